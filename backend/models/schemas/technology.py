"""Technology taxonomy records: groups of interchangeable skills."""

from pydantic import BaseModel, ConfigDict


class TechnologyGroup(BaseModel):
    """A primary skill with the skills that partially substitute for it.

    compensation is how much of the primary's value a related skill carries.
    """
    model_config = ConfigDict(frozen=True)

    primary: str
    related: tuple[str, ...] = ()
    context: tuple[str, ...] = ()
    compensation: float = 0.5


class GroupMatch(BaseModel):
    """Location of a group inside the taxonomy."""
    model_config = ConfigDict(frozen=True)

    category: str
    subcategory: str
    group: TechnologyGroup
