"""Static technology taxonomy: category -> subcategory -> technology groups.

A group ties a primary skill to the skills that partially substitute for it
(related), the words that signal it in a job context, and a compensation
weight. Taxonomy order is significant: a skill listed in several groups
resolves to the first one.
"""

import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from models.schemas.technology import GroupMatch, TechnologyGroup
from services.matching.skill_normalizer import normalize_skill

logger = logging.getLogger(__name__)

DEFAULT_COMPENSATION = 0.5

_WEB_CONTEXT = ("web development", "ui", "frontend", "spa")
_MOBILE_CONTEXT = ("mobile", "cross-platform", "app development")
_CLOUD_CONTEXT = ("cloud", "infrastructure", "scalability")


def _group(primary: str, related: Iterable[str], compensation: float, context: Iterable[str]) -> TechnologyGroup:
    return TechnologyGroup(
        primary=primary,
        related=tuple(related),
        context=tuple(context),
        compensation=compensation,
    )


TECHNOLOGY_MAP: dict[str, dict[str, tuple[TechnologyGroup, ...]]] = {
    "frontend": {
        "frameworks": (
            _group("react", ["react-router", "redux", "next.js", "gatsby"], 0.8, _WEB_CONTEXT),
            _group("vue", ["vuex", "nuxt.js", "vue-router"], 0.8, _WEB_CONTEXT),
            _group("angular", ["rxjs", "ngrx", "angular material"], 0.8,
                   ["web development", "ui", "frontend", "enterprise"]),
        ),
        "libraries": (
            _group("tailwind", ["css", "postcss", "styled-components"], 0.7,
                   ["styling", "ui design", "css framework"]),
            _group("material-ui", ["styled-components", "emotion", "chakra-ui"], 0.7,
                   ["ui components", "design system"]),
        ),
        "tools": (
            _group("webpack", ["babel", "rollup", "vite"], 0.6, ["build tools", "bundling", "optimization"]),
            _group("jest", ["testing-library", "cypress", "enzyme"], 0.6,
                   ["testing", "unit tests", "integration tests"]),
        ),
    },
    "backend": {
        "languages": (
            _group("node.js", ["javascript", "typescript", "deno"], 0.9,
                   ["server", "api", "backend", "javascript runtime"]),
            _group("python", ["django", "flask", "fastapi"], 0.9, ["server", "api", "backend", "scripting"]),
        ),
        "frameworks": (
            _group("express", ["koa", "fastify", "nest.js"], 0.8, ["web framework", "rest api", "middleware"]),
            _group("django", ["django-rest-framework", "flask", "fastapi"], 0.8,
                   ["web framework", "orm", "full-stack"]),
        ),
        "databases": (
            _group("postgresql", ["mysql", "sql", "relational database"], 0.8,
                   ["database", "sql", "data storage"]),
            _group("mongodb", ["mongoose", "nosql", "document database"], 0.8,
                   ["database", "nosql", "data storage"]),
        ),
    },
    "devops": {
        "core": (
            _group("docker", ["kubernetes", "containerization", "docker-compose"], 0.8,
                   ["containers", "deployment", "infrastructure"]),
            _group("aws", ["ec2", "s3", "lambda", "cloud"], 0.8, ["cloud", "infrastructure", "deployment"]),
            _group("ci/cd", ["jenkins", "github actions", "gitlab ci"], 0.7, ["automation", "deployment", "testing"]),
        ),
    },
    "cloud": {
        "platforms": (
            _group("gcp", ["gke", "cloud run", "bigquery"], 0.8, _CLOUD_CONTEXT),
            _group("azure", ["aks", "azure functions", "azure devops"], 0.8, _CLOUD_CONTEXT),
            _group("serverless", ["cloud functions", "api gateway", "step functions"], 0.7,
                   ["cloud", "event-driven", "serverless"]),
        ),
        "infrastructure": (
            _group("terraform", ["cloudformation", "pulumi", "infrastructure as code"], 0.8,
                   ["infrastructure", "provisioning", "cloud"]),
            _group("helm", ["istio", "service mesh", "argo cd"], 0.7, ["cloud native", "kubernetes", "deployment"]),
        ),
    },
    "mobile": {
        "core": (
            _group("react-native", ["mobile development", "ios", "android"], 0.8, _MOBILE_CONTEXT),
            _group("flutter", ["dart", "mobile development", "cross-platform"], 0.8, _MOBILE_CONTEXT),
        ),
    },
}


def _normalize_group(group: TechnologyGroup) -> TechnologyGroup:
    return TechnologyGroup(
        primary=normalize_skill(group.primary),
        related=tuple(normalize_skill(s) for s in group.related),
        context=tuple(c.lower() for c in group.context),
        compensation=group.compensation,
    )


class TechnologyTaxonomy:
    """Read-only view over a technology map.

    Entries are normalized once at construction, so lookups by alias
    ("aws", "k8s") resolve to the same groups as their canonical forms.
    """

    def __init__(self, technology_map: Mapping[str, Mapping[str, Iterable[TechnologyGroup]]]):
        categories = {}
        index: dict[str, GroupMatch] = {}
        for category, subcategories in technology_map.items():
            frozen_subs = {}
            for subcategory, groups in subcategories.items():
                normalized = tuple(_normalize_group(g) for g in groups)
                frozen_subs[subcategory] = normalized
                for group in normalized:
                    match = GroupMatch(category=category, subcategory=subcategory, group=group)
                    for skill in (group.primary, *group.related):
                        index.setdefault(skill, match)
            categories[category] = MappingProxyType(frozen_subs)
        self._map = MappingProxyType(categories)
        self._index = MappingProxyType(index)

    @property
    def technology_map(self) -> Mapping[str, Mapping[str, tuple[TechnologyGroup, ...]]]:
        return self._map

    def categories(self) -> list[str]:
        return list(self._map)

    def find_group_for_skill(self, skill: str) -> GroupMatch | None:
        """First group (in taxonomy order) listing the skill as primary or related."""
        if not skill:
            return None
        return self._index.get(normalize_skill(skill))

    def get_skills(self, category: str, subcategory: str | None = None) -> list[str]:
        """All primary and related skills of a category, or of one subcategory."""
        subcategories = self._map.get(category)
        if subcategories is None:
            return []
        if subcategory is not None:
            groups = subcategories.get(subcategory, ())
        else:
            groups = [g for sub in subcategories.values() for g in sub]
        return _unique(skill for g in groups for skill in (g.primary, *g.related))

    def category_skills(self, category: str) -> list[str]:
        return self.get_skills(category)

    def category_primaries(self, category: str) -> list[str]:
        subcategories = self._map.get(category, {})
        return _unique(g.primary for sub in subcategories.values() for g in sub)

    def get_related_skills(self, skill: str) -> list[str]:
        """Skills of every group in the skill's subcategory, excluding the skill."""
        match = self.find_group_for_skill(skill)
        if match is None:
            return []
        norm = normalize_skill(skill)
        return [s for s in self.get_skills(match.category, match.subcategory) if s != norm]

    def get_compensation_factor(self, group_or_skill: TechnologyGroup | str) -> float:
        if isinstance(group_or_skill, TechnologyGroup):
            return group_or_skill.compensation
        match = self.find_group_for_skill(group_or_skill)
        return match.group.compensation if match else DEFAULT_COMPENSATION

    def get_skill_context(self, skill: str) -> list[str]:
        match = self.find_group_for_skill(skill)
        return list(match.group.context) if match else []

    def are_skills_related(self, skill_a: str, skill_b: str) -> bool:
        """Same subcategory, or one listed in the other's related skills."""
        match_a = self.find_group_for_skill(skill_a)
        match_b = self.find_group_for_skill(skill_b)
        if match_a is None or match_b is None:
            return False
        if (match_a.category, match_a.subcategory) == (match_b.category, match_b.subcategory):
            return True
        return (
            normalize_skill(skill_b) in match_a.group.related
            or normalize_skill(skill_a) in match_b.group.related
        )


def _unique(items: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(items))


DEFAULT_TAXONOMY = TechnologyTaxonomy(TECHNOLOGY_MAP)
