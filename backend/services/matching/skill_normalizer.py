"""Skill name canonicalization: case, seniority prefixes, aliases and fuzzy distance."""

import logging
import re
from types import MappingProxyType

from rapidfuzz.distance import Levenshtein

logger = logging.getLogger(__name__)

DEFAULT_SIMILARITY_THRESHOLD = 0.8

# canonical -> aliases
SKILL_ALIASES: MappingProxyType = MappingProxyType({
    "javascript": ("js", "ecmascript", "es6", "es2015+"),
    "typescript": ("ts",),
    "python": ("py", "python3"),
    "go": ("golang",),
    "react": ("reactjs", "react.js"),
    "vue": ("vuejs", "vue.js"),
    "angular": ("angularjs", "angular.js"),
    "node.js": ("nodejs", "node"),
    "postgresql": ("postgres", "psql"),
    "mongodb": ("mongo",),
    "kubernetes": ("k8s",),
    "amazon web services": ("aws",),
    "google cloud platform": ("gcp", "google cloud"),
    "microsoft azure": ("azure",),
    "continuous integration": ("ci",),
    "continuous deployment": ("cd",),
    "devops": ("dev ops", "development operations"),
    "machine learning": ("ml",),
    "artificial intelligence": ("ai",),
})

SKILL_PREFIXES: tuple[str, ...] = (
    "senior", "junior", "lead", "principal", "expert",
    "certified", "professional", "advanced",
)

# One or more stacked prefixes, so a single pass leaves nothing to strip
_PREFIX_RE = re.compile(r"^(?:(?:" + "|".join(SKILL_PREFIXES) + r")\s+)+")

_ALIAS_TO_CANONICAL: dict[str, str] = {}
for _canonical, _aliases in SKILL_ALIASES.items():
    for _alias in _aliases:
        _ALIAS_TO_CANONICAL[_alias] = _canonical
_ALIAS_TO_CANONICAL = MappingProxyType(_ALIAS_TO_CANONICAL)


def normalize_skill(raw: str) -> str:
    """Lowercase, trim, strip leading seniority prefixes and resolve aliases."""
    if not raw:
        return ""
    skill = _PREFIX_RE.sub("", raw.lower().strip()).strip()
    return _ALIAS_TO_CANONICAL.get(skill, skill)


def _alias_group(skill: str) -> str | None:
    if skill in SKILL_ALIASES:
        return skill
    return _ALIAS_TO_CANONICAL.get(skill)


def skill_similarity(a: str, b: str) -> float:
    """Normalized Levenshtein similarity of two skills in [0, 1]."""
    norm_a = normalize_skill(a)
    norm_b = normalize_skill(b)
    if not norm_a and not norm_b:
        return 1.0
    if not norm_a or not norm_b:
        return 0.0
    if norm_a == norm_b:
        return 1.0
    return float(Levenshtein.normalized_similarity(norm_a, norm_b))


def are_similar_skills(a: str, b: str, threshold: float = DEFAULT_SIMILARITY_THRESHOLD) -> bool:
    norm_a = normalize_skill(a)
    norm_b = normalize_skill(b)
    if norm_a == norm_b:
        return True

    group_a = _alias_group(norm_a)
    if group_a is not None and group_a == _alias_group(norm_b):
        return True

    return skill_similarity(norm_a, norm_b) >= threshold


def find_closest_skill(
    skill: str,
    candidates: list[str],
    threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
) -> str | None:
    """Return the most similar candidate at or above threshold.

    Ties keep the earliest candidate.
    """
    best: str | None = None
    best_score = -1.0
    for candidate in candidates:
        score = skill_similarity(skill, candidate)
        if score > best_score:
            best, best_score = candidate, score
            if score == 1.0:
                break

    if best is not None and best_score >= threshold:
        return best
    return None


def skill_aliases(skill: str) -> tuple[str, ...]:
    """Alternative spellings of a skill's canonical form ("aws" for "amazon web services")."""
    return SKILL_ALIASES.get(normalize_skill(skill), ())


def normalize_skill_list(skills: list[str]) -> list[str]:
    """Normalize and de-duplicate, keeping first-seen order and dropping blanks."""
    seen: set[str] = set()
    result: list[str] = []
    for skill in skills:
        norm = normalize_skill(skill)
        if norm and norm not in seen:
            seen.add(norm)
            result.append(norm)
    return result
