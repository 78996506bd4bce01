"""Technical keyword library and technical-density scoring.

Keywords match on token boundaries, so "java" does not fire inside
"javascript" and "sql" does not fire inside "mysql".
"""

import logging
import re
from types import MappingProxyType

logger = logging.getLogger(__name__)

TECHNICAL_CATEGORIES: MappingProxyType = MappingProxyType({
    "PROGRAMMING_LANGUAGES": (
        "javascript", "python", "java", "c++", "c#", "ruby", "php", "swift",
        "kotlin", "go", "rust", "typescript", "scala", "perl", "r", "matlab",
    ),
    "FRAMEWORKS": (
        "react", "angular", "vue", "django", "flask", "spring", "express",
        "laravel", "rails", "asp.net", "node.js", "next.js", "nuxt", "svelte",
    ),
    "DATABASES": (
        "sql", "mysql", "postgresql", "mongodb", "redis", "elasticsearch",
        "dynamodb", "cassandra", "oracle", "firebase", "neo4j", "graphql",
    ),
    "CLOUD_DEVOPS": (
        "aws", "azure", "gcp", "docker", "kubernetes", "jenkins", "terraform",
        "ansible", "circleci", "gitlab", "github actions", "prometheus", "grafana",
    ),
    "TECHNICAL_CONCEPTS": (
        "api", "rest", "microservices", "ci/cd", "tdd", "agile", "scrum",
        "algorithms", "data structures", "design patterns", "architecture",
    ),
    "TECHNICAL_ROLES": (
        "software engineer", "developer", "programmer", "architect", "devops",
        "full stack", "frontend", "backend", "sre", "data scientist", "ml engineer",
        "qa engineer", "security engineer", "cloud engineer", "systems engineer",
    ),
})

VERSION_SPECIFIC_KEYWORDS: MappingProxyType = MappingProxyType({
    "JAVASCRIPT_VERSIONS": ("es6", "es2015", "es2016", "es2017", "es2018", "es2019", "es2020", "es2021"),
    "PYTHON_VERSIONS": (
        "python 2.7", "python 3.6", "python 3.7", "python 3.8", "python 3.9", "python 3.10", "python 3.11",
    ),
    "JAVA_VERSIONS": ("java 8", "java 11", "java 17", "java 21", "jdk 8", "jdk 11", "jdk 17", "jdk 21"),
    "FRAMEWORK_VERSIONS": (
        "react 16", "react 17", "react 18",
        "angular 12", "angular 13", "angular 14", "angular 15", "angular 16",
        "vue 2", "vue 3", "spring boot 2", "spring boot 3", "django 3", "django 4",
    ),
})

INDUSTRY_TECH_TERMS: MappingProxyType = MappingProxyType({
    "FINTECH": (
        "blockchain", "cryptocurrency", "payment processing", "financial modeling",
        "trading systems", "risk analysis", "fraud detection", "kyc", "aml",
    ),
    "HEALTHCARE": (
        "emr", "ehr", "hipaa", "hl7", "fhir", "medical imaging",
        "clinical data", "telehealth", "patient portal", "icd-10",
    ),
    "E_COMMERCE": (
        "payment gateway", "shopping cart", "inventory management",
        "order processing", "pci compliance", "product catalog",
    ),
    "CYBERSECURITY": (
        "penetration testing", "vulnerability assessment", "siem",
        "intrusion detection", "threat analysis", "security audit",
    ),
})

# Density is normalized against the core library only
ALL_TECHNICAL_KEYWORDS: tuple[str, ...] = tuple(
    dict.fromkeys(k for keywords in TECHNICAL_CATEGORIES.values() for k in keywords)
)
DENSITY_SATURATION = 0.2  # share of the core library that counts as fully technical

TECHNICAL_ROLE_INDICATORS: tuple[str, ...] = (
    "engineer", "developer", "programmer", "architect", "analyst",
    "administrator", "technician", "specialist", "consultant",
)

_SCORED_CATEGORIES: MappingProxyType = MappingProxyType({
    **TECHNICAL_CATEGORIES,
    "VERSION_SPECIFIC": tuple(k for v in VERSION_SPECIFIC_KEYWORDS.values() for k in v),
    "INDUSTRY_SPECIFIC": tuple(k for v in INDUSTRY_TECH_TERMS.values() for k in v),
})

_TOKEN_CHARS = r"a-z0-9+#"
_PATTERNS: MappingProxyType = MappingProxyType({
    keyword: re.compile(rf"(?<![{_TOKEN_CHARS}]){re.escape(keyword)}(?![{_TOKEN_CHARS}])")
    for keywords in _SCORED_CATEGORIES.values()
    for keyword in keywords
})


def contains_keyword(text: str, keyword: str) -> bool:
    """Token-boundary match of a lowercase keyword in lowercase text."""
    pattern = _PATTERNS.get(keyword)
    if pattern is None:
        pattern = re.compile(rf"(?<![{_TOKEN_CHARS}]){re.escape(keyword)}(?![{_TOKEN_CHARS}])")
    return pattern.search(text) is not None


def calculate_technical_density(text: str) -> dict:
    """Technical density of text in [0, 1] with matches grouped by category.

    Returns {"score", "matches", "categories": {name: {"score", "matches"}}}.
    """
    text_lower = (text or "").lower()
    matches: list[str] = []
    categories: dict[str, dict] = {}

    for category, keywords in _SCORED_CATEGORIES.items():
        found = [k for k in keywords if contains_keyword(text_lower, k)]
        if found:
            matches.extend(found)
            categories[category] = {"score": len(found) / len(keywords), "matches": found}

    unique = list(dict.fromkeys(matches))
    score = len(unique) / (len(ALL_TECHNICAL_KEYWORDS) * DENSITY_SATURATION)
    return {"score": min(1.0, score), "matches": unique, "categories": categories}


def extract_technical_keywords(text: str, categories: tuple[str, ...] | None = None) -> list[str]:
    """Core-library keywords found in text, in library order.

    categories restricts the search to the named TECHNICAL_CATEGORIES.
    """
    text_lower = (text or "").lower()
    if categories is None:
        keywords = ALL_TECHNICAL_KEYWORDS
    else:
        keywords = tuple(dict.fromkeys(k for c in categories for k in TECHNICAL_CATEGORIES[c]))
    return [k for k in keywords if contains_keyword(text_lower, k)]


def is_technical_role(job_title: str) -> dict:
    """Whether a title names a technical role.

    A listed technical role gives confidence 1.0. Otherwise each generic
    indicator ("engineer", "analyst", ...) adds 0.2 over a 0.4 base, capped
    at 0.8, and the role counts as technical above 0.4.
    """
    title = (job_title or "").lower()
    if any(role in title for role in TECHNICAL_CATEGORIES["TECHNICAL_ROLES"]):
        return {"is_technical": True, "confidence": 1.0}

    indicators = [i for i in TECHNICAL_ROLE_INDICATORS if i in title]
    confidence = min(0.8, 0.4 + len(indicators) * 0.2) if indicators else 0.0
    return {"is_technical": confidence > 0.4, "confidence": confidence}
