"""Tests for skill name normalization and fuzzy matching."""

from services.matching.skill_normalizer import (
    are_similar_skills,
    find_closest_skill,
    normalize_skill,
    normalize_skill_list,
    skill_similarity,
)

SAMPLES = [
    "  Senior JS ",
    "Lead Senior Python",
    "Certified Kubernetes Administrator",
    "senior senior react",
    "ReactJS",
    "k8s",
    "Golang",
    "PostgreSQL",
    "",
]


class TestNormalizeSkill:
    def test_lowercases_trims_and_resolves_alias(self):
        assert normalize_skill("  Senior JS ") == "javascript"

    def test_strips_stacked_prefixes(self):
        assert normalize_skill("Lead Senior Python") == "python"
        assert normalize_skill("senior senior react") == "react"

    def test_prefix_only_stripped_at_start(self):
        assert normalize_skill("Certified Kubernetes Administrator") == "kubernetes administrator"

    def test_aliases(self):
        assert normalize_skill("k8s") == "kubernetes"
        assert normalize_skill("Golang") == "go"
        assert normalize_skill("AWS") == "amazon web services"
        assert normalize_skill("react.js") == "react"

    def test_empty(self):
        assert normalize_skill("") == ""

    def test_idempotent(self):
        for raw in SAMPLES:
            once = normalize_skill(raw)
            assert normalize_skill(once) == once


class TestSimilarity:
    def test_alias_forms_are_similar(self):
        assert are_similar_skills("react", "reactjs")
        assert are_similar_skills("ReactJS", "react.js")
        assert are_similar_skills("nodejs", "node")

    def test_near_spelling_is_similar(self):
        assert are_similar_skills("postgresql", "postgresq")

    def test_java_is_not_javascript(self):
        assert not are_similar_skills("java", "javascript")

    def test_symmetric(self):
        pairs = [("react", "reactjs"), ("java", "javascript"), ("docker", "dockr"), ("vue", "vuex")]
        for a, b in pairs:
            assert are_similar_skills(a, b) == are_similar_skills(b, a)
            assert skill_similarity(a, b) == skill_similarity(b, a)

    def test_empty_inputs(self):
        assert skill_similarity("", "") == 1.0
        assert skill_similarity("", "python") == 0.0

    def test_threshold_is_configurable(self):
        assert not are_similar_skills("vue", "vuex")
        assert are_similar_skills("vue", "vuex", threshold=0.7)


class TestFindClosestSkill:
    def test_finds_alias_match(self):
        assert find_closest_skill("reactjs", ["vue", "react", "angular"]) == "react"

    def test_tie_keeps_first_candidate(self):
        assert find_closest_skill("abcdefghij", ["abcdefghix", "abcdefghiy"]) == "abcdefghix"

    def test_none_below_threshold(self):
        assert find_closest_skill("python", ["excel", "word"]) is None

    def test_empty_candidates(self):
        assert find_closest_skill("python", []) is None


def test_normalize_skill_list_dedupes_in_order():
    assert normalize_skill_list(["ReactJS", "react", "", "K8s", "kubernetes", "Python"]) == [
        "react", "kubernetes", "python",
    ]
