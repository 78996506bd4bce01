"""Tests for the technology taxonomy."""

import pytest

from models.schemas.technology import TechnologyGroup
from services.matching.technology_mapper import DEFAULT_TAXONOMY, TechnologyTaxonomy


class TestFindGroup:
    def test_primary_skill(self):
        match = DEFAULT_TAXONOMY.find_group_for_skill("React")
        assert match.category == "frontend"
        assert match.subcategory == "frameworks"
        assert match.group.primary == "react"

    def test_alias_resolves_to_normalized_entry(self):
        match = DEFAULT_TAXONOMY.find_group_for_skill("AWS")
        assert match.category == "devops"
        assert match.group.primary == "amazon web services"

    def test_related_skill_finds_its_group(self):
        match = DEFAULT_TAXONOMY.find_group_for_skill("k8s")
        assert match.group.primary == "docker"

    def test_first_group_wins(self):
        # django is related to python and also primary in backend frameworks
        match = DEFAULT_TAXONOMY.find_group_for_skill("django")
        assert match.subcategory == "languages"
        assert match.group.primary == "python"

    def test_unknown_skill(self):
        assert DEFAULT_TAXONOMY.find_group_for_skill("cobol") is None
        assert DEFAULT_TAXONOMY.find_group_for_skill("") is None


class TestQueries:
    def test_related_skills_exclude_self_and_duplicates(self):
        related = DEFAULT_TAXONOMY.get_related_skills("react")
        assert "react" not in related
        assert {"vue", "angular", "redux"} <= set(related)
        assert len(related) == len(set(related))

    def test_related_skills_unknown(self):
        assert DEFAULT_TAXONOMY.get_related_skills("cobol") == []

    def test_compensation_factor(self):
        assert DEFAULT_TAXONOMY.get_compensation_factor("vue") == 0.8
        assert DEFAULT_TAXONOMY.get_compensation_factor("jest") == 0.6
        assert DEFAULT_TAXONOMY.get_compensation_factor("cobol") == 0.5
        group = TechnologyGroup(primary="x", compensation=0.3)
        assert DEFAULT_TAXONOMY.get_compensation_factor(group) == 0.3

    def test_skill_context(self):
        assert "frontend" in DEFAULT_TAXONOMY.get_skill_context("react")
        assert DEFAULT_TAXONOMY.get_skill_context("cobol") == []

    def test_are_skills_related(self):
        assert DEFAULT_TAXONOMY.are_skills_related("react", "vue")
        assert DEFAULT_TAXONOMY.are_skills_related("docker", "kubernetes")
        assert not DEFAULT_TAXONOMY.are_skills_related("react", "docker")
        assert not DEFAULT_TAXONOMY.are_skills_related("react", "cobol")

    def test_category_lists(self):
        assert "cloud" in DEFAULT_TAXONOMY.categories()
        assert DEFAULT_TAXONOMY.category_primaries("frontend")[:3] == ["react", "vue", "angular"]
        assert DEFAULT_TAXONOMY.get_skills("unknown") == []


def test_custom_taxonomy():
    taxonomy = TechnologyTaxonomy({
        "data": {"tools": (TechnologyGroup(primary="Pandas", related=("NumPy",), compensation=0.9),)},
    })
    match = taxonomy.find_group_for_skill("numpy")
    assert match.category == "data"
    assert match.group.primary == "pandas"
    assert taxonomy.get_related_skills("pandas") == ["numpy"]
    assert taxonomy.find_group_for_skill("react") is None


def test_taxonomy_is_read_only():
    with pytest.raises(TypeError):
        DEFAULT_TAXONOMY.technology_map["frontend"] = {}
    with pytest.raises(TypeError):
        DEFAULT_TAXONOMY.technology_map["frontend"]["frameworks"] = ()
