"""Tests for taxonomy-aware skill analysis."""

import pytest

from services.matching.skill_analyzer import SkillAnalyzer, SkillAnalyzerConfig, context_relevance

# Relevance of a known skill against an empty job context: 0 hits + 0.3 boost
EMPTY_CONTEXT_RELEVANCE = 0.3
EMPTY_CONTEXT_FACTOR = EMPTY_CONTEXT_RELEVANCE * 0.3 + 0.7


@pytest.fixture
def analyzer():
    return SkillAnalyzer()


class TestPerSkill:
    def test_alias_counts_as_direct_match(self, analyzer):
        result = analyzer.analyze_skills(["react"], ["reactjs"])
        detail = result.details[0]
        assert detail.matched
        assert detail.related_matches == []
        assert detail.score == pytest.approx(EMPTY_CONTEXT_FACTOR)

    def test_related_skill_gives_partial_credit(self, analyzer):
        result = analyzer.analyze_skills(["react"], ["vue"])
        detail = result.details[0]
        assert not detail.matched
        assert detail.related_matches == ["vue"]
        assert detail.score == pytest.approx(0.8 * EMPTY_CONTEXT_FACTOR)

    def test_related_bonus_is_capped(self, analyzer):
        result = analyzer.analyze_skills(["react"], ["vue", "angular", "redux", "gatsby", "vuex"])
        assert result.details[0].score == pytest.approx(1.0 * EMPTY_CONTEXT_FACTOR)

    def test_relevance_from_group_context(self, analyzer):
        result = analyzer.analyze_skills(["react"], ["react"], "Frontend web development for a SPA")
        assert result.details[0].relevance == 1.0
        assert result.details[0].score == pytest.approx(1.0)

    def test_unknown_skill_has_neutral_relevance(self, analyzer):
        result = analyzer.analyze_skills(["cobol"], ["excel"])
        assert result.details[0].relevance == 0.5
        assert result.details[0].score == 0.0


class TestCombinations:
    def test_react_and_express_is_not_full_stack(self, analyzer):
        result = analyzer.analyze_skills(["react", "node.js"], ["react", "express"])
        assert all(c.name != "Full Stack" for c in result.combinations)
        assert [d.matched for d in result.details] == [True, False]

    def test_full_stack_workflow(self, analyzer):
        result = analyzer.analyze_skills(["react", "node.js"], ["react", "nodejs"])
        workflows = [c for c in result.combinations if c.type == "workflow"]
        assert [c.name for c in workflows] == ["Full Stack"]
        assert workflows[0].skills == ["react", "node.js"]
        assert workflows[0].score == pytest.approx(0.5)

    def test_stack_combination_from_candidate_skills(self, analyzer):
        result = analyzer.analyze_skills(["react"], ["react", "redux", "vue"])
        stacks = [c for c in result.combinations if c.type == "stack"]
        assert [c.name for c in stacks] == ["frontend"]
        assert stacks[0].skills == ["react", "redux", "vue"]
        assert stacks[0].explanation == "Found 3 skills from frontend stack"
        assert "angular" in stacks[0].missing

    def test_combination_bonus_raises_score(self):
        without = SkillAnalyzer(SkillAnalyzerConfig(combination_bonus=0.0))
        with_bonus = SkillAnalyzer()
        args = (["react", "node.js"], ["react", "nodejs"], "")
        assert with_bonus.analyze_skills(*args).score > without.analyze_skills(*args).score


class TestOverall:
    def test_no_required_skills(self, analyzer):
        result = analyzer.analyze_skills([], ["excel"])
        assert result.score == 0.0
        assert result.details == []

    def test_score_in_unit_interval(self, analyzer):
        cases = [
            (["react", "node.js", "docker"], ["react", "nodejs", "docker", "kubernetes", "aws"], "cloud api frontend"),
            (["python"], [], ""),
            (["go", "rust"], ["python"], "systems"),
        ]
        for required, candidate, context in cases:
            score = analyzer.analyze_skills(required, candidate, context).score
            assert 0.0 <= score <= 1.0

    def test_weighted_score(self, analyzer):
        result = analyzer.analyze_skills(["react"], ["react"], "Frontend web development for a SPA")
        # match 1.0 * 0.7 + relevance 1.0 * 0.3, no combinations
        assert result.score == pytest.approx(1.0)
        assert result.match_score == pytest.approx(1.0)
        assert result.context_score == pytest.approx(1.0)


class TestSuggestions:
    def test_missing_skill_with_alternatives(self, analyzer):
        result = analyzer.analyze_skills(["docker"], ["excel"])
        assert result.suggestions == [
            "Consider learning docker or related technologies like kubernetes, containerization"
        ]

    def test_missing_skill_without_taxonomy_entry(self, analyzer):
        result = analyzer.analyze_skills(["cobol"], ["excel"])
        assert result.suggestions == ["Consider learning cobol"]

    def test_no_suggestion_for_related_match(self, analyzer):
        result = analyzer.analyze_skills(["react"], ["vue"])
        assert not any(s.startswith("Consider learning react") for s in result.suggestions)


def test_context_relevance():
    assert context_relevance([], "anything") == 0.5
    assert context_relevance(["api", "server"], "REST APIs on the server side") == 1.0
    assert context_relevance(["data storage", "sql"], "") == pytest.approx(0.3)
    assert context_relevance(["data storage", "nosql", "database"], "reliable data storage") == pytest.approx(1 / 3 + 0.3)


def test_context_relevance_matches_aliases():
    assert context_relevance(["amazon web services"], "Deploy on AWS.") == 1.0
    assert context_relevance(["google cloud platform"], "Runs on google cloud") == 1.0
    assert context_relevance(["artificial intelligence"], "maintain the servers") == pytest.approx(0.3)
