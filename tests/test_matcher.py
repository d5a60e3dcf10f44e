"""Tests for skill matching, shortlists and the talent-pool filter."""

from types import SimpleNamespace

from hypothesis import given, strategies as st

from hirehive.core.matcher import (
    dedupe_skills,
    filter_talent,
    matches,
    matches_category,
    mentions_skill,
    normalize_skills,
    shared_skills,
    shortlist_jobs,
)

skill_names = st.sampled_from(
    ["Python", "SQL", "React", "Figma", "Tally", "Negotiation", "Docker", "Excel", "Leadership"]
)


def vary_case(draw, skill):
    return "".join(c.upper() if draw(st.booleans()) else c.lower() for c in skill)


@st.composite
def respelled(draw, skill):
    """The same skill with random casing and surrounding whitespace."""
    padding = draw(st.sampled_from(["", " ", "  ", "\t"]))
    return padding + vary_case(draw, skill) + padding


class TestMatches:
    def test_case_and_whitespace_insensitive(self):
        assert matches(["  python "], ["PYTHON"])
        assert matches(["React", "Node"], ["node"])

    def test_no_overlap(self):
        assert not matches(["Python"], ["Java"])

    def test_empty_sides_never_match(self):
        assert not matches([], ["Python"])
        assert not matches(["Python"], [])
        assert not matches(None, None)
        assert not matches(["   "], ["", " "])

    @given(st.lists(skill_names, min_size=1, max_size=5), st.lists(skill_names, min_size=1, max_size=5))
    def test_symmetric(self, left, right):
        assert matches(left, right) == matches(right, left)

    @given(st.data(), skill_names)
    def test_respelling_still_matches(self, data, skill):
        assert matches([data.draw(respelled(skill))], [data.draw(respelled(skill))])


class TestSkillFragment:
    def test_substring_case_insensitive(self):
        assert mentions_skill([" PostgreSQL "], "sql")
        assert mentions_skill(["Python"], "PYT")
        assert not mentions_skill(["Python"], "java")

    def test_blank_fragment_matches_anyone(self):
        assert mentions_skill([], "  ")
        assert not mentions_skill(None, "go")

    def test_shared_skills_are_normalized(self):
        assert shared_skills(["Python", " SQL"], ["sql", "Go", "PYTHON"]) == {"python", "sql"}


class TestSkillCleanup:
    def test_normalize_drops_blanks(self):
        assert normalize_skills([" SQL", "sql ", "", "   "]) == {"sql"}

    def test_dedupe_keeps_first_spelling_and_order(self):
        assert dedupe_skills(["React", " python", "REACT", "Python ", "Go"]) == ["React", "python", "Go"]

    @given(st.lists(skill_names, max_size=10))
    def test_dedupe_is_idempotent(self, skills):
        once = dedupe_skills(skills)
        assert dedupe_skills(once) == once
        assert normalize_skills(once) == normalize_skills(skills)


class TestCategory:
    def test_keyword_substring(self):
        assert matches_category(["Full-stack developer"], "IT & Tech")
        assert matches_category(["Tally ERP"], "finance")
        assert not matches_category(["Tally ERP"], "Design")

    def test_unknown_category_matches_nothing(self):
        assert not matches_category(["Python"], "Astronomy")


def job(job_id, skills):
    return SimpleNamespace(id=job_id, required_skills=skills)


def seeker(name, skills):
    return SimpleNamespace(name=name, skills=skills)


class TestShortlist:
    def test_excludes_applied_and_unmatched(self):
        jobs = [job("j1", ["Python"]), job("j2", ["sql"]), job("j3", ["Figma"]), job("j4", [])]
        result = shortlist_jobs(["python", "SQL"], jobs, applied_job_ids={"j2"})
        assert [j.id for j in result] == ["j1"]

    def test_no_skills_no_shortlist(self):
        assert shortlist_jobs([], [job("j1", ["Python"])]) == []


class TestTalentFilter:
    def setup_method(self):
        self.seekers = [
            seeker("Asha", ["Python", "AWS"]),
            seeker("Bilal", ["Figma", "UX research"]),
            seeker("Chen", ["Tally", "GST filing"]),
        ]

    def test_no_filters_returns_everyone(self):
        assert filter_talent(self.seekers) == self.seekers

    def test_keyword_is_exact_skill_match(self):
        assert [s.name for s in filter_talent(self.seekers, keyword=" figma ")] == ["Bilal"]
        assert filter_talent(self.seekers, keyword="Fig") == []

    def test_category_uses_keywords(self):
        assert [s.name for s in filter_talent(self.seekers, category="Finance")] == ["Chen"]

    def test_filters_are_combined(self):
        assert filter_talent(self.seekers, keyword="Python", category="Design") == []
        assert [s.name for s in filter_talent(self.seekers, keyword="aws", category="IT & Tech")] == ["Asha"]
