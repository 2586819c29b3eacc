"""Shared fixtures: a scripted completion client and forced randomness."""

import pytest

from skill_sprint.completion.results import (
    GradeResult,
    ProfileAnalysis,
    ProjectDraft,
    SkillDraft,
)
from skill_sprint.errors import CompletionError
from skill_sprint.models.sprint import Difficulty
from skill_sprint.sprint.randomness import RandomSource
from skill_sprint.sprint.session import SprintSession


class FixedRandom(RandomSource):
    """Random source with forced outcomes."""

    def __init__(
        self, index: int = 0, baseline: int = 120, increment: int = 70, jitter: float = 0.0
    ):
        super().__init__()
        self.index = index
        self.baseline = baseline
        self.increment = increment
        self._jitter = jitter

    def pick_index(self, count: int) -> int:
        return self.index

    def rival_baseline(self) -> int:
        return self.baseline

    def rival_increment(self) -> int:
        return self.increment

    def jitter(self, spread: float) -> float:
        return self._jitter


def make_skill_drafts(names=("Public Speaking", "SQL Basics", "UX Research")) -> list[SkillDraft]:
    return [
        SkillDraft(name=name, rationale=f"{name} fits your goals.", category="Tech")
        for name in names
    ]


def make_project_drafts(days=(3, 8, 14)) -> list[ProjectDraft]:
    difficulties = [Difficulty.EASY, Difficulty.MEDIUM, Difficulty.HARD]
    return [
        ProjectDraft(
            title=f"Project {i + 1}",
            description=f"Build thing {i + 1}.",
            difficulty=difficulties[i],
            deliverable_type="Code snippet",
            day_due=day,
        )
        for i, day in enumerate(days)
    ]


class FakeCompletionClient:
    """Scripted stand-in for CompletionClient that records every call."""

    def __init__(self):
        self.calls: list[tuple] = []
        self.analysis = ProfileAnalysis(
            current_skills=["Communication", "Customer Service"],
            recommended_path="Move into customer-facing analytics.",
        )
        self.skills = make_skill_drafts()
        self.projects = make_project_drafts()
        self.grades: list[GradeResult] = [
            GradeResult(score=85, feedback="Solid start."),
            GradeResult(score=90, feedback="Great progress."),
            GradeResult(score=95, feedback="Excellent work."),
        ]
        self.fail: set[str] = set()

    def _check(self, operation: str) -> None:
        if operation in self.fail:
            raise CompletionError(operation, "scripted failure")

    async def extract_profile(self, resume_text, intent):
        self.calls.append(("extract_profile", resume_text, intent))
        self._check("extract_profile")
        return self.analysis

    async def recommend_skills(self, current_skills, intent, path):
        self.calls.append(("recommend_skills", current_skills, intent, path))
        self._check("recommend_skills")
        return self.skills

    async def generate_projects(self, skill_name):
        self.calls.append(("generate_projects", skill_name))
        self._check("generate_projects")
        return self.projects

    async def grade_submission(self, project, submission, skill_name):
        self.calls.append(("grade_submission", project.id, submission, skill_name))
        self._check("grade_submission")
        return self.grades[project.id - 1]


@pytest.fixture
def fake_client():
    return FakeCompletionClient()


@pytest.fixture
def fixed_random():
    return FixedRandom(index=1)


@pytest.fixture
def session(fake_client, fixed_random):
    return SprintSession(fake_client, random_source=fixed_random, spin_delay_seconds=0)
