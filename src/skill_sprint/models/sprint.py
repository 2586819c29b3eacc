"""Sprint domain models: recommended skills, projects and the sprint aggregate."""

from enum import StrEnum

from pydantic import BaseModel, Field

SPRINT_LENGTH_DAYS = 14
DEFAULT_RIVAL_NAME = "Alex_Bot_92"


class Difficulty(StrEnum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class ProjectStatus(StrEnum):
    """Project lifecycle: locked -> active -> graded."""

    LOCKED = "locked"
    ACTIVE = "active"
    GRADED = "graded"


class SkillRecommendation(BaseModel):
    """A recommended skill decorated for display."""

    id: str
    name: str
    rationale: str
    category: str
    color: str


class Project(BaseModel):
    """One of the three sprint projects."""

    id: int
    day_due: int
    title: str
    description: str
    difficulty: Difficulty
    deliverable_type: str
    status: ProjectStatus = ProjectStatus.LOCKED
    user_submission: str | None = None
    score: int | None = None
    feedback: str | None = None


class SprintState(BaseModel):
    """In-progress sprint for the chosen skill."""

    skill: SkillRecommendation | None = None
    rival_name: str = DEFAULT_RIVAL_NAME
    rival_score: int = 0
    user_score: int = 0
    current_day: int = Field(default=1, ge=1, le=SPRINT_LENGTH_DAYS)
    projects: list[Project] = Field(default_factory=list)

    @property
    def active_project(self) -> Project | None:
        return next((p for p in self.projects if p.status == ProjectStatus.ACTIVE), None)

    @property
    def graded_count(self) -> int:
        return sum(1 for p in self.projects if p.status == ProjectStatus.GRADED)

    @property
    def is_complete(self) -> bool:
        """True when every project has been graded."""
        return bool(self.projects) and self.graded_count == len(self.projects)

    def get_project(self, project_id: int) -> Project | None:
        return next((p for p in self.projects if p.id == project_id), None)
