"""Result shapes requested from the completion service.

Each model doubles as the required-shape descriptor (its JSON schema is sent
with the request) and as the validating decoder for the response.
"""

from pydantic import BaseModel, Field, field_validator

from skill_sprint.models.sprint import SPRINT_LENGTH_DAYS, Difficulty

SPRINT_ITEM_COUNT = 3


class ProfileAnalysis(BaseModel):
    """Skills extracted from the resume text plus a suggested path."""

    current_skills: list[str]
    recommended_path: str


class SkillDraft(BaseModel):
    name: str = Field(description="Name of the skill (e.g., React, Python Data Analysis, Public Speaking)")
    rationale: str = Field(description="Why this is a good fit in 1 sentence")
    category: str = Field(description="Tech, Soft Skill, Design, or Business")


class SkillDrafts(BaseModel):
    skills: list[SkillDraft] = Field(
        min_length=SPRINT_ITEM_COUNT, max_length=SPRINT_ITEM_COUNT
    )


class ProjectDraft(BaseModel):
    title: str
    description: str = Field(description="Clear instructions on what to do. Max 3 sentences.")
    difficulty: Difficulty
    deliverable_type: str = Field(description="e.g., Code snippet, 300-word reflection, Link")
    day_due: int = Field(ge=1, le=SPRINT_LENGTH_DAYS)


class ProjectDrafts(BaseModel):
    projects: list[ProjectDraft] = Field(
        min_length=SPRINT_ITEM_COUNT, max_length=SPRINT_ITEM_COUNT
    )

    @field_validator("projects")
    @classmethod
    def _due_days_increase(cls, projects: list[ProjectDraft]) -> list[ProjectDraft]:
        days = [p.day_due for p in projects]
        if any(later <= earlier for earlier, later in zip(days, days[1:])):
            raise ValueError(f"day_due must be strictly increasing, got {days}")
        return projects


class GradeResult(BaseModel):
    score: int = Field(ge=0, le=100, description="Score from 0 to 100")
    feedback: str = Field(description="2-3 sentences of constructive feedback.")
