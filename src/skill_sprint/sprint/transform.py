"""Decorate raw completion output into domain entities."""

from skill_sprint.completion.results import ProjectDraft, SkillDraft
from skill_sprint.models.sprint import Project, ProjectStatus, SkillRecommendation

SKILL_COLORS = ["bg-rose-500", "bg-cyan-500", "bg-amber-500"]


def decorate_skills(drafts: list[SkillDraft]) -> list[SkillRecommendation]:
    """Assign index-based ids and cycle display colors by position."""
    return [
        SkillRecommendation(
            id=f"skill-{index}",
            color=SKILL_COLORS[index % len(SKILL_COLORS)],
            **draft.model_dump(),
        )
        for index, draft in enumerate(drafts)
    ]


def decorate_projects(drafts: list[ProjectDraft]) -> list[Project]:
    """Number projects from 1; the first starts active, the rest locked."""
    return [
        Project(
            id=index + 1,
            status=ProjectStatus.ACTIVE if index == 0 else ProjectStatus.LOCKED,
            **draft.model_dump(),
        )
        for index, draft in enumerate(drafts)
    ]
