"""Read-only projections of SessionState for each screen.

Building a view never changes the session state. Rival progress jitter is
drawn at render time and not stored.
"""

from pydantic import BaseModel

from skill_sprint.models.session import SessionState, View
from skill_sprint.models.sprint import SPRINT_LENGTH_DAYS, Project
from skill_sprint.sprint.randomness import RandomSource

RIVAL_PROGRESS_PER_DAY = 7
RIVAL_PROGRESS_JITTER = 5.0
FREE_TIER_WAIT_WEEKS = 4
PREMIUM_PRICE = "$9.99/mo"
PREMIUM_BENEFITS = [
    "Instant access to all sprints",
    "Advanced AI mentor feedback",
    "Verified certificates",
]


class DashboardView(BaseModel):
    skill_name: str
    current_day: int
    total_days: int = SPRINT_LENGTH_DAYS
    user_score: int
    rival_name: str
    rival_score: int
    user_progress: float
    rival_progress: float
    projects: list[Project]
    open_project: Project | None = None


class SummaryView(BaseModel):
    skill_name: str
    user_score: int
    rival_name: str
    rival_score: int
    is_winner: bool
    share_text: str


class PremiumGateView(BaseModel):
    wait_weeks: int = FREE_TIER_WAIT_WEEKS
    price: str = PREMIUM_PRICE
    benefits: list[str] = PREMIUM_BENEFITS


def dashboard_view(state: SessionState, random_source: RandomSource) -> DashboardView:
    sprint = state.sprint
    total = len(sprint.projects)
    user_progress = (sprint.graded_count / total) * 100 if total else 0.0
    rival_progress = min(
        sprint.current_day * RIVAL_PROGRESS_PER_DAY
        + random_source.jitter(RIVAL_PROGRESS_JITTER),
        100.0,
    )
    open_project = (
        sprint.get_project(state.open_project_id)
        if state.open_project_id is not None
        else None
    )
    return DashboardView(
        skill_name=sprint.skill.name if sprint.skill else "",
        current_day=sprint.current_day,
        user_score=sprint.user_score,
        rival_name=sprint.rival_name,
        rival_score=sprint.rival_score,
        user_progress=round(user_progress, 1),
        rival_progress=round(max(rival_progress, 0.0), 1),
        projects=sprint.projects,
        open_project=open_project,
    )


def share_text(skill_name: str, user_score: int, is_winner: bool) -> str:
    verb = "won" if is_winner else "completed"
    return (
        f"I just {verb} a 14-day {skill_name} sprint on SkillSprint AI! "
        f"Final Score: {user_score}. #SkillSprint #AI"
    )


def summary_view(state: SessionState) -> SummaryView:
    sprint = state.sprint
    skill_name = sprint.skill.name if sprint.skill else ""
    is_winner = bool(state.is_winner)
    return SummaryView(
        skill_name=skill_name,
        user_score=sprint.user_score,
        rival_name=sprint.rival_name,
        rival_score=sprint.rival_score,
        is_winner=is_winner,
        share_text=share_text(skill_name, sprint.user_score, is_winner),
    )


def render(state: SessionState, random_source: RandomSource) -> dict | None:
    """Projection for the current view, or None where the raw state suffices."""
    if state.view == View.DASHBOARD:
        return dashboard_view(state, random_source).model_dump(mode="json")
    if state.view == View.SPRINT_SUMMARY:
        return summary_view(state).model_dump(mode="json")
    if state.view == View.PREMIUM_GATE:
        return PremiumGateView().model_dump(mode="json")
    return None
