"""Session aggregate: current view, profile, sprint and request sub-states."""

from enum import StrEnum

from pydantic import BaseModel, Field

from skill_sprint.models.profile import UserProfile
from skill_sprint.models.sprint import SkillRecommendation, SprintState


class View(StrEnum):
    """Screens of the guided flow."""

    ONBOARDING = "onboarding"
    ROULETTE = "roulette"
    DASHBOARD = "dashboard"
    SPRINT_SUMMARY = "sprint_summary"
    PREMIUM_GATE = "premium_gate"


class Operation(StrEnum):
    """Asynchronous operations triggered by user actions."""

    EXTRACT_PROFILE = "extract_profile"
    RECOMMEND_SKILLS = "recommend_skills"
    SPIN = "spin"
    GENERATE_PROJECTS = "generate_projects"
    GRADE_SUBMISSION = "grade_submission"


class RequestStatus(StrEnum):
    IDLE = "idle"
    IN_FLIGHT = "in_flight"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class RequestState(BaseModel):
    """Status of the latest call for one operation."""

    status: RequestStatus = RequestStatus.IDLE
    error: str | None = None


def _idle_requests() -> dict[Operation, RequestState]:
    return {op: RequestState() for op in Operation}


class SessionState(BaseModel):
    """Single source of truth for one user's session."""

    view: View = View.ONBOARDING
    profile: UserProfile | None = None
    recommendations: list[SkillRecommendation] = Field(default_factory=list)
    spin_result: SkillRecommendation | None = None
    sprint: SprintState = Field(default_factory=SprintState)
    open_project_id: int | None = None
    is_winner: bool | None = None
    requests: dict[Operation, RequestState] = Field(default_factory=_idle_requests)

    def request(self, operation: Operation) -> RequestState:
        return self.requests.get(operation, RequestState())

    def is_in_flight(self, operation: Operation) -> bool:
        return self.request(operation).status == RequestStatus.IN_FLIGHT

    @property
    def in_flight_operation(self) -> Operation | None:
        """The outstanding operation, if any."""
        return next(
            (op for op, r in self.requests.items() if r.status == RequestStatus.IN_FLIGHT),
            None,
        )
