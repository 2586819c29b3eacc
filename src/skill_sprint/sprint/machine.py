"""Sprint view-state machine.

Views: onboarding -> roulette -> dashboard -> sprint_summary -> premium_gate,
and premium_gate -> onboarding on restart. Every transition takes the prior
SessionState and returns a new one; the input is never mutated.
"""

import structlog

from skill_sprint.errors import (
    InvalidTransitionError,
    ProjectLockedError,
    ProjectNotFoundError,
    RequestInFlightError,
)
from skill_sprint.models.profile import UserProfile
from skill_sprint.models.session import (
    Operation,
    RequestState,
    RequestStatus,
    SessionState,
    View,
)
from skill_sprint.models.sprint import (
    SPRINT_LENGTH_DAYS,
    Project,
    ProjectStatus,
    SkillRecommendation,
    SprintState,
)

logger = structlog.get_logger()

VALID_TRANSITIONS: dict[View, list[View]] = {
    View.ONBOARDING: [View.ROULETTE],
    View.ROULETTE: [View.DASHBOARD],
    View.DASHBOARD: [View.SPRINT_SUMMARY],
    View.SPRINT_SUMMARY: [View.PREMIUM_GATE],
    View.PREMIUM_GATE: [View.ONBOARDING],
}


def can_transition(current: View, target: View) -> bool:
    return target in VALID_TRANSITIONS.get(current, [])


def require_view(state: SessionState, view: View, action: str) -> None:
    if state.view != view:
        raise InvalidTransitionError(state.view.value, action)


def _advance(state: SessionState, target: View, action: str, **update) -> SessionState:
    if not can_transition(state.view, target):
        raise InvalidTransitionError(state.view.value, action)
    logger.info("view_changed", old_view=state.view.value, new_view=target.value)
    return state.model_copy(update={"view": target, **update})


# Request sub-states


def begin_request(state: SessionState, operation: Operation) -> SessionState:
    """Mark an operation in flight.

    Only one operation may be outstanding per session, so any in-flight
    request (the same one or another) refuses the new one.
    """
    busy = state.in_flight_operation
    if busy is not None:
        raise RequestInFlightError(busy.value)
    requests = {**state.requests, operation: RequestState(status=RequestStatus.IN_FLIGHT)}
    return state.model_copy(update={"requests": requests})


def finish_request(
    state: SessionState, operation: Operation, error: str | None = None
) -> SessionState:
    """Record success, or failure with a user-facing message."""
    status = RequestStatus.FAILED if error else RequestStatus.SUCCEEDED
    requests = {**state.requests, operation: RequestState(status=status, error=error)}
    return state.model_copy(update={"requests": requests})


# View transitions


def complete_onboarding(state: SessionState, profile: UserProfile) -> SessionState:
    return _advance(state, View.ROULETTE, "complete onboarding", profile=profile)


def set_recommendations(
    state: SessionState, skills: list[SkillRecommendation]
) -> SessionState:
    require_view(state, View.ROULETTE, "load recommendations")
    return state.model_copy(update={"recommendations": skills, "spin_result": None})


def reveal_skill(state: SessionState, index: int) -> SessionState:
    """Reveal the skill the wheel landed on."""
    require_view(state, View.ROULETTE, "spin")
    if not 0 <= index < len(state.recommendations):
        raise InvalidTransitionError(state.view.value, f"reveal skill at index {index}")
    return state.model_copy(update={"spin_result": state.recommendations[index]})


def start_sprint(
    state: SessionState,
    skill: SkillRecommendation,
    projects: list[Project],
    rival_baseline: int,
    rival_name: str,
) -> SessionState:
    """Accept the revealed skill and open the dashboard on day 1.

    ``skill`` is the one the projects were generated for, captured before
    the generation call.
    """
    require_view(state, View.ROULETTE, "start sprint")
    if state.spin_result is None:
        raise InvalidTransitionError(state.view.value, "start sprint without a skill")
    sprint = SprintState(
        skill=skill,
        rival_name=rival_name,
        rival_score=rival_baseline,
        user_score=0,
        current_day=1,
        projects=projects,
    )
    return _advance(state, View.DASHBOARD, "start sprint", sprint=sprint)


def _find_project(state: SessionState, project_id: int) -> Project:
    project = state.sprint.get_project(project_id)
    if project is None:
        raise ProjectNotFoundError(project_id)
    return project


def open_project(state: SessionState, project_id: int) -> SessionState:
    """Open the project detail overlay; locked projects stay closed."""
    require_view(state, View.DASHBOARD, "open a project")
    project = _find_project(state, project_id)
    if project.status == ProjectStatus.LOCKED:
        raise ProjectLockedError(project_id, project.status.value)
    return state.model_copy(update={"open_project_id": project_id})


def close_project(state: SessionState) -> SessionState:
    require_view(state, View.DASHBOARD, "close a project")
    return state.model_copy(update={"open_project_id": None})


def require_gradable(state: SessionState, project_id: int) -> Project:
    """Return the project if it may receive a submission."""
    require_view(state, View.DASHBOARD, "submit a deliverable")
    project = _find_project(state, project_id)
    if project.status != ProjectStatus.ACTIVE:
        raise ProjectLockedError(project_id, project.status.value)
    return project


def grade_project(
    state: SessionState,
    project_id: int,
    submission: str,
    score: int,
    feedback: str,
    rival_increment: int,
) -> SessionState:
    """Commit a grade, unlock the next project and move both scores forward.

    Enters the sprint summary once every project is graded.
    """
    project = require_gradable(state, project_id)
    sprint = state.sprint

    projects = []
    unlock_next = False
    for p in sprint.projects:
        if p.id == project.id:
            p = p.model_copy(update={
                "status": ProjectStatus.GRADED,
                "user_submission": submission,
                "score": score,
                "feedback": feedback,
            })
            unlock_next = True
        elif unlock_next and p.status == ProjectStatus.LOCKED:
            p = p.model_copy(update={"status": ProjectStatus.ACTIVE})
            unlock_next = False
        projects.append(p)

    new_day = min(project.day_due + 1, SPRINT_LENGTH_DAYS)
    sprint = sprint.model_copy(update={
        "projects": projects,
        "user_score": sprint.user_score + score,
        "rival_score": sprint.rival_score + rival_increment,
        "current_day": max(sprint.current_day, new_day),
    })
    logger.info(
        "project_graded",
        project_id=project.id,
        score=score,
        user_score=sprint.user_score,
        rival_score=sprint.rival_score,
        current_day=sprint.current_day,
    )

    state = state.model_copy(update={"sprint": sprint, "open_project_id": None})
    if sprint.is_complete:
        is_winner = sprint.user_score >= sprint.rival_score
        state = _advance(state, View.SPRINT_SUMMARY, "finish sprint", is_winner=is_winner)
    return state


def claim_badge(state: SessionState) -> SessionState:
    return _advance(state, View.PREMIUM_GATE, "claim badge")


def restart(state: SessionState) -> SessionState:
    """Discard profile and sprint and return to onboarding."""
    if not can_transition(state.view, View.ONBOARDING):
        raise InvalidTransitionError(state.view.value, "restart")
    logger.info("session_restarted")
    return SessionState()
