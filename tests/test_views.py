"""Tests for the read-only screen projections."""

from conftest import FixedRandom

from skill_sprint.models.session import SessionState, View
from skill_sprint.models.sprint import SkillRecommendation, SprintState
from skill_sprint.sprint.views import (
    PremiumGateView,
    dashboard_view,
    render,
    share_text,
    summary_view,
)

SKILL = SkillRecommendation(
    id="skill-1", name="SQL Basics", rationale="r", category="Tech", color="bg-cyan-500"
)


def _summary(user_score: int, rival_score: int) -> SessionState:
    return SessionState(
        view=View.SPRINT_SUMMARY,
        sprint=SprintState(skill=SKILL, user_score=user_score, rival_score=rival_score),
        is_winner=user_score >= rival_score,
    )


class TestSummary:
    def test_winner(self):
        view = summary_view(_summary(300, 280))
        assert view.is_winner is True
        assert view.share_text.startswith("I just won a 14-day SQL Basics sprint")

    def test_not_winner(self):
        view = summary_view(_summary(200, 280))
        assert view.is_winner is False
        assert "I just completed" in view.share_text

    def test_share_text(self):
        assert share_text("UX Research", 250, True) == (
            "I just won a 14-day UX Research sprint on SkillSprint AI! "
            "Final Score: 250. #SkillSprint #AI"
        )


class TestDashboard:
    def test_progress(self):
        state = SessionState(
            view=View.DASHBOARD,
            sprint=SprintState(skill=SKILL, current_day=4, user_score=85, rival_score=190),
        )
        view = dashboard_view(state, FixedRandom(jitter=2.0))
        assert view.rival_progress == 30.0
        assert view.user_progress == 0.0
        assert view.total_days == 14

    def test_rival_progress_capped(self):
        state = SessionState(view=View.DASHBOARD, sprint=SprintState(current_day=14))
        view = dashboard_view(state, FixedRandom(jitter=4.0))
        assert view.rival_progress == 100.0

    def test_render_does_not_mutate(self):
        state = SessionState(
            view=View.DASHBOARD,
            sprint=SprintState(skill=SKILL, current_day=4, user_score=85, rival_score=190),
        )
        before = state.model_copy(deep=True)
        render(state, FixedRandom())
        render(state, FixedRandom())
        assert state == before


class TestRender:
    def test_onboarding_has_no_projection(self):
        assert render(SessionState(), FixedRandom()) is None

    def test_premium_gate(self):
        data = render(SessionState(view=View.PREMIUM_GATE), FixedRandom())
        assert data == PremiumGateView().model_dump(mode="json")
        assert data["wait_weeks"] == 4
