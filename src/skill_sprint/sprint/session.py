"""Sprint session: runs user actions through the completion client and the state machine."""

import asyncio
import time
import uuid
from contextlib import asynccontextmanager

import structlog

from skill_sprint.completion.client import CompletionClient
from skill_sprint.errors import CompletionError, InvalidTransitionError
from skill_sprint.models.profile import (
    DEFAULT_DISPLAY_NAME,
    FALLBACK_RESUME_TEXT,
    CareerIntent,
    UserProfile,
)
from skill_sprint.models.session import Operation, SessionState, View
from skill_sprint.models.sprint import DEFAULT_RIVAL_NAME
from skill_sprint.sprint import machine
from skill_sprint.sprint.randomness import RandomSource
from skill_sprint.sprint.transform import decorate_projects, decorate_skills

logger = structlog.get_logger()


class SprintSession:
    """Owns one user's SessionState and the handlers that advance it.

    Handlers commit a new state only when their completion call succeeds.
    On a CompletionError the request is marked failed and the error is
    re-raised for the caller to surface.

    Args:
        client: Completion client used for all AI calls.
        random_source: Source for the wheel spin and the rival's score.
        spin_delay_seconds: Simulated wheel spin duration.
        rival_name: Display name of the simulated rival.
    """

    def __init__(
        self,
        client: CompletionClient,
        random_source: RandomSource | None = None,
        spin_delay_seconds: float = 3.0,
        rival_name: str = DEFAULT_RIVAL_NAME,
        session_id: str | None = None,
    ):
        self.session_id = session_id or str(uuid.uuid4())
        self.client = client
        self.random = random_source or RandomSource()
        self.spin_delay_seconds = spin_delay_seconds
        self.rival_name = rival_name
        self.state = SessionState()

    @asynccontextmanager
    async def _request(self, operation: Operation):
        self.state = machine.begin_request(self.state, operation)
        try:
            yield
        except CompletionError as e:
            self.state = machine.finish_request(self.state, operation, error=str(e))
            logger.warning(
                "request_failed",
                session_id=self.session_id,
                operation=operation.value,
                reason=e.reason,
            )
            raise
        except BaseException:
            # Leave the control usable for a retry.
            self.state = machine.finish_request(self.state, operation, error="Request aborted.")
            raise
        else:
            self.state = machine.finish_request(self.state, operation)

    async def submit_profile(
        self,
        resume_text: str,
        intent: CareerIntent | None = None,
        name: str = "",
    ) -> SessionState:
        """Extract skills from the resume and move on to the roulette."""
        machine.require_view(self.state, View.ONBOARDING, "submit profile")
        text = resume_text.strip() or FALLBACK_RESUME_TEXT
        prompt_intent = intent or CareerIntent.EXPLORE

        async with self._request(Operation.EXTRACT_PROFILE):
            analysis = await self.client.extract_profile(text, prompt_intent)
            profile = UserProfile(
                name=name.strip() or DEFAULT_DISPLAY_NAME,
                intent=intent,
                resume_text=resume_text,
                current_skills=analysis.current_skills,
                recommended_path=analysis.recommended_path,
            )
            self.state = machine.complete_onboarding(self.state, profile)

        logger.info(
            "profile_extracted",
            session_id=self.session_id,
            skill_count=len(profile.current_skills),
        )
        return self.state

    async def load_recommendations(self) -> SessionState:
        """Fetch three recommended skills for the roulette."""
        machine.require_view(self.state, View.ROULETTE, "load recommendations")
        profile = self.state.profile

        async with self._request(Operation.RECOMMEND_SKILLS):
            drafts = await self.client.recommend_skills(
                profile.current_skills,
                profile.effective_intent,
                profile.recommended_path,
            )
            self.state = machine.set_recommendations(self.state, decorate_skills(drafts))

        logger.info(
            "skills_recommended",
            session_id=self.session_id,
            skills=[s.name for s in self.state.recommendations],
        )
        return self.state

    async def spin(self) -> SessionState:
        """Spin the wheel: uniform pick revealed after the simulated delay."""
        machine.require_view(self.state, View.ROULETTE, "spin")
        if not self.state.recommendations:
            raise InvalidTransitionError(self.state.view.value, "spin without skills")

        async with self._request(Operation.SPIN):
            await asyncio.sleep(self.spin_delay_seconds)
            index = self.random.pick_index(len(self.state.recommendations))
            self.state = machine.reveal_skill(self.state, index)

        logger.info("wheel_spun", session_id=self.session_id, skill=self.state.spin_result.name)
        return self.state

    async def accept_skill(self) -> SessionState:
        """Generate the sprint projects for the revealed skill and open the dashboard."""
        machine.require_view(self.state, View.ROULETTE, "start sprint")
        skill = self.state.spin_result
        if skill is None:
            raise InvalidTransitionError(self.state.view.value, "start sprint without a skill")

        async with self._request(Operation.GENERATE_PROJECTS):
            drafts = await self.client.generate_projects(skill.name)
            self.state = machine.start_sprint(
                self.state,
                skill,
                decorate_projects(drafts),
                rival_baseline=self.random.rival_baseline(),
                rival_name=self.rival_name,
            )

        logger.info(
            "sprint_started",
            session_id=self.session_id,
            skill=skill.name,
            rival_score=self.state.sprint.rival_score,
        )
        return self.state

    def open_project(self, project_id: int) -> SessionState:
        self.state = machine.open_project(self.state, project_id)
        return self.state

    def close_project(self) -> SessionState:
        self.state = machine.close_project(self.state)
        return self.state

    async def submit_deliverable(self, project_id: int, submission: str) -> SessionState:
        """Grade the active project's deliverable and commit the result."""
        project = machine.require_gradable(self.state, project_id)
        skill_name = self.state.sprint.skill.name

        async with self._request(Operation.GRADE_SUBMISSION):
            result = await self.client.grade_submission(project, submission, skill_name)
            self.state = machine.grade_project(
                self.state,
                project_id,
                submission=submission,
                score=result.score,
                feedback=result.feedback,
                rival_increment=self.random.rival_increment(),
            )

        if self.state.view == View.SPRINT_SUMMARY:
            logger.info(
                "sprint_finished",
                session_id=self.session_id,
                user_score=self.state.sprint.user_score,
                rival_score=self.state.sprint.rival_score,
                is_winner=self.state.is_winner,
            )
        return self.state

    def claim_badge(self) -> SessionState:
        self.state = machine.claim_badge(self.state)
        return self.state

    def restart(self) -> SessionState:
        self.state = machine.restart(self.state)
        return self.state


class SessionStore:
    """In-memory registry of live sessions; nothing survives a restart.

    Sessions idle for longer than ``ttl_seconds`` are evicted whenever the
    store is touched.

    Args:
        factory: Callable building a new SprintSession.
        ttl_seconds: Idle lifetime of a session.
        clock: Monotonic time source (tests inject a fake).
    """

    def __init__(self, factory, ttl_seconds: float = 3600.0, clock=time.monotonic):
        self._factory = factory
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._sessions: dict[str, SprintSession] = {}
        self._last_seen: dict[str, float] = {}

    def _evict_expired(self, now: float) -> None:
        expired = [
            sid for sid, seen in self._last_seen.items() if now - seen >= self._ttl_seconds
        ]
        for sid in expired:
            self.discard(sid)
        if expired:
            logger.info("sessions_evicted", count=len(expired))

    def create(self) -> SprintSession:
        now = self._clock()
        self._evict_expired(now)
        session = self._factory()
        self._sessions[session.session_id] = session
        self._last_seen[session.session_id] = now
        logger.info("session_created", session_id=session.session_id)
        return session

    def get(self, session_id: str) -> SprintSession | None:
        now = self._clock()
        self._evict_expired(now)
        session = self._sessions.get(session_id)
        if session is not None:
            self._last_seen[session_id] = now
        return session

    def discard(self, session_id: str) -> bool:
        """Drop a session; returns False if it was unknown."""
        self._last_seen.pop(session_id, None)
        return self._sessions.pop(session_id, None) is not None

    def __len__(self) -> int:
        return len(self._sessions)
