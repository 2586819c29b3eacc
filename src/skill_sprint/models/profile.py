"""User profile captured during onboarding."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_DISPLAY_NAME = "Sprinter"
FALLBACK_RESUME_TEXT = "General professional interested in growth"


class CareerIntent(StrEnum):
    """What the user wants out of the sprint."""

    ADVANCE = "Advance in current role"
    TRANSITION = "Transition to new career"
    EXPLORE = "Just exploring"


class UserProfile(BaseModel):
    """Profile created once onboarding completes; read-only afterwards."""

    model_config = ConfigDict(frozen=True)

    name: str = DEFAULT_DISPLAY_NAME
    intent: CareerIntent | None = None
    resume_text: str = ""
    current_skills: list[str] = Field(default_factory=list)
    recommended_path: str = ""

    @property
    def effective_intent(self) -> CareerIntent:
        """Intent used for prompts; unset falls back to exploring."""
        return self.intent or CareerIntent.EXPLORE
