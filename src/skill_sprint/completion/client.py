"""Completion client: structured JSON calls to the OpenAI chat completions API."""

from typing import TypeVar

import structlog
from openai import AsyncOpenAI, OpenAIError
from pydantic import BaseModel, ValidationError

from skill_sprint.completion.prompts import (
    build_grade_prompt,
    build_profile_context,
    build_profile_prompt,
    build_projects_prompt,
    build_recommend_prompt,
)
from skill_sprint.completion.results import (
    GradeResult,
    ProfileAnalysis,
    ProjectDraft,
    ProjectDrafts,
    SkillDraft,
    SkillDrafts,
)
from skill_sprint.errors import CompletionError
from skill_sprint.models.profile import CareerIntent
from skill_sprint.models.sprint import Project

logger = structlog.get_logger()

ResultT = TypeVar("ResultT", bound=BaseModel)


def response_format_for(shape: type[BaseModel]) -> dict:
    """Build the json_schema response format describing the required shape."""
    return {
        "type": "json_schema",
        "json_schema": {
            "name": shape.__name__,
            "schema": shape.model_json_schema(),
        },
    }


class CompletionClient:
    """Issues one structured completion per call; no retries, no caching.

    Args:
        api_key: OpenAI API key.
        model: Model to use for all operations.
        temperature: Sampling temperature.
        client: Pre-built AsyncOpenAI client (tests inject a mock).
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        temperature: float = 0.4,
        client: AsyncOpenAI | None = None,
    ):
        self.client = client or AsyncOpenAI(api_key=api_key, max_retries=0)
        self.model = model
        self.temperature = temperature

    async def complete(
        self,
        operation: str,
        instruction: str,
        shape: type[ResultT],
        context: str | None = None,
    ) -> ResultT:
        """Send an instruction and decode the reply into ``shape``.

        Args:
            operation: Name used for logging and error reporting.
            instruction: Natural-language instruction (system message).
            shape: Pydantic model describing and validating the payload.
            context: Optional secondary text block (user message).

        Returns:
            The validated payload.

        Raises:
            CompletionError: Transport failure, empty reply, or a payload
                that does not match ``shape``.
        """
        messages = [{"role": "system", "content": instruction}]
        if context:
            messages.append({"role": "user", "content": context})

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=self.temperature,
                response_format=response_format_for(shape),
            )
        except OpenAIError as e:
            logger.error("completion_request_failed", operation=operation, error=str(e))
            raise CompletionError(operation, "request failed") from e

        content = response.choices[0].message.content if response.choices else None
        if not content:
            logger.error("completion_empty", operation=operation)
            raise CompletionError(operation, "empty content")

        try:
            result = shape.model_validate_json(content)
        except ValidationError as e:
            logger.error(
                "completion_shape_mismatch",
                operation=operation,
                errors=e.error_count(),
            )
            raise CompletionError(operation, "shape mismatch") from e

        logger.info("completion_succeeded", operation=operation)
        return result

    async def extract_profile(
        self, resume_text: str, intent: CareerIntent
    ) -> ProfileAnalysis:
        return await self.complete(
            "extract_profile",
            build_profile_prompt(intent),
            ProfileAnalysis,
            context=build_profile_context(resume_text),
        )

    async def recommend_skills(
        self, current_skills: list[str], intent: CareerIntent, path: str
    ) -> list[SkillDraft]:
        result = await self.complete(
            "recommend_skills",
            build_recommend_prompt(current_skills, intent, path),
            SkillDrafts,
        )
        return result.skills

    async def generate_projects(self, skill_name: str) -> list[ProjectDraft]:
        result = await self.complete(
            "generate_projects",
            build_projects_prompt(skill_name),
            ProjectDrafts,
        )
        return result.projects

    async def grade_submission(
        self, project: Project, submission: str, skill_name: str
    ) -> GradeResult:
        return await self.complete(
            "grade_submission",
            build_grade_prompt(project.description, submission, skill_name),
            GradeResult,
        )
