"""FastAPI application entry point."""

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from skill_sprint.api.routes import router
from skill_sprint.config import get_settings
from skill_sprint.logging_config import configure_logging

configure_logging()

# Fails at startup when OPENAI_API_KEY is missing.
settings = get_settings()

app = FastAPI(title="SkillSprint", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(router)


def main() -> None:
    """Run the application."""
    uvicorn.run(
        "skill_sprint.main:app",
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level="info",
    )


if __name__ == "__main__":
    main()
