"""Exceptions raised by the sprint session and the completion boundary."""

GENERIC_FAILURE_MESSAGE = "AI analysis failed. Please try again."


class SprintError(Exception):
    """Base exception for sprint session operations."""


class CompletionError(SprintError):
    """The completion service rejected the call or returned unusable content.

    The message shown to users is always the generic one; the underlying
    cause is chained for logging.
    """

    def __init__(self, operation: str, reason: str = ""):
        super().__init__(GENERIC_FAILURE_MESSAGE)
        self.operation = operation
        self.reason = reason


class InvalidTransitionError(SprintError):
    """Action is not allowed in the current view."""

    def __init__(self, view: str, action: str):
        super().__init__(f"Cannot {action} while in view '{view}'")
        self.view = view
        self.action = action


class RequestInFlightError(SprintError):
    """The same operation is already outstanding."""

    def __init__(self, operation: str):
        super().__init__(f"Operation '{operation}' is already in flight")
        self.operation = operation


class ProjectNotFoundError(SprintError):
    """No project with the given id exists in the sprint."""

    def __init__(self, project_id: int):
        super().__init__(f"Project {project_id} not found")
        self.project_id = project_id


class ProjectLockedError(SprintError):
    """Project cannot be opened or submitted in its current status."""

    def __init__(self, project_id: int, status: str):
        super().__init__(f"Project {project_id} is {status}")
        self.project_id = project_id
        self.status = status
