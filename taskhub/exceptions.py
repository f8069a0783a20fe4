"""
Task service: domain-specific HTTP exceptions.

Five error kinds are modelled as base classes (InvalidInput, DuplicateResource,
Unauthorized, NotFound, Forbidden).  Every concrete error subclasses one of them
and presets its status code, machine-readable ``code`` and detail message so
callers never specify these at the call site.  The error envelope handler in
shared.middleware renders them uniformly.
"""
from fastapi import HTTPException, status


# ── Error kinds ───────────────────────────────────────────────────────────────

class InvalidInput(HTTPException):
    code = "invalid_input"

    def __init__(self, detail: str = "Invalid input.") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class DuplicateResource(HTTPException):
    code = "duplicate_resource"

    def __init__(self, detail: str = "Resource already exists.") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class Unauthorized(HTTPException):
    code = "unauthorized"

    def __init__(self, detail: str = "Not authenticated.") -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class NotFound(HTTPException):
    code = "not_found"

    def __init__(self, detail: str = "Resource not found.") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class Forbidden(HTTPException):
    code = "forbidden"

    def __init__(self, detail: str = "You do not have permission to perform this action.") -> None:
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


# ── Registration ──────────────────────────────────────────────────────────────

class InvalidEmail(InvalidInput):
    code = "invalid_email"

    def __init__(self) -> None:
        super().__init__("Invalid email format.")


class PasswordTooShort(InvalidInput):
    code = "password_too_short"

    def __init__(self, min_length: int) -> None:
        super().__init__(f"Password must be at least {min_length} characters long.")


class UserAlreadyExists(DuplicateResource):
    code = "user_already_exists"

    def __init__(self) -> None:
        super().__init__("A user with this email already exists.")


# ── Authentication ────────────────────────────────────────────────────────────

class InvalidCredentials(Unauthorized):
    code = "invalid_credentials"

    def __init__(self) -> None:
        super().__init__("Invalid email or password.")


class TokenInvalid(Unauthorized):
    """Bad signature, malformed, expired or incomplete token: one signal for all."""

    code = "token_invalid"

    def __init__(self) -> None:
        super().__init__("Token is invalid or has expired.")


# ── Tasks ─────────────────────────────────────────────────────────────────────

class TitleRequired(InvalidInput):
    code = "title_required"

    def __init__(self) -> None:
        super().__init__("Title is required.")


class InvalidTaskStatus(InvalidInput):
    code = "invalid_task_status"

    def __init__(self) -> None:
        super().__init__("Status must be one of: TODO, IN_PROGRESS, DONE.")


class InvalidDueDate(InvalidInput):
    code = "invalid_due_date"

    def __init__(self) -> None:
        super().__init__("Invalid due date format.")


class TaskNotFound(NotFound):
    code = "task_not_found"

    def __init__(self, task_id: object) -> None:
        super().__init__(f"Task with ID {task_id} not found.")


class TaskAccessDenied(Forbidden):
    code = "task_access_denied"

    def __init__(self) -> None:
        super().__init__("You do not have permission to access this task.")
