import enum

# ── List pagination ──────────────────────────────────────────────────────────
DEFAULT_PAGE: int = 1
DEFAULT_LIMIT: int = 10
MAX_LIMIT: int = 100

TITLE_MAX_LENGTH: int = 255


class TaskStatus(str, enum.Enum):
    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"
