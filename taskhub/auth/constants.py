import enum

# ── Token lifetimes (defaults; overridable via Settings) ─────────────────────
ACCESS_TOKEN_EXPIRE_SECONDS: int = 3_600         # 1 hour
REFRESH_TOKEN_EXPIRE_SECONDS: int = 86_400 * 7   # 7 days

# ── Registration rules ───────────────────────────────────────────────────────
PASSWORD_MIN_LENGTH: int = 6
# local@domain.tld, no whitespace and exactly one "@"
EMAIL_PATTERN: str = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"

# Registering with this address yields an ADMIN account.
BOOTSTRAP_ADMIN_EMAIL: str = "admin@example.com"


class UserRole(str, enum.Enum):
    USER = "USER"
    ADMIN = "ADMIN"
