"""
Auth domain: FastAPI dependencies.

Re-exports the shared bearer-token guard so routes import from here, not from
shared directly.  Access tokens are verified with the access secret only; a
refresh token presented as a bearer token is rejected.
"""
from taskhub.shared.auth.dependencies import get_current_user_required

get_current_user = get_current_user_required

__all__ = ["get_current_user"]
