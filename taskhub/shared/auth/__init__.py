from taskhub.shared.auth.dependencies import (
    get_current_user_optional,
    get_current_user_required,
)

__all__ = ["get_current_user_optional", "get_current_user_required"]
