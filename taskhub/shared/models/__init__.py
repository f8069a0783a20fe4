from taskhub.shared.models.user import CurrentUser

__all__ = ["CurrentUser"]
