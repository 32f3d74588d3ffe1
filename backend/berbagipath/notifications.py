from .notification_models import Notification


def push_notification(db, user_id: str, title: str, message: str, type_: str = 'system') -> Notification:
    """Queue an inbox notification on the session; the caller commits."""
    n = Notification(user_id=user_id, title=title, message=message, type=type_)
    db.add(n)
    return n
