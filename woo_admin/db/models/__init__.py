from .user import User
from .push_token import PushToken

__all__ = [
    'User',
    'PushToken',
]
