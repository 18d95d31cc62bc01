from typing import Optional, Dict, Any
from datetime import timedelta

from woo_admin.crud.user import UserRepository
from woo_admin.db.models.user import User as UserModel
from woo_admin.core.security import verify_password, create_access_token
from woo_admin.core.config import get_settings

settings = get_settings()

class PasswordNotSetError(Exception):
    """The user row carries neither a hashed nor a legacy password."""

async def authenticate_user(email: str, password: str, users: UserRepository) -> Optional[UserModel]:
    """
    Authenticate a user by verifying email and password.
    Returns the user if authentication is successful, None otherwise.
    Raises PasswordNotSetError when the stored row has no password to check against.
    """
    user = await users.get_by_email(email)
    if not user:
        return None

    # Prefer hashed_password; older rows only have the legacy column
    stored_hash = user.hashed_password or user.password
    if not stored_hash:
        raise PasswordNotSetError("User password not set")

    if not verify_password(password, stored_hash):
        return None

    return user

def create_user_token(user: UserModel) -> Dict[str, Any]:
    """
    Create a session token for the given user.
    Returns a dictionary with the token data.
    """
    access_token_expires = timedelta(minutes=int(settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    access_token = create_access_token(
        data={"sub": str(user.id)},
        expires_delta=access_token_expires
    )

    return {
        "access_token": access_token,
        "token_type": "bearer"
    }
