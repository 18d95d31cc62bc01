from fastapi import APIRouter, Depends, HTTPException, status

from woo_admin.crud.user import UserRepository, get_user_repository
from woo_admin.schemas.auth import LoginRequest, LoginResponse
from woo_admin.services.auth_service import authenticate_user, create_user_token

router = APIRouter()

@router.post("/login", response_model=LoginResponse)
async def login(
    form_data: LoginRequest,
    users: UserRepository = Depends(get_user_repository)
):
    """
    Verify email and password and issue a session token.
    The token is sent back as 'Authorization: Bearer <token>' on later calls.
    """
    if not form_data.email or not form_data.password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email & password required"
        )

    user = await authenticate_user(form_data.email, form_data.password, users)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = create_user_token(user)
    return LoginResponse(
        user_id=user.id,
        access_token=token["access_token"],
        token_type=token["token_type"],
    )
