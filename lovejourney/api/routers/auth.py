# api/routers/auth.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from lovejourney.core.config import get_db
from lovejourney.core.security import (
    create_access_token,
    create_refresh_token,
    get_current_user,
    verify_refresh_token,
)
from lovejourney.services.user_auth import user_auth_service
from lovejourney.models.user import User
from lovejourney.schemas.user import (
    LoginRequest,
    RefreshTokenRequest,
    TokenResponse,
    UserCreate,
    UserOut,
    UserUpdate,
)

router = APIRouter(prefix="/auth", tags=["User Authentication"])


def _issue_tokens(user: User) -> TokenResponse:
    return TokenResponse(
        access_token=create_access_token(data={"sub": str(user.id)}),
        refresh_token=create_refresh_token(data={"sub": str(user.id)}),
        user=UserOut.model_validate(user),
    )


# =====================================================================
# PUBLIC ENDPOINTS - No authentication required
# =====================================================================

@router.post(
    "/register",
    response_model=UserOut,
    status_code=status.HTTP_201_CREATED,
    summary="Register new user account"
)
def register(
    user_data: UserCreate,
    db: Session = Depends(get_db)
):
    """
    Register a new user account.

    - **email**: Valid email address (required)
    - **password**: Min 8 characters with at least one letter and one digit
    - **username**: Optional display name
    - **timezone**: Optional IANA timezone used for the daily journal limit
    """
    return user_auth_service.register_user(db=db, user_data=user_data)


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Login to get access token"
)
def login(
    login_data: LoginRequest,
    db: Session = Depends(get_db)
):
    """Authenticate user and receive access and refresh tokens."""
    user = user_auth_service.authenticate_user(db, login_data)
    return _issue_tokens(user)


@router.post(
    "/refresh",
    response_model=TokenResponse,
    summary="Refresh access token"
)
def refresh_token(
    refresh_data: RefreshTokenRequest,
    db: Session = Depends(get_db)
):
    """Exchange a valid refresh token for a new token pair."""
    user_id = verify_refresh_token(refresh_data.refresh_token)
    user = user_auth_service.get_user_by_id(db, user_id=user_id)
    return _issue_tokens(user)


# =====================================================================
# USER ENDPOINTS - Authentication required
# =====================================================================

@router.get(
    "/me",
    response_model=UserOut,
    summary="Get current user profile"
)
def get_current_user_profile(
    current_user: User = Depends(get_current_user)
):
    return current_user


@router.put(
    "/me",
    response_model=UserOut,
    summary="Update current user profile"
)
def update_current_user_profile(
    update_data: UserUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Update the authenticated user's profile.

    - **username**: New display name (optional)
    - **timezone**: New IANA timezone (optional)
    """
    return user_auth_service.update_profile(db=db, user=current_user, update_data=update_data)
