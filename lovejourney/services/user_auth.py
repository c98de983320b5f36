# services/user_auth.py
from uuid import UUID
from sqlalchemy.orm import Session

from lovejourney.core.config import settings
from lovejourney.core.exceptions import ConflictError, NotFoundError, UnauthorizedError
from lovejourney.models.user import User, UserRole
from lovejourney.schemas.user import UserCreate, UserUpdate, LoginRequest
from lovejourney.crud.user import crud_user


# =====================================================================
# SERVICE CLASS
# =====================================================================


class UserAuthService:
    """Service layer for user registration and authentication."""

    def __init__(self):
        self.crud = crud_user

    # =====================================================================
    # USER REGISTRATION
    # =====================================================================

    def register_user(
        self, db: Session, user_data: UserCreate, role: UserRole = UserRole.user
    ) -> User:
        """
        Create a new user account.

        Args:
            db: Database session
            user_data: Registration payload
            role: Role to assign (admins are created by setup scripts only)

        Returns:
            Created User instance

        Raises:
            ConflictError: If email already exists
        """
        if self.crud.get_by_email(db, email=user_data.email):
            raise ConflictError("Email already registered")

        return self.crud.create(
            db,
            obj_in=user_data,
            role=role,
            default_timezone=settings.DEFAULT_TIMEZONE,
        )

    # =====================================================================
    # AUTHENTICATION & LOGIN
    # =====================================================================

    def authenticate_user(self, db: Session, login_data: LoginRequest) -> User:
        """
        Authenticate user with email and password.

        Raises:
            UnauthorizedError: If credentials are invalid
        """
        user = self.crud.get_by_email(db, email=login_data.email)
        if not user or not self.crud.verify_password(login_data.password, user.password_hash):
            raise UnauthorizedError("Invalid email or password")

        return self.crud.touch_login(db, db_obj=user)

    # =====================================================================
    # USER RETRIEVAL & UPDATE
    # =====================================================================

    def get_user_by_id(self, db: Session, user_id: UUID) -> User:
        user = self.crud.get(db, id=user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def update_profile(self, db: Session, user: User, update_data: UserUpdate) -> User:
        return self.crud.update(db, db_obj=user, obj_in=update_data)


# =====================================================================
# SINGLETON INSTANCE
# =====================================================================

user_auth_service = UserAuthService()
