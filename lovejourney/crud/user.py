# crud/user.py
from typing import Optional
from uuid import UUID
from datetime import datetime, timezone
from sqlalchemy.orm import Session
from passlib.context import CryptContext

from lovejourney.models.user import User, UserRole
from lovejourney.schemas.user import UserCreate, UserUpdate

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class UserCRUD:
    """CRUD operations for User model."""

    # =====================================================================
    # HELPER METHODS
    # =====================================================================

    @staticmethod
    def hash_password(password: str) -> str:
        """Hash a password."""
        return pwd_context.hash(password)

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        """Verify a password against its hash."""
        return pwd_context.verify(plain_password, hashed_password)

    # =====================================================================
    # CREATE OPERATIONS
    # =====================================================================

    def create(
        self,
        db: Session,
        *,
        obj_in: UserCreate,
        role: UserRole = UserRole.user,
        default_timezone: str = "UTC",
    ) -> User:
        """
        Create a new user.

        Args:
            db: Database session
            obj_in: UserCreate schema with registration data
            role: Role to assign
            default_timezone: Timezone used when the payload has none

        Returns:
            Created User instance
        """
        db_obj = User(
            email=obj_in.email,
            username=obj_in.username,
            password_hash=self.hash_password(obj_in.password),
            role=role,
            timezone=obj_in.timezone or default_timezone,
        )

        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    # =====================================================================
    # READ OPERATIONS
    # =====================================================================

    def get(self, db: Session, id: UUID) -> Optional[User]:
        return db.query(User).filter(User.id == id).first()

    def get_by_email(self, db: Session, *, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == email).first()

    # =====================================================================
    # UPDATE OPERATIONS
    # =====================================================================

    def update(self, db: Session, *, db_obj: User, obj_in: UserUpdate) -> User:
        update_data = obj_in.model_dump(exclude_unset=True)

        for field, value in update_data.items():
            if value is not None:
                setattr(db_obj, field, value)

        db_obj.updated_at = datetime.now(timezone.utc)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def touch_login(self, db: Session, *, db_obj: User) -> User:
        db_obj.last_login_at = datetime.now(timezone.utc)
        db.commit()
        db.refresh(db_obj)
        return db_obj


# Create singleton instance
crud_user = UserCRUD()
