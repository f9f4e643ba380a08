from uuid import UUID
from typing import Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from ..entities.user import User
from ..core.exceptions import NotFoundError, StorageUnavailableError
from ..logging import logger


class UserService:

    @staticmethod
    def find_user_by_id(db: Session, user_id: UUID) -> Optional[User]:
        """Get user by ID, or None"""
        try:
            return db.query(User).filter(User.id == user_id).first()
        except SQLAlchemyError as e:
            logger.error(f"Error loading user {user_id}: {e}")
            raise StorageUnavailableError("load user", e) from e

    @staticmethod
    def get_user_by_id(db: Session, user_id: UUID) -> User:
        user = UserService.find_user_by_id(db, user_id)
        if not user:
            logger.warning(f"User not found with ID: {user_id}")
            raise NotFoundError("User", user_id)
        return user

    @staticmethod
    def get_user_by_email(db: Session, email: str) -> Optional[User]:
        """Get user by email"""
        try:
            return db.query(User).filter(User.email == email).first()
        except SQLAlchemyError as e:
            logger.error(f"Error loading user by email: {e}")
            raise StorageUnavailableError("load user by email", e) from e
