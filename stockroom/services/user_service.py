"""
User Service - Directory lookups for staff members
"""

from typing import List
import logging

from stockroom.exceptions import NotFoundError
from stockroom.models import User
from stockroom.repositories import UserRepository

logger = logging.getLogger(__name__)


class UserService:

    def __init__(self):
        self.user_repo = UserRepository()

    def get_user(self, user_id: int) -> User:
        user = self.user_repo.get_by_id(user_id)
        if not user:
            raise NotFoundError(f"User {user_id} not found")
        return user

    def list_users(self) -> List[User]:
        """Get all users ordered by username"""
        try:
            return self.user_repo.get_all()
        except Exception as e:
            logger.error(f"Error listing users: {str(e)}")
            raise
