"""
User Repository Implementation
"""

from typing import List, Optional

from stockroom.models import User
from .base import UserRepositoryInterface


class UserRepository(UserRepositoryInterface):
    """Concrete implementation of user repository"""

    def get_by_id(self, user_id: int) -> Optional[User]:
        """Get user by ID"""
        return User.query.filter_by(id=user_id).first()

    def get_all(self) -> List[User]:
        """Get all users ordered by username"""
        return User.query.order_by(User.username).all()

    def count_active(self) -> int:
        """Count users allowed to use the tracker"""
        return User.query.filter(User.is_active.is_(True)).count()
