"""
User Model
"""

from stockroom.database import db, utcnow
from .enums import UserRole, enum_values


class User(db.Model):
    """Staff member known to the tracker; credentials live in the auth service"""
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(50), unique=True, nullable=False, index=True)
    full_name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    role = db.Column(
        db.Enum(UserRole, name='user_role', values_callable=enum_values),
        default=UserRole.EMPLOYEE,
        nullable=False
    )
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    def __repr__(self):
        return f'<User {self.username}>'
