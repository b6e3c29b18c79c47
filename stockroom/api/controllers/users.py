"""
Users Controller - Staff directory
"""

from flask_restx import Namespace, Resource
from stockroom.middlewares.auth import REVIEWER_ROLES, require_roles
from stockroom.services import UserService
from stockroom.utils.schemas import UserResponseSchema

users_ns = Namespace('users', description='Staff directory')

user_response_schema = UserResponseSchema()


@users_ns.route('')
class UserList(Resource):
    @users_ns.doc('list_users')
    @require_roles(*REVIEWER_ROLES)
    def get(self):
        """List users ordered by username"""
        users = UserService().list_users()
        return user_response_schema.dump(users, many=True), 200
