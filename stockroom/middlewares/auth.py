"""
JWT Authentication and Authorization Middleware
Turns the bearer token issued by the auth service into an actor identity
"""

import jwt
from datetime import datetime, timedelta, timezone
from functools import wraps
from flask import request, g, current_app
import logging

logger = logging.getLogger(__name__)

# Roles allowed to move stock and edit the catalogue
STOCK_HANDLER_ROLES = ('admin', 'manager', 'staff')
# Roles allowed to review requests and delete products
REVIEWER_ROLES = ('admin', 'manager')


class AuthError(Exception):
    """Custom authentication error"""
    def __init__(self, message, status_code=401):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


def get_token_from_request():
    """Extract JWT token from Authorization header"""
    auth_header = request.headers.get('Authorization', '')

    if not auth_header:
        return None

    if not auth_header.startswith('Bearer '):
        raise AuthError('Authorization header must start with Bearer', 401)

    parts = auth_header.split(' ')
    if len(parts) != 2:
        raise AuthError('Invalid Authorization header format', 401)

    return parts[1]


def decode_jwt(token):
    """Decode and validate JWT token"""
    config = current_app.config
    options = {}
    if not config.get('JWT_AUDIENCE'):
        options['verify_aud'] = False

    try:
        return jwt.decode(
            token,
            config['JWT_SECRET'],
            algorithms=[config['JWT_ALGORITHM']],
            issuer=config.get('JWT_ISSUER'),
            audience=config.get('JWT_AUDIENCE'),
            options=options
        )
    except jwt.ExpiredSignatureError:
        raise AuthError('Token has expired', 401)
    except jwt.InvalidTokenError as e:
        logger.warning(f'Invalid token: {str(e)}')
        raise AuthError('Invalid token', 401)


def create_token(user_id, role, expires_in=None):
    """Issue a token the way the auth service does; used by tooling and tests"""
    config = current_app.config
    payload = {'sub': str(user_id), 'role': role}
    if expires_in is not None:
        payload['exp'] = datetime.now(timezone.utc) + timedelta(seconds=expires_in)
    if config.get('JWT_ISSUER'):
        payload['iss'] = config['JWT_ISSUER']
    if config.get('JWT_AUDIENCE'):
        payload['aud'] = config['JWT_AUDIENCE']
    return jwt.encode(payload, config['JWT_SECRET'], algorithm=config['JWT_ALGORITHM'])


def _actor_from_payload(payload):
    raw_id = payload.get('id') or payload.get('user_id') or payload.get('sub')
    role = payload.get('role')

    if raw_id is None:
        raise AuthError('Token missing user identifier', 401)

    try:
        user_id = int(raw_id)
    except (TypeError, ValueError):
        raise AuthError('Token user identifier must be numeric', 401)

    if not role:
        raise AuthError('Token missing role', 401)

    return {'id': user_id, 'role': role}


def require_auth(f):
    """
    Decorator to require valid JWT authentication
    Attaches the actor to g.current_user
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        try:
            token = get_token_from_request()

            if not token:
                logger.warning('Authentication required: No token provided')
                return {
                    'error': 'Authentication required',
                    'message': 'No authentication token provided',
                    'status_code': 401
                }, 401

            g.current_user = _actor_from_payload(decode_jwt(token))
            logger.debug(f'Authentication successful for user: {g.current_user["id"]}')

        except AuthError as e:
            logger.warning(f'Authentication failed: {e.message}')
            return {
                'error': 'Authentication failed',
                'message': e.message,
                'status_code': e.status_code
            }, e.status_code

        return f(*args, **kwargs)

    return decorated_function


def require_roles(*required_roles):
    """
    Decorator to require specific roles
    Usage: @require_roles('admin') or @require_roles('admin', 'manager')
    """
    def decorator(f):
        @wraps(f)
        @require_auth
        def decorated_function(*args, **kwargs):
            user = g.current_user

            if user['role'] not in required_roles:
                logger.warning(
                    f'Authorization failed: User {user["id"]} has role {user["role"]}. '
                    f'Required: {required_roles}'
                )
                return {
                    'error': 'Forbidden',
                    'message': f'Required roles: {", ".join(required_roles)}',
                    'status_code': 403
                }, 403

            return f(*args, **kwargs)

        return decorated_function
    return decorator


def current_actor_id():
    return g.current_user['id']
