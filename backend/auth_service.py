"""
User registration and login
"""

import logging

from auth_utils import hash_password, verify_password, generate_access_token
from errors import AuthError, ValidationError

logger = logging.getLogger(__name__)

MAX_USERNAME_LENGTH = 128


class AuthService:
    """
    Registers users and issues bearer tokens on successful login.
    """

    def __init__(self, store, jwt_secret, bcrypt_rounds=10):
        self.store = store
        self.jwt_secret = jwt_secret
        self.bcrypt_rounds = bcrypt_rounds

    @staticmethod
    def _validate_credentials(username, password):
        if not isinstance(username, str) or not username.strip():
            raise ValidationError('Username and password required')
        if not isinstance(password, str) or not password:
            raise ValidationError('Username and password required')
        if len(username) > MAX_USERNAME_LENGTH:
            raise ValidationError(f'Username must be at most {MAX_USERNAME_LENGTH} characters')

    def register(self, username, password):
        """
        Hash the password and store a new user

        Returns:
            Public user record: id, username, created_at

        Raises:
            ValidationError: Missing fields or username already taken
        """
        self._validate_credentials(username, password)
        password_hash = hash_password(password, rounds=self.bcrypt_rounds)
        user = self.store.create_user(username, password_hash)
        logger.info(f"User registered: {username}")
        return {
            'id': user['id'],
            'username': user['username'],
            'created_at': user.get('created_at'),
        }

    def login(self, username, password):
        """
        Verify credentials and issue a signed access token

        Raises:
            ValidationError: Missing fields
            AuthError: Unknown user or wrong password
        """
        if not isinstance(username, str) or not isinstance(password, str):
            raise ValidationError('Username and password required')

        user = self.store.find_user_by_username(username)
        if not user or not verify_password(password, user['password_hash']):
            logger.info(f"Failed login for: {username}")
            raise AuthError('Invalid credentials')

        logger.info(f"User logged in: {username}")
        return generate_access_token(user['username'], self.jwt_secret)
