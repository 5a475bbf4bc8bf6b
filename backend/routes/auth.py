"""
Authentication routes: register, login

Both routes are public; every other business route requires the token
returned by /login.
"""

from flask import Blueprint, request, jsonify, current_app
import logging

from errors import ValidationError

logger = logging.getLogger(__name__)
auth_bp = Blueprint('auth', __name__)


def _credentials_from_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    return data.get('username'), data.get('password')


@auth_bp.route('/register', methods=['POST'])
def register():
    """
    Register new user with username and password

    Request body:
        {"username": "alice", "password": "secret"}

    Returns:
        201: {"id": 1, "username": "alice", "created_at": "..."}
        400: Invalid input or username already taken
        500: Server error
    """
    username, password = _credentials_from_body()
    user = current_app.extensions['auth_service'].register(username, password)
    return jsonify(user), 201


@auth_bp.route('/login', methods=['POST'])
def login():
    """
    Login with username and password

    Returns:
        200: {"token": "..."}
        400: Invalid input
        401: Invalid credentials
        500: Server error
    """
    username, password = _credentials_from_body()
    token = current_app.extensions['auth_service'].login(username, password)
    return jsonify({'token': token}), 200
