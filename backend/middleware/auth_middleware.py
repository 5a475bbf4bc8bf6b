"""
Authentication middleware for protecting Flask routes

This module provides the require_auth decorator, which rejects requests
without a valid bearer token before the view function runs.
"""

from functools import wraps
from flask import request, jsonify, g, current_app

from auth_utils import decode_token


def require_auth(f):
    """
    Decorator to require valid JWT access token

    Usage:
        @bp.route('/protected')
        @require_auth
        def protected_route():
            return jsonify({'user': g.current_username})

    The decorated function will have access to g.current_username, the
    username claim from the verified token.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        auth_header = request.headers.get('Authorization')

        if not auth_header:
            return jsonify({'error': 'No authorization header'}), 401

        # Expected format: "Bearer <token>"
        parts = auth_header.split(' ')
        if len(parts) != 2 or parts[0] != 'Bearer' or not parts[1]:
            return jsonify({'error': 'Invalid authorization header format'}), 401

        secret = current_app.config['SETTINGS'].jwt_secret
        try:
            payload = decode_token(parts[1], secret)
        except ValueError as e:
            return jsonify({'error': f'Invalid token: {e}'}), 401

        g.current_username = payload['username']
        return f(*args, **kwargs)

    return decorated_function
