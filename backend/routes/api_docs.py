"""
API Documentation Route
Serves an OpenAPI 3.0 description of the public endpoints
"""

from flask import Blueprint, jsonify, request

api_docs_bp = Blueprint('api_docs', __name__)

ISRC_PARAMETER = {
    'in': 'path',
    'name': 'isrc',
    'required': True,
    'description': 'International Standard Recording Code for the track',
    'schema': {'type': 'string'},
}

CREDENTIALS_BODY = {
    'content': {
        'application/json': {
            'schema': {
                'type': 'object',
                'required': ['username', 'password'],
                'properties': {
                    'username': {'type': 'string'},
                    'password': {'type': 'string'},
                },
            }
        }
    }
}

BEARER = [{'bearerAuth': []}]


def _responses(**codes):
    return {code.lstrip('_'): {'description': text} for code, text in codes.items()}


def build_openapi_document(base_url):
    """Return the OpenAPI document as a dict"""
    return {
        'openapi': '3.0.0',
        'info': {
            'title': 'Track Catalog API',
            'version': '1.0.0',
            'description': 'Store and search music track metadata fetched from Spotify',
        },
        'servers': [{'url': base_url}],
        'components': {
            'securitySchemes': {
                'bearerAuth': {'type': 'http', 'scheme': 'bearer', 'bearerFormat': 'JWT'},
            },
        },
        'paths': {
            '/register': {
                'post': {
                    'summary': 'Register a new user',
                    'requestBody': CREDENTIALS_BODY,
                    'responses': _responses(
                        _201='User created', _400='Invalid input', _500='Server error'),
                },
            },
            '/login': {
                'post': {
                    'summary': 'Exchange username and password for a JWT',
                    'requestBody': CREDENTIALS_BODY,
                    'responses': _responses(
                        _200='Successful login', _401='Invalid user or password',
                        _500='Server error'),
                },
            },
            '/tracks/{isrc}': {
                'post': {
                    'summary': 'Create a track from Spotify metadata',
                    'parameters': [ISRC_PARAMETER],
                    'security': BEARER,
                    'responses': _responses(
                        _200='Track created', _400='Track already exists',
                        _401='Unauthorized', _404='No track', _500='Server error',
                        _502='Catalog service unavailable'),
                },
                'get': {
                    'summary': 'Get a stored track by ISRC',
                    'parameters': [ISRC_PARAMETER],
                    'security': BEARER,
                    'responses': _responses(
                        _200='Track fetched', _401='Unauthorized',
                        _404='Track not found', _500='Server error'),
                },
            },
            '/artists/{name}': {
                'get': {
                    'summary': 'Get stored tracks by artist name (substring match)',
                    'parameters': [{
                        'in': 'path',
                        'name': 'name',
                        'required': True,
                        'description': 'Part of the artist name',
                        'schema': {'type': 'string'},
                    }],
                    'security': BEARER,
                    'responses': _responses(
                        _200='Tracks fetched', _401='Unauthorized',
                        _404='No tracks found for the artist', _500='Server error'),
                },
            },
        },
    }


@api_docs_bp.route('/api-docs', methods=['GET'])
def openapi_document():
    """OpenAPI document for the API"""
    return jsonify(build_openapi_document(f"{request.scheme}://{request.host}"))
