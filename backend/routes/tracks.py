# routes/tracks.py
"""
Track API Routes

Create tracks from the catalog provider by ISRC, fetch them back, and
search stored tracks by artist name. All routes require a bearer token.
"""
from flask import Blueprint, jsonify, current_app, g
import logging

from middleware.auth_middleware import require_auth

logger = logging.getLogger(__name__)
tracks_bp = Blueprint('tracks', __name__)


def _track_service():
    return current_app.extensions['track_service']


@tracks_bp.route('/tracks/<isrc>', methods=['POST'])
@require_auth
def create_track(isrc):
    """
    Fetch a track from Spotify by ISRC and store it

    Returns:
        200: Track with artists
        400: Track already exists
        401: Unauthorized
        404: No track for this ISRC
        502: Catalog service unavailable
    """
    logger.info(f"{g.current_username} requested track {isrc}")
    track = _track_service().create_track(isrc)
    return jsonify(track)


@tracks_bp.route('/tracks/<isrc>', methods=['GET'])
@require_auth
def get_track(isrc):
    """Get a stored track with its artists"""
    return jsonify(_track_service().get_track(isrc))


@tracks_bp.route('/artists/<path:name>', methods=['GET'])
@require_auth
def get_tracks_by_artist(name):
    """List stored tracks whose artist names contain the given text"""
    return jsonify(_track_service().search_by_artist(name))
