"""
Track Service

Fetches recordings from the catalog provider by ISRC, stores them with
their artists, and serves stored tracks back by code or artist name.
"""

import logging

from errors import CatalogUnavailableError, ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class TrackService:

    def __init__(self, store, catalog):
        self.store = store
        self.catalog = catalog

    def create_track(self, isrc):
        """
        Look up an ISRC in the catalog and persist the most popular match

        Args:
            isrc: Recording code from the request path

        Returns:
            The stored track with its artists

        Raises:
            CatalogUnavailableError: No access token, or the lookup failed
            NotFoundError: The catalog has no recording for this code
            ConflictError: A track with this code is already stored
        """
        isrc = _clean_code(isrc)

        token = self.catalog.get_access_token()
        if token is None:
            raise CatalogUnavailableError('Could not authenticate with catalog service')

        result = self.catalog.lookup_by_code(isrc, token)
        best = result.most_popular()
        if best is None:
            raise NotFoundError('No track')

        # Fast path only; insert_track is what actually guarantees uniqueness
        if self.store.track_exists(isrc):
            raise ConflictError()

        inserted = self.store.insert_track(
            isrc,
            best.name,
            best.image_url,
            [artist.name for artist in best.artists],
        )
        if not inserted:
            logger.info(f"Lost insert race for ISRC {isrc}")
            raise ConflictError()

        logger.info(f"Created track {isrc}: {best.name} ({len(best.artists)} artist(s))")
        return self.store.get_track(isrc)

    def get_track(self, isrc):
        """Stored track with artists; NotFoundError if absent"""
        track = self.store.get_track(_clean_code(isrc))
        if track is None:
            raise NotFoundError('Track not found')
        return track

    def search_by_artist(self, name):
        """
        Tracks whose artists' names contain name (case-insensitive)

        Returns:
            List of {isrc, image_uri, title}, one entry per track
        """
        if not name:
            raise ValidationError('Artist name required')

        tracks = self.store.search_tracks_by_artist(name)
        if not tracks:
            raise NotFoundError('No tracks found for the artist')
        return [
            {'isrc': t['isrc'], 'image_uri': t['image_uri'], 'title': t['title']}
            for t in tracks
        ]


def _clean_code(isrc):
    code = (isrc or '').strip()
    if not code:
        raise ValidationError('ISRC required')
    return code
