"""
Dataclasses for the catalog provider's search response.

Only the fields the service stores are modelled; everything else in the
provider payload is ignored.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional

from errors import CatalogUnavailableError


@dataclass
class CatalogArtist:
    name: str

    @classmethod
    def from_api(cls, data: Any) -> 'CatalogArtist':
        if not isinstance(data, dict) or not isinstance(data.get('name'), str):
            raise CatalogUnavailableError('Malformed artist in catalog response')
        return cls(name=data['name'])


@dataclass
class CatalogTrack:
    """
    A candidate recording returned for a code lookup.
    """
    name: str
    popularity: int
    image_url: Optional[str] = None    # First (largest) album image
    artists: List[CatalogArtist] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: Any) -> 'CatalogTrack':
        if not isinstance(data, dict) or not isinstance(data.get('name'), str):
            raise CatalogUnavailableError('Malformed track in catalog response')

        popularity = data.get('popularity') or 0
        if not isinstance(popularity, int):
            raise CatalogUnavailableError('Malformed popularity in catalog response')

        album = data.get('album') or {}
        images = album.get('images') if isinstance(album, dict) else None
        image_url = None
        if isinstance(images, list) and images and isinstance(images[0], dict):
            image_url = images[0].get('url')

        artists = [CatalogArtist.from_api(a) for a in data.get('artists') or []]
        return cls(
            name=data['name'],
            popularity=popularity,
            image_url=image_url,
            artists=artists,
        )


@dataclass
class CatalogSearchResult:
    tracks: List[CatalogTrack] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: Any) -> 'CatalogSearchResult':
        """Parse the body of a provider search call"""
        if not isinstance(data, dict):
            raise CatalogUnavailableError('Malformed catalog response')
        tracks = data.get('tracks') or {}
        items = tracks.get('items') if isinstance(tracks, dict) else None
        items = items or []
        if not isinstance(items, list):
            raise CatalogUnavailableError('Malformed catalog response')
        return cls(tracks=[CatalogTrack.from_api(item) for item in items])

    def most_popular(self) -> Optional[CatalogTrack]:
        """Highest popularity candidate; the first one wins a tie"""
        if not self.tracks:
            return None
        return max(self.tracks, key=lambda t: t.popularity)
