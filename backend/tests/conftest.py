"""Shared fixtures: in-memory store, stub catalog client and Flask test client."""

from datetime import datetime, timezone

import pytest

from app import create_app
from auth_utils import generate_access_token
from catalog_models import CatalogArtist, CatalogSearchResult, CatalogTrack
from config import Settings
from errors import ValidationError

JWT_SECRET = 'test-secret'


class InMemoryStore:
    """Dict-backed stand-in for CatalogStore with the same method contract"""

    def __init__(self):
        self.users = {}
        self.tracks = {}
        self.artists = []
        self.insert_calls = 0

    def ping(self):
        return True

    def create_user(self, username, password_hash):
        if username in self.users:
            raise ValidationError('Username already exists')
        user = {
            'id': len(self.users) + 1,
            'username': username,
            'password_hash': password_hash,
            'created_at': datetime(2024, 1, 1, tzinfo=timezone.utc),
        }
        self.users[username] = user
        return {k: v for k, v in user.items() if k != 'password_hash'}

    def find_user_by_username(self, username):
        user = self.users.get(username)
        return dict(user) if user else None

    def track_exists(self, isrc):
        return isrc in self.tracks

    def insert_track(self, isrc, title, image_uri, artist_names):
        self.insert_calls += 1
        if isrc in self.tracks:
            return False
        self.tracks[isrc] = {'isrc': isrc, 'title': title, 'image_uri': image_uri}
        for name in artist_names:
            self.artists.append({'id': len(self.artists) + 1, 'name': name, 'track_isrc': isrc})
        return True

    def get_track(self, isrc):
        track = self.tracks.get(isrc)
        if track is None:
            return None
        track = dict(track)
        track['artists'] = [a for a in self.artists if a['track_isrc'] == isrc]
        return track

    def search_tracks_by_artist(self, query):
        needle = query.lower()
        codes = {a['track_isrc'] for a in self.artists if needle in a['name'].lower()}
        found = [self.tracks[code] for code in codes]
        return sorted(found, key=lambda t: (t['title'], t['isrc']))


class StubCatalog:
    """Catalog client returning canned results keyed by ISRC"""

    def __init__(self, results=None, token='provider-token'):
        self.results = results or {}
        self.token = token
        self.token_calls = 0
        self.lookups = []

    def get_access_token(self):
        self.token_calls += 1
        return self.token

    def lookup_by_code(self, code, token):
        self.lookups.append((code, token))
        return self.results.get(code, CatalogSearchResult())


def make_track(name, popularity, artists, image_url='https://img.example/cover.jpg'):
    return CatalogTrack(
        name=name,
        popularity=popularity,
        image_url=image_url,
        artists=[CatalogArtist(name=a) for a in artists],
    )


@pytest.fixture
def settings():
    return Settings(
        db_name='catalog',
        db_user='catalog',
        db_password='catalog',
        db_host='localhost',
        jwt_secret=JWT_SECRET,
        spotify_client_id='client-id',
        spotify_client_secret='client-secret',
        bcrypt_rounds=4,
    )


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def catalog():
    return StubCatalog({
        'GBAYE0601498': CatalogSearchResult(tracks=[
            make_track('Let It Be - Remastered', 70, ['The Beatles']),
            make_track('Let It Be', 85, ['The Beatles', 'Billy Preston']),
            make_track('Let It Be (Live)', 85, ['The Beatles']),
        ]),
        'USSM19900014': CatalogSearchResult(tracks=[
            make_track('So What', 60, ['Miles Davis', 'John Coltrane', 'Bill Evans']),
        ]),
    })


@pytest.fixture
def app(settings, store, catalog):
    app = create_app(settings=settings, store=store, catalog=catalog)
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers():
    token = generate_access_token('alice', JWT_SECRET)
    return {'Authorization': f'Bearer {token}'}
