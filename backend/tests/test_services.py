"""Tests for AuthService and TrackService against the in-memory store."""

import pytest

from auth_service import AuthService
from auth_utils import decode_token
from catalog_models import CatalogSearchResult
from errors import (
    AuthError,
    CatalogUnavailableError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from track_service import TrackService

from conftest import InMemoryStore, StubCatalog, make_track


@pytest.fixture
def auth_service(store):
    return AuthService(store, 'secret', bcrypt_rounds=4)


@pytest.fixture
def track_service(store, catalog):
    return TrackService(store, catalog)


class TestAuthService:

    def test_register_then_login(self, auth_service, store):
        user = auth_service.register('alice', 'wonderland')

        assert user['username'] == 'alice'
        assert 'password_hash' not in user
        assert store.users['alice']['password_hash'] != 'wonderland'

        token = auth_service.login('alice', 'wonderland')
        assert decode_token(token, 'secret')['username'] == 'alice'
        assert 'wonderland' not in token
        assert store.users['alice']['password_hash'] not in token

    def test_duplicate_username(self, auth_service):
        auth_service.register('alice', 'one')
        with pytest.raises(ValidationError):
            auth_service.register('alice', 'two')

    @pytest.mark.parametrize('username,password', [
        ('', 'pw'),
        ('   ', 'pw'),
        ('bob', ''),
        (None, 'pw'),
        ('bob', 12345),
        ('x' * 129, 'pw'),
    ])
    def test_register_rejects_bad_input(self, auth_service, username, password):
        with pytest.raises(ValidationError):
            auth_service.register(username, password)

    def test_login_wrong_password(self, auth_service):
        auth_service.register('alice', 'wonderland')
        with pytest.raises(AuthError):
            auth_service.login('alice', 'looking-glass')

    def test_login_unknown_user(self, auth_service):
        with pytest.raises(AuthError):
            auth_service.login('nobody', 'pw')


class TestCreateTrack:

    def test_persists_most_popular_candidate(self, track_service, store):
        track = track_service.create_track('GBAYE0601498')

        assert track['isrc'] == 'GBAYE0601498'
        assert track['title'] == 'Let It Be'
        assert track['image_uri'] == 'https://img.example/cover.jpg'
        assert [a['name'] for a in track['artists']] == ['The Beatles', 'Billy Preston']

    def test_second_create_conflicts_and_keeps_one_row(self, track_service, store):
        track_service.create_track('USSM19900014')
        with pytest.raises(ConflictError):
            track_service.create_track('USSM19900014')

        assert list(store.tracks) == ['USSM19900014']
        assert len(store.artists) == 3

    def test_lost_insert_race_is_a_conflict(self, catalog):
        class RacingStore(InMemoryStore):
            def track_exists(self, isrc):
                # Another request inserts between the check and our insert
                return False

        store = RacingStore()
        store.insert_track('USSM19900014', 'So What', None, ['Miles Davis'])
        service = TrackService(store, catalog)

        with pytest.raises(ConflictError):
            service.create_track('USSM19900014')
        assert len(store.artists) == 1

    def test_no_results_is_not_found_and_persists_nothing(self, track_service, store):
        with pytest.raises(NotFoundError):
            track_service.create_track('ZZZZ00000000')
        assert store.tracks == {}
        assert store.insert_calls == 0

    def test_missing_provider_token_short_circuits(self, store):
        catalog = StubCatalog(token=None)
        service = TrackService(store, catalog)

        with pytest.raises(CatalogUnavailableError):
            service.create_track('GBAYE0601498')
        assert catalog.lookups == []

    def test_track_without_artists(self, store):
        catalog = StubCatalog({'AAA': CatalogSearchResult(tracks=[make_track('Silence', 1, [])])})
        track = TrackService(store, catalog).create_track('AAA')
        assert track['artists'] == []

    def test_blank_code_rejected(self, track_service):
        with pytest.raises(ValidationError):
            track_service.create_track('  ')


class TestReadTracks:

    def test_get_track_missing(self, track_service):
        with pytest.raises(NotFoundError):
            track_service.get_track('NOPE')

    def test_get_track_returns_all_artists_once(self, track_service):
        track_service.create_track('USSM19900014')
        track = track_service.get_track('USSM19900014')
        names = [a['name'] for a in track['artists']]
        assert sorted(names) == ['Bill Evans', 'John Coltrane', 'Miles Davis']

    def test_search_is_case_insensitive_substring(self, track_service):
        track_service.create_track('GBAYE0601498')
        results = track_service.search_by_artist('bea')
        assert results == [{
            'isrc': 'GBAYE0601498',
            'image_uri': 'https://img.example/cover.jpg',
            'title': 'Let It Be',
        }]

    def test_search_returns_track_once_for_multiple_matching_artists(self, track_service):
        track_service.create_track('USSM19900014')
        # "Bill Evans" and "Miles Davis" both contain "s"; "John Coltrane" does not
        results = track_service.search_by_artist('S')
        assert [r['isrc'] for r in results] == ['USSM19900014']

    def test_search_no_match(self, track_service):
        track_service.create_track('USSM19900014')
        with pytest.raises(NotFoundError):
            track_service.search_by_artist('Coltrane Quartet')

    def test_search_whitespace_is_a_literal_substring(self, track_service):
        track_service.create_track('GBAYE0601498')
        results = track_service.search_by_artist(' ')
        assert [r['isrc'] for r in results] == ['GBAYE0601498']

    def test_search_empty_query_rejected(self, track_service):
        with pytest.raises(ValidationError):
            track_service.search_by_artist('')
