"""Tests for password hashing and JWT helpers."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from auth_utils import (
    ACCESS_TOKEN_EXPIRY,
    JWT_ALGORITHM,
    decode_token,
    generate_access_token,
    hash_password,
    verify_password,
)


class TestPasswordHashing:

    def test_hash_is_salted_and_verifiable(self):
        first = hash_password('hunter2', rounds=4)
        second = hash_password('hunter2', rounds=4)

        assert first != second
        assert 'hunter2' not in first
        assert verify_password('hunter2', first)
        assert verify_password('hunter2', second)

    def test_wrong_password_is_rejected(self):
        hashed = hash_password('hunter2', rounds=4)
        assert not verify_password('hunter3', hashed)

    def test_default_cost_factor_is_ten(self):
        hashed = hash_password('hunter2')
        assert hashed.startswith('$2b$10$')

    def test_malformed_hash_returns_false(self):
        assert verify_password('hunter2', 'not-a-bcrypt-hash') is False


class TestTokens:

    def test_token_carries_username_and_one_hour_expiry(self):
        token = generate_access_token('alice', 'secret')
        payload = decode_token(token, 'secret')

        assert payload['username'] == 'alice'
        assert payload['exp'] - payload['iat'] == int(ACCESS_TOKEN_EXPIRY.total_seconds())

    def test_wrong_secret_is_invalid(self):
        token = generate_access_token('alice', 'secret')
        with pytest.raises(ValueError, match='Invalid token'):
            decode_token(token, 'other-secret')

    def test_expired_token(self):
        past = datetime.now(timezone.utc) - timedelta(hours=2)
        token = jwt.encode(
            {'username': 'alice', 'iat': past, 'exp': past + timedelta(hours=1)},
            'secret',
            algorithm=JWT_ALGORITHM,
        )
        with pytest.raises(ValueError, match='expired'):
            decode_token(token, 'secret')

    def test_token_without_username_claim_is_invalid(self):
        token = jwt.encode(
            {'exp': datetime.now(timezone.utc) + timedelta(hours=1)},
            'secret',
            algorithm=JWT_ALGORITHM,
        )
        with pytest.raises(ValueError):
            decode_token(token, 'secret')

    def test_garbage_is_invalid(self):
        with pytest.raises(ValueError):
            decode_token('abc.def.ghi', 'secret')
