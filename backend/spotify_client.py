"""
Spotify API Client Infrastructure

Handles the two calls the service makes against the catalog provider:
- OAuth client-credentials token exchange
- Search-by-ISRC lookup

Responses are parsed into catalog_models dataclasses so nothing outside
this module depends on the provider's wire format.
"""

import base64
import logging
from typing import Optional

import requests

from catalog_models import CatalogSearchResult
from errors import CatalogUnavailableError

logger = logging.getLogger(__name__)

TOKEN_URL = 'https://accounts.spotify.com/api/token'
SEARCH_URL = 'https://api.spotify.com/v1/search'


class SpotifyClient:
    """
    Thin Spotify Web API client using client-credentials authentication.
    """

    def __init__(self, client_id, client_secret, timeout=10, session=None):
        """
        Initialize Spotify Client

        Args:
            client_id: Spotify application client id
            client_secret: Spotify application client secret
            timeout: Per-request timeout in seconds
            session: Optional requests.Session (defaults to a new one)
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self.timeout = timeout
        self.session = session or requests.Session()

    # ========================================================================
    # AUTHENTICATION
    # ========================================================================

    def get_access_token(self) -> Optional[str]:
        """
        Exchange client credentials for an access token.
        Returns None if authentication fails for any reason.
        """
        credentials = f"{self.client_id}:{self.client_secret}"
        credentials_b64 = base64.b64encode(credentials.encode()).decode()

        try:
            response = self.session.post(
                TOKEN_URL,
                headers={
                    'Authorization': f'Basic {credentials_b64}',
                    'Content-Type': 'application/x-www-form-urlencoded'
                },
                data={'grant_type': 'client_credentials'},
                timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Failed to authenticate with Spotify: {e}")
            return None

        if response.status_code != 200:
            logger.error(f"Spotify token request returned HTTP {response.status_code}")
            return None

        try:
            token = response.json().get('access_token')
        except (ValueError, AttributeError) as e:
            logger.error(f"Unreadable Spotify token response: {e}")
            return None

        if not token:
            logger.error("Spotify token response did not include an access token")
            return None

        logger.debug("Spotify authentication successful")
        return token

    # ========================================================================
    # LOOKUP
    # ========================================================================

    def lookup_by_code(self, code: str, token: str) -> CatalogSearchResult:
        """
        Search the catalog for recordings with the given ISRC

        Args:
            code: ISRC to search for
            token: Access token from get_access_token()

        Returns:
            CatalogSearchResult with every candidate the provider returned

        Raises:
            CatalogUnavailableError: On transport errors, non-2xx responses
                or a response body that does not match the expected shape
        """
        try:
            response = self.session.get(
                SEARCH_URL,
                params={'q': f'isrc:{code}', 'type': 'track'},
                headers={'Authorization': f'Bearer {token}'},
                timeout=self.timeout
            )
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as e:
            logger.error(f"Spotify search failed for ISRC {code}: {e}")
            raise CatalogUnavailableError() from e
        except ValueError as e:
            logger.error(f"Spotify search returned invalid JSON for ISRC {code}: {e}")
            raise CatalogUnavailableError() from e

        result = CatalogSearchResult.from_api(data)
        logger.info(f"Spotify search for ISRC {code} returned {len(result.tracks)} candidate(s)")
        return result
