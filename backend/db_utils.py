"""
Database Utilities - PostgreSQL store for users, tracks and artists

CatalogStore owns a psycopg connection pool with an explicit open/close
lifecycle. It is constructed once by the app factory and handed to the
services that need it.

Track uniqueness is enforced by the primary key on tracks.isrc; inserts
use ON CONFLICT DO NOTHING so the database decides which of two racing
requests wins.
"""

import logging
from contextlib import contextmanager
from typing import Optional

import psycopg
from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool

from errors import ValidationError

logger = logging.getLogger(__name__)


SCHEMA_SQL = """
    CREATE TABLE IF NOT EXISTS users (
        id SERIAL PRIMARY KEY,
        username VARCHAR(128) NOT NULL UNIQUE,
        password_hash VARCHAR(128) NOT NULL,
        created_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP,
        updated_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP
    );

    CREATE TABLE IF NOT EXISTS tracks (
        isrc VARCHAR(32) PRIMARY KEY,
        title VARCHAR(255),
        image_uri VARCHAR(512),
        created_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP,
        updated_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP
    );

    CREATE TABLE IF NOT EXISTS artists (
        id SERIAL PRIMARY KEY,
        name VARCHAR(255) NOT NULL,
        track_isrc VARCHAR(32) NOT NULL REFERENCES tracks(isrc) ON DELETE CASCADE,
        created_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP,
        updated_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP
    );

    CREATE INDEX IF NOT EXISTS idx_artists_track_isrc ON artists(track_isrc);
"""


def escape_like(value):
    """
    Escape LIKE/ILIKE wildcards so user input matches literally

    Args:
        value: Raw substring from the request

    Returns:
        String safe to embed between % wildcards
    """
    return (
        value.replace('\\', '\\\\')
        .replace('%', '\\%')
        .replace('_', '\\_')
    )


class CatalogStore:
    """
    Pooled PostgreSQL access for the catalog service
    """

    def __init__(self, conninfo, min_size=1, max_size=5, timeout=30):
        self.conninfo = conninfo
        self.min_size = min_size
        self.max_size = max_size
        self.timeout = timeout
        self.pool: Optional[ConnectionPool] = None

    # ========================================================================
    # LIFECYCLE
    # ========================================================================

    def open(self):
        """Open the connection pool (idempotent)"""
        if self.pool is not None:
            return
        logger.info("Opening database connection pool...")
        self.pool = ConnectionPool(
            self.conninfo,
            min_size=self.min_size,
            max_size=self.max_size,
            open=True,
            timeout=self.timeout,
            kwargs={
                'row_factory': dict_row,
                'autocommit': False,
            }
        )
        logger.info("Connection pool opened")

    def close(self):
        """Close the connection pool"""
        if self.pool is None:
            return
        logger.info("Closing connection pool...")
        try:
            self.pool.close()
        finally:
            self.pool = None
        logger.info("Connection pool closed")

    @contextmanager
    def connection(self):
        """
        Borrow a connection from the pool

        The transaction is committed when the block exits normally and
        rolled back if it raises.
        """
        if self.pool is None:
            raise RuntimeError("CatalogStore is not open")
        with self.pool.connection() as conn:
            yield conn

    def init_schema(self):
        """Create tables and indexes if they do not exist"""
        with self.connection() as conn:
            conn.execute(SCHEMA_SQL)
        logger.info("Database schema ready")

    def ping(self):
        """Run a trivial query; raises if the database is unreachable"""
        with self.connection() as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1 AS ok")
                return cur.fetchone()['ok'] == 1

    # ========================================================================
    # USERS
    # ========================================================================

    def create_user(self, username, password_hash):
        """
        Insert a user

        Returns:
            Dict with id, username and created_at (never the hash)

        Raises:
            ValidationError: If the username is already taken
        """
        try:
            with self.connection() as conn:
                with conn.cursor() as cur:
                    cur.execute("""
                        INSERT INTO users (username, password_hash)
                        VALUES (%s, %s)
                        RETURNING id, username, created_at
                    """, (username, password_hash))
                    return cur.fetchone()
        except psycopg.errors.UniqueViolation:
            raise ValidationError('Username already exists')

    def find_user_by_username(self, username):
        """Return the user row including password_hash, or None"""
        with self.connection() as conn:
            with conn.cursor() as cur:
                cur.execute("""
                    SELECT id, username, password_hash, created_at
                    FROM users
                    WHERE username = %s
                """, (username,))
                return cur.fetchone()

    # ========================================================================
    # TRACKS AND ARTISTS
    # ========================================================================

    def track_exists(self, isrc):
        with self.connection() as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1 FROM tracks WHERE isrc = %s", (isrc,))
                return cur.fetchone() is not None

    def insert_track(self, isrc, title, image_uri, artist_names):
        """
        Insert a track and its artists in one transaction

        Args:
            isrc: Track code (primary key)
            title: Display title
            image_uri: Cover image URL, may be None
            artist_names: Names of the contributing artists

        Returns:
            True if the track was inserted, False if the ISRC already existed
        """
        with self.connection() as conn:
            with conn.cursor() as cur:
                cur.execute("""
                    INSERT INTO tracks (isrc, title, image_uri)
                    VALUES (%s, %s, %s)
                    ON CONFLICT (isrc) DO NOTHING
                    RETURNING isrc
                """, (isrc, title, image_uri))

                if cur.fetchone() is None:
                    return False

                if artist_names:
                    cur.executemany("""
                        INSERT INTO artists (name, track_isrc)
                        VALUES (%s, %s)
                    """, [(name, isrc) for name in artist_names])

        logger.debug(f"Inserted track {isrc} with {len(artist_names)} artist(s)")
        return True

    def get_track(self, isrc):
        """
        Fetch a track with its artists

        Returns:
            Track dict with an 'artists' list, or None if not found
        """
        with self.connection() as conn:
            with conn.cursor() as cur:
                cur.execute("""
                    SELECT isrc, title, image_uri, created_at, updated_at
                    FROM tracks
                    WHERE isrc = %s
                """, (isrc,))
                track = cur.fetchone()
                if track is None:
                    return None

                cur.execute("""
                    SELECT id, name, track_isrc, created_at, updated_at
                    FROM artists
                    WHERE track_isrc = %s
                    ORDER BY id
                """, (isrc,))
                track['artists'] = cur.fetchall()
                return track

    def search_tracks_by_artist(self, query):
        """
        Find tracks with at least one artist whose name contains query

        Matching is case-insensitive. Each track appears once even when
        several of its artists match.

        Returns:
            List of dicts with isrc, image_uri and title
        """
        pattern = f"%{escape_like(query)}%"
        with self.connection() as conn:
            with conn.cursor() as cur:
                cur.execute("""
                    SELECT t.isrc, t.image_uri, t.title
                    FROM tracks t
                    WHERE EXISTS (
                        SELECT 1 FROM artists a
                        WHERE a.track_isrc = t.isrc
                          AND a.name ILIKE %s
                    )
                    ORDER BY t.title, t.isrc
                """, (pattern,))
                return cur.fetchall()
