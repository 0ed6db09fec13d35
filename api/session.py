"""Signed session tokens and the in-memory store of live tables."""

import logging
from datetime import datetime, timedelta
from uuid import uuid4

from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired

from api.table import TableSession
from config import config

logger = logging.getLogger(__name__)


class SessionSigner:
    """Sign and verify session IDs using itsdangerous."""

    def __init__(self, secret_key: str | None = None) -> None:
        self._serializer = URLSafeTimedSerializer(secret_key or config.security.secret_key)

    def sign(self, session_id: str) -> str:
        """Create a signed token from a session ID."""
        return self._serializer.dumps(session_id)

    def unsign(self, token: str, max_age: int | None = None) -> str | None:
        """
        Verify and extract session_id from a signed token.

        Args:
            token: The signed token to verify
            max_age: Maximum age in seconds (defaults to session_ttl)

        Returns:
            The session ID if valid, None otherwise
        """
        try:
            return self._serializer.loads(token, max_age=max_age or config.session_ttl)
        except (BadSignature, SignatureExpired):
            return None


_session_signer: SessionSigner | None = None


def get_session_signer() -> SessionSigner:
    """Get or create the session signer."""
    global _session_signer
    if _session_signer is None:
        _session_signer = SessionSigner()
    return _session_signer


def extract_session_id(token: str) -> str | None:
    """Return the raw session ID inside a signed token, or None if it is invalid."""
    return get_session_signer().unsign(token)


class TableStore:
    """
    Live tables keyed by signed session token.

    Tables hold running sequencers and are never serialised, so they only last
    as long as the process. Every lookup pushes a table's expiry back by the
    store's TTL; tables left idle longer than that are dropped.
    """

    def __init__(self, ttl: int | None = None) -> None:
        self.ttl = ttl or config.session_ttl
        self._tables: dict[str, tuple[TableSession, datetime]] = {}

    def open(self, table: TableSession) -> str:
        """Store a table under a freshly signed token and return the token."""
        self.cleanup_expired()
        token = get_session_signer().sign(str(uuid4()))
        self.put(token, table)
        return token

    def put(self, token: str, table: TableSession) -> None:
        """Store a table under an existing token, replacing any table there."""
        self._tables[token] = (table, self._expiry())

    def get(self, token: str) -> TableSession | None:
        """Return the table for a token, refreshing its expiry."""
        entry = self._tables.get(token)
        if entry is None:
            return None

        table, expiry = entry
        if expiry < datetime.now():
            self._retire(token)
            return None

        self._tables[token] = (table, self._expiry())
        return table

    def cleanup_expired(self) -> int:
        """Drop every table whose expiry has passed."""
        now = datetime.now()
        expired = [token for token, (_, expiry) in self._tables.items() if expiry < now]
        for token in expired:
            self._retire(token)
        if expired:
            logger.info("Dropped %d expired tables", len(expired))
        return len(expired)

    def _retire(self, token: str) -> None:
        table, _ = self._tables.pop(token)
        table.sequencer.close()

    def _expiry(self) -> datetime:
        return datetime.now() + timedelta(seconds=self.ttl)

    def __contains__(self, token: object) -> bool:
        return token in self._tables

    def __len__(self) -> int:
        return len(self._tables)


_table_store: TableStore | None = None


def get_table_store() -> TableStore:
    """Get or create the table store."""
    global _table_store
    if _table_store is None:
        _table_store = TableStore()
    return _table_store
