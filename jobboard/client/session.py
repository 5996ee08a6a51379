"""
Client-side session cache.

Keeps the bearer token and the signed-in user under two fixed keys
(auth_token, auth_user) in a small JSON file, so a CLI or script picks the
session back up on the next run.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from jobboard.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

TOKEN_KEY = "auth_token"
USER_KEY = "auth_user"


class SessionStore:
    """Token + user cache persisted to a JSON file (memory only when path is None)."""

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path else None
        self.token: Optional[str] = None
        self.user: Optional[Dict[str, Any]] = None
        self._load()

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "SessionStore":
        """Session persisted at the configured client_session_file."""
        settings = settings or get_settings()
        return cls(settings.client_session_file)

    def _load(self) -> None:
        if not self.path or not self.path.exists():
            return
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.warning("Discarding unreadable session file %s", self.path)
            self.clear()
            return

        token = data.get(TOKEN_KEY) if isinstance(data, dict) else None
        user = data.get(USER_KEY) if isinstance(data, dict) else None
        if user is not None and not isinstance(user, dict):
            self.clear()
            return
        self.token = token
        self.user = user

    def _save(self) -> None:
        if not self.path:
            return
        data = {}
        if self.token is not None:
            data[TOKEN_KEY] = self.token
        if self.user is not None:
            data[USER_KEY] = self.user
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(data), encoding="utf-8")
        # Holds a bearer token: owner read/write only
        os.chmod(tmp, 0o600)
        tmp.replace(self.path)

    def set_auth(self, user: Dict[str, Any], token: str) -> None:
        self.user = user
        self.token = token
        self._save()

    def set_user(self, user: Dict[str, Any]) -> None:
        self.user = user
        self._save()

    def clear(self) -> None:
        self.user = None
        self.token = None
        self._save()

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None and self.user is not None
