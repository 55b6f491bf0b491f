"""Client-side storage for the bearer credential.

A single named slot in a JSON file. The SDK reads it before every
request; logout clears it.
"""

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

STORAGE_KEY = "jwt"


class CredentialStore:
    def __init__(self, path: Path, key: str = STORAGE_KEY):
        self.path = Path(path).expanduser()
        self.key = key

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning("Ignoring unreadable credential file %s", self.path)
            return {}
        return data if isinstance(data, dict) else {}

    def get(self) -> str | None:
        token = self._read().get(self.key)
        return token or None

    def set(self, token: str) -> None:
        data = self._read()
        data[self.key] = token
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data), encoding="utf-8")
        self.path.chmod(0o600)

    def clear(self) -> None:
        data = self._read()
        if self.key not in data:
            return
        del data[self.key]
        self.path.write_text(json.dumps(data), encoding="utf-8")
