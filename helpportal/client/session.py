import json
import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_PATH = Path.home() / ".helpportal" / "session.json"


class SessionStore:
    """Keeps the logged-in user on disk until logout."""

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path else DEFAULT_PATH

    def load(self) -> Optional[dict]:
        if not self.path.exists():
            return None
        try:
            return json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.warning("Ignoring unreadable session file %s", self.path)
            return None

    def save(self, user: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(user), encoding="utf-8")

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
