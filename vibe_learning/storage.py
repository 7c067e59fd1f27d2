"""Persistence gateway: the profile document and per-dictionary stats on disk."""

import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path

from . import config
from .errors import ProfileFormatError
from .models import UserProfile
from .quiz import QuizSummary

log = logging.getLogger(__name__)


def _write_json(path: Path, data) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_name(path.name + ".tmp")
    with open(tmp, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
    os.replace(tmp, path)


class ProfileStorage:
    """Loads and saves the whole profile as one JSON document."""

    def __init__(self, path: str | Path | None = None):
        self.path = Path(path) if path else config.PROFILE_FILE
        self.last_corrupt: Path | None = None

    def corrupt_path(self) -> Path:
        """Backup name for an unreadable document; earlier backups are kept."""
        stamp = datetime.now().strftime("%Y%m%d-%H%M%S-%f")
        backup = self.path.with_name(f"{self.path.name}.{stamp}.corrupt")
        n = 1
        while backup.exists():
            backup = self.path.with_name(f"{self.path.name}.{stamp}-{n}.corrupt")
            n += 1
        return backup

    def load(self) -> UserProfile | None:
        """Return the stored profile, or None when there is none yet.

        A document that cannot be parsed is moved aside to
        ``<name>.<timestamp>.corrupt`` and treated as absent, which sends
        the user back to onboarding.
        """
        if not self.path.exists():
            return None
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return UserProfile.from_dict(data)
        except (json.JSONDecodeError, UnicodeDecodeError, ProfileFormatError) as e:
            backup = self.corrupt_path()
            log.warning("Unreadable profile at %s (%s); moved to %s", self.path, e, backup)
            os.replace(self.path, backup)
            self.last_corrupt = backup
            return None

    def save(self, profile: UserProfile) -> None:
        _write_json(self.path, profile.to_dict())
        log.debug("Saved profile to %s", self.path)


class StatsStorage:
    """Last training result per dictionary, keyed by dictionary id."""

    def __init__(self, path: str | Path | None = None):
        self.path = Path(path) if path else config.STATS_FILE

    def _load_all(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            log.warning("Ignoring unreadable stats file %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def record(self, dictionary_id: str, summary: QuizSummary) -> dict:
        stats = summary.to_dict()
        stats["timestamp"] = datetime.now(timezone.utc).isoformat()
        data = self._load_all()
        data[dictionary_id] = stats
        _write_json(self.path, data)
        return stats

    def last(self, dictionary_id: str) -> dict | None:
        return self._load_all().get(dictionary_id)

    def forget(self, dictionary_id: str) -> None:
        data = self._load_all()
        if data.pop(dictionary_id, None) is not None:
            _write_json(self.path, data)
