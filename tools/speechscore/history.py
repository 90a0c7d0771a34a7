from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import ScoringConfig
from .pipeline import ScoreResult
from .text_metrics import round_half_up

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class HistoryEntry:
    transcript: str
    wpm: int
    language: str
    timestamp: str
    confidence_level: Optional[int]

    @classmethod
    def from_result(cls, transcript: str, result: ScoreResult, language: str) -> "HistoryEntry":
        return cls(
            transcript=transcript.strip(),
            wpm=round_half_up(result.metrics.words_per_minute),
            language=language,
            timestamp=datetime.now(timezone.utc).replace(microsecond=0).isoformat(),
            confidence_level=result.confidence_level,
        )

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "HistoryEntry":
        conf = d.get("confidence_level")
        return cls(
            transcript=str(d.get("transcript") or ""),
            wpm=int(d.get("wpm") or 0),
            language=str(d.get("language") or ""),
            timestamp=str(d.get("timestamp") or ""),
            confidence_level=int(conf) if isinstance(conf, (int, float)) else None,
        )


class HistoryStore:
    """
    Practice sessions kept in a JSON file, most recent first.

    The scoring engine never touches this; callers add an entry after scoring.
    """

    def __init__(self, path: Path, cfg: Optional[ScoringConfig] = None):
        self.path = path
        self.max_entries = (cfg or ScoringConfig()).history_max_entries

    def load(self) -> List[HistoryEntry]:
        if not self.path.exists():
            return []
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            log.warning("history file %s is not valid JSON, starting fresh: %s", self.path, e)
            return []
        if not isinstance(data, list):
            log.warning("history file %s does not hold a list, starting fresh", self.path)
            return []

        entries: List[HistoryEntry] = []
        for i, d in enumerate(data):
            if not isinstance(d, dict):
                log.warning("history record %d in %s is not an object, skipped", i, self.path)
                continue
            try:
                entries.append(HistoryEntry.from_dict(d))
            except (TypeError, ValueError, OverflowError) as e:
                log.warning("history record %d in %s is malformed, skipped: %s", i, self.path, e)
        return entries

    def _save(self, entries: List[HistoryEntry]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = [asdict(e) for e in entries]
        self.path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")

    def add(self, entry: HistoryEntry) -> List[HistoryEntry]:
        entries = [entry] + self.load()
        del entries[self.max_entries:]
        self._save(entries)
        return entries

    def recent(self, n: int = 30) -> List[HistoryEntry]:
        return self.load()[: max(0, n)]

    def clear(self) -> None:
        self._save([])
