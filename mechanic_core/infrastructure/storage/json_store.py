import json
import threading
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List

from mechanic_core.config.settings import settings
from mechanic_core.domain.exceptions import PersistenceError
from mechanic_core.domain.records import BookingRecord, ContactRecord
from mechanic_core.domain.transcript import TranscriptEntry


def _to_iso(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def _from_iso(value: str) -> datetime:
    # 无时区的旧数据按 UTC 读取，保证排序时可与带时区的值比较
    parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class _JsonLinesFile:
    """单个 .jsonl 文件：追加写一行，整文件读。"""

    def __init__(self, path: Path):
        self._path = path
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def append(self, payload: Dict[str, Any]) -> None:
        line = json.dumps(payload, ensure_ascii=False)
        try:
            with self._lock:
                with self._path.open("a", encoding="utf-8") as f:
                    f.write(line + "\n")
        except OSError as e:
            raise PersistenceError(code="STORE_WRITE_ERROR", message=str(e), path=str(self._path))

    def read_all(self) -> List[Dict[str, Any]]:
        if not self._path.exists():
            return []
        try:
            text = self._path.read_text(encoding="utf-8")
        except OSError as e:
            raise PersistenceError(code="STORE_READ_ERROR", message=str(e), path=str(self._path))
        items: List[Dict[str, Any]] = []
        for line in text.splitlines():
            if not line.strip():
                continue
            try:
                data = json.loads(line)
            except json.JSONDecodeError:
                continue
            if isinstance(data, dict):
                items.append(data)
        return items


class JsonTranscriptStore:
    def __init__(self, root: str | Path | None = None):
        self._root = Path(root or settings.storage_root).resolve()
        self._root.mkdir(parents=True, exist_ok=True)
        self._file = _JsonLinesFile(self._root / "transcripts.jsonl")

    def add_entry(self, entry: TranscriptEntry) -> None:
        self._file.append(
            {
                "user_message": entry.user_message,
                "bot_response": entry.bot_response,
                "timestamp": _to_iso(entry.timestamp),
            }
        )

    def list_recent(self, limit: int) -> List[TranscriptEntry]:
        items: List[TranscriptEntry] = []
        for data in self._file.read_all():
            try:
                items.append(
                    TranscriptEntry(
                        user_message=data["user_message"],
                        bot_response=data["bot_response"],
                        timestamp=_from_iso(data["timestamp"]),
                    )
                )
            except (KeyError, ValueError):
                continue
        items.sort(key=lambda e: e.timestamp, reverse=True)
        return items[: max(limit, 0)]


class JsonSubmissionStore:
    def __init__(self, root: str | Path | None = None):
        self._root = Path(root or settings.storage_root).resolve()
        self._root.mkdir(parents=True, exist_ok=True)
        self._contacts = _JsonLinesFile(self._root / "contacts.jsonl")
        self._bookings = _JsonLinesFile(self._root / "bookings.jsonl")

    def add_contact(self, record: ContactRecord) -> None:
        payload = asdict(record)
        payload["created_at"] = _to_iso(record.created_at)
        self._contacts.append(payload)

    def add_booking(self, record: BookingRecord) -> None:
        payload = asdict(record)
        payload["datetime"] = _to_iso(record.datetime)
        payload["created_at"] = _to_iso(record.created_at)
        self._bookings.append(payload)

    def list_contacts(self) -> List[ContactRecord]:
        return [
            ContactRecord(
                name=d["name"],
                phone=d["phone"],
                message=d["message"],
                created_at=_from_iso(d["created_at"]),
            )
            for d in self._contacts.read_all()
        ]

    def list_bookings(self) -> List[BookingRecord]:
        return [
            BookingRecord(
                name=d["name"],
                phone=d["phone"],
                vehicle=d["vehicle"],
                issue=d["issue"],
                datetime=_from_iso(d["datetime"]),
                created_at=_from_iso(d["created_at"]),
            )
            for d in self._bookings.read_all()
        ]
