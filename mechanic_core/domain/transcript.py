from dataclasses import dataclass
from datetime import datetime
from typing import List, Protocol


@dataclass(frozen=True)
class TranscriptEntry:
    user_message: str
    bot_response: str
    timestamp: datetime


class TranscriptStore(Protocol):
    def add_entry(self, entry: TranscriptEntry) -> None:
        ...

    def list_recent(self, limit: int) -> List[TranscriptEntry]:
        """按 timestamp 倒序返回最多 limit 条记录。"""
        ...
