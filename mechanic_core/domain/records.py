from dataclasses import dataclass
import datetime as dt
from typing import Protocol


@dataclass(frozen=True)
class ContactRecord:
    name: str
    phone: str
    message: str
    created_at: dt.datetime


@dataclass(frozen=True)
class BookingRecord:
    name: str
    phone: str
    vehicle: str
    issue: str
    datetime: dt.datetime
    created_at: dt.datetime


class SubmissionStore(Protocol):
    """联系表单与预约表单的持久化协议（只写）。"""

    def add_contact(self, record: ContactRecord) -> None:
        ...

    def add_booking(self, record: BookingRecord) -> None:
        ...
