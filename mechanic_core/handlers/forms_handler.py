"""联系表单与预约表单处理器。

只做校验 + 单条写入，没有其他业务逻辑。
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable

import pydantic

from mechanic_core.domain.payloads import BookingForm, ContactForm
from mechanic_core.domain.records import BookingRecord, ContactRecord, SubmissionStore
from mechanic_core.handlers.chat_handler import ChatResponseEnvelope
from mechanic_core.infrastructure.logging.logger import logger


CONTACT_REQUIRED_REPLY = "All fields are required."
BOOKING_REQUIRED_REPLY = "All fields are required with a valid date."


class FormsHandler:
    def __init__(self, store: SubmissionStore, clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc)):
        self._store = store
        self._clock = clock

    def submit_contact(self, raw_body: Any) -> ChatResponseEnvelope:
        try:
            form = ContactForm.model_validate(raw_body if isinstance(raw_body, dict) else {})
        except pydantic.ValidationError:
            return ChatResponseEnvelope(400, {"reply": CONTACT_REQUIRED_REPLY})

        record = ContactRecord(name=form.name, phone=form.phone, message=form.message, created_at=self._clock())
        try:
            self._store.add_contact(record)
        except Exception as e:
            logger.error("contact.save_failed", extra={"extra": {"error": str(e)}})
            return ChatResponseEnvelope(500, {"success": False, "message": "Error saving contact."})
        logger.info("contact.saved", extra={"extra": {"name": form.name, "phone": form.phone}})
        return ChatResponseEnvelope(200, {"success": True, "message": "Contact saved successfully."})

    def submit_booking(self, raw_body: Any) -> ChatResponseEnvelope:
        try:
            form = BookingForm.model_validate(raw_body if isinstance(raw_body, dict) else {})
        except pydantic.ValidationError:
            return ChatResponseEnvelope(400, {"reply": BOOKING_REQUIRED_REPLY})

        record = BookingRecord(
            name=form.name,
            phone=form.phone,
            vehicle=form.vehicle,
            issue=form.issue,
            datetime=form.datetime,
            created_at=self._clock(),
        )
        try:
            self._store.add_booking(record)
        except Exception as e:
            logger.error("booking.save_failed", extra={"extra": {"error": str(e)}})
            return ChatResponseEnvelope(500, {"success": False, "message": "Error saving booking."})
        logger.info(
            "booking.saved",
            extra={"extra": {"name": form.name, "vehicle": form.vehicle, "datetime": form.datetime.isoformat()}},
        )
        return ChatResponseEnvelope(200, {"success": True, "message": "Booking confirmed successfully."})
