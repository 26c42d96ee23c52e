import pytest

from mechanic_core.domain.exceptions import PersistenceError
from mechanic_core.handlers.forms_handler import FormsHandler


class MemorySubmissionStore:
    def __init__(self):
        self.contacts = []
        self.bookings = []

    def add_contact(self, record):
        self.contacts.append(record)

    def add_booking(self, record):
        self.bookings.append(record)


class BrokenStore:
    def add_contact(self, record):
        raise PersistenceError(code="STORE_WRITE_ERROR", message="disk full")

    def add_booking(self, record):
        raise PersistenceError(code="STORE_WRITE_ERROR", message="disk full")


def test_contact_saved():
    store = MemorySubmissionStore()
    env = FormsHandler(store).submit_contact({"name": "Asha", "phone": "9876543210", "message": "Call back"})
    assert env.status_code == 200
    assert env.body == {"success": True, "message": "Contact saved successfully."}
    assert store.contacts[0].name == "Asha"


@pytest.mark.parametrize(
    "body",
    [None, {}, {"name": "Asha", "phone": "1"}, {"name": " ", "phone": "1", "message": "x"}],
)
def test_contact_missing_fields(body):
    store = MemorySubmissionStore()
    env = FormsHandler(store).submit_contact(body)
    assert env.status_code == 400
    assert env.body == {"reply": "All fields are required."}
    assert store.contacts == []


def test_contact_store_failure():
    env = FormsHandler(BrokenStore()).submit_contact({"name": "a", "phone": "1", "message": "m"})
    assert env.status_code == 500
    assert env.body == {"success": False, "message": "Error saving contact."}


def test_booking_saved():
    store = MemorySubmissionStore()
    body = {
        "name": "Ravi",
        "phone": "9123456780",
        "vehicle": "Swift",
        "issue": "Brake noise",
        "datetime": "2024-06-01T10:30:00",
    }
    env = FormsHandler(store).submit_booking(body)
    assert env.status_code == 200
    assert env.body == {"success": True, "message": "Booking confirmed successfully."}
    assert store.bookings[0].datetime.hour == 10
    assert store.bookings[0].created_at is not None


@pytest.mark.parametrize("when", ["not a date", "", None])
def test_booking_invalid_date(when):
    body = {"name": "Ravi", "phone": "1", "vehicle": "Swift", "issue": "noise", "datetime": when}
    env = FormsHandler(MemorySubmissionStore()).submit_booking(body)
    assert env.status_code == 400
    assert env.body == {"reply": "All fields are required with a valid date."}


def test_booking_store_failure():
    body = {"name": "R", "phone": "1", "vehicle": "V", "issue": "I", "datetime": "2024-06-01T10:30:00"}
    env = FormsHandler(BrokenStore()).submit_booking(body)
    assert env.status_code == 500
    assert env.body == {"success": False, "message": "Error saving booking."}
