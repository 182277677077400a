import os
import sys
from pathlib import Path
import pytest

# Ensure project root is on sys.path so tests can import 'bulkload' package
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Tests always run against a throwaway sqlite file, never the configured database
os.environ["DATABASE_URL"] = "sqlite:///./test_bulkload.db"

from bulkload.db import Base, engine, SessionLocal


@pytest.fixture(autouse=True)
def reset_db():
    # Drop all and re-create so the test DB matches the current models exactly
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


class RecordingNotifier:
    """Collects alert messages instead of sending them."""

    def __init__(self, failing=()):
        self.sent = []
        self.failing = set(failing)

    def send(self, recipient, subject, body):
        if recipient in self.failing:
            raise ConnectionError(f"mail server refused {recipient}")
        self.sent.append((recipient, subject, body))


@pytest.fixture
def notifier():
    return RecordingNotifier()


def erp_payload(number="ORD-001", **overrides):
    payload = {
        "number": number,
        "external_code": f"SAP-{number}",
        "scheduled_date": "2025-03-01T08:00:00",
        "preset": 9000.0,
        "driver": {"name": "Juan", "surname": "Perez", "dni": "30111222"},
        "client": {"company_name": "YPF", "contact_name": "Ana"},
        "truck": {"domain": "AB123CD", "description": "Scania", "cisterns": [5000, 5000]},
        "product": {"name": "Propano", "description": "GLP"},
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def make_order(db):
    """Create an order through the ERP intake path."""
    from bulkload.core import intake

    def _make(number="ORD-001", **overrides):
        return intake.create_order_from_payload(db, erp_payload(number, **overrides), intake.SCHEMA_ERP)

    return _make
