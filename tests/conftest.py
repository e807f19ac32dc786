from datetime import datetime

import pytest

from lendtrack import create_app
from lendtrack.config import Config, EQUIPMENT_MODE_FREE_TEXT
from lendtrack.extensions import db
from lendtrack.models.equipment import Equipment
from lendtrack.models.loan import LoanRecord
from lendtrack.services.auth_service import AuthService


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_ENGINE_OPTIONS = {}
    JWT_SECRET_KEY = "test-jwt-secret-key-that-is-long-enough-for-hs256"
    SECRET_KEY = "test-secret"
    LOG_LEVEL = "WARNING"


class FreeTextConfig(TestingConfig):
    EQUIPMENT_TRACKING_MODE = EQUIPMENT_MODE_FREE_TEXT


def _make_app(config):
    app = create_app(config)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def app():
    yield from _make_app(TestingConfig)


@pytest.fixture
def free_text_app():
    yield from _make_app(FreeTextConfig)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def staff_user(app):
    AuthService.register("admin", "admin@example.edu", "secret-pass", role="admin")
    return AuthService.register("desk", "desk@example.edu", "secret-pass", role="staff")


@pytest.fixture
def auth_headers(staff_user):
    return {"Authorization": f"Bearer {AuthService.token_for(staff_user)}"}


@pytest.fixture
def projector(app):
    e = Equipment(name="Projector", serial_number="PRJ-001", model="EB-X05", description="Epson projector")
    db.session.add(e)
    db.session.commit()
    return e


def add_loan(kind="student", start=None, end=None, status="Borrowed", equipment=None, name="Juan Dela Cruz", **extra):
    loan = LoanRecord(
        borrower_kind=kind,
        name=name,
        email=extra.pop("email", "juan@example.edu"),
        start_time=start or datetime(2025, 1, 1, 9, 0),
        end_time=end,
        status=status,
        equipment=equipment,
        **extra,
    )
    if kind == "student" and loan.student_id is None:
        loan.student_id = "2021-00123"
    db.session.add(loan)
    db.session.commit()
    return loan
