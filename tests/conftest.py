from __future__ import annotations

from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from frontdesk.api import deps
from frontdesk.config.settings import Settings
from frontdesk.db.init_db import drop_db, init_db
from frontdesk.db.session import build_session_factory
from frontdesk.models import Room
from frontdesk.models.base.enums import RoomStatus, RoomType, UserRole
from frontdesk.services.booking import BookingLifecycleService
from frontdesk.services.common.permissions import CurrentUser

TODAY = date(2024, 3, 1)


@pytest.fixture()
def engine():
    """
    Isolated in-memory SQLite engine shared by every session of one test.
    """
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    drop_db(bind=engine)
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture()
def config():
    return Settings(
        _env_file=None,
        CURRENCY="KES",
        BOOKING_TAX_RATE=None,
        BOOKING_SERVICE_CHARGE_RATE=None,
        AUTO_HOUSEKEEPING_ON_CHECKOUT=True,
        DEFAULT_HOUSEKEEPER="unassigned",
        ENFORCE_BOOKING_OVERLAP=False,
    )


@pytest.fixture()
def admin():
    return CurrentUser(user_id="u-admin", role=UserRole.ADMIN, name="Alice Admin", email="admin@hotel.test")


@pytest.fixture()
def receptionist():
    return CurrentUser(user_id="u-desk", role=UserRole.RECEPTIONIST, name="Rita Desk")


@pytest.fixture()
def housekeeper():
    return CurrentUser(user_id="u-hk", role=UserRole.HOUSEKEEPING, name="Hana Keeper")


@pytest.fixture()
def guest_user():
    return CurrentUser(user_id="u-guest", role=UserRole.GUEST, name="Jane Doe", email="jane@example.com")


def _room(number, room_type, price, capacity, status=RoomStatus.AVAILABLE, floor=1):
    return Room(number=number, type=room_type, price=price, capacity=capacity, floor=floor, status=status)


@pytest.fixture()
def rooms(session_factory):
    """Seed a small room directory; returns rooms keyed by number."""
    seeded = [
        _room("101", RoomType.SINGLE, 5000, 1),
        _room("102", RoomType.DOUBLE, 7500, 2),
        _room("201", RoomType.SUITE, 15000, 4, floor=2),
        _room("202", RoomType.DOUBLE, 7000, 2, status=RoomStatus.OCCUPIED, floor=2),
        _room("301", RoomType.DELUXE, 20000, 3, status=RoomStatus.MAINTENANCE, floor=3),
    ]
    with session_factory() as session:
        session.add_all(seeded)
        session.commit()
    return {room.number: room for room in seeded}


@pytest.fixture()
def guest_details():
    return {
        "first_name": "Jane",
        "last_name": "Doe",
        "email": "Jane@Example.com",
        "phone": "+254700000001",
        "id_number": "ID-12345",
    }


@pytest.fixture()
def lifecycle(session_factory, config):
    return BookingLifecycleService(session_factory, config, today_provider=lambda: TODAY)


@pytest.fixture()
def client(session_factory, config):
    from frontdesk.main import create_app

    app = create_app()
    app.dependency_overrides[deps.get_session_factory] = lambda: session_factory
    app.dependency_overrides[deps.get_app_settings] = lambda: config
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def auth_headers():
    """Identity headers the authentication proxy would set for a user."""

    def build(user: CurrentUser) -> dict:
        headers = {"X-User-Id": user.user_id, "X-User-Role": user.role.value}
        if user.name:
            headers["X-User-Name"] = user.name
        if user.email:
            headers["X-User-Email"] = user.email
        return headers

    return build
