from datetime import date, timedelta
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from common.db.database import Base, configure_sqlite_engine, get_db
from main import app
from hotel_service.app.backend.dependencies import get_current_actor, get_guest_directory
from hotel_service.app.backend.models.Booking import Booking, BookingStatus
from hotel_service.app.backend.models.Room import Room, RoomStatus, RoomType
from hotel_service.app.backend.services.actor import Actor
from hotel_service.app.backend.services.guest_directory import LocalGuestDirectory
from user_service.app.backend.models.User import User

ADMIN = Actor(user_id=1, role="admin")
GUEST_A = Actor(user_id=2, role="user")
GUEST_B = Actor(user_id=3, role="user")


@pytest.fixture
def engine():
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    configure_sqlite_engine(test_engine)
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def db_session(engine):
    TestingSessionLocal = sessionmaker(bind=engine)
    session = TestingSessionLocal()
    yield session
    session.close()


@pytest.fixture
def guests(db_session):
    users = [
        User(id=ADMIN.user_id, login="admin", fullname="Hotel Admin", role="admin"),
        User(id=GUEST_A.user_id, login="guest_a", fullname="Guest A"),
        User(id=GUEST_B.user_id, login="guest_b", fullname="Guest B"),
    ]
    db_session.add_all(users)
    db_session.commit()
    return users


@pytest.fixture
def directory(db_session, guests):
    return LocalGuestDirectory(db_session)


@pytest.fixture
def room_type(db_session):
    standard = RoomType(name="Standard", price=Decimal("2500.00"), capacity=2, description="Double bed")
    db_session.add(standard)
    db_session.commit()
    return standard


@pytest.fixture
def room(db_session, room_type):
    room_101 = Room(room_number="101", room_type=room_type, status=RoomStatus.AVAILABLE)
    db_session.add(room_101)
    db_session.commit()
    return room_101


@pytest.fixture
def make_booking(db_session):
    """Кладе бронювання напряму в БД, в обхід леджера."""

    def _make_booking(room, guest_id, check_in, check_out, status=BookingStatus.PENDING, total_price="10000.00"):
        booking = Booking(
            room=room,
            guest_id=guest_id,
            check_in=check_in,
            check_out=check_out,
            status=status,
            total_price=Decimal(total_price),
        )
        db_session.add(booking)
        db_session.commit()
        return booking

    return _make_booking


@pytest.fixture
def client(db_session, guests):
    acting = {"actor": GUEST_A}

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_actor] = lambda: acting["actor"]
    app.dependency_overrides[get_guest_directory] = lambda: LocalGuestDirectory(db_session)

    test_client = TestClient(app)

    def act_as(actor):
        acting["actor"] = actor

    test_client.act_as = act_as
    yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def tomorrow():
    return date.today() + timedelta(days=1)
