"""API test infrastructure: async httpx client with SQLite test database."""

from __future__ import annotations

import uuid
from collections.abc import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.dialects.postgresql import UUID as PG_UUID

from app.models import Base, Battery, BatteryType, Station
from app.models.database import get_db

# ---------------------------------------------------------------------------
# SQLite compatibility for PostgreSQL column types
# ---------------------------------------------------------------------------

@compiles(PG_UUID, "sqlite")
def _compile_uuid_sqlite(type_, compiler, **kw):
    return "CHAR(36)"


# ---------------------------------------------------------------------------
# Database fixtures
# ---------------------------------------------------------------------------

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def db_engine():
    engine = create_async_engine(TEST_DATABASE_URL, echo=False)
    async with engine.begin() as conn:
        await conn.exec_driver_sql("PRAGMA foreign_keys = ON")
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


# ---------------------------------------------------------------------------
# FastAPI app with overridden dependencies
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def app(session_factory):
    from app.main import create_app

    application = create_app()

    async def _override_get_db():
        async with session_factory() as session:
            yield session

    application.dependency_overrides[get_db] = _override_get_db

    yield application

    application.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# ---------------------------------------------------------------------------
# Seed data
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def seeded(session_factory) -> dict[str, uuid.UUID]:
    """Two stations, two types and six batteries. Returns ids keyed by code."""
    station_a = Station(station_code="ST-A", name="Central")
    station_b = Station(station_code="ST-B", name="Harbour")
    scooter = BatteryType(
        type_code="SCT-15", type_name="Scooter Standard", manufacturer="VoltCell", capacity_kwh=1.5
    )
    moto = BatteryType(
        type_code="MTO-30", type_name="Moto Long Range", manufacturer="Amperion", capacity_kwh=3.0
    )
    rows = [
        ("BAT-001", "available", 100, 97.0, scooter, station_a),
        ("BAT-002", "available", 95, 82.0, scooter, station_a),
        ("BAT-003", "charging", 55, 91.0, scooter, station_a),
        ("BAT-004", "charging", 30, 88.0, moto, station_b),
        ("BAT-005", "maintenance", 10, 60.0, moto, station_a),
        ("BAT-006", "in_use", 70, 93.0, moto, station_b),
    ]
    batteries = [
        Battery(
            battery_code=code,
            serial_number=f"SN-{code}",
            status=status,
            charge_level=level,
            soh_percentage=soh,
            battery_type=battery_type,
            station=station,
        )
        for code, status, level, soh, battery_type, station in rows
    ]

    async with session_factory() as session:
        session.add_all([station_a, station_b, scooter, moto, *batteries])
        await session.commit()
        ids = {b.battery_code: b.id for b in batteries}
        ids.update(
            station_a=station_a.id,
            station_b=station_b.id,
            scooter=scooter.id,
            moto=moto.id,
        )
    return ids
