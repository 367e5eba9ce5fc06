"""In-memory SQLite engine and model fixtures shared by the whole suite."""

from __future__ import annotations

from datetime import date

import pytest
from sqlalchemy import Connection, create_engine, event, text
from sqlalchemy.engine import Engine

from revtrack.models.business import Business
from revtrack.models.item import Cadence, OneTimeItem, RecurringItem, VariableItem

# Matches Alembic head: 8a4e6d2c1b53 (create item_monthly_amounts)
SCHEMA_DDL = """
CREATE TABLE businesses (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    uuid VARCHAR(26) NOT NULL UNIQUE,
    name VARCHAR(255) NOT NULL,
    description TEXT NOT NULL DEFAULT '',
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL,
    deleted_at DATETIME
);

CREATE TABLE items (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    uuid VARCHAR(26) NOT NULL UNIQUE,
    business_id INTEGER REFERENCES businesses(id) ON DELETE CASCADE,
    billing_kind VARCHAR(20) NOT NULL,
    customer TEXT NOT NULL DEFAULT '',
    plan_name TEXT NOT NULL DEFAULT '',
    notes TEXT NOT NULL DEFAULT '',
    price INTEGER NOT NULL DEFAULT 0,
    cadence VARCHAR(20),
    start_date VARCHAR(10),
    end_date VARCHAR(10),
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL,
    deleted_at DATETIME
);

CREATE TABLE item_monthly_amounts (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    item_id INTEGER NOT NULL REFERENCES items(id) ON DELETE CASCADE,
    month VARCHAR(7) NOT NULL,
    amount INTEGER NOT NULL DEFAULT 0,
    UNIQUE(item_id, month)
);
"""


@pytest.fixture()
def db_engine() -> Engine:
    engine = create_engine("sqlite:///:memory:")

    @event.listens_for(engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys = ON")
        cursor.close()

    return engine


@pytest.fixture()
def db_connection(db_engine: Engine) -> Connection:
    conn = db_engine.connect()
    for statement in SCHEMA_DDL.strip().split(";"):
        stmt = statement.strip()
        if stmt:
            conn.execute(text(stmt))
    conn.commit()
    yield conn
    conn.close()


def _sample_business(**overrides) -> Business:
    defaults = dict(name="TableTech", description="QR menus")
    defaults.update(overrides)
    return Business(**defaults)


def _sample_recurring(**overrides) -> RecurringItem:
    defaults = dict(
        customer="Cafe de Markt",
        plan_name="QR Basic",
        price=8000,
        cadence=Cadence.MONTHLY,
        start_date=date(2025, 5, 10),
        notes="Start in mei",
    )
    defaults.update(overrides)
    return RecurringItem(**defaults)


def _sample_one_time(**overrides) -> OneTimeItem:
    defaults = dict(
        customer="Losse factuur",
        plan_name="Setup kosten",
        price=25000,
        start_date=date(2025, 6, 5),
    )
    defaults.update(overrides)
    return OneTimeItem(**defaults)


def _sample_variable(**overrides) -> VariableItem:
    defaults = dict(
        customer="App met variabele omzet",
        plan_name="Ad revenue",
        monthly_amounts={"2025-01": 12000, "2025-02": 26000, "2025-05": 9000},
    )
    defaults.update(overrides)
    return VariableItem(**defaults)


@pytest.fixture()
def sample_business():
    return _sample_business


@pytest.fixture()
def sample_recurring():
    return _sample_recurring


@pytest.fixture()
def sample_one_time():
    return _sample_one_time


@pytest.fixture()
def sample_variable():
    return _sample_variable
