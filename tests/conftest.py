import os

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("DEBUG", "false")
os.environ.setdefault("SQL_ECHO", "false")
os.environ.setdefault("AUTO_CREATE_DB", "false")
os.environ.setdefault("EMAIL_BACKEND", "disabled")
os.environ.setdefault("DEFAULT_LOCALE", "es")

import sys
from datetime import datetime
from pathlib import Path

project_root = Path(__file__).resolve().parents[1]
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

import storefront.models  # noqa: F401
from storefront.core.rate_limit import limiter
from storefront.core.security import BcryptHasher

import pytest
from fastapi import Depends
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

limiter.enabled = False

FROZEN_NOW = datetime(2024, 3, 20, 12, 0, 0)


class FrozenClock:
    def __init__(self, now: datetime):
        self.current = now

    def now(self) -> datetime:
        return self.current


@pytest.fixture()
def engine():
    return create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest.fixture()
def db_session(engine):
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session


@pytest.fixture()
def clock():
    return FrozenClock(FROZEN_NOW)


@pytest.fixture()
def hasher():
    # Costo mínimo de bcrypt para que los tests sean rápidos
    return BcryptHasher(rounds=4)


@pytest.fixture()
def client(engine, db_session, clock, hasher):
    from storefront.main import app
    from storefront.core.database import get_session
    from storefront.routers.password_reset import get_password_reset_service
    from storefront.services.password_reset import PasswordResetService

    def get_session_override():
        with Session(engine) as session:
            yield session

    def get_password_reset_service_override(session: Session = Depends(get_session)):
        return PasswordResetService(session, clock=clock, hasher=hasher)

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_password_reset_service] = get_password_reset_service_override
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
