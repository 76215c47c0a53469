from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel

from ..core.db import create_engine_for_url, get_session, set_engine
from ..core import db as core_db
from ..core.security import hash_password
from ..main import app
from ..models import AccountModel, UserModel


@pytest.fixture
def engine(tmp_path):
    test_db = tmp_path / "test.db"
    engine = create_engine_for_url(f"sqlite:///{test_db}")
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def make_user(session: Session):
    def _make_user(email: str) -> UserModel:
        user = UserModel(email=email, password_hash=hash_password("secret123"))
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def make_account(session: Session):
    def _make_account(user_id: int, balance: str = "0.00", account_type: str = "checking") -> AccountModel:
        account = AccountModel(user_id=user_id, balance=Decimal(balance), account_type=account_type)
        session.add(account)
        session.commit()
        session.refresh(account)
        return account

    return _make_account


@pytest.fixture
def client(engine) -> TestClient:
    original_engine = core_db.engine
    set_engine(engine)

    def _get_session_override():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _get_session_override

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
    set_engine(original_engine)
