import os
import tempfile

_db_dir = tempfile.mkdtemp(prefix="luxboard-tests-")
os.environ["SQLALCHEMY_DATABASE_URL"] = f"sqlite:///{os.path.join(_db_dir, 'test.db')}"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-for-luxboard-sessions"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["PROVISION_PLANS_ON_STARTUP"] = "false"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app import app  # noqa: E402
from app.db import Base, GetDB, crud, engine  # noqa: E402
from app.models.account import AccountCreate, Role  # noqa: E402
from app.models.plan import PlanKey  # noqa: E402
from app.services import plan_catalog  # noqa: E402

PASSWORD = "s3cret-password"


@pytest.fixture(autouse=True)
def clean_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    with GetDB() as session:
        yield session


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def make_account(db):
    def _make_account(email="alice@example.com", plan=PlanKey.essential, role=Role.concierge, password=PASSWORD):
        dbplan = plan_catalog.get_or_create(db, plan)
        payload = AccountCreate(
            email=email,
            password=password,
            firstName="Alice",
            lastName="Martin",
            plan=plan,
        )
        return crud.create_account(db, payload, dbplan, role=role)
    return _make_account


def auth_header(token):
    return {"Authorization": f"Bearer {token}"}
