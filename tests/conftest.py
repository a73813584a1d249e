import pytest
import os
import tempfile
from datetime import date
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Set env before importing app components
os.environ["APP_ENV"] = "testing"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["STORAGE_DIR"] = tempfile.mkdtemp(prefix="factory-storage-")
os.environ["STORAGE_PUBLIC_URL"] = "http://testserver/storage"

from garment_erp.core.exceptions import DataStoreError
from garment_erp.data.sql_store import SqlAlchemyStore
from garment_erp.database import Base, get_db
from garment_erp.main import app
from fastapi.testclient import TestClient

# SQLite in-memory database configuration
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """
    Fresh schema per test. The store commits (and on errors rolls back) on
    its own, so an outer rollback transaction cannot isolate tests here.
    """
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()

    yield session

    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def store(db_session):
    return SqlAlchemyStore(db_session)


class FailingStore:
    """Store double whose every call fails like an unreachable database."""

    def _fail(self, *args, **kwargs):
        raise DataStoreError("connection refused", table=args[0] if args else None)

    select = insert = update = upsert = delete = rpc = _fail


@pytest.fixture
def failing_store():
    return FailingStore()


@pytest.fixture(scope="function")
def client(db_session):
    """Get a TestClient that uses the test database session via dependency override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# --- factories ---

@pytest.fixture
def make_employee(store):
    def _make(name="Asha", salary_amount=30000.0, **fields):
        row = {"name": name, "salary_amount": salary_amount, "is_active": True}
        row.update(fields)
        return store.insert("employees", [row])[0]
    return _make


@pytest.fixture
def make_worker(store):
    def _make(name="Ravi", **fields):
        return store.insert("workers", [dict({"name": name, "is_active": True}, **fields)])[0]
    return _make


@pytest.fixture
def make_product(store):
    def _make(name="Polo Shirt", operations=(), **fields):
        row = {"name": name, "material_cost": 40.0, "thread_cost": 5.0, "other_costs": 5.0}
        row.update(fields)
        product = store.insert("products", [row])[0]
        ops = []
        if operations:
            ops = store.insert("operations", [
                {"product_id": product["id"], "name": op_name, "amount_per_piece": rate}
                for op_name, rate in operations
            ])
        return product, ops
    return _make


@pytest.fixture
def mark_days(store):
    """Insert one attendance row per (day, status) for an employee."""
    def _mark(employee_id, year, month, statuses):
        rows = [
            {
                "person_type": "employee",
                "person_id": employee_id,
                "date": date(year, month, day),
                "status": status,
            }
            for day, status in statuses
        ]
        if rows:
            store.insert("attendance", rows)
    return _mark
