import os

# Must be set before storefront_admin.core.config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("TIMEZONE", "Asia/Jakarta")

from datetime import datetime, timezone

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from storefront_admin.domain.models import Document  # noqa: F401
from storefront_admin.infrastructure.database import Base, engine
from storefront_admin.infrastructure.repositories.document_store import SqlDocumentStore
from storefront_admin.application.dashboard_service import DashboardService
from storefront_admin.interfaces import admin_routes


@pytest.fixture
def store():
    Base.metadata.create_all(bind=engine)
    yield SqlDocumentStore()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def seeded_store(store):
    store.add("products", {"name": "Pashmina Silk", "category": "Hijab", "price": 85000, "stock": 12}, doc_id="prod-1")
    store.add("products", {"name": "Bergo Instan", "price": "45000"}, doc_id="prod-2")

    store.add("users", {"name": "Admin", "email": "admin@hijabina.id", "role": "admin"}, doc_id="admin-1")
    store.add("users", {"name": "Siti", "email": "siti@mail.id", "phone": "0812", "role": "customer",
                        "createdAt": datetime(2024, 1, 2, 3, 4, tzinfo=timezone.utc)}, doc_id="cust-1")
    store.add("users", {"name": "Rina", "role": "customer"}, doc_id="cust-2")

    store.add("orders", {"userId": "cust-1", "customerName": "Siti", "status": "completed", "totalAmount": 100000,
                         "createdAt": datetime(2024, 6, 15, 1, 0, tzinfo=timezone.utc)}, doc_id="order-aaaaaaaa-1")
    store.add("orders", {"userId": "cust-1", "customerName": "Siti", "status": "pending", "total": 999,
                         "createdAt": datetime(2024, 6, 14, 1, 0, tzinfo=timezone.utc)}, doc_id="order-bbbbbbbb-2")
    store.add("orders", {"customerName": "Tamu", "status": "completed",
                         "items": [{"name": "Pashmina Silk", "quantity": 2, "price": 500},
                                   {"name": "Bergo Instan", "quantity": 1, "price": 1000}],
                         "createdAt": datetime(2024, 6, 13, 1, 0, tzinfo=timezone.utc)}, doc_id="order-cccccccc-3")
    return store


@pytest.fixture
def service(seeded_store):
    return DashboardService(seeded_store, timezone="Asia/Jakarta", recent_limit=5)


@pytest.fixture
def client(service):
    app = FastAPI()
    app.state.dashboard = service
    app.include_router(admin_routes.router)
    return TestClient(app)


@pytest.fixture
def broken_store():
    # A database file inside a directory that does not exist cannot be opened
    unreachable = create_engine("sqlite:////nonexistent-dir/storefront.db")
    return SqlDocumentStore(session_factory=sessionmaker(bind=unreachable))


@pytest.fixture
def broken_service(broken_store):
    return DashboardService(broken_store, timezone="Asia/Jakarta")
