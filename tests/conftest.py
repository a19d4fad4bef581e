import os
from datetime import timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import insert

from jobboard.core.config import Settings
from jobboard.core.sessions import utcnow
from jobboard.db.schema import jobs
from jobboard.main import create_app

ADMIN_EMAIL = "admin@jobboard.com"
ADMIN_PASSWORD = "admin123"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        database_url=f"sqlite:///{tmp_path / 'jobboard.db'}",
        upload_dir=str(tmp_path / "uploads"),
        public_dir=str(tmp_path / "public"),
        bcrypt_rounds=4,
        environment="test",
        admin_email=ADMIN_EMAIL,
        admin_password=ADMIN_PASSWORD,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    # context manager runs the lifespan: schema bootstrap + seed
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db(app, client):
    return app.state.db


@pytest.fixture
def admin_client(app, client):
    c = TestClient(app)
    resp = c.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert resp.status_code == 200
    return c


@pytest.fixture
def user_client(client):
    resp = client.post(
        "/api/auth/register",
        json={"email": "alice@example.com", "password": "secret1", "name": "Alice"},
    )
    assert resp.status_code == 201
    return client


@pytest.fixture
def upload_dir(settings):
    return settings.upload_dir


def uploaded_files(upload_dir):
    if not os.path.isdir(upload_dir):
        return []
    return sorted(os.listdir(upload_dir))


def insert_job(db, title="QA Engineer", company="Acme", deadline_in=timedelta(days=3)):
    with db.transaction() as conn:
        result = conn.execute(insert(jobs).values(
            title=title,
            company=company,
            description="desc",
            deadline=utcnow() + deadline_in,
            created_at=utcnow(),
        ))
        return result.inserted_primary_key[0]
