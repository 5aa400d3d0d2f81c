import pytest
from fastapi.testclient import TestClient

from schooladmin.app.db.base import Base
from schooladmin.app.db.session import SessionLocal, engine
from schooladmin.app.dependencies.auth import get_password_hasher
from schooladmin.app.main import app
from schooladmin.app.schemas.account import AccountCreate
from schooladmin.app.services.accounts import create_account


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


def seed_and_login(client: TestClient, email: str, role: str) -> dict:
    db = SessionLocal()
    try:
        create_account(
            db, get_password_hasher(), AccountCreate(email=email, name=email.split("@")[0], role=role, password="password123")
        )
    finally:
        db.close()
    response = client.post("/auth/login", json={"email": email, "password": "password123"})
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


def test_admin_manages_subjects():
    client = TestClient(app)
    admin = seed_and_login(client, "admin@example.com", "admin")

    resp = client.post("/subjects", json={"name": "Mathematics"}, headers=admin)
    assert resp.status_code == 201
    subject_id = resp.json()["id"]

    assert client.post("/subjects", json={"name": "Mathematics"}, headers=admin).status_code == 409

    resp = client.put(f"/subjects/{subject_id}", json={"name": "Maths"}, headers=admin)
    assert resp.status_code == 200
    assert resp.json()["name"] == "Maths"

    assert client.delete(f"/subjects/{subject_id}", headers=admin).status_code == 200
    assert client.get(f"/subjects/{subject_id}", headers=admin).status_code == 404


def test_everyone_reads_subjects_only_admin_writes():
    client = TestClient(app)
    admin = seed_and_login(client, "admin@example.com", "admin")
    student = seed_and_login(client, "student@example.com", "student")
    teacher = seed_and_login(client, "teacher@example.com", "teacher")
    client.post("/subjects", json={"name": "Physics"}, headers=admin)
    client.post("/subjects", json={"name": "Art"}, headers=admin)

    resp = client.get("/subjects", headers=student)
    assert resp.status_code == 200
    assert [s["name"] for s in resp.json()] == ["Art", "Physics"]

    assert client.post("/subjects", json={"name": "Music"}, headers=teacher).status_code == 403
    assert client.post("/subjects", json={"name": "Music"}, headers=student).status_code == 403
    assert client.get("/subjects").status_code == 401


def test_renaming_to_existing_subject_is_conflict():
    client = TestClient(app)
    admin = seed_and_login(client, "admin@example.com", "admin")
    client.post("/subjects", json={"name": "History"}, headers=admin)
    geo = client.post("/subjects", json={"name": "Geography"}, headers=admin).json()
    assert client.put(f"/subjects/{geo['id']}", json={"name": "History"}, headers=admin).status_code == 409
