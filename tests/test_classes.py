import pytest
from fastapi.testclient import TestClient

from schooladmin.app.db.base import Base
from schooladmin.app.db.session import SessionLocal, engine
from schooladmin.app.dependencies.auth import get_password_hasher
from schooladmin.app.main import app
from schooladmin.app.models.enrollment import Enrollment
from schooladmin.app.models.grade import Grade
from schooladmin.app.schemas.account import AccountCreate
from schooladmin.app.services.accounts import create_account


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


def seed_account(email: str, role: str) -> dict:
    db = SessionLocal()
    try:
        account = create_account(
            db, get_password_hasher(), AccountCreate(email=email, name=email.split("@")[0], role=role, password="password123")
        )
        return {"id": account.id, "student_id": account.student_id, "teacher_id": account.teacher_id}
    finally:
        db.close()


def login(client: TestClient, email: str) -> dict:
    response = client.post("/auth/login", json={"email": email, "password": "password123"})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def people(client):
    seed_account("admin@example.com", "admin")
    teacher_a = seed_account("teacher.a@example.com", "teacher")
    teacher_b = seed_account("teacher.b@example.com", "teacher")
    student = seed_account("student@example.com", "student")
    return {
        "admin": login(client, "admin@example.com"),
        "teacher_a": login(client, "teacher.a@example.com"),
        "teacher_b": login(client, "teacher.b@example.com"),
        "student": login(client, "student@example.com"),
        "teacher_a_id": teacher_a["teacher_id"],
        "teacher_b_id": teacher_b["teacher_id"],
        "student_id": student["student_id"],
    }


def test_teacher_creates_class_for_self(client, people):
    resp = client.post("/classes", json={"name": "Algebra"}, headers=people["teacher_a"])
    assert resp.status_code == 201
    data = resp.json()
    assert data["teacher_id"] == people["teacher_a_id"]
    assert data["is_active"] is True


def test_teacher_cannot_create_class_for_another_teacher(client, people):
    resp = client.post(
        "/classes", json={"name": "Biology", "teacher_id": people["teacher_b_id"]}, headers=people["teacher_a"]
    )
    assert resp.status_code == 403


def test_student_cannot_create_class(client, people):
    resp = client.post("/classes", json={"name": "Chemistry"}, headers=people["student"])
    assert resp.status_code == 403


def test_admin_must_name_existing_teacher(client, people):
    assert client.post("/classes", json={"name": "History"}, headers=people["admin"]).status_code == 400
    assert client.post("/classes", json={"name": "History", "teacher_id": 999}, headers=people["admin"]).status_code == 404
    resp = client.post("/classes", json={"name": "History", "teacher_id": people["teacher_b_id"]}, headers=people["admin"])
    assert resp.status_code == 201


def test_class_name_is_unique(client, people):
    assert client.post("/classes", json={"name": "Art"}, headers=people["teacher_a"]).status_code == 201
    assert client.post("/classes", json={"name": "Art"}, headers=people["teacher_b"]).status_code == 409


def test_class_listing_is_scoped_by_role(client, people):
    a_class = client.post("/classes", json={"name": "Geometry"}, headers=people["teacher_a"]).json()
    client.post("/classes", json={"name": "Poetry"}, headers=people["teacher_b"])
    client.post(
        "/enrollments", json={"student_id": people["student_id"], "class_id": a_class["id"]}, headers=people["admin"]
    )

    assert [c["name"] for c in client.get("/classes", headers=people["admin"]).json()] == ["Geometry", "Poetry"]
    assert [c["name"] for c in client.get("/classes", headers=people["teacher_b"]).json()] == ["Poetry"]
    assert [c["name"] for c in client.get("/classes", headers=people["student"]).json()] == ["Geometry"]


def test_class_read_visibility(client, people):
    a_class = client.post("/classes", json={"name": "Music"}, headers=people["teacher_a"]).json()
    assert client.get(f"/classes/{a_class['id']}", headers=people["teacher_a"]).status_code == 200
    assert client.get(f"/classes/{a_class['id']}", headers=people["teacher_b"]).status_code == 403
    assert client.get(f"/classes/{a_class['id']}", headers=people["student"]).status_code == 403

    client.post(
        "/enrollments", json={"student_id": people["student_id"], "class_id": a_class["id"]}, headers=people["admin"]
    )
    assert client.get(f"/classes/{a_class['id']}", headers=people["student"]).status_code == 200
    assert client.get("/classes/999", headers=people["admin"]).status_code == 404


def test_update_class_only_by_owner_or_admin(client, people):
    a_class = client.post("/classes", json={"name": "Drama"}, headers=people["teacher_a"]).json()
    url = f"/classes/{a_class['id']}"

    assert client.put(url, json={"name": "Theatre"}, headers=people["teacher_b"]).status_code == 403
    resp = client.put(url, json={"name": "Theatre", "is_active": False}, headers=people["teacher_a"])
    assert resp.status_code == 200
    assert resp.json()["name"] == "Theatre"
    assert resp.json()["is_active"] is False

    resp = client.put(url, json={"is_active": True, "teacher_id": people["teacher_b_id"]}, headers=people["admin"])
    assert resp.status_code == 200
    assert resp.json()["teacher_id"] == people["teacher_a_id"]


def test_delete_class_cascades_enrollments_and_grades(client, people):
    a_class = client.post("/classes", json={"name": "Latin"}, headers=people["teacher_a"]).json()
    enrollment = client.post(
        "/enrollments", json={"student_id": people["student_id"], "class_id": a_class["id"]}, headers=people["admin"]
    ).json()
    grade = client.post(
        "/grades",
        json={"enrollment_id": enrollment["id"], "assignment_name": "Quiz", "grade_value": 4},
        headers=people["teacher_a"],
    )
    assert grade.status_code == 201

    assert client.delete(f"/classes/{a_class['id']}", headers=people["teacher_b"]).status_code == 403
    assert client.delete(f"/classes/{a_class['id']}", headers=people["teacher_a"]).status_code == 200

    db = SessionLocal()
    assert db.query(Enrollment).count() == 0
    assert db.query(Grade).count() == 0
    db.close()


def test_class_enrollments_visible_to_owner_and_admin(client, people):
    a_class = client.post("/classes", json={"name": "Greek"}, headers=people["teacher_a"]).json()
    client.post(
        "/enrollments", json={"student_id": people["student_id"], "class_id": a_class["id"]}, headers=people["admin"]
    )
    url = f"/classes/{a_class['id']}/enrollments"
    assert len(client.get(url, headers=people["teacher_a"]).json()) == 1
    assert len(client.get(url, headers=people["admin"]).json()) == 1
    assert client.get(url, headers=people["teacher_b"]).status_code == 403
