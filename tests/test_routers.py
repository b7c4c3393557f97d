# /tests/test_routers.py

"""
End-to-end checks through the HTTP layer: routing, the X-Actor-Id
dependency and the mapping of domain errors to status codes.
"""

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from app.core.clock import utcnow
from app.db.database import get_db
from app.main import app


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def _as(actor):
    return {"X-Actor-Id": actor.id}


def test_health_check(client):
    response = client.get("/")
    assert response.status_code == 200
    assert "running" in response.json()["status"]


def test_unknown_actor_is_unauthorized(client, school_class):
    response = client.post("/api/classes", json={"name": "X", "code": "X1", "level": "Form 1"},
                           headers={"X-Actor-Id": "usr_ghost"})
    assert response.status_code == 401


def test_create_and_fetch_class(client, admin):
    response = client.post("/api/classes", json={"name": "Form 4 South", "code": "F4S", "level": "Form 4"}, headers=_as(admin))
    assert response.status_code == 201
    class_id = response.json()["id"]

    details = client.get(f"/api/classes/{class_id}")
    assert details.status_code == 200
    assert details.json()["code"] == "F4S"
    assert details.json()["students"] == []


def test_missing_class_is_404(client):
    response = client.get("/api/classes/cls_missing")
    assert response.status_code == 404
    assert response.json()["error"] == "not_found"


def test_duplicate_subject_link_is_409(client, admin, school_class, subject, subject_link):
    response = client.post(
        f"/api/classes/{school_class.id}/subjects",
        json={"subject": {"_id": subject.id, "name": subject.name}},
        headers=_as(admin),
    )
    assert response.status_code == 409
    assert response.json()["error"] == "duplicate_link"


def test_self_enrollment_then_approval(client, admin, student, school_class):
    """
    GIVEN a student requesting enrollment without choosing a status
    WHEN an admin approves the request
    THEN the link moves from pending to approved, and cannot be decided again
    """
    requested = client.post(f"/api/classes/{school_class.id}/students", json={"student": student.id}, headers=_as(student))
    assert requested.status_code == 201
    assert requested.json()["status"] == "pending"
    link_id = requested.json()["id"]

    pending = client.get("/api/classes/links/student/pending", headers=_as(admin))
    assert [link["id"] for link in pending.json()] == [link_id]

    approved = client.patch(f"/api/classes/links/student/{link_id}", json={"status": "approved"}, headers=_as(admin))
    assert approved.status_code == 200
    assert approved.json()["status"] == "approved"

    again = client.patch(f"/api/classes/links/student/{link_id}", json={"status": "rejected"}, headers=_as(admin))
    assert again.status_code == 409
    assert again.json()["error"] == "invalid_transition"
    print("\n✅ SUCCESS: test_self_enrollment_then_approval passed.")


def test_student_cannot_approve(client, student, school_class):
    requested = client.post(f"/api/classes/{school_class.id}/students", json={"student": student.id}, headers=_as(student))
    link_id = requested.json()["id"]
    response = client.patch(f"/api/classes/links/student/{link_id}", json={"status": "approved"}, headers=_as(student))
    assert response.status_code == 403
    assert response.json()["error"] == "permission_denied"


def test_remove_link_twice_is_204(client, admin, enrolled_student, db_service):
    link = db_service.first("student_link", {"student_id": enrolled_student.id})
    for _ in range(2):
        response = client.delete(f"/api/classes/links/student/{link.id}", headers=_as(admin))
        assert response.status_code == 204


def test_assignment_submission_and_grading_flow(client, approved_teacher, enrolled_student, school_class, subject):
    created = client.post("/api/assignments", json={
        "title": "Probability",
        "due_date": (utcnow() + timedelta(days=2)).isoformat(),
        "total_marks": 50,
        "class_id": school_class.id,
        "subject_id": subject.id,
    }, headers=_as(approved_teacher))
    assert created.status_code == 201
    assignment_id = created.json()["id"]
    assert created.json()["status"] == "draft"

    draft_submit = client.post(f"/api/assignments/{assignment_id}/submissions", json={"content": "1/6"},
                               headers=_as(enrolled_student))
    assert draft_submit.status_code == 409

    assert client.post(f"/api/assignments/{assignment_id}/publish", headers=_as(approved_teacher)).status_code == 200

    empty = client.post(f"/api/assignments/{assignment_id}/submissions", json={"content": ""}, headers=_as(enrolled_student))
    assert empty.status_code == 422
    assert empty.json()["error"] == "empty_submission"

    submitted = client.post(f"/api/assignments/{assignment_id}/submissions", json={"content": "1/6"},
                            headers=_as(enrolled_student))
    assert submitted.status_code == 201
    submission_id = submitted.json()["id"]

    over = client.patch(f"/api/submissions/{submission_id}/grade", json={"marks_awarded": 51, "feedback": "ok"},
                        headers=_as(approved_teacher))
    assert over.status_code == 422
    assert over.json()["error"] == "out_of_range"

    graded = client.patch(f"/api/submissions/{submission_id}/grade", json={"marks_awarded": 45},
                          headers=_as(approved_teacher))
    assert graded.status_code == 200
    assert graded.json()["status"] == "graded"

    feed = client.get("/api/assignments/mine", headers=_as(enrolled_student))
    assert [a["id"] for a in feed.json()] == [assignment_id]


def test_gradebook_entry_over_http(client, approved_teacher, enrolled_student, school_class, subject):
    created = client.post("/api/gradebook", json={
        "student_id": enrolled_student.id,
        "class_id": school_class.id,
        "subject_id": subject.id,
        "academic_year": "2025/2026",
        "term": "Term 2",
        "tests": [{"name": "CAT 1", "marks": 45}],
        "exams": [{"name": "Mid-term", "marks": 45}],
    }, headers=_as(approved_teacher))
    assert created.status_code == 201
    entry_id = created.json()["id"]
    assert created.json()["total_marks"] == 90
    assert created.json()["final_grade"] == "A"

    added = client.post(f"/api/gradebook/{entry_id}/rubrics", json={"criteria": "Homework", "marks": 5},
                        headers=_as(approved_teacher))
    assert added.status_code == 200
    assert added.json()["total_marks"] == 95

    published = client.post(f"/api/gradebook/{entry_id}/publish", headers=_as(approved_teacher))
    assert published.status_code == 200
    assert published.json()["is_published"] is True

    summary = client.get("/api/gradebook/summary", params={
        "class_id": school_class.id, "subject_id": subject.id, "academic_year": "2025/2026", "term": "Term 2",
    }, headers=_as(approved_teacher))
    assert summary.status_code == 200
    assert summary.json()["positions"] == {enrolled_student.id: 1}


def test_delete_subject_over_http(client, admin, subject, school_class):
    linked = client.post(f"/api/classes/{school_class.id}/subjects", json={"subject": subject.id}, headers=_as(admin))
    assert linked.status_code == 201

    blocked = client.delete(f"/api/subjects/{subject.id}", headers=_as(admin))
    assert blocked.status_code == 409
    assert blocked.json()["error"] == "conflict"

    assert client.delete(f"/api/classes/{school_class.id}/subjects/{linked.json()['id']}", headers=_as(admin)).status_code == 204
    assert client.delete(f"/api/subjects/{subject.id}", headers=_as(admin)).status_code == 204
    assert client.get(f"/api/subjects/{subject.id}").status_code == 404


def test_subject_link_removal_is_scoped_to_the_class_in_the_path(client, admin, db_service, subject_link, school_class):
    other = client.post("/api/classes", json={"name": "Form 3 West", "code": "F3W", "level": "Form 3"}, headers=_as(admin))
    response = client.delete(f"/api/classes/{other.json()['id']}/subjects/{subject_link.id}", headers=_as(admin))
    assert response.status_code == 204
    assert db_service.find("subject_link", subject_link.id) is not None


def test_nan_marks_over_http_are_out_of_range(client, approved_teacher, enrolled_student, published_assignment):
    submitted = client.post(f"/api/assignments/{published_assignment.id}/submissions", json={"content": "Done"},
                            headers=_as(enrolled_student))
    response = client.patch(
        f"/api/submissions/{submitted.json()['id']}/grade",
        content='{"marks_awarded": NaN}',
        headers={**_as(approved_teacher), "Content-Type": "application/json"},
    )
    assert response.status_code == 422
    assert response.json()["error"] == "out_of_range"
