"""End-to-end tests of the /admin/homework screen through the HTTP layer."""
from datetime import date

from sqlmodel import select

from app.api.dependencies import get_homework_repository
from app.db.models.homework import Homework
from app.db.repositories.base import StoreError
from app.main import app

URL = "/admin/homework"
JSON = {"Accept": "application/json"}


def _post(client, headers=None, **form):
    return client.post(URL, data=form, headers=headers, follow_redirects=False)


def _all(session):
    session.expire_all()
    return session.exec(select(Homework)).all()


def _create(client, subject="Math", description="Pages 1-10", assigned_date="2024-01-15"):
    return _post(client, intent="create", subject=subject, description=description, assignedDate=assigned_date)


class BrokenRepository:
    def list_by_date_desc(self):
        raise StoreError("could not connect to server")

    def create_homework(self, **fields):
        raise StoreError("could not connect to server")

    def update_homework(self, homework_id, **fields):
        raise StoreError("could not connect to server")

    def delete_homework(self, homework_id):
        raise StoreError("could not connect to server")


# -----------------------------
# Scenario A/B/C
# -----------------------------

def test_create_redirects_and_lists_record(admin_client, session):
    resp = _create(admin_client)
    assert resp.status_code == 303
    assert resp.headers["location"] == URL

    listing = admin_client.get(URL, headers=JSON).json()["homework"]
    assert len(listing) == 1
    hw = listing[0]
    assert (hw["subject"], hw["description"], hw["homework_date"]) == ("Math", "Pages 1-10", "2024-01-15")
    assert hw["created_at"] == hw["updated_at"]


def test_update_changes_fields_but_not_created_at(admin_client, session):
    _create(admin_client)
    original = _all(session)[0]
    original_id, original_created = original.id, original.created_at

    resp = _post(
        admin_client, intent="update", homeworkId=str(original_id),
        subject="Science", description="Ch.3", assignedDate="2024-01-16",
    )
    assert resp.status_code == 303

    updated = _all(session)[0]
    assert updated.id == original_id
    assert updated.subject == "Science"
    assert updated.homework_date == date(2024, 1, 16)
    assert updated.created_at == original_created
    assert updated.updated_at >= updated.created_at


def test_delete_removes_record(admin_client, session):
    _create(admin_client, subject="Math")
    _create(admin_client, subject="Art")
    target = next(hw for hw in _all(session) if hw.subject == "Math")

    resp = _post(admin_client, intent="delete", homeworkId=str(target.id))
    assert resp.status_code == 303

    ids = [hw["id"] for hw in admin_client.get(URL, headers=JSON).json()["homework"]]
    assert target.id not in ids
    assert len(ids) == 1


# -----------------------------
# Validation / invalid intent
# -----------------------------

def test_create_missing_field_returns_json_error(admin_client, session):
    resp = _post(admin_client, headers=JSON, intent="create", subject="Math", description="", assignedDate="2024-01-15")
    assert resp.status_code == 400
    assert resp.json() == {"error": "All fields are required"}
    assert _all(session) == []


def test_update_without_id_returns_error(admin_client, session):
    _create(admin_client)
    resp = _post(admin_client, headers=JSON, intent="update", subject="S", description="D", assignedDate="2024-01-15")
    assert resp.status_code == 400
    assert resp.json() == {"error": "All fields are required"}
    assert _all(session)[0].subject == "Math"


def test_missing_intent_is_invalid_action(admin_client, session):
    resp = _post(admin_client, headers=JSON, subject="Math", description="d", assignedDate="2024-01-15")
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid action"}
    assert _all(session) == []


def test_unknown_intent_is_invalid_action(admin_client):
    resp = _post(admin_client, headers=JSON, intent="complete", homeworkId="1")
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid action"}


def test_html_error_rerenders_form_with_submitted_values(admin_client):
    resp = _post(admin_client, intent="create", subject="Math", description="", assignedDate="2024-01-15")
    assert resp.status_code == 400
    assert "text/html" in resp.headers["content-type"]
    assert "All fields are required" in resp.text
    assert "Assign New Homework" in resp.text
    assert 'value="Math"' in resp.text


def test_html_update_error_keeps_edit_form(admin_client, session):
    _create(admin_client)
    hw_id = _all(session)[0].id
    resp = _post(admin_client, intent="update", homeworkId=str(hw_id), subject="", description="D", assignedDate="2024-01-15")
    assert resp.status_code == 400
    assert "Edit Homework" in resp.text
    assert f'name="homeworkId" value="{hw_id}"' in resp.text


# -----------------------------
# Store failures
# -----------------------------

def test_store_error_on_write_returns_message(admin_client):
    app.dependency_overrides[get_homework_repository] = lambda: BrokenRepository()
    resp = _create(admin_client, subject="Math")
    assert resp.status_code == 400
    assert "could not connect to server" in resp.text

    resp = _post(admin_client, headers=JSON, intent="delete", homeworkId="1")
    assert resp.json() == {"error": "could not connect to server"}


def test_store_error_on_read_renders_empty_page(admin_client):
    app.dependency_overrides[get_homework_repository] = lambda: BrokenRepository()
    resp = admin_client.get(URL)
    assert resp.status_code == 200
    assert "No homework assigned yet" in resp.text


# -----------------------------
# Rendering
# -----------------------------

def test_screen_shows_selected_date_with_relative_label(admin_client):
    _create(admin_client, subject="Math", assigned_date="2024-01-15")
    _create(admin_client, subject="Art", assigned_date="2024-01-16")

    resp = admin_client.get(URL)
    assert resp.status_code == 200
    assert "Math" in resp.text
    assert "Today" in resp.text
    assert 'id="stat-total">2<' in resp.text
    assert 'id="stat-today">1<' in resp.text
    assert 'id="stat-pending">0<' in resp.text

    resp = admin_client.get(URL, params={"date": "2024-01-16"})
    assert "Art" in resp.text
    assert "Tomorrow" in resp.text


def test_screen_empty_date_message(admin_client):
    _create(admin_client, assigned_date="2024-01-15")
    resp = admin_client.get(URL, params={"date": "2024-02-01"})
    assert "No homework assigned for 2/1/2024" in resp.text


def test_edit_query_prefills_form(admin_client, session):
    _create(admin_client, subject="Math", description="Pages 1-10")
    hw_id = _all(session)[0].id
    resp = admin_client.get(URL, params={"edit": str(hw_id)})
    assert "Edit Homework" in resp.text
    assert 'name="intent" value="update"' in resp.text
    assert "Pages 1-10</textarea>" in resp.text


def test_delete_form_requires_confirmation(admin_client):
    _create(admin_client)
    resp = admin_client.get(URL)
    assert 'data-confirm="Are you sure you want to delete this homework?"' in resp.text


# -----------------------------
# Scenario E: access guard
# -----------------------------

def test_anonymous_read_redirects_to_login(client):
    resp = client.get(URL, follow_redirects=False)
    assert resp.status_code == 303
    assert resp.headers["location"].startswith("/auth/login?next=")


def test_anonymous_json_read_is_unauthorized(client):
    resp = client.get(URL, headers=JSON)
    assert resp.status_code == 401
    assert "homework" not in resp.json()


def test_anonymous_write_never_mutates(client, session):
    resp = _create(client)
    assert resp.status_code == 303
    assert resp.headers["location"].startswith("/auth/login")
    assert _all(session) == []


def test_non_admin_is_forbidden(regular_client, session):
    assert regular_client.get(URL).status_code == 403
    resp = _create(regular_client)
    assert resp.status_code == 403
    assert _all(session) == []


def test_guard_runs_before_store(client):
    app.dependency_overrides[get_homework_repository] = lambda: BrokenRepository()
    resp = client.get(URL, headers=JSON)
    assert resp.status_code == 401


def test_oversized_id_is_rejected_with_400(admin_client, session):
    _create(admin_client)
    huge = str(2**70)
    for form in (
        {"intent": "delete", "homeworkId": huge},
        {"intent": "update", "homeworkId": huge, "subject": "S", "description": "D", "assignedDate": "2024-01-15"},
    ):
        resp = _post(admin_client, headers=JSON, **form)
        assert resp.status_code == 400
        assert resp.json() == {"error": "Invalid homework id"}
    assert _all(session)[0].subject == "Math"


# -----------------------------
# Filter date kept across actions
# -----------------------------

def test_rejected_action_keeps_filter_date(admin_client):
    _create(admin_client, subject="Chemistry", assigned_date="2024-01-10")
    resp = admin_client.post(
        URL,
        params={"date": "2024-01-10"},
        data={"intent": "create", "subject": "", "description": "d", "assignedDate": "2024-01-10"},
        follow_redirects=False,
    )
    assert resp.status_code == 400
    assert "Chemistry" in resp.text
    assert 'name="date" value="2024-01-10"' in resp.text
    assert 'action="/admin/homework?date=2024-01-10"' in resp.text


def test_successful_action_redirects_to_filter_date(admin_client):
    resp = admin_client.post(
        URL,
        params={"date": "2024-01-10"},
        data={"intent": "create", "subject": "Art", "description": "d", "assignedDate": "2024-01-10"},
        follow_redirects=False,
    )
    assert resp.status_code == 303
    assert resp.headers["location"] == f"{URL}?date=2024-01-10"


def test_first_homework_link_keeps_filter_date(admin_client):
    resp = admin_client.get(URL, params={"date": "2024-01-10"})
    assert 'href="?date=2024-01-10&amp;form=new"' in resp.text


def test_openapi_documents_error_body_and_session_cookie(client):
    schema = client.get("/openapi.json").json()
    post = schema["paths"]["/admin/homework"]["post"]
    assert post["responses"]["400"]["content"]["application/json"]["schema"]["$ref"].endswith("/ActionErrorOut")
    cookie_params = [p["name"] for p in post["parameters"] if p["in"] == "cookie"]
    assert cookie_params == ["session"]
