import json
import os
import stat

import httpx
import pytest
from fastapi.testclient import TestClient

from jobboard.client import ApiError, JobBoardClient, SessionStore
from jobboard.client.session import TOKEN_KEY, USER_KEY


@pytest.fixture
def session_path(tmp_path):
    return tmp_path / "session.json"


@pytest.fixture
def api(app, session_path):
    return JobBoardClient(session=SessionStore(session_path), http=TestClient(app))


def test_register_stores_session(api, session_path):
    data = api.register("ada@example.com", "secret123", "Ada", "Lovelace", "employer")

    assert api.is_authenticated()
    assert api.is_employer()
    assert not api.is_job_seeker()
    saved = json.loads(session_path.read_text())
    assert saved[TOKEN_KEY] == data["token"]
    assert saved[USER_KEY]["email"] == "ada@example.com"


def test_session_rehydrates_from_file(app, api, session_path):
    api.register("ada@example.com", "secret123", "Ada", "Lovelace")

    fresh = JobBoardClient(session=SessionStore(session_path), http=TestClient(app))

    assert fresh.is_authenticated()
    assert fresh.is_job_seeker()
    assert fresh.get_current_user()["email"] == "ada@example.com"


def test_corrupt_user_entry_clears_session(session_path):
    session_path.write_text(json.dumps({TOKEN_KEY: "tok", USER_KEY: "not-a-user"}))

    store = SessionStore(session_path)

    assert store.token is None
    assert store.user is None
    assert json.loads(session_path.read_text()) == {}


def test_unreadable_session_file_clears_session(session_path):
    session_path.write_text("{not json")

    store = SessionStore(session_path)

    assert not store.is_authenticated


def test_session_from_settings(settings):
    store = SessionStore.from_settings(settings)
    store.set_auth({"id": "1"}, "tok")

    assert json.loads(settings.client_session_file.read_text()) == {TOKEN_KEY: "tok", USER_KEY: {"id": "1"}}


def test_login_failure_raises_api_error(api):
    api.register("ada@example.com", "secret123", "Ada", "Lovelace")
    api.logout()

    with pytest.raises(ApiError) as exc_info:
        api.login("ada@example.com", "wrong-pass")

    assert exc_info.value.status_code == 401
    assert exc_info.value.message == "Invalid credentials"
    assert not api.is_authenticated()


def test_failed_refresh_clears_session(app, session_path):
    store = SessionStore(session_path)
    store.set_auth({"id": "1", "userType": "employer"}, "expired-or-forged")
    api = JobBoardClient(session=store, http=TestClient(app))

    assert api.get_current_user() is None
    assert not api.is_authenticated()
    assert json.loads(session_path.read_text()) == {}


def test_get_current_user_without_token(api):
    assert api.get_current_user() is None


def test_logout_clears_session(api, session_path):
    api.register("ada@example.com", "secret123", "Ada", "Lovelace")

    api.logout()

    assert not api.is_authenticated()
    assert json.loads(session_path.read_text()) == {}


def test_employer_workflow(api):
    api.register("boss@example.com", "secret123", "Ada", "Boss", "employer")
    company = api.create_company("Acme", industry="Software")
    job = api.create_job({
        "title": "Python Developer",
        "description": "FastAPI services",
        "location": "Remote",
        "jobType": "remote",
        "experienceLevel": "senior",
        "minSalary": 70000,
        "skills": ["Python"],
        "companyId": company["id"],
    })

    assert [c["id"] for c in api.my_companies()] == [company["id"]]
    assert [j["id"] for j in api.employer_jobs()] == [job["id"]]
    assert [j["id"] for j in api.list_jobs(min_salary=50000, skills=["pyth"])] == [job["id"]]
    assert api.list_jobs(search="designer") == []
    assert api.get_job(job["id"])["company"]["name"] == "Acme"

    updated = api.update_job(job["id"], {"isActive": False})
    assert updated["isActive"] is False
    assert api.list_jobs() == []

    api.delete_job(job["id"])
    with pytest.raises(ApiError) as exc_info:
        api.get_job(job["id"])
    assert exc_info.value.status_code == 404


def test_update_profile_refreshes_cached_user(api):
    api.register("ada@example.com", "secret123", "Ada", "Lovelace")

    api.update_profile(firstName="Augusta")

    assert api.session.user["firstName"] == "Augusta"


def test_non_json_refresh_clears_session(session_path):
    store = SessionStore(session_path)
    store.set_auth({"id": "1", "userType": "job_seeker"}, "tok")
    transport = httpx.MockTransport(lambda request: httpx.Response(200, text="<html>proxy</html>"))
    api = JobBoardClient(session=store, http=httpx.Client(transport=transport, base_url="http://testserver"))

    assert api.get_current_user() is None
    assert not api.is_authenticated()
    assert json.loads(session_path.read_text()) == {}


def test_default_session_uses_configured_file(app, settings, monkeypatch):
    monkeypatch.setattr("jobboard.client.session.get_settings", lambda: settings)
    JobBoardClient(http=TestClient(app)).register("ada@example.com", "secret123", "Ada", "Lovelace")

    restored = JobBoardClient(http=TestClient(app))

    assert restored.session.path == settings.client_session_file
    assert restored.is_authenticated()


@pytest.mark.skipif(os.name != "posix", reason="POSIX file modes")
def test_session_file_is_private(session_path):
    SessionStore(session_path).set_auth({"id": "1"}, "tok")

    assert stat.S_IMODE(session_path.stat().st_mode) == 0o600
