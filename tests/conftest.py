import pytest
from fastapi.testclient import TestClient

from jobboard.core.config import Settings
from jobboard.db import MemoryStorage
from jobboard.main import create_app


@pytest.fixture
def settings(tmp_path):
    return Settings(
        jwt_secret_key="test-secret",
        client_session_file=tmp_path / "session.json",
    )


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def app(settings, storage):
    return create_app(settings=settings, storage=storage)


@pytest.fixture
def client(app):
    return TestClient(app)


def auth(token):
    return {"Authorization": f"Bearer {token}"}


def register(client, email, user_type="job_seeker", password="secret123"):
    response = client.post("/api/auth/register", json={
        "email": email,
        "password": password,
        "firstName": "Test",
        "lastName": "User",
        "userType": user_type,
    })
    assert response.status_code == 201, response.text
    body = response.json()
    return body["user"], body["token"]


def create_company(client, token, name="Acme"):
    response = client.post("/api/companies", json={"name": name}, headers=auth(token))
    assert response.status_code == 201, response.text
    return response.json()


def post_job(client, token, company_id, **overrides):
    body = {
        "title": "Backend Engineer",
        "description": "Build and run APIs",
        "location": "Berlin",
        "jobType": "full_time",
        "experienceLevel": "mid",
        "companyId": company_id,
    }
    body.update(overrides)
    response = client.post("/api/jobs", json=body, headers=auth(token))
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def employer(client):
    user, token = register(client, "boss@example.com", "employer")
    return {"user": user, "token": token}


@pytest.fixture
def seeker(client):
    user, token = register(client, "seeker@example.com", "job_seeker")
    return {"user": user, "token": token}


@pytest.fixture
def company(client, employer):
    return create_company(client, employer["token"])


@pytest.fixture
def job(client, employer, company):
    return post_job(client, employer["token"], company["id"])
