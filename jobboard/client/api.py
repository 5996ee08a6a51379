"""
Job board API client.

Thin httpx wrappers around the REST API plus the session handling a
front end needs: register/login store the session, a failed "who am I"
refresh clears it, logout clears it.

Usage:
    client = JobBoardClient("http://localhost:8000", session=SessionStore(path))
    client.login("ada@example.com", "secret123")
    jobs = client.list_jobs(search="engineer", min_salary=50000)
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from jobboard.client.session import SessionStore

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Non-2xx response from the API."""

    def __init__(self, status_code: int, message: str, payload: Optional[dict] = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.payload = payload or {}


class JobBoardClient:
    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        session: Optional[SessionStore] = None,
        http: Optional[httpx.Client] = None,
        timeout: float = 10.0,
    ):
        self.session = session if session is not None else SessionStore.from_settings()
        self.http = http or httpx.Client(base_url=base_url, timeout=timeout)

    def close(self) -> None:
        self.http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    # ============================================================
    # LOW LEVEL
    # ============================================================

    def _headers(self) -> Dict[str, str]:
        if self.session.token:
            return {"Authorization": f"Bearer {self.session.token}"}
        return {}

    def _request(self, method: str, path: str, **kwargs) -> Any:
        response = self.http.request(method, path, headers=self._headers(), **kwargs)
        if response.is_error:
            try:
                payload = response.json()
            except ValueError:
                payload = {}
            message = payload.get("message") if isinstance(payload, dict) else None
            raise ApiError(response.status_code, message or f"Request failed ({response.status_code})", payload)
        return response.json()

    # ============================================================
    # AUTH
    # ============================================================

    def register(
        self,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        user_type: str = "job_seeker",
    ) -> Dict[str, Any]:
        data = self._request("POST", "/api/auth/register", json={
            "email": email,
            "password": password,
            "firstName": first_name,
            "lastName": last_name,
            "userType": user_type,
        })
        self.session.set_auth(data["user"], data["token"])
        return data

    def login(self, email: str, password: str) -> Dict[str, Any]:
        data = self._request("POST", "/api/auth/login", json={"email": email, "password": password})
        self.session.set_auth(data["user"], data["token"])
        return data

    def get_current_user(self) -> Optional[Dict[str, Any]]:
        """Refresh the cached user. Any failure clears the session."""
        if not self.session.token:
            return None
        try:
            user = self._request("GET", "/api/auth/me")
        except (ApiError, httpx.HTTPError, ValueError) as e:
            logger.info("Session refresh failed, clearing: %s", e)
            self.session.clear()
            return None
        self.session.set_user(user)
        return user

    def logout(self) -> None:
        self.session.clear()

    def is_authenticated(self) -> bool:
        return self.session.is_authenticated

    def is_employer(self) -> bool:
        return bool(self.session.user) and self.session.user.get("userType") == "employer"

    def is_job_seeker(self) -> bool:
        return bool(self.session.user) and self.session.user.get("userType") == "job_seeker"

    # ============================================================
    # JOBS
    # ============================================================

    def list_jobs(
        self,
        search: Optional[str] = None,
        location: Optional[str] = None,
        job_type: Optional[str] = None,
        experience_level: Optional[str] = None,
        min_salary: Optional[int] = None,
        max_salary: Optional[int] = None,
        skills: Optional[List[str]] = None,
    ) -> List[Dict[str, Any]]:
        params = {
            "search": search,
            "location": location,
            "jobType": job_type,
            "experienceLevel": experience_level,
            "minSalary": min_salary,
            "maxSalary": max_salary,
            "skills": ",".join(skills) if skills else None,
        }
        params = {k: v for k, v in params.items() if v not in (None, "")}
        return self._request("GET", "/api/jobs", params=params)

    def get_job(self, job_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/api/jobs/{job_id}")

    def create_job(self, job: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/api/jobs", json=job)

    def update_job(self, job_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PATCH", f"/api/jobs/{job_id}", json=updates)

    def delete_job(self, job_id: str) -> Dict[str, Any]:
        return self._request("DELETE", f"/api/jobs/{job_id}")

    def employer_jobs(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/employer/jobs")

    # ============================================================
    # APPLICATIONS
    # ============================================================

    def apply(self, job_id: str, cover_letter: Optional[str] = None) -> Dict[str, Any]:
        return self._request("POST", f"/api/jobs/{job_id}/apply", json={"coverLetter": cover_letter})

    def my_applications(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/my-applications")

    def employer_applications(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/employer/applications")

    def job_applications(self, job_id: str) -> List[Dict[str, Any]]:
        return self._request("GET", f"/api/jobs/{job_id}/applications")

    def update_application(self, application_id: str, **updates) -> Dict[str, Any]:
        """update_application(app_id, status="reviewing")"""
        body = {}
        if "status" in updates:
            body["status"] = updates["status"]
        if "cover_letter" in updates:
            body["coverLetter"] = updates["cover_letter"]
        return self._request("PATCH", f"/api/applications/{application_id}", json=body)

    # ============================================================
    # COMPANIES & PROFILE
    # ============================================================

    def create_company(self, name: str, **fields) -> Dict[str, Any]:
        return self._request("POST", "/api/companies", json={"name": name, **fields})

    def my_companies(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/my-companies")

    def update_profile(self, **fields) -> Dict[str, Any]:
        user = self._request("PATCH", "/api/profile", json=fields)
        self.session.set_user(user)
        return user
