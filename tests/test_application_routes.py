from conftest import auth, create_company, post_job, register


def apply(client, token, job_id, cover_letter=None):
    return client.post(f"/api/jobs/{job_id}/apply", json={"coverLetter": cover_letter}, headers=auth(token))


def test_apply(client, seeker, job):
    response = apply(client, seeker["token"], job["id"], "Hire me")

    assert response.status_code == 201
    body = response.json()
    assert body["jobId"] == job["id"]
    assert body["applicantId"] == seeker["user"]["id"]
    assert body["coverLetter"] == "Hire me"
    assert body["status"] == "pending"


def test_apply_without_body(client, seeker, job):
    response = client.post(f"/api/jobs/{job['id']}/apply", headers=auth(seeker["token"]))

    assert response.status_code == 201
    assert response.json()["coverLetter"] is None


def test_apply_twice_conflicts(client, seeker, job):
    assert apply(client, seeker["token"], job["id"]).status_code == 201

    response = apply(client, seeker["token"], job["id"])

    assert response.status_code == 409
    assert response.json()["message"] == "Already applied to this job"


def test_other_applicant_or_other_job_can_apply(client, employer, company, seeker, job):
    _, other_token = register(client, "second@example.com")
    other_job = post_job(client, employer["token"], company["id"], title="Second job")

    assert apply(client, seeker["token"], job["id"]).status_code == 201
    assert apply(client, other_token, job["id"]).status_code == 201
    assert apply(client, seeker["token"], other_job["id"]).status_code == 201


def test_apply_to_missing_job(client, seeker):
    response = apply(client, seeker["token"], "missing")

    assert response.status_code == 404


def test_apply_to_inactive_job(client, employer, seeker, job):
    client.patch(f"/api/jobs/{job['id']}", json={"isActive": False}, headers=auth(employer["token"]))

    response = apply(client, seeker["token"], job["id"])

    assert response.status_code == 400


def test_employer_cannot_apply(client, employer, job):
    response = apply(client, employer["token"], job["id"])

    assert response.status_code == 403
    assert response.json()["message"] == "Job seekers only"


def test_my_applications(client, seeker, job):
    apply(client, seeker["token"], job["id"])

    response = client.get("/api/my-applications", headers=auth(seeker["token"]))

    assert response.status_code == 200
    rows = response.json()
    assert len(rows) == 1
    assert rows[0]["job"]["id"] == job["id"]
    assert rows[0]["job"]["company"]["name"] == "Acme"


def test_my_applications_requires_job_seeker(client, employer):
    assert client.get("/api/my-applications", headers=auth(employer["token"])).status_code == 403


def test_employer_applications_only_for_own_jobs(client, employer, seeker, job):
    _, other_token = register(client, "other@example.com", "employer")
    other_company = create_company(client, other_token, "Other")
    other_job = post_job(client, other_token, other_company["id"])
    apply(client, seeker["token"], job["id"])
    apply(client, seeker["token"], other_job["id"])

    rows = client.get("/api/employer/applications", headers=auth(employer["token"])).json()

    assert [r["jobId"] for r in rows] == [job["id"]]
    assert rows[0]["job"]["title"] == job["title"]


def test_job_applications_for_owner(client, employer, seeker, job):
    apply(client, seeker["token"], job["id"])
    _, other_token = register(client, "other@example.com", "employer")

    own = client.get(f"/api/jobs/{job['id']}/applications", headers=auth(employer["token"]))
    foreign = client.get(f"/api/jobs/{job['id']}/applications", headers=auth(other_token))

    assert own.status_code == 200
    assert [a["applicantId"] for a in own.json()] == [seeker["user"]["id"]]
    assert foreign.status_code == 403


def test_employer_updates_status(client, employer, seeker, job):
    application = apply(client, seeker["token"], job["id"]).json()

    response = client.patch(f"/api/applications/{application['id']}", json={"status": "interview"},
                            headers=auth(employer["token"]))

    assert response.status_code == 200
    assert response.json()["status"] == "interview"
    rows = client.get("/api/my-applications", headers=auth(seeker["token"])).json()
    assert rows[0]["status"] == "interview"


def test_applicant_updates_cover_letter(client, seeker, job):
    application = apply(client, seeker["token"], job["id"]).json()

    response = client.patch(f"/api/applications/{application['id']}", json={"coverLetter": "Updated"},
                            headers=auth(seeker["token"]))

    assert response.status_code == 200
    assert response.json()["coverLetter"] == "Updated"
    assert response.json()["status"] == "pending"


def test_unrelated_user_cannot_update(client, seeker, job):
    application = apply(client, seeker["token"], job["id"]).json()
    _, stranger = register(client, "stranger@example.com")

    response = client.patch(f"/api/applications/{application['id']}", json={"status": "accepted"},
                            headers=auth(stranger))

    assert response.status_code == 403


def test_update_rejects_unknown_status(client, employer, seeker, job):
    application = apply(client, seeker["token"], job["id"]).json()

    response = client.patch(f"/api/applications/{application['id']}", json={"status": "hired"},
                            headers=auth(employer["token"]))

    assert response.status_code == 400


def test_update_missing_application(client, employer):
    response = client.patch("/api/applications/nope", json={"status": "accepted"}, headers=auth(employer["token"]))

    assert response.status_code == 404


def test_application_frozen_after_job_deleted(client, employer, seeker, job):
    application = apply(client, seeker["token"], job["id"]).json()
    client.delete(f"/api/jobs/{job['id']}", headers=auth(employer["token"]))

    as_applicant = client.patch(f"/api/applications/{application['id']}", json={"status": "accepted"},
                                headers=auth(seeker["token"]))
    as_employer = client.patch(f"/api/applications/{application['id']}", json={"status": "rejected"},
                               headers=auth(employer["token"]))

    assert as_applicant.status_code == 403
    assert as_employer.status_code == 403
