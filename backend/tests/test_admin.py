from ableconnect.models import Application, Job, User, UserSettings


def test_admin_routes_require_token(client):
    response = client.get("/api/admin/users")

    assert response.status_code == 401


def test_admin_routes_reject_other_roles(client, auth_headers, jobseeker, employer):
    for user in (jobseeker, employer):
        response = client.get("/api/admin/reports", headers=auth_headers(user))
        assert response.status_code == 403
        assert response.json()["message"] == "Not authorized as admin"


def test_approve_employer_once(client, auth_headers, admin, employer):
    assert employer.approved is False
    url = f"/api/admin/users/{employer.id}/approve"

    first = client.put(url, headers=auth_headers(admin))
    assert first.status_code == 200
    assert first.json()["message"] == "User approved"
    assert first.json()["user"]["approved"] is True

    second = client.put(url, headers=auth_headers(admin))
    assert second.status_code == 400
    assert second.json()["message"] == "User is already approved"


def test_approve_unknown_user(client, auth_headers, admin):
    response = client.put("/api/admin/users/999/approve", headers=auth_headers(admin))

    assert response.status_code == 404
    assert response.json()["message"] == "User not found"


def test_suspend_toggles(client, auth_headers, admin, jobseeker):
    url = f"/api/admin/users/{jobseeker.id}/suspend"

    assert client.put(url, headers=auth_headers(admin)).json()["message"] == "User suspended"
    assert client.put(url, headers=auth_headers(admin)).json()["message"] == "User unsuspended"


def test_edit_user_role_and_email(client, auth_headers, admin, jobseeker, employer):
    response = client.put(
        f"/api/admin/users/{jobseeker.id}",
        json={"role": "employer", "email": "Renamed@Example.com"},
        headers=auth_headers(admin),
    )
    clash = client.put(
        f"/api/admin/users/{jobseeker.id}",
        json={"email": employer.email},
        headers=auth_headers(admin),
    )
    bad_role = client.put(
        f"/api/admin/users/{jobseeker.id}", json={"role": "owner"}, headers=auth_headers(admin)
    )

    assert response.status_code == 200
    assert response.json()["user"]["role"] == "employer"
    assert response.json()["user"]["email"] == "renamed@example.com"
    assert clash.status_code == 400
    assert bad_role.status_code == 400


def test_delete_user_cascades(client, db, auth_headers, admin, employer, jobseeker, job):
    db.add(Application(job_id=job.id, applicant_id=jobseeker.id, name="J", email="j@x.io"))
    db.add(UserSettings(user_id=employer.id))
    db.commit()

    response = client.delete(f"/api/admin/users/{employer.id}", headers=auth_headers(admin))

    assert response.status_code == 200
    assert response.json()["message"] == "User deleted"
    db.expire_all()
    assert db.get(User, employer.id) is None
    assert db.query(Job).count() == 0
    assert db.query(Application).count() == 0
    assert db.query(UserSettings).count() == 0


def test_admin_cannot_delete_self(client, auth_headers, admin):
    response = client.delete(f"/api/admin/users/{admin.id}", headers=auth_headers(admin))

    assert response.status_code == 400


def test_job_moderation(client, db, auth_headers, admin, job):
    job.status = "Pending"
    db.commit()
    headers = auth_headers(admin)

    approved = client.put(f"/api/admin/jobs/{job.id}/approve", headers=headers)
    assert approved.json()["message"] == "Job approved"
    assert approved.json()["job"]["status"] == "Approved"

    again = client.put(f"/api/admin/jobs/{job.id}/approve", headers=headers)
    assert again.status_code == 400
    assert again.json()["message"] == "Job is already approved"

    rejected = client.put(f"/api/admin/jobs/{job.id}/reject", headers=headers)
    assert rejected.json()["message"] == "Job rejected"


def test_admin_edits_any_job(client, auth_headers, admin, job):
    response = client.put(
        f"/api/admin/jobs/{job.id}",
        json={"title": "Renamed", "status": "Closed"},
        headers=auth_headers(admin),
    )
    invalid = client.put(
        f"/api/admin/jobs/{job.id}", json={"status": "Archived"}, headers=auth_headers(admin)
    )

    assert response.json()["job"]["title"] == "Renamed"
    assert response.json()["job"]["status"] == "Closed"
    assert invalid.status_code == 400


def test_admin_application_status_subset_and_email(
    client, db, auth_headers, mailer, admin, jobseeker, job
):
    application = Application(job_id=job.id, applicant_id=jobseeker.id, name="J", email="j@x.io")
    db.add(application)
    db.commit()
    url = f"/api/admin/applications/{application.id}/status"

    interview = client.put(url, json={"status": "Interview Scheduled"}, headers=auth_headers(admin))
    assert interview.status_code == 400
    assert interview.json()["message"] == "Invalid status. Must be Pending, Accepted, or Rejected"
    assert mailer.sent == []

    accepted = client.put(url, json={"status": "Accepted"}, headers=auth_headers(admin))
    assert accepted.status_code == 200
    assert accepted.json()["app"]["status"] == "Accepted"
    assert [message["to"] for message in mailer.sent] == [jobseeker.email]


def test_admin_sets_feedback_only(client, db, auth_headers, admin, jobseeker, job):
    application = Application(job_id=job.id, applicant_id=jobseeker.id, name="J", email="j@x.io")
    db.add(application)
    db.commit()

    response = client.put(
        f"/api/admin/applications/{application.id}/feedback",
        json={"feedback": "Strong portfolio"},
        headers=auth_headers(admin),
    )

    assert response.status_code == 200
    assert response.json()["app"]["feedback"] == "Strong portfolio"
    assert response.json()["app"]["status"] == "Pending"


def test_reports(client, db, auth_headers, admin, employer, jobseeker, job):
    db.add(
        Application(
            job_id=job.id,
            applicant_id=jobseeker.id,
            name="J",
            email="j@x.io",
            status="Accepted",
            resume="cv.pdf",
            accommodation="Captioning",
        )
    )
    db.commit()

    report = client.get("/api/admin/reports", headers=auth_headers(admin)).json()

    assert report["totalUsers"] == 3
    assert report["totalJobs"] == 1
    assert report["totalApplications"] == 1
    assert report["hires"] == 1
    assert report["resumeUploads"] == 1
    assert report["accommodations"] == 1
    assert report["usersByRole"] == {"jobseeker": 1, "employer": 1}
    assert report["jobsByStatus"]["active"] == 1
    assert report["topEmployers"] == [
        {"id": employer.id, "email": employer.email, "company": "Acme Corp", "jobCount": 1}
    ]


def test_oversized_ids_are_bad_requests(client, auth_headers, admin):
    too_big = "9" * 30

    user = client.put(f"/api/admin/users/{too_big}/approve", headers=auth_headers(admin))
    job = client.delete(f"/api/admin/jobs/{too_big}", headers=auth_headers(admin))

    assert user.status_code == 400
    assert job.status_code == 400
