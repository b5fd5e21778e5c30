import pytest

from ableconnect.core.exceptions import ValidationFailed
from ableconnect.models import User
from ableconnect.services.profiles import normalize_accommodations

PDF = b"%PDF-1.4 resume"


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, []),
        ("Ramps, Captioning", [
            {"name": "Ramps", "available": True},
            {"name": "Captioning", "available": True},
        ]),
        ('[{"name": "Ramps", "available": false}]', [{"name": "Ramps", "available": False}]),
        (["Ramps", "", {"name": "Quiet room", "available": True}, {"name": 3}], [
            {"name": "Ramps", "available": True},
            {"name": "Quiet room", "available": True},
        ]),
    ],
)
def test_normalize_accommodations(raw, expected):
    assert normalize_accommodations(raw) == expected


def test_normalize_accommodations_rejects_other_shapes():
    with pytest.raises(ValidationFailed):
        normalize_accommodations({"name": "Ramps"})


def test_employer_updates_company_profile(client, auth_headers, employer):
    response = client.put(
        "/api/profiles/employer",
        json={
            "username": "acme",
            "companyName": "Acme Accessible",
            "website": "https://acme.example",
            "accommodations": ["Ramps"],
            "accommodationsAvailable": True,
        },
        headers=auth_headers(employer),
    )

    assert response.status_code == 200
    body = response.json()
    assert body["companyName"] == "Acme Accessible"
    assert body["accommodations"] == [{"name": "Ramps", "available": True}]
    assert body["accommodationsAvailable"] is True


def test_company_profile_requires_company_name(client, auth_headers, employer):
    response = client.put(
        "/api/profiles/employer",
        json={"username": "acme", "companyName": " "},
        headers=auth_headers(employer),
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Company Name is required"


def test_company_profile_is_employer_only(client, auth_headers, jobseeker):
    response = client.get("/api/profiles/employer", headers=auth_headers(jobseeker))

    assert response.status_code == 403


def test_public_company_lookup(client, employer):
    found = client.get("/api/profiles/companies/acme-corp")
    missing = client.get("/api/profiles/companies/initech")

    assert found.status_code == 200
    assert found.json()["companyName"] == "Acme Corp"
    assert "email" not in found.json()
    assert missing.status_code == 404
    assert missing.json()["message"] == "No user found with that company name"


def test_jobseeker_profile_resume_replacement(client, db, auth_headers, jobseeker, storage):
    headers = auth_headers(jobseeker)
    form = {"username": "jamie", "name": "Jamie Q. Doe"}

    first = client.put(
        "/api/profiles/jobseeker",
        data=form,
        files={"resume": ("one.pdf", PDF, "application/pdf")},
        headers=headers,
    )
    assert first.status_code == 200
    first_name = first.json()["resume"]["filename"]
    assert first.json()["resume"]["url"] == f"/api/applications/resume/{first_name}"

    second = client.put(
        "/api/profiles/jobseeker",
        data=form,
        files={"resume": ("two.docx", PDF, "application/octet-stream")},
        headers=headers,
    )
    second_name = second.json()["resume"]["filename"]

    assert second.json()["name"] == "Jamie Q. Doe"
    stored = sorted(path.name for path in storage.directory("resume").iterdir())
    assert stored == [second_name]


def test_profile_resume_visible_to_employers_not_other_seekers(
    client, auth_headers, jobseeker, other_jobseeker, employer
):
    uploaded = client.put(
        "/api/profiles/jobseeker",
        data={"username": "jamie", "name": "Jamie"},
        files={"resume": ("cv.pdf", PDF, "application/pdf")},
        headers=auth_headers(jobseeker),
    ).json()
    url = f"/api/applications/resume/{uploaded['resume']['filename']}"

    assert client.get(url, headers=auth_headers(jobseeker)).status_code == 200
    assert client.get(url, headers=auth_headers(employer)).status_code == 200
    assert client.get(url, headers=auth_headers(other_jobseeker)).status_code == 403


def test_jobseeker_preferences_and_accommodation(client, db, auth_headers, jobseeker):
    headers = auth_headers(jobseeker)

    prefs = client.put(
        "/api/profiles/jobseeker/preferences",
        json={"jobTypes": ["Remote"], "preferredLocation": "Denver"},
        headers=headers,
    )
    accommodation = client.put(
        "/api/profiles/jobseeker/accommodation",
        json={"accommodationPreferences": "Captioned interviews"},
        headers=headers,
    )

    assert prefs.json()["jobTypes"] == ["Remote"]
    assert accommodation.json()["accommodationPreferences"] == "Captioned interviews"
    db.expire_all()
    assert db.get(User, jobseeker.id).preferred_location == "Denver"


def test_username_is_required_on_profile_edit(client, auth_headers, jobseeker):
    response = client.put(
        "/api/profiles/jobseeker", data={"name": "Jamie"}, headers=auth_headers(jobseeker)
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Username is required"
