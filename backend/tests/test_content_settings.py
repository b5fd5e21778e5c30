from ableconnect.models import Content


def _create(client, headers, **overrides):
    payload = {"title": "Welcome", "body": "Hello", "category": "Homepage", "isPublished": True}
    payload.update(overrides)
    return client.post("/api/admin/content", json=payload, headers=headers)


# ============== Content ==============


def test_content_lifecycle(client, auth_headers, admin):
    headers = auth_headers(admin)

    created = _create(client, headers)
    assert created.status_code == 201
    content_id = created.json()["id"]
    assert created.json()["author"]["id"] == admin.id

    edited = client.put(
        f"/api/admin/content/{content_id}", json={"body": "Updated"}, headers=headers
    )
    assert edited.json()["body"] == "Updated"

    deleted = client.delete(f"/api/admin/content/{content_id}", headers=headers)
    assert deleted.json()["message"] == "Content deleted"

    missing = client.delete(f"/api/admin/content/{content_id}", headers=headers)
    assert missing.status_code == 404
    assert missing.json()["message"] == "Content not found"


def test_content_requires_fields_and_known_category(client, auth_headers, admin):
    headers = auth_headers(admin)

    missing = _create(client, headers, body="")
    unknown = _create(client, headers, category="Blog")

    assert missing.status_code == 400
    assert missing.json()["message"] == "Title, body, and category are required"
    assert unknown.status_code == 400


def test_public_content_only_published_and_filtered(client, db, admin):
    db.add_all(
        [
            Content(title="FAQ 1", body="b", category="FAQ", created_by=admin.id, is_published=True),
            Content(title="Draft", body="b", category="FAQ", created_by=admin.id, is_published=False),
            Content(title="News", body="b", category="Announcements", created_by=admin.id,
                    is_published=True),
            Content(title="Guide", body="b", category="Guides", created_by=admin.id,
                    is_published=True),
        ]
    )
    db.commit()

    everything = client.get("/api/content").json()
    filtered = client.get("/api/content", params={"category": "FAQ,Announcements"}).json()

    assert {item["title"] for item in everything} == {"FAQ 1", "News", "Guide"}
    assert {item["title"] for item in filtered} == {"FAQ 1", "News"}


# ============== Settings ==============


def test_guest_gets_default_settings(client):
    response = client.get("/api/settings")

    assert response.status_code == 200
    body = response.json()
    assert body["fontSize"] == 0
    assert body["highContrast"] is False
    assert body["notifications"] == {"jobAlerts": True, "announcements": True}
    assert body["userId"] is None


def test_settings_created_lazily_and_merged(client, auth_headers, jobseeker):
    headers = auth_headers(jobseeker)

    initial = client.get("/api/settings", headers=headers).json()
    assert initial["userId"] == jobseeker.id

    updated = client.put(
        "/api/settings",
        json={"fontSize": 3, "tts": {"rate": 1.5}, "notifications": {"jobAlerts": False}},
        headers=headers,
    )

    assert updated.status_code == 200
    body = updated.json()
    assert body["fontSize"] == 3
    assert body["tts"]["rate"] == 1.5
    assert body["tts"]["volume"] == 1
    assert body["notifications"] == {"jobAlerts": False, "announcements": True}

    assert client.get("/api/settings", headers=headers).json()["fontSize"] == 3


def test_settings_font_size_is_bounded(client, auth_headers, jobseeker):
    response = client.put("/api/settings", json={"fontSize": 9}, headers=auth_headers(jobseeker))

    assert response.status_code == 400


def test_settings_update_requires_token(client):
    response = client.put("/api/settings", json={"fontSize": 1})

    assert response.status_code == 401
