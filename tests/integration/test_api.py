from app.models.entities import ContentItem, ContentKind


def _insert(db_session, title: str, status: str, author: str = "legacy-import", kind=ContentKind.document) -> int:
    item = ContentItem(kind=kind, title=title, author=author, status=status)
    db_session.add(item)
    db_session.commit()
    return item.id


def _submit(client, key: str, **overrides) -> dict:
    payload = {
        "kind": "document",
        "title": "Hypertension self-management",
        "description": "Patient guide",
        "media_url": "https://example.org/uploads/hypertension.pdf",
        "author": "dr.ramos",
        "journal": "Patient Education",
        "year": 2024,
    }
    payload.update(overrides)
    resp = client.post("/v1/content", json=payload, headers={"Idempotency-Key": key})
    assert resp.status_code == 200
    return resp.json()["data"]


def test_submit_requires_idempotency(client):
    resp = client.post("/v1/content", json={"kind": "document", "title": "x", "author": "y"})
    assert resp.status_code == 422
    assert resp.json()["error"]["code"] == "VALIDATION_ERROR"


def test_submitted_content_starts_pending(client):
    data = _submit(client, "submit-pending-1")
    assert data["raw_status"] == "pending"
    assert data["status"] == "pending"
    assert data["is_public"] is False
    assert data["descriptor"]["label"] == "Pending Review"
    assert data["allowed_next_states"] == ["verified", "rejected"]


def test_submit_idempotent_replay(client):
    first = _submit(client, "submit-replay-1", title="Replay check")
    second = _submit(client, "submit-replay-1", title="Replay check")
    assert first["id"] == second["id"]


def test_idempotency_conflict(client):
    headers = {"Idempotency-Key": "submit-conflict"}
    base = {"kind": "video", "author": "dr.okafor"}
    first = client.post("/v1/content", json={**base, "title": "A"}, headers=headers)
    second = client.post("/v1/content", json={**base, "title": "B"}, headers=headers)
    assert first.status_code == 200
    assert second.status_code == 409
    assert second.json()["error"]["code"] == "HTTP_ERROR"


def test_moderation_transition_and_history(client):
    item = _submit(client, "submit-moderate-1", title="Moderated item")
    resp = client.post(
        f"/v1/content/{item['id']}/status",
        json={"target": "verified", "current": "pending"},
        headers={"Idempotency-Key": "moderate-1", "X-Actor": "dr.admin"},
    )
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["status"] == "verified"
    assert data["is_public"] is True
    assert data["allowed_next_states"] == ["pending", "rejected"]

    history = client.get(f"/v1/content/{item['id']}/history").json()["data"]
    assert [entry["action"] for entry in history] == ["submit", "transition"]
    assert history[-1]["actor"] == "dr.admin"
    assert history[-1]["payload_json"] == {"from_raw": "pending", "from_status": "pending", "to_status": "verified"}


def test_transition_to_same_status_is_rejected(client):
    item = _submit(client, "submit-same-1", title="Same status")
    resp = client.post(
        f"/v1/content/{item['id']}/status",
        json={"target": "pending"},
        headers={"Idempotency-Key": "moderate-same-1"},
    )
    assert resp.status_code == 409


def test_transition_status_mismatch(client):
    item = _submit(client, "submit-mismatch-1", title="Mismatch")
    resp = client.post(
        f"/v1/content/{item['id']}/status",
        json={"target": "rejected", "current": "verified"},
        headers={"Idempotency-Key": "moderate-mismatch-1"},
    )
    assert resp.status_code == 409
    assert resp.json()["error"]["message"] == "Content status mismatch"


def test_transition_rejects_legacy_target(client):
    item = _submit(client, "submit-legacy-target", title="Legacy target")
    resp = client.post(
        f"/v1/content/{item['id']}/status",
        json={"target": "approved"},
        headers={"Idempotency-Key": "moderate-legacy-target"},
    )
    assert resp.status_code == 422


def test_legacy_row_is_interpreted_without_rewrite(client, db_session):
    content_id = _insert(db_session, "Legacy approved video", "approved", kind=ContentKind.video)
    data = client.get(f"/v1/content/{content_id}").json()["data"]
    assert data["raw_status"] == "approved"
    assert data["status"] == "verified"
    assert data["is_public"] is True
    assert data["allowed_next_states"] == ["pending", "rejected"]


def test_unknown_status_renders_neutral_and_moves_anywhere(client, db_session):
    content_id = _insert(db_session, "Archived import", "archived")
    data = client.get(f"/v1/content/{content_id}").json()["data"]
    assert data["status"] is None
    assert data["is_public"] is False
    assert data["descriptor"]["recognized"] is False
    assert data["descriptor"]["severity"] == "neutral"
    assert data["allowed_next_states"] == ["pending", "rejected", "verified"]

    resp = client.post(
        f"/v1/content/{content_id}/status",
        json={"target": "pending", "current": "archived"},
        headers={"Idempotency-Key": "moderate-archived-1"},
    )
    assert resp.status_code == 200
    assert resp.json()["data"]["raw_status"] == "pending"


def test_public_listing_includes_legacy_and_excludes_unknown(client, db_session):
    author = "public-listing-author"
    verified_id = _insert(db_session, "Public verified", "verified", author=author)
    accepted_id = _insert(db_session, "Public accepted", "accepted", author=author)
    _insert(db_session, "Hidden pending", "pending", author=author)
    _insert(db_session, "Hidden archived", "archived", author=author)

    resp = client.get("/v1/content", params={"author": author})
    assert resp.status_code == 200
    body = resp.json()
    ids = {item["id"] for item in body["data"]["items"]}
    assert ids == {verified_id, accepted_id}
    assert body["meta"]["total"] == 2

    everything = client.get("/v1/content", params={"author": author, "show_all": True}).json()
    assert everything["data"]["total"] == 4


def test_status_filter_folds_legacy_values(client, db_session):
    author = "status-filter-author"
    refused_id = _insert(db_session, "Refused upload", "refused", author=author)
    rejected_id = _insert(db_session, "Rejected upload", "rejected", author=author)
    _insert(db_session, "Pending upload", "pending", author=author)

    resp = client.get("/v1/content", params={"author": author, "status": "rejected"})
    ids = {item["id"] for item in resp.json()["data"]["items"]}
    assert ids == {refused_id, rejected_id}


def test_status_counts(client, db_session):
    _insert(db_session, "Count video approved", "approved", kind=ContentKind.video)
    _insert(db_session, "Count video unknown", "draft", kind=ContentKind.video)

    counts = client.get("/v1/content/status-counts", params={"kind": "video"}).json()["data"]
    assert counts["verified"] >= 1
    assert counts["unrecognized"] >= 1
    assert counts["total"] == counts["pending"] + counts["rejected"] + counts["verified"] + counts["unrecognized"]


def test_status_taxonomy(client):
    data = client.get("/v1/statuses").json()["data"]
    assert [item["status"] for item in data["statuses"]] == ["pending", "rejected", "verified"]
    assert data["public_statuses"] == ["verified"]
    assert data["aliases"]["refused"] == "rejected"
    assert data["aliases"]["verified"] == "verified"


def test_resolve_endpoint(client):
    data = client.get("/v1/statuses/resolve", params={"raw": "refused"}).json()["data"]
    assert data["status"] == "rejected"
    assert data["predicates"]["is_rejected"] is True
    assert data["allowed_next_states"] == ["pending", "verified"]

    absent = client.get("/v1/statuses/resolve").json()["data"]
    assert absent["raw"] is None
    assert absent["status"] is None
    assert absent["predicates"] == {
        "is_public": False,
        "is_pending": False,
        "is_rejected": False,
        "is_verified": False,
    }


def test_resolve_endpoint_strict_mode(client):
    resp = client.get("/v1/statuses/resolve", params={"raw": "archived", "strict": True})
    assert resp.status_code == 422
    body = resp.json()
    assert body["error"]["code"] == "UNRECOGNIZED_STATUS"
    assert body["error"]["details"]["raw"] == "archived"


def test_category_lifecycle(client):
    headers = {"Idempotency-Key": "category-neurology"}
    created = client.post("/v1/categories", json={"name": "Neurology"}, headers=headers)
    assert created.status_code == 200
    category_id = created.json()["data"]["id"]

    item = _submit(client, "submit-category-1", title="Migraine overview", category_id=category_id)
    assert item["category_name"] == "Neurology"

    names = [category["name"] for category in client.get("/v1/categories").json()["data"]]
    assert "Neurology" in names


def test_submit_unknown_category(client):
    resp = client.post(
        "/v1/content",
        json={"kind": "document", "title": "Orphan", "author": "x", "category_id": 99999},
        headers={"Idempotency-Key": "submit-orphan"},
    )
    assert resp.status_code == 404


def test_delete_content(client):
    item = _submit(client, "submit-delete-1", title="To delete")
    resp = client.delete(f"/v1/content/{item['id']}", headers={"Idempotency-Key": "delete-1"})
    assert resp.status_code == 200
    assert client.get(f"/v1/content/{item['id']}").status_code == 404


def test_content_not_found(client):
    resp = client.get("/v1/content/99999")
    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "HTTP_ERROR"


def test_metrics_endpoint(client):
    client.get("/v1/statuses/resolve", params={"raw": "mystery"})
    resp = client.get("/metrics")
    assert resp.status_code == 200
    assert "healthcontent_unrecognized_status_total" in resp.text


def test_content_row_without_status_defaults_to_pending(client, db_session):
    item = ContentItem(kind=ContentKind.document, title="Row without status", author="legacy-import")
    db_session.add(item)
    db_session.commit()
    data = client.get(f"/v1/content/{item.id}").json()["data"]
    assert data["raw_status"] == "pending"
    assert data["allowed_next_states"] == ["verified", "rejected"]
