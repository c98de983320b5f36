"""API tests for the analysis trigger and analysis read endpoints"""

from types import SimpleNamespace
from uuid import uuid4

import httpx
import openai
from fastapi.testclient import TestClient

from conftest import add_entries, auth_headers, make_user
from lovejourney.core.exceptions import (
    UNEXPECTED_ERROR_BODY,
    CompletionError,
    CompletionQuotaExceededError,
)
from lovejourney.models.analysis import Analysis
from lovejourney.services.completion import CompletionClient
from lovejourney.services.journal_analysis import journal_analysis_service

REQUEST = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")


def trigger(client, user_id, email):
    return client.post("/functions/analyze-entries", json={"userId": str(user_id), "email": email})


def test_trigger_generates_analysis(client, db, user, fake_completion):
    add_entries(db, user, 3)

    response = trigger(client, user.id, user.email)

    assert response.status_code == 200
    assert response.json() == {
        "status": "success",
        "code": "GENERATED",
        "message": "Analysis generated and saved successfully",
    }
    assert len(fake_completion.calls) == 1


def test_trigger_without_entries_is_success(client, user, fake_completion):
    response = trigger(client, user.id, user.email)

    assert response.status_code == 200
    assert response.json()["code"] == "NO_CONTENT"
    assert fake_completion.calls == []


def test_trigger_missing_email_is_rejected(client, db, user, fake_completion):
    add_entries(db, user, 3)

    response = client.post("/functions/analyze-entries", json={"userId": str(user.id)})

    assert response.status_code == 422
    body = response.json()
    assert body["status"] == "error"
    assert body["code"] == "MISSING_FIELDS"
    assert fake_completion.calls == []


def test_trigger_without_body_is_rejected(client):
    response = client.post("/functions/analyze-entries")

    assert response.status_code == 422
    assert response.json()["code"] == "MISSING_FIELDS"


def test_trigger_quota_exceeded_returns_429(client, db, user, fake_completion):
    add_entries(db, user, 3)
    fake_completion.error = CompletionQuotaExceededError("insufficient_quota")

    response = trigger(client, user.id, user.email)

    assert response.status_code == 429
    body = response.json()
    assert body["status"] == "error"
    assert body["code"] == "OPENAI_QUOTA_EXCEEDED"
    assert "high demand" in body["error"]


def test_trigger_generic_failure_returns_500(client, db, user, fake_completion):
    add_entries(db, user, 3)
    fake_completion.error = CompletionError("Completion service timed out after 30s")

    response = trigger(client, user.id, user.email)

    assert response.status_code == 500
    assert response.json()["code"] == "UNEXPECTED_ERROR"
    assert "timed out" not in response.text
    db.expire_all()
    assert db.query(Analysis).count() == 0


def test_trigger_unclassified_sdk_failure_returns_500(client, db, user, monkeypatch):
    """SDK errors outside the status/timeout/connection family still map to UNEXPECTED_ERROR"""
    add_entries(db, user, 3)
    completion = CompletionClient(api_key="test-key")

    def create(**kwargs):
        raise openai.APIResponseValidationError(
            response=httpx.Response(200, request=REQUEST), body=None
        )

    completion._client = SimpleNamespace(
        chat=SimpleNamespace(completions=SimpleNamespace(create=create))
    )
    monkeypatch.setattr(journal_analysis_service, "completion", completion)

    response = trigger(client, user.id, user.email)

    assert response.status_code == 500
    assert response.json()["code"] == "UNEXPECTED_ERROR"
    db.expire_all()
    assert db.query(Analysis).count() == 0


def test_unhandled_error_returns_json_500(client, db, user, fake_completion):
    add_entries(db, user, 3)
    fake_completion.error = RuntimeError("boom")
    raw_client = TestClient(client.app, raise_server_exceptions=False)

    response = trigger(raw_client, user.id, user.email)

    assert response.status_code == 500
    assert response.json() == UNEXPECTED_ERROR_BODY
    assert "boom" not in response.text


def test_second_trigger_is_not_needed(client, db, user):
    add_entries(db, user, 3)

    trigger(client, user.id, user.email)
    response = trigger(client, user.id, user.email)

    assert response.status_code == 200
    assert response.json()["code"] == "NOT_NEEDED"
    db.expire_all()
    assert db.query(Analysis).count() == 1


def test_my_analyses_and_detail(client, db, user):
    add_entries(db, user, 3)
    trigger(client, user.id, user.email)

    response = client.get("/analyses/me", headers=auth_headers(user))
    assert response.status_code == 200
    analyses = response.json()
    assert len(analyses) == 1
    assert analyses[0]["status"] == "generated"
    assert analyses[0]["email"] == user.email

    detail = client.get(f"/analyses/{analyses[0]['id']}", headers=auth_headers(user))
    assert detail.status_code == 200
    assert detail.json()["content"] == "Keywords: trust, patience"


def test_analysis_of_other_user_is_hidden(client, db, user):
    add_entries(db, user, 1)
    trigger(client, user.id, user.email)
    analysis_id = client.get("/analyses/me", headers=auth_headers(user)).json()[0]["id"]

    other = make_user(db, email="bob@example.com")
    response = client.get(f"/analyses/{analysis_id}", headers=auth_headers(other))

    assert response.status_code == 404
    assert client.get(f"/analyses/{uuid4()}", headers=auth_headers(user)).status_code == 404


def test_trigger_for_myself(client, db, user):
    add_entries(db, user, 2)

    response = client.post("/analyses/me/trigger", headers=auth_headers(user))

    assert response.status_code == 200
    assert response.json()["code"] == "GENERATED"


def test_analyses_require_authentication(client):
    assert client.get("/analyses/me").status_code in (401, 403)
