"""API tests for journal entries, daily sentences and the milestone hook"""

from datetime import date, datetime, timedelta, timezone

from conftest import add_entries, auth_headers, make_user
from lovejourney.crud.journal_entry import crud_journal_entry
from lovejourney.models.journal_entry import JournalEntry


def write(client, user, content="Today I listened more than I talked.", **extra):
    return client.post(
        "/journal/entries", json={"content": content, **extra}, headers=auth_headers(user)
    )


def test_create_entry(client, db, user):
    response = write(client, user)

    assert response.status_code == 201
    body = response.json()
    assert body["content"] == "Today I listened more than I talked."
    assert body["user_id"] == str(user.id)
    db.expire_all()
    assert db.query(JournalEntry).count() == 1


def test_blank_entry_is_rejected(client, user):
    assert write(client, user, content="   ").status_code == 422


def test_one_entry_per_local_day(client, user):
    assert write(client, user).status_code == 201

    response = write(client, user, content="Another one")

    assert response.status_code == 409
    assert "See you tomorrow" in response.json()["detail"]


def test_daily_limit_is_per_user(client, db, user):
    other = make_user(db, email="bob@example.com")

    assert write(client, user).status_code == 201
    assert write(client, other).status_code == 201


def test_entry_gets_today_daily_sentence(client, db, user, admin):
    client.post(
        "/daily-sentences",
        json={"content": "What did love look like today?", "active_date": str(datetime.now(timezone.utc).date())},
        headers=auth_headers(admin),
    )

    response = write(client, user)

    assert response.json()["daily_sentence"] == "What did love look like today?"


def test_explicit_prompt_is_kept(client, user):
    response = write(client, user, daily_sentence="Custom prompt")

    assert response.json()["daily_sentence"] == "Custom prompt"


def test_unknown_timezone_is_rejected(client, user):
    assert write(client, user, timezone="Mars/Olympus").status_code == 422


def test_milestone_schedules_notification(client, db, user, notifier_stub):
    add_entries(db, user, 4, start=datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc))

    assert write(client, user).status_code == 201

    assert notifier_stub.notified == [user.id]


def test_no_notification_before_milestone(client, user, notifier_stub):
    write(client, user)

    assert notifier_stub.notified == []


def test_entries_for_day_and_dates(client, db, user):
    # 20:00 UTC on March 1st is March 2nd in Jakarta (UTC+7)
    crud_journal_entry.create(
        db,
        user_id=user.id,
        content="late evening",
        created_at=datetime(2024, 3, 1, 20, 0, tzinfo=timezone.utc),
    )
    crud_journal_entry.create(
        db,
        user_id=user.id,
        content="morning",
        created_at=datetime(2024, 3, 1, 2, 0, tzinfo=timezone.utc),
    )

    utc_day = client.get("/journal/entries", params={"on": "2024-03-01", "tz": "UTC"}, headers=auth_headers(user))
    assert [e["content"] for e in utc_day.json()] == ["morning", "late evening"]

    jakarta_day = client.get(
        "/journal/entries", params={"on": "2024-03-02", "tz": "Asia/Jakarta"}, headers=auth_headers(user)
    )
    assert [e["content"] for e in jakarta_day.json()] == ["late evening"]

    dates = client.get("/journal/dates", params={"tz": "Asia/Jakarta"}, headers=auth_headers(user)).json()
    assert dates == {"timezone": "Asia/Jakarta", "dates": ["2024-03-02", "2024-03-01"]}


def test_today_status(client, user):
    before = client.get("/journal/today", headers=auth_headers(user)).json()
    assert before["has_written_today"] is False
    assert before["daily_limit"] == 1

    write(client, user)

    after = client.get("/journal/today", headers=auth_headers(user)).json()
    assert after["has_written_today"] is True
    assert after["entries_today"] == 1


def test_daily_sentence_lookup(client, user, admin):
    day = date(2024, 2, 14)
    created = client.post(
        "/daily-sentences",
        json={"content": "Name one small kindness.", "active_date": str(day)},
        headers=auth_headers(admin),
    )
    assert created.status_code == 201

    response = client.get("/journal/daily-sentence", params={"on": str(day)}, headers=auth_headers(user))
    assert response.status_code == 200
    assert response.json()["content"] == "Name one small kindness."

    missing = client.get(
        "/journal/daily-sentence", params={"on": str(day + timedelta(days=1))}, headers=auth_headers(user)
    )
    assert missing.status_code == 404


def test_daily_sentences_are_admin_only(client, user, admin):
    payload = {"content": "Prompt", "active_date": "2024-02-14"}

    assert client.post("/daily-sentences", json=payload, headers=auth_headers(user)).status_code == 403
    assert client.post("/daily-sentences", json=payload, headers=auth_headers(admin)).status_code == 201
    assert client.post("/daily-sentences", json=payload, headers=auth_headers(admin)).status_code == 409

    listed = client.get("/daily-sentences", headers=auth_headers(admin)).json()
    assert [s["content"] for s in listed] == ["Prompt"]
