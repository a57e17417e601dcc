"""
Integration tests for the password reset flow

POST /password/forgot -> GET /password/reset -> POST /password/reset
"""
import time
from datetime import timedelta

import pytest
from fastapi import BackgroundTasks
from sqlmodel import select

from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.routes.password import ForgotPasswordRequest, forgot_password
from src.domain.base import generate_opaque_token, hash_token, utcnow
from src.domain.entities import DeliveryChannel, PasswordResetToken
from tests.utils.factories import seed_user
from tests.utils.fakes import RecordingSender


def token_from(notification) -> str:
    return notification.body.split("token=")[1].split()[0]


async def request_reset(client, sender, email) -> str:
    response = await client.post("/password/forgot", json={"email": email})
    assert response.status_code == 200
    return token_from(sender.last(DeliveryChannel.email))


@pytest.mark.asyncio
async def test_forgot_password_same_answer_for_unknown_email(client, db_session, sender):
    await seed_user(db_session, "two_factor")

    known = await client.post("/password/forgot", json={"email": "thandi@park.example.com"})
    unknown = await client.post("/password/forgot", json={"email": "ghost@park.example.com"})

    assert known.status_code == unknown.status_code == 200
    assert known.json() == unknown.json()
    assert known.json()["success"] is True
    assert len(sender.sent) == 1


@pytest.mark.asyncio
async def test_forgot_password_does_not_wait_for_delivery(db_session):
    # Arrange
    await seed_user(db_session, "two_factor")
    slow_sender = RecordingSender(delay=0.5)
    background_tasks = BackgroundTasks()
    bodies = []
    elapsed = []

    # Act
    for email in ("thandi@park.example.com", "ghost@park.example.com"):
        started = time.perf_counter()
        response = await forgot_password(
            ForgotPasswordRequest(email=email),
            background_tasks,
            SqlAlchemyUnitOfWork(db_session),
            slow_sender,
        )
        elapsed.append(time.perf_counter() - started)
        bodies.append(response.model_dump(by_alias=True))

    # Assert
    assert all(seconds < 0.25 for seconds in elapsed)
    assert bodies[0] == bodies[1]
    assert slow_sender.attempts == []
    assert len(background_tasks.tasks) == 1

    await background_tasks()
    assert slow_sender.last(DeliveryChannel.email).body.count("token=") == 1


@pytest.mark.asyncio
async def test_reset_link_stores_only_token_hash(client, db_session, sender):
    user = await seed_user(db_session, "two_factor")

    token = await request_reset(client, sender, user.email)

    rows = (await db_session.exec(select(PasswordResetToken))).all()
    assert len(rows) == 1
    assert rows[0].token_hash == hash_token(token)
    assert "/auth/reset-password?token=" in sender.last().body


@pytest.mark.asyncio
async def test_validate_token(client, db_session, sender):
    user = await seed_user(db_session, "two_factor")
    token = await request_reset(client, sender, user.email)

    valid = await client.get("/password/reset", params={"token": token})
    invalid = await client.get("/password/reset", params={"token": generate_opaque_token()})

    assert valid.json() == {"success": True, "valid": True, "userId": str(user.id)}
    assert invalid.json()["valid"] is False


@pytest.mark.asyncio
async def test_reset_then_login_with_new_password(client, db_session, sender):
    # Arrange
    user = await seed_user(db_session, "no_two_factor")
    token = await request_reset(client, sender, user.email)

    # Act
    reset = await client.post("/password/reset", json={"token": token, "newPassword": "brandnew"})
    old_login = await client.post(
        "/auth/login", json={"email": user.email, "password": "Secret123!"}
    )
    new_login = await client.post(
        "/auth/login", json={"email": user.email, "password": "brandnew"}
    )

    # Assert
    assert reset.status_code == 200
    assert reset.json()["success"] is True
    assert old_login.status_code == 401
    assert new_login.status_code == 200


@pytest.mark.asyncio
async def test_reset_token_is_single_use(client, db_session, sender):
    user = await seed_user(db_session, "two_factor")
    token = await request_reset(client, sender, user.email)

    first = await client.post("/password/reset", json={"token": token, "newPassword": "brandnew"})
    second = await client.post("/password/reset", json={"token": token, "newPassword": "another1"})

    assert first.status_code == 200
    assert second.status_code == 400
    assert second.json()["error"]["code"] == "INVALID_OR_EXPIRED_TOKEN"


@pytest.mark.asyncio
async def test_weak_password_keeps_token_usable(client, db_session, sender):
    user = await seed_user(db_session, "two_factor")
    token = await request_reset(client, sender, user.email)

    weak = await client.post("/password/reset", json={"token": token, "newPassword": "12345"})
    still_valid = await client.get("/password/reset", params={"token": token})
    retry = await client.post("/password/reset", json={"token": token, "newPassword": "123456"})

    assert weak.status_code == 400
    assert weak.json()["error"] == {
        "code": "WEAK_PASSWORD",
        "message": "Password must be at least 6 characters long",
    }
    assert still_valid.json()["valid"] is True
    assert retry.status_code == 200


@pytest.mark.asyncio
async def test_expired_reset_token(client, db_session):
    user = await seed_user(db_session, "two_factor")
    token = generate_opaque_token()
    db_session.add(
        PasswordResetToken(
            user_id=user.id,
            token_hash=hash_token(token),
            expires_at=utcnow() - timedelta(minutes=1),
        )
    )
    await db_session.commit()

    response = await client.post("/password/reset", json={"token": token, "newPassword": "brandnew"})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_OR_EXPIRED_TOKEN"


@pytest.mark.asyncio
async def test_reset_revokes_pending_logins(client, db_session, sender):
    user = await seed_user(db_session, "two_factor")
    login = await client.post(
        "/auth/login", json={"email": user.email, "password": "Secret123!"}
    )
    session_token = login.json()["sessionToken"]
    token = await request_reset(client, sender, user.email)

    await client.post("/password/reset", json={"token": token, "newPassword": "brandnew"})
    pending = await client.get("/auth/login", params={"sessionToken": session_token})

    assert pending.status_code == 401
