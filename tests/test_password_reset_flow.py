from datetime import timedelta

from sqlmodel import Session, select

from storefront.core.security import verify_password
from storefront.services.password_reset import CODE_ALPHABET


RESET_URL = "/api/v1/password/reset"


def _create_user(session: Session, hasher, *, email: str, password: str = "OldPass123"):
    from storefront.models import User

    user = User(name="Test User", email=email, password_hash=hasher.hash(password))
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def _create_code(session: Session, *, code: str, email: str, created_at):
    from storefront.models import ResetCodePassword

    record = ResetCodePassword(code=code, email=email, created_at=created_at)
    session.add(record)
    session.commit()
    return record


def _code_exists(session: Session, code: str) -> bool:
    from storefront.models import ResetCodePassword

    session.expire_all()
    return session.exec(select(ResetCodePassword).where(ResetCodePassword.code == code)).first() is not None


def _reload_hash(session: Session, user_id: int) -> str:
    from storefront.models import User

    session.expire_all()
    return session.get(User, user_id).password_hash


def test_reset_password_with_recent_code(client, db_session: Session, clock, hasher):
    user = _create_user(db_session, hasher, email="buyer@example.com")
    old_hash = user.password_hash
    _create_code(db_session, code="123456", email=user.email, created_at=clock.now() - timedelta(minutes=30))

    response = client.post(
        RESET_URL,
        json={"code": "123456", "password": "abc123", "password_confirmation": "abc123"},
    )
    assert response.status_code == 200
    assert response.json() == {"message": "password has been successfully reset"}

    new_hash = _reload_hash(db_session, user.id)
    assert new_hash != old_hash
    assert new_hash != "abc123"
    assert verify_password("abc123", new_hash)
    assert not _code_exists(db_session, "123456")


def test_reset_password_code_cannot_be_reused(client, db_session: Session, clock, hasher):
    user = _create_user(db_session, hasher, email="reuse@example.com")
    _create_code(db_session, code="654321", email=user.email, created_at=clock.now() - timedelta(minutes=5))
    payload = {"code": "654321", "password": "first-pass", "password_confirmation": "first-pass"}

    first = client.post(RESET_URL, json=payload)
    assert first.status_code == 200
    hash_after_first = _reload_hash(db_session, user.id)

    second = client.post(RESET_URL, json={**payload, "password": "second-pass", "password_confirmation": "second-pass"})
    assert second.status_code == 422
    assert second.json()["code"] == "VALIDATION_ERROR"
    assert second.json()["detail"][0]["loc"] == ["body", "code"]
    assert _reload_hash(db_session, user.id) == hash_after_first


def test_reset_password_with_expired_code(client, db_session: Session, clock, hasher):
    user = _create_user(db_session, hasher, email="late@example.com")
    old_hash = user.password_hash
    _create_code(db_session, code="111111", email=user.email, created_at=clock.now() - timedelta(hours=2))

    response = client.post(
        RESET_URL,
        json={"code": "111111", "password": "abc123", "password_confirmation": "abc123"},
    )
    assert response.status_code == 422
    assert response.json() == {"message": "El código de restablecimiento expiró"}
    assert not _code_exists(db_session, "111111")
    assert _reload_hash(db_session, user.id) == old_hash


def test_expired_message_follows_accept_language(client, db_session: Session, clock, hasher):
    user = _create_user(db_session, hasher, email="english@example.com")
    _create_code(db_session, code="222222", email=user.email, created_at=clock.now() - timedelta(hours=3))

    response = client.post(
        RESET_URL,
        json={"code": "222222", "password": "abc123", "password_confirmation": "abc123"},
        headers={"Accept-Language": "en-US,en;q=0.9"},
    )
    assert response.status_code == 422
    assert response.json() == {"message": "The password reset code has expired"}


def test_reset_password_unknown_code(client, db_session: Session):
    response = client.post(
        RESET_URL,
        json={"code": "000000", "password": "abc123", "password_confirmation": "abc123"},
    )
    assert response.status_code == 422
    body = response.json()
    assert body["code"] == "VALIDATION_ERROR"
    assert body["detail"][0]["msg"] == "El código de restablecimiento no es válido"


def test_reset_password_rejects_mismatched_confirmation(client, db_session: Session, clock, hasher):
    user = _create_user(db_session, hasher, email="typo@example.com")
    _create_code(db_session, code="333333", email=user.email, created_at=clock.now())

    response = client.post(
        RESET_URL,
        json={"code": "333333", "password": "abc123", "password_confirmation": "abc124"},
    )
    assert response.status_code == 422
    assert response.json()["code"] == "VALIDATION_ERROR"
    assert _code_exists(db_session, "333333")


def test_reset_password_rejects_short_password(client, db_session: Session, clock, hasher):
    user = _create_user(db_session, hasher, email="short@example.com")
    _create_code(db_session, code="444444", email=user.email, created_at=clock.now())

    response = client.post(
        RESET_URL,
        json={"code": "444444", "password": "abc12", "password_confirmation": "abc12"},
    )
    assert response.status_code == 422
    assert _code_exists(db_session, "444444")


def test_reset_password_orphaned_code_is_internal_error(client, db_session: Session, clock):
    _create_code(db_session, code="555555", email="ghost@example.com", created_at=clock.now())

    response = client.post(
        RESET_URL,
        json={"code": "555555", "password": "abc123", "password_confirmation": "abc123"},
    )
    assert response.status_code == 500
    body = response.json()
    assert body["code"] == "INTERNAL_ERROR"
    assert body["detail"] == "Error interno del servidor"
    assert "ghost@example.com" not in str(body)
    # La transacción se revierte: el código no se consume
    assert _code_exists(db_session, "555555")


def test_forgot_password_issues_single_code(client, db_session: Session, hasher):
    from storefront.models import ResetCodePassword

    _create_user(db_session, hasher, email="forgot@example.com")

    first = client.post("/api/v1/password/email", json={"email": "Forgot@Example.com"})
    assert first.status_code == 200
    second = client.post("/api/v1/password/email", json={"email": "forgot@example.com"})
    assert second.status_code == 200
    assert first.json() == second.json()

    db_session.expire_all()
    codes = db_session.exec(
        select(ResetCodePassword).where(ResetCodePassword.email == "forgot@example.com")
    ).all()
    assert len(codes) == 1
    assert len(codes[0].code) == 8
    assert set(codes[0].code) <= set(CODE_ALPHABET)


def test_forgot_password_unknown_email_same_response(client, db_session: Session, hasher):
    from storefront.models import ResetCodePassword

    _create_user(db_session, hasher, email="known@example.com")

    known = client.post("/api/v1/password/email", json={"email": "known@example.com"})
    unknown = client.post("/api/v1/password/email", json={"email": "nobody@example.com"})
    assert known.status_code == unknown.status_code == 200
    assert known.json() == unknown.json()

    db_session.expire_all()
    assert db_session.exec(
        select(ResetCodePassword).where(ResetCodePassword.email == "nobody@example.com")
    ).first() is None


def test_check_code_valid_and_expired(client, db_session: Session, clock, hasher):
    user = _create_user(db_session, hasher, email="check@example.com")
    _create_code(db_session, code="777777", email=user.email, created_at=clock.now() - timedelta(minutes=59))
    _create_code(db_session, code="888888", email="other@example.com", created_at=clock.now() - timedelta(minutes=61))

    valid = client.post("/api/v1/password/code/check", json={"code": "777777"})
    assert valid.status_code == 200
    assert valid.json() == {"message": "El código es válido", "code": "777777"}
    assert _code_exists(db_session, "777777")

    expired = client.post("/api/v1/password/code/check", json={"code": "888888"})
    assert expired.status_code == 422
    assert expired.json() == {"message": "El código de restablecimiento expiró"}
    assert not _code_exists(db_session, "888888")

    missing = client.post("/api/v1/password/code/check", json={"code": "999999"})
    assert missing.status_code == 422
    assert missing.json()["code"] == "VALIDATION_ERROR"


def test_reset_rate_limit_ignores_spoofed_forwarded_for(client, db_session: Session):
    from storefront.core.rate_limit import limiter

    limiter.reset()
    limiter.enabled = True
    try:
        statuses = [
            client.post(
                RESET_URL,
                json={"code": "ZZZZZZZZ", "password": "abc123", "password_confirmation": "abc123"},
                headers={"X-Forwarded-For": f"10.0.0.{i}"},
            ).status_code
            for i in range(5)
        ]
    finally:
        limiter.enabled = False
        limiter.reset()

    assert statuses == [422, 422, 422, 429, 429]
