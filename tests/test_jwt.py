"""
Tests for signed session tokens.
"""

import time
import uuid

import pytest

import auth.jwt as jwt
from auth.jwt import ExpiredToken, MalformedToken, create_token, verify_token

SEVEN_DAYS = 7 * 24 * 3600


class TestVerifyToken:
    def test_returns_embedded_user_id(self):
        user_id = str(uuid.uuid4())
        assert verify_token(create_token(user_id)) == user_id

    def test_valid_until_seven_days_after_issue(self):
        issued = 1_700_000_000
        token = create_token("u1", issued_at=issued)
        assert verify_token(token, now=issued + SEVEN_DAYS) == "u1"
        with pytest.raises(ExpiredToken):
            verify_token(token, now=issued + SEVEN_DAYS + 1)

    def test_expired_token(self):
        token = create_token("u1", issued_at=int(time.time()) - SEVEN_DAYS - 60)
        with pytest.raises(ExpiredToken):
            verify_token(token)

    def test_tampered_signature(self):
        token = create_token("u1")
        payload, sig = token.split(".")
        forged = payload + "." + ("0" if sig[0] != "0" else "1") + sig[1:]
        with pytest.raises(MalformedToken):
            verify_token(forged)

    def test_tampered_payload(self):
        _, sig = create_token("u1").split(".")
        other_payload, _ = create_token("u2").split(".")
        with pytest.raises(MalformedToken):
            verify_token(other_payload + "." + sig)

    def test_other_secret_rejected(self, monkeypatch):
        with monkeypatch.context() as m:
            m.setattr(jwt, "_TOKEN_SECRET", "someone-else")
            token = create_token("u1")
        with pytest.raises(MalformedToken):
            verify_token(token)

    @pytest.mark.parametrize("garbage", ["", "abc", "abc.", ".abc", "!!!.def", "ünïcode.sig"])
    def test_unparsable(self, garbage):
        with pytest.raises(MalformedToken):
            verify_token(garbage)

    def test_expired_forgery_reports_bad_signature_first(self):
        token = create_token("u1", issued_at=0)
        payload, _ = token.split(".")
        with pytest.raises(MalformedToken):
            verify_token(payload + "." + "f" * 64)
