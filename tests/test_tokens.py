"""Unit tests for gatekeep.core.tokens: issuing and validating access tokens."""

import unittest
import uuid
from datetime import UTC, datetime, timedelta

import jwt
from jwt.utils import base64url_decode, base64url_encode

from gatekeep.core.errors import SigningError, TokenExpired, TokenInvalid
from gatekeep.core.tokens import TOKEN_ISSUER, TOKEN_TTL, TokenService

SECRET = "test-secret-that-is-long-enough-for-hs256"
ISSUED_AT = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


def _service(at: datetime = ISSUED_AT, secret: str = SECRET) -> TokenService:
    return TokenService(secret, clock=lambda: at)


def _flip_signature_byte(token: str, index: int) -> str:
    head, sig = token.rsplit(".", 1)
    raw = bytearray(base64url_decode(sig.encode("ascii")))
    raw[index] ^= 0x01
    return f"{head}.{base64url_encode(bytes(raw)).decode('ascii')}"


class TestIssueAndValidate(unittest.TestCase):
    """Validate(Issue(subject)) returns the subject's claims."""

    def test_claims_match_subject(self) -> None:
        user_id = uuid.uuid4()
        service = _service()
        claims = service.validate(service.issue(user_id, "alice", "admin"))
        self.assertEqual(claims.user_id, user_id)
        self.assertEqual(claims.username, "alice")
        self.assertEqual(claims.role, "admin")
        self.assertEqual(claims.iss, TOKEN_ISSUER)
        self.assertEqual(claims.expires_at, ISSUED_AT + TOKEN_TTL)

    def test_tokens_differ_for_same_subject(self) -> None:
        user_id = uuid.uuid4()
        service = _service()
        self.assertNotEqual(
            service.issue(user_id, "alice", "user"),
            service.issue(user_id, "alice", "user"),
        )

    def test_token_is_hs256_jwt(self) -> None:
        token = _service().issue(uuid.uuid4(), "alice", "user")
        self.assertEqual(jwt.get_unverified_header(token)["alg"], "HS256")

    def test_empty_secret_raises_signing_error(self) -> None:
        for secret in ("", "   ", b"", b"   ", b"\t\n", None):
            with self.subTest(secret=secret):
                with self.assertRaises(SigningError):
                    TokenService(secret).issue(uuid.uuid4(), "alice", "user")


class TestExpiry(unittest.TestCase):
    """Tokens are valid for one hour; now >= exp is expired."""

    def setUp(self) -> None:
        self.token = _service().issue(uuid.uuid4(), "alice", "user")

    def test_valid_just_before_expiry(self) -> None:
        at = ISSUED_AT + TOKEN_TTL - timedelta(seconds=1)
        self.assertEqual(_service(at).validate(self.token).username, "alice")

    def test_expired_at_exact_expiry(self) -> None:
        with self.assertRaises(TokenExpired):
            _service(ISSUED_AT + TOKEN_TTL).validate(self.token)

    def test_expired_after_window(self) -> None:
        with self.assertRaises(TokenExpired):
            _service(ISSUED_AT + timedelta(days=1)).validate(self.token)

    def test_expired_is_not_invalid(self) -> None:
        with self.assertRaises(TokenExpired) as ctx:
            _service(ISSUED_AT + TOKEN_TTL).validate(self.token)
        self.assertNotIsInstance(ctx.exception, TokenInvalid)


class TestInvalidTokens(unittest.TestCase):
    """Bad signatures and malformed tokens raise TokenInvalid."""

    def setUp(self) -> None:
        self.service = _service()
        self.token = self.service.issue(uuid.uuid4(), "alice", "user")

    def test_other_secret(self) -> None:
        other = _service(secret="another-secret-that-is-long-enough-too")
        with self.assertRaises(TokenInvalid):
            other.validate(self.token)

    def test_any_signature_byte_altered(self) -> None:
        for index in range(32):
            with self.subTest(index=index):
                with self.assertRaises(TokenInvalid):
                    self.service.validate(_flip_signature_byte(self.token, index))

    def test_expired_token_with_bad_signature_is_invalid(self) -> None:
        late = _service(ISSUED_AT + timedelta(days=1))
        with self.assertRaises(TokenInvalid):
            late.validate(_flip_signature_byte(self.token, 0))

    def test_malformed(self) -> None:
        for bad in ("", "not-a-token", "a.b.c", self.token + "x"):
            with self.subTest(bad=bad):
                with self.assertRaises(TokenInvalid):
                    self.service.validate(bad)

    def test_wrong_issuer(self) -> None:
        payload = {
            "user_id": str(uuid.uuid4()),
            "username": "alice",
            "role": "user",
            "iss": "someone-else",
            "iat": int(ISSUED_AT.timestamp()),
            "exp": int((ISSUED_AT + TOKEN_TTL).timestamp()),
            "jti": "abc",
        }
        token = jwt.encode(payload, SECRET, algorithm="HS256")
        with self.assertRaises(TokenInvalid):
            self.service.validate(token)

    def test_payload_missing_typed_claim(self) -> None:
        payload = {
            "username": "alice",
            "role": "user",
            "iss": TOKEN_ISSUER,
            "iat": int(ISSUED_AT.timestamp()),
            "exp": int((ISSUED_AT + TOKEN_TTL).timestamp()),
            "jti": "abc",
        }
        token = jwt.encode(payload, SECRET, algorithm="HS256")
        with self.assertRaises(TokenInvalid):
            self.service.validate(token)

    def test_payload_with_bad_user_id(self) -> None:
        payload = {
            "user_id": "not-a-uuid",
            "username": "alice",
            "role": "user",
            "iss": TOKEN_ISSUER,
            "iat": int(ISSUED_AT.timestamp()),
            "exp": int((ISSUED_AT + TOKEN_TTL).timestamp()),
            "jti": "abc",
        }
        token = jwt.encode(payload, SECRET, algorithm="HS256")
        with self.assertRaises(TokenInvalid):
            self.service.validate(token)

    def test_unsigned_token_rejected(self) -> None:
        payload = {
            "user_id": str(uuid.uuid4()),
            "username": "alice",
            "role": "admin",
            "iss": TOKEN_ISSUER,
            "iat": int(ISSUED_AT.timestamp()),
            "exp": int((ISSUED_AT + TOKEN_TTL).timestamp()),
            "jti": "abc",
        }
        token = jwt.encode(payload, None, algorithm="none")
        with self.assertRaises(TokenInvalid):
            self.service.validate(token)


if __name__ == "__main__":
    unittest.main()
