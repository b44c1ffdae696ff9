from __future__ import annotations

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from ..core.constants import DEFAULT_TOKEN_MAX_AGE_DAYS
from ..core.exceptions import AuthenticationError


class TokenIdentityProvider:
    """Issues opaque bearer tokens and resolves them back to a user id.

    The caller identity returned by ``resolve`` is trusted verbatim by the services.
    """

    _SALT = "field-attendance-bearer"

    def __init__(self, secret_key: str, *, max_age_days: int = DEFAULT_TOKEN_MAX_AGE_DAYS):
        self._serializer = URLSafeTimedSerializer(secret_key, salt=self._SALT)
        self._max_age_seconds = int(max_age_days) * 86400

    def issue(self, user_id: int) -> str:
        return self._serializer.dumps({"uid": int(user_id)})

    def resolve(self, token: str) -> int:
        try:
            payload = self._serializer.loads(token, max_age=self._max_age_seconds)
        except SignatureExpired:
            raise AuthenticationError("Invalid or expired token")
        except BadSignature:
            raise AuthenticationError("Invalid or expired token")

        try:
            return int(payload["uid"])
        except (KeyError, TypeError, ValueError):
            raise AuthenticationError("Invalid or expired token")

    def resolve_header(self, authorization: str | None) -> int:
        """Resolve an ``Authorization: Bearer <token>`` header value."""
        if not authorization:
            raise AuthenticationError("Authorization token required")
        scheme, _, token = authorization.partition(" ")
        if scheme != "Bearer":
            raise AuthenticationError("Invalid authorization format. Expected: Bearer <token>")
        if not token.strip():
            raise AuthenticationError("Token not found in authorization header")
        return self.resolve(token.strip())
