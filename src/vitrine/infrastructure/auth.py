"""Shared-password gate and signed session cookies."""

import hashlib
import hmac
import secrets

import pendulum


class GateNotConfigured(Exception):  # noqa: N818
    """Raised when no site password is configured."""

    pass


class SessionManager:
    """Check the shared site password and issue/verify session tokens.

    A token is ``<issued-at unix seconds>.<hex hmac-sha256>``; it carries no
    user data.
    """

    def __init__(self, password: str | None, signing_key: str | None, max_age: int):
        """Initialize with the configured password, signing key and lifetime."""
        self.password = password
        self.signing_key = signing_key
        self.max_age = max_age

    @property
    def configured(self) -> bool:
        return bool(self.password) and bool(self.signing_key)

    def check_password(self, submitted: str | None) -> bool:
        """Compare a submitted password against the configured one.

        Raises:
            GateNotConfigured: If no password is configured
        """
        if not self.configured:
            raise GateNotConfigured("SITE_PASSWORD environment variable is not set")
        if not submitted:
            return False
        return secrets.compare_digest(submitted.encode(), self.password.encode())

    def issue_token(self, now: pendulum.DateTime | None = None) -> str:
        """Create a signed session token."""
        if not self.configured:
            raise GateNotConfigured("SITE_PASSWORD environment variable is not set")
        issued_at = int((now or pendulum.now("UTC")).timestamp())
        return f"{issued_at}.{self._sign(str(issued_at))}"

    def validate_token(
        self, token: str | None, now: pendulum.DateTime | None = None
    ) -> bool:
        """Check a token's signature and age."""
        if not token or not self.configured:
            return False

        issued_part, _, signature = token.partition(".")
        if not (issued_part.isascii() and issued_part.isdigit()) or not signature:
            return False
        if not hmac.compare_digest(
            signature.encode(), self._sign(issued_part).encode()
        ):
            return False

        now_ts = int((now or pendulum.now("UTC")).timestamp())
        age = now_ts - int(issued_part)
        return 0 <= age <= self.max_age

    def _sign(self, value: str) -> str:
        return hmac.new(
            self.signing_key.encode(), value.encode(), hashlib.sha256
        ).hexdigest()
