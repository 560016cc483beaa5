"""Static credential store and cookie session gate"""

import logging
import secrets
from types import MappingProxyType
from typing import Dict, Mapping

from fastapi import Request, Response

from config import Settings

logger = logging.getLogger(__name__)

def parse_credentials(raw: str) -> Dict[str, str]:
    """Parse ``user1:pass1,user2:pass2`` into a mapping.

    Items that do not split into exactly a username and a password are
    ignored. A later duplicate username replaces an earlier one.
    """
    credentials = {}
    for item in raw.split(","):
        parts = item.split(":")
        if len(parts) != 2:
            if item:
                logger.warning("Ignoring malformed credential entry")
            continue
        credentials[parts[0]] = parts[1]
    return credentials

class CredentialStore:
    """Read-only username -> password mapping, built once at startup"""

    def __init__(self, credentials: Mapping[str, str]):
        self._credentials = MappingProxyType(dict(credentials))

    @classmethod
    def from_settings(cls, config: Settings) -> "CredentialStore":
        return cls(parse_credentials(config.users))

    def __len__(self) -> int:
        return len(self._credentials)

    def __contains__(self, username: object) -> bool:
        return username in self._credentials

    def authenticate(self, username: str, password: str) -> bool:
        expected = self._credentials.get(username)
        if expected is None:
            return False
        return secrets.compare_digest(expected.encode("utf-8"), password.encode("utf-8"))

class SessionGate:
    """Checks and issues the fixed-value session cookie.

    The cookie value is a constant shared by every user, so this only
    distinguishes "logged in" from "not logged in". It carries no identity
    and never expires.
    """

    def __init__(self, cookie_name: str, cookie_value: str):
        self.cookie_name = cookie_name
        self.cookie_value = cookie_value

    @classmethod
    def from_settings(cls, config: Settings) -> "SessionGate":
        return cls(config.session_cookie_name, config.session_cookie_value)

    def is_authenticated(self, request: Request) -> bool:
        value = request.cookies.get(self.cookie_name)
        if value is None:
            return False
        return secrets.compare_digest(value.encode("utf-8"), self.cookie_value.encode("utf-8"))

    def issue(self, response: Response) -> Response:
        # No max_age/expires: the cookie lives for the browser session only
        response.set_cookie(
            key=self.cookie_name,
            value=self.cookie_value,
            path="/",
            httponly=True,
            samesite="strict",
        )
        return response
