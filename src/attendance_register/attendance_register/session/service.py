from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..core.constants import DEFAULT_ADMIN_PASSWORD, PREF_ADMIN_AUTH, PREF_SCRIPT_URL
from ..core.exceptions import AuthenticationError
from .repository import PreferenceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionSettings:
    """Persisted session flags, kept outside the Document."""

    is_admin: bool = False
    endpoint_override: Optional[str] = None


class AuthService:
    """Use case: unlock elevated mode with the shared gate secret."""

    def __init__(self, gate_secret: Optional[str] = None):
        self._hash = generate_password_hash(gate_secret or DEFAULT_ADMIN_PASSWORD)

    def verify(self, password: str) -> None:
        if not password or not check_password_hash(self._hash, password):
            raise AuthenticationError("Password salah!")


class SessionService:
    """Owns the local profile's elevated-mode flag and the endpoint override.

    Loaded once at construction; changed only through login/logout and
    set_endpoint, each of which writes through to the preference store.
    HTTP clients keep their own flag in the Flask session and only use
    `verify` here.
    """

    def __init__(
        self,
        preferences: PreferenceRepository,
        auth: AuthService,
        *,
        default_endpoint: Optional[str] = None,
    ):
        self._preferences = preferences
        self._auth = auth
        self._default_endpoint = (default_endpoint or "").strip() or None
        self._settings = SessionSettings(
            is_admin=preferences.get(PREF_ADMIN_AUTH) == "true",
            endpoint_override=(preferences.get(PREF_SCRIPT_URL) or "").strip() or None,
        )

    @property
    def settings(self) -> SessionSettings:
        return self._settings

    @property
    def is_admin(self) -> bool:
        return self._settings.is_admin

    @property
    def endpoint(self) -> Optional[str]:
        """Explicit local override first, then the configured default."""

        return self._settings.endpoint_override or self._default_endpoint

    def verify(self, password: str) -> None:
        """Check the gate secret without touching the persisted flag."""

        self._auth.verify(password)

    def login(self, password: str) -> None:
        self._auth.verify(password)
        self._preferences.set(PREF_ADMIN_AUTH, "true")
        self._settings = SessionSettings(is_admin=True, endpoint_override=self._settings.endpoint_override)
        logger.info("Elevated mode enabled")

    def logout(self) -> None:
        self._preferences.delete(PREF_ADMIN_AUTH)
        self._settings = SessionSettings(is_admin=False, endpoint_override=self._settings.endpoint_override)
        logger.info("Elevated mode disabled")

    def set_endpoint(self, url: str) -> None:
        url = (url or "").strip()
        self._preferences.set(PREF_SCRIPT_URL, url)
        self._settings = SessionSettings(is_admin=self._settings.is_admin, endpoint_override=url or None)
