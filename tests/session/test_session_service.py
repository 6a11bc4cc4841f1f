from __future__ import annotations

import pytest

from src.attendance_register.attendance_register.core.constants import PREF_ADMIN_AUTH, PREF_SCRIPT_URL
from src.attendance_register.attendance_register.core.exceptions import AuthenticationError
from src.attendance_register.attendance_register.session.service import AuthService, SessionService
from fakes import InMemoryPreferences


def _session(values=None, *, default_endpoint=None, secret="admin123"):
    prefs = InMemoryPreferences(values)
    return SessionService(prefs, AuthService(secret), default_endpoint=default_endpoint), prefs


def test_starts_read_only_without_stored_flag():
    session, _ = _session()

    assert session.is_admin is False
    assert session.endpoint is None


def test_login_with_wrong_password_changes_nothing():
    session, prefs = _session()

    with pytest.raises(AuthenticationError) as exc:
        session.login("salah")

    assert str(exc.value) == "Password salah!"
    assert session.is_admin is False
    assert PREF_ADMIN_AUTH not in prefs.values


def test_verify_checks_secret_without_touching_the_profile_flag():
    session, prefs = _session()

    with pytest.raises(AuthenticationError):
        session.verify("salah")
    session.verify("admin123")

    assert session.is_admin is False
    assert PREF_ADMIN_AUTH not in prefs.values


def test_login_persists_flag_and_logout_removes_it():
    session, prefs = _session()

    session.login("admin123")
    assert session.is_admin is True
    assert prefs.values[PREF_ADMIN_AUTH] == "true"

    session.logout()
    assert session.is_admin is False
    assert PREF_ADMIN_AUTH not in prefs.values


def test_stored_flag_is_restored_on_construction():
    session, _ = _session({PREF_ADMIN_AUTH: "true"})

    assert session.is_admin is True


def test_configured_gate_secret_replaces_default():
    session, _ = _session(secret="rahasia")

    with pytest.raises(AuthenticationError):
        session.login("admin123")
    session.login("rahasia")
    assert session.is_admin is True


def test_local_override_wins_over_configured_endpoint():
    session, prefs = _session({PREF_SCRIPT_URL: "https://override.test/exec"}, default_endpoint="https://default.test/exec")

    assert session.endpoint == "https://override.test/exec"

    session.set_endpoint("")
    assert prefs.values[PREF_SCRIPT_URL] == ""
    assert session.endpoint == "https://default.test/exec"


def test_set_endpoint_trims_and_persists():
    session, prefs = _session()

    session.set_endpoint("  https://script.test/exec  ")

    assert session.endpoint == "https://script.test/exec"
    assert prefs.values[PREF_SCRIPT_URL] == "https://script.test/exec"
