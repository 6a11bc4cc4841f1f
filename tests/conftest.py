from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def _testing_settings(monkeypatch):
    # create_app and the scripts read the settings module from APP_ENV.
    monkeypatch.setenv("APP_ENV", "testing")
    monkeypatch.delenv("ATTENDANCE_SCRIPT_URL", raising=False)
