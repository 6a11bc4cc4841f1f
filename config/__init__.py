import os

# APP_ENV value -> settings module
_SETTINGS_MODULES = {
    "dev": "config.development",
    "development": "config.development",
    "prod": "config.production",
    "production": "config.production",
    "test": "config.testing",
    "testing": "config.testing",
}


def get_settings_module() -> str:
    # development by default; a misspelt APP_ENV must not silently run with
    # the development gate secret and DEBUG on
    env = os.getenv("APP_ENV", "development").strip().lower()
    try:
        return _SETTINGS_MODULES[env]
    except KeyError:
        raise ValueError(
            f"Unknown APP_ENV {env!r}; expected one of {', '.join(sorted(_SETTINGS_MODULES))}"
        ) from None
