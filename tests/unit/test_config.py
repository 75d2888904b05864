"""Unit tests for settings-derived names and paths."""

import pytest

from fintrack.core.config import Settings, sanitize_app_id


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("default-app-id", "default-app-id"),
        ("team/app", "team-app"),
        ("my app.v2", "my_app_v2"),
        ("a/b c", "a-b_c"),
    ],
)
def test_sanitize_app_id(raw, expected):
    assert sanitize_app_id(raw) == expected


def test_app_id_is_sanitized_on_load():
    settings = Settings(_env_file=None, app_id="team/my app")

    assert settings.app_id == "team-my_app"


def test_namespaced_names():
    settings = Settings(_env_file=None, app_id="demo")

    assert settings.local_owner_id == "local_demo"
    assert settings.local_storage_key("u1") == "fintrack:demo:u1:expenses"
    assert settings.collection_path("u1") == "artifacts/demo/users/u1/expenses"
