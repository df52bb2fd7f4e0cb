from __future__ import annotations

import pytest
from pydantic import ValidationError

from SocialGraph.core.config import Settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("PORT", raising=False)
    monkeypatch.delenv("PASSWORD_HASH_ROUNDS", raising=False)
    settings = Settings(_env_file=None)
    assert settings.PORT == 3000
    assert settings.PASSWORD_HASH_ROUNDS == 10
    assert settings.ENABLE_EXPLORER is True


def test_port_overridden_from_environment(monkeypatch):
    monkeypatch.setenv("PORT", "8123")
    assert Settings(_env_file=None).PORT == 8123


def test_hash_rounds_validated(monkeypatch):
    monkeypatch.setenv("PASSWORD_HASH_ROUNDS", "2")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)
