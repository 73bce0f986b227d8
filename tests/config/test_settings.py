"""Tests for CowMapSettings environment configuration."""

import pytest
from pydantic import ValidationError

from cowmap import CloneDepth, CowMap, CowMapSettings


def test_defaults(monkeypatch):
    for name in ("COWMAP_CLONE_DEPTH", "COWMAP_DEFAULT_CAPACITY", "COWMAP_WARN_ON_PROMOTION"):
        monkeypatch.delenv(name, raising=False)

    settings = CowMapSettings()

    assert settings.clone_depth is CloneDepth.DEEP
    assert settings.default_capacity == 0
    assert settings.warn_on_promotion is False


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("COWMAP_CLONE_DEPTH", "shallow")
    monkeypatch.setenv("COWMAP_DEFAULT_CAPACITY", "16")
    monkeypatch.setenv("COWMAP_WARN_ON_PROMOTION", "true")

    settings = CowMapSettings()

    assert settings.clone_depth is CloneDepth.SHALLOW
    assert settings.default_capacity == 16
    assert settings.warn_on_promotion is True


def test_map_uses_environment_when_no_settings_given(monkeypatch):
    monkeypatch.setenv("COWMAP_DEFAULT_CAPACITY", "8")
    assert CowMap().capacity() == 8


def test_explicit_values_override_environment(monkeypatch):
    monkeypatch.setenv("COWMAP_CLONE_DEPTH", "shallow")
    assert CowMapSettings(clone_depth=CloneDepth.DEEP).clone_depth is CloneDepth.DEEP


def test_clone_depth_name_is_case_insensitive():
    assert CowMapSettings(clone_depth="Deep").clone_depth is CloneDepth.DEEP


@pytest.mark.parametrize(
    "overrides",
    [{"clone_depth": "sideways"}, {"default_capacity": -1}],
)
def test_invalid_values_rejected(overrides):
    with pytest.raises(ValidationError):
        CowMapSettings(**overrides)
