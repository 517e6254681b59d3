"""Shared fixtures for kindload tests."""

from __future__ import annotations

import io

import pytest

from kindload.errors import CommandError


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the config dir at an empty temp dir and clear env overrides."""
    config_root = tmp_path / "config"
    config_root.mkdir()
    import kindload.config
    monkeypatch.setattr(kindload.config, "DEFAULT_CONFIG_DIR", config_root)
    for var in kindload.config.ENV_OVERRIDES:
        monkeypatch.delenv(var, raising=False)
    return config_root


class FakeKubectl:
    """Records ``run_out`` calls and returns canned node inventory output."""

    def __init__(self, output: str = "", error: Exception | None = None) -> None:
        self.output = output
        self.error = error
        self.calls: list[tuple[str, ...]] = []

    def run_out(self, *args: str) -> str:
        self.calls.append(args)
        if self.error is not None:
            raise self.error
        return self.output


class FakeKind:
    """Records transfers; tags in *failures* fail with the given output."""

    def __init__(self, failures: dict[str, str] | None = None) -> None:
        self.failures = failures or {}
        self.calls: list[tuple[str, str]] = []

    def load_docker_image(self, cluster_name: str, tag: str) -> str:
        self.calls.append((cluster_name, tag))
        if tag in self.failures:
            raise CommandError(
                ["kind", "load", "docker-image", "--name", cluster_name, tag],
                1,
                self.failures[tag],
            )
        return ""


@pytest.fixture
def out():
    return io.StringIO()
