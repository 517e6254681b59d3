"""Tests for kindload.config."""

from __future__ import annotations

from unittest import mock

import pytest

from kindload.config import (
    DEFAULT_KIND_CLUSTER,
    KindloadConfig,
    kind_kube_context,
    resolve_kind_cluster,
)
from kindload.errors import ConfigError


class TestKindloadConfigLoad:

    def test_defaults_without_file(self, isolated_config):
        config = KindloadConfig.load(environ={})
        assert config.kind_binary == "kind"
        assert config.kubectl_binary == "kubectl"
        assert config.cluster_name is None
        assert config.timeout is None

    def test_reads_config_file(self, isolated_config):
        (isolated_config / "config.yaml").write_text(
            "kind_binary: /opt/kind\ncluster_name: dev\ntimeout: 120\n"
        )
        config = KindloadConfig.load(environ={})
        assert config.kind_binary == "/opt/kind"
        assert config.cluster_name == "dev"
        assert config.timeout == 120.0

    def test_environment_overrides_file(self, isolated_config):
        (isolated_config / "config.yaml").write_text("cluster_name: dev\n")
        config = KindloadConfig.load(environ={"KINDLOAD_CLUSTER": "ci", "KINDLOAD_TIMEOUT": "30"})
        assert config.cluster_name == "ci"
        assert config.timeout == 30.0

    def test_explicit_config_dir(self, tmp_path):
        (tmp_path / "config.yaml").write_text("kubectl_binary: /bin/kc\n")
        assert KindloadConfig.load(tmp_path, environ={}).kubectl_binary == "/bin/kc"

    def test_unknown_keys_ignored(self, isolated_config):
        (isolated_config / "config.yaml").write_text("colour: blue\ncluster_name: dev\n")
        config = KindloadConfig.load(environ={})
        assert config.cluster_name == "dev"
        assert not hasattr(config, "colour")

    def test_non_mapping_file_is_empty(self, isolated_config):
        (isolated_config / "config.yaml").write_text("- just\n- a list\n")
        assert KindloadConfig.load(environ={}) == KindloadConfig()

    def test_invalid_yaml(self, isolated_config):
        (isolated_config / "config.yaml").write_text("cluster_name: [unclosed\n")
        with pytest.raises(ConfigError):
            KindloadConfig.load(environ={})

    def test_unreadable_file(self, isolated_config):
        (isolated_config / "config.yaml").write_text("cluster_name: dev\n")
        with mock.patch("pathlib.Path.open", side_effect=PermissionError(13, "Permission denied")):
            with pytest.raises(ConfigError, match="unable to read"):
                KindloadConfig.load(environ={})

    @pytest.mark.parametrize("value", ["-1", "0", "soon"])
    def test_invalid_timeout(self, isolated_config, value):
        with pytest.raises(ConfigError):
            KindloadConfig.load(environ={"KINDLOAD_TIMEOUT": value})

    def test_with_overrides_skips_none(self):
        base = KindloadConfig(cluster_name="dev", kube_context="kind-dev")
        config = base.with_overrides(cluster_name=None, kube_context="other", timeout=5)
        assert config.cluster_name == "dev"
        assert config.kube_context == "other"
        assert config.timeout == 5.0
        assert base.kube_context == "kind-dev"


class TestResolveKindCluster:

    def test_explicit_name_wins(self):
        assert resolve_kind_cluster("dev", "kind-other") == "dev"

    def test_name_from_kind_context(self):
        assert resolve_kind_cluster(None, "kind-ci") == "ci"

    def test_non_kind_context_falls_back(self):
        assert resolve_kind_cluster(None, "minikube") == DEFAULT_KIND_CLUSTER
        assert resolve_kind_cluster(None, "kind-") == DEFAULT_KIND_CLUSTER

    def test_default(self):
        assert resolve_kind_cluster(None) == "kind"

    def test_kind_kube_context(self):
        assert kind_kube_context("dev") == "kind-dev"
