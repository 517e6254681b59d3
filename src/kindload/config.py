"""Configuration for kindload.

Settings are read from ``~/.config/kindload/config.yaml`` and may be
overridden by environment variables and, in the CLI, by command-line
options::

    kind_binary: kind
    kubectl_binary: kubectl
    cluster_name: dev
    kube_context: kind-dev
    kubeconfig: ~/.kube/config
    timeout: 300
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path

from kindload.errors import ConfigError
from kindload.utils import coerce_value, load_yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".config" / "kindload"
CONFIG_FILE_NAME = "config.yaml"

DEFAULT_KIND_CLUSTER = "kind"
KIND_CONTEXT_PREFIX = "kind-"

# environment variable -> config field
ENV_OVERRIDES = {
    "KINDLOAD_KIND": "kind_binary",
    "KINDLOAD_KUBECTL": "kubectl_binary",
    "KINDLOAD_CLUSTER": "cluster_name",
    "KINDLOAD_TIMEOUT": "timeout",
    "KUBECONFIG": "kubeconfig",
}


@dataclass
class KindloadConfig:
    kind_binary: str = "kind"
    kubectl_binary: str = "kubectl"
    cluster_name: str | None = None
    kube_context: str | None = None
    kubeconfig: str | None = None
    timeout: float | None = None

    @classmethod
    def load(cls, config_dir: str | Path | None = None, environ=None) -> "KindloadConfig":
        """Build a config from the config file and the environment.

        Args:
            config_dir: Directory holding ``config.yaml``.  Defaults to
                :data:`DEFAULT_CONFIG_DIR`.
            environ: Mapping used for overrides.  Defaults to ``os.environ``.

        Raises:
            ConfigError: The file is unreadable or holds invalid values.
        """
        base = Path(config_dir) if config_dir else DEFAULT_CONFIG_DIR
        env = os.environ if environ is None else environ

        values: dict = {}
        path = base / CONFIG_FILE_NAME
        if path.is_file():
            values.update(load_yaml(path))

        for var, key in ENV_OVERRIDES.items():
            if env.get(var):
                values[key] = env[var]

        known = {f.name for f in fields(cls)}
        for key in sorted(set(values) - known):
            logger.warning("Ignoring unknown config key '%s' in %s", key, path)
            del values[key]

        config = cls(**values)
        config.timeout = _validate_timeout(config.timeout)
        if config.kubeconfig:
            config.kubeconfig = os.path.expanduser(str(config.kubeconfig))
        return config

    def with_overrides(self, **overrides) -> "KindloadConfig":
        """Return a copy with every non-``None`` override applied."""
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        values.update({k: v for k, v in overrides.items() if v is not None})
        config = type(self)(**values)
        config.timeout = _validate_timeout(config.timeout)
        return config


def _validate_timeout(value):
    if value is None:
        return None
    if isinstance(value, str):
        value = coerce_value(value)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise ConfigError("timeout must be a positive number of seconds, got %r" % (value,))
    return float(value)


def kind_kube_context(cluster_name: str) -> str:
    """Return the kube context ``kind`` writes for *cluster_name*."""
    return KIND_CONTEXT_PREFIX + cluster_name


def resolve_kind_cluster(cluster_name: str | None, kube_context: str | None = None) -> str:
    """Work out which kind cluster to load images into.

    An explicit *cluster_name* wins.  Otherwise a ``kind-<name>`` kube
    context yields ``<name>``.  Falls back to kind's default cluster name.
    """
    if cluster_name:
        return cluster_name
    if kube_context and kube_context.startswith(KIND_CONTEXT_PREFIX):
        name = kube_context[len(KIND_CONTEXT_PREFIX):]
        if name:
            return name
    return DEFAULT_KIND_CLUSTER
