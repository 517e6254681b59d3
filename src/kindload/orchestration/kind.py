"""Thin wrapper around the ``kind`` binary."""

from __future__ import annotations

from kindload.orchestration.commands import run_command_out


class KindCLI:
    """Transfers local docker images into kind cluster nodes."""

    def __init__(self, binary: str = "kind", timeout: float | None = None) -> None:
        self.binary = binary
        self.timeout = timeout

    @classmethod
    def from_config(cls, config) -> "KindCLI":
        return cls(binary=config.kind_binary, timeout=config.timeout)

    def load_docker_image(self, cluster_name: str, tag: str) -> str:
        """Copy image *tag* into every node of *cluster_name*.

        Raises:
            CommandError: ``kind load`` failed.
        """
        return run_command_out(
            [self.binary, "load", "docker-image", "--name", cluster_name, tag],
            timeout=self.timeout,
        )
