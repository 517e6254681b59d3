"""Thin wrapper around the ``kubectl`` binary."""

from __future__ import annotations

from kindload.orchestration.commands import run_command_out


class KubectlCLI:
    """Runs ``kubectl`` against a fixed kubeconfig and context."""

    def __init__(
        self,
        binary: str = "kubectl",
        kube_context: str | None = None,
        kubeconfig: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self.binary = binary
        self.kube_context = kube_context
        self.kubeconfig = kubeconfig
        self.timeout = timeout

    @classmethod
    def from_config(cls, config) -> "KubectlCLI":
        return cls(
            binary=config.kubectl_binary,
            kube_context=config.kube_context,
            kubeconfig=config.kubeconfig,
            timeout=config.timeout,
        )

    def command(self, *args: str) -> list[str]:
        cmd = [self.binary]
        if self.kubeconfig:
            cmd += ["--kubeconfig", self.kubeconfig]
        if self.kube_context:
            cmd += ["--context", self.kube_context]
        return cmd + list(args)

    def run_out(self, *args: str) -> str:
        return run_command_out(self.command(*args), timeout=self.timeout)
