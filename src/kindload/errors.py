"""Exception types raised by kindload."""

from __future__ import annotations

import shlex


class KindloadError(Exception):
    """Base class for all errors raised by kindload."""


class ConfigError(KindloadError):
    """Invalid configuration or build-artifacts file."""


class CommandError(KindloadError):
    """An external command exited non-zero or could not be run.

    Attributes:
        command: The argv that was executed.
        returncode: Exit status, or ``None`` when the process never
            completed (missing executable, timeout).
        output: Captured stdout/stderr of the command.
    """

    def __init__(
        self,
        command: list[str],
        returncode: int | None = None,
        output: str = "",
        reason: str | None = None,
    ) -> None:
        self.command = list(command)
        self.returncode = returncode
        self.output = output
        if reason is None:
            reason = "exit status %s" % returncode if returncode is not None else "failed"
        self.reason = reason
        super().__init__("running %s: %s" % (shlex.join(self.command), reason))


class InventoryQueryFailed(KindloadError):
    """The node image inventory could not be retrieved."""

    def __init__(self, cause: Exception) -> None:
        self.cause = cause
        super().__init__("unable to inspect the nodes: %s" % cause)


class TransferFailed(KindloadError):
    """``kind load`` failed for a single image tag."""

    def __init__(self, tag: str, cause: Exception, output: str = "") -> None:
        self.tag = tag
        self.cause = cause
        self.output = output
        message = "unable to load image with kind %r: %s" % (tag, cause)
        if output:
            message += ", %s" % output
        super().__init__(message)
