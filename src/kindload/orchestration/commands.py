"""Local command execution primitives.

Everything kindload does outside the process goes through
:func:`run_command`, which blocks until the child exits and captures its
output.  Callers that need a hard failure use :func:`run_command_out`.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from dataclasses import dataclass

from kindload.errors import CommandError

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Outcome of a finished local command."""

    command: list[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def success(self) -> bool:
        return self.returncode == 0

    @property
    def output(self) -> str:
        """Combined stdout and stderr, stripped."""
        return "\n".join(s.strip() for s in (self.stdout, self.stderr) if s.strip())


def _decode(data) -> str:
    # TimeoutExpired carries bytes even when text=True was requested
    if data is None:
        return ""
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace")
    return data


def run_command(command: list[str], timeout: float | None = None) -> CommandResult:
    """Run *command* and capture its output.

    Args:
        command: Program and arguments.
        timeout: Optional timeout in seconds.  The child is killed when it
            expires.

    Returns:
        A :class:`CommandResult`; non-zero exit statuses are not raised.

    Raises:
        CommandError: The executable is missing, cannot be started, or the
            timeout expired.
    """
    logger.debug("Running: %s", shlex.join(command))
    try:
        proc = subprocess.run(
            command,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            check=False,
        )
    except FileNotFoundError as e:
        raise CommandError(command, reason="executable not found: %s" % command[0]) from e
    except OSError as e:
        raise CommandError(command, reason="unable to start %s: %s" % (command[0], e)) from e
    except subprocess.TimeoutExpired as e:
        output = "\n".join(s for s in (_decode(e.stdout), _decode(e.stderr)) if s).strip()
        raise CommandError(command, output=output, reason="timed out after %ss" % timeout) from e

    result = CommandResult(command, proc.returncode, proc.stdout or "", proc.stderr or "")
    logger.debug("Exit status %d: %s", result.returncode, command[0])
    return result


def run_command_out(command: list[str], timeout: float | None = None) -> str:
    """Run *command* and return its stdout, raising on non-zero exit.

    Raises:
        CommandError: The command failed; ``output`` holds what it printed.
    """
    result = run_command(command, timeout=timeout)
    if not result.success:
        raise CommandError(command, result.returncode, result.output)
    return result.stdout
