"""Event source: runs ``go test -json`` and streams its stdout into a session."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from typing import IO, TYPE_CHECKING, cast

from gostress.config import StressConfig

if TYPE_CHECKING:
    from gostress.core.session import StressSession

logger = logging.getLogger(__name__)


class StressError(RuntimeError):
    """Base error for gostress."""


class GoTestNotFoundError(StressError):
    """Raised when the configured go binary cannot be executed."""


def build_go_test_command(
    args: Sequence[str],
    *,
    count: int,
    failfast: bool = True,
    go_binary: str = "go",
) -> list[str]:
    """Build the ``go test`` argv that repeats every selected test *count* times."""
    command = [go_binary, "test", f"-count={count}"]
    if failfast:
        command.append("-failfast")
    command.append("-json")
    command.extend(args)
    return command


class GoTestRunner:
    """Spawns ``go test`` and feeds its JSON event stream to a StressSession.

    Parameters
    ----------
    config:
        Source of the go binary and failfast defaults.
    """

    def __init__(self, config: StressConfig | None = None) -> None:
        self.config = config or StressConfig()

    def command(
        self, args: Sequence[str], *, count: int, failfast: bool | None = None
    ) -> list[str]:
        return build_go_test_command(
            args,
            count=count,
            failfast=self.config.failfast if failfast is None else failfast,
            go_binary=self.config.go_binary,
        )

    def run(
        self,
        args: Sequence[str],
        *,
        count: int,
        session: StressSession,
        failfast: bool | None = None,
    ) -> int:
        """Run the tests and return the exit code of ``go test``.

        stderr is inherited so build errors reach the terminal directly.

        Raises
        ------
        GoTestNotFoundError
            If the go binary does not exist or is not executable.
        """
        command = self.command(args, count=count, failfast=failfast)
        logger.info("Starting: %s", " ".join(command))
        try:
            proc = subprocess.Popen(
                command,
                stdout=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except (FileNotFoundError, PermissionError) as exc:
            raise GoTestNotFoundError(
                f"Cannot execute {self.config.go_binary!r}: {exc}"
            ) from exc

        # Popen's context manager closes stdout and reaps the child on exit.
        with proc:
            stdout = cast(IO[str], proc.stdout)
            try:
                session.consume(stdout)
            except BaseException:
                if proc.poll() is None:
                    logger.info("Stopping go test (pid %d)", proc.pid)
                    proc.kill()
                raise
            # Closing the pipe first lets a child still writing exit on EPIPE.
            stdout.close()
            returncode = proc.wait()
        logger.info("go test exited with code %d", returncode)
        return returncode
