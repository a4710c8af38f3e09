"""Process replacement adapter.

Implements ProcessReplacerPort. On POSIX the current process image is
replaced with ``os.execve``: the pid, stdio and exit status become the
kubectl binary's. Windows has no real exec, so a child is spawned with
inherited stdio and the parent exits with the child's return code. The
console already delivers Ctrl+C and Ctrl+Break to the child; only the
remaining signals are forwarded to it.
"""

from __future__ import annotations

import logging
import os
import signal
import subprocess
import sys
from pathlib import Path
from typing import Any, Callable, Mapping, NoReturn, Sequence

from eke_kubectl.domain.exceptions import ProcessReplaceError

logger = logging.getLogger(__name__)

_FORWARDED_SIGNALS = tuple(
    getattr(signal, name)
    for name in ("SIGINT", "SIGTERM", "SIGBREAK", "SIGHUP")
    if hasattr(signal, name)
)

# Delivered by the console to every attached process, the child included
_CONSOLE_SIGNALS = tuple(
    getattr(signal, name) for name in ("SIGINT", "SIGBREAK") if hasattr(signal, name)
)


class ExecProcessReplacer:
    """Replaces the running process with a resolved kubectl binary.

    Attributes:
        use_exec: Whether to use ``os.execve``. Defaults to True everywhere
            but Windows.
        child_shares_console: Whether a spawned child receives console
            signals on its own. Defaults to True on Windows only.
    """

    def __init__(
        self,
        use_exec: bool | None = None,
        execve: Callable[..., Any] = os.execve,
        exit_: Callable[[int], Any] = sys.exit,
        child_shares_console: bool | None = None,
    ) -> None:
        """Initialize the replacer.

        Args:
            use_exec: Force exec (True) or spawn-and-wait (False). None picks
                based on the platform.
            execve: Injection point for os.execve (testing).
            exit_: Injection point for sys.exit (testing).
            child_shares_console: Skip forwarding console signals (Ctrl+C,
                Ctrl+Break) the child already got. None picks based on the
                platform.
        """
        self.use_exec = os.name != "nt" if use_exec is None else use_exec
        self.child_shares_console = (
            os.name == "nt" if child_shares_console is None else child_shares_console
        )
        self._execve = execve
        self._exit = exit_

    def replace(
        self,
        binary_path: Path,
        args: Sequence[str],
        env: Mapping[str, str],
    ) -> NoReturn:
        path = self._resolve(binary_path)
        argv = [str(path), *args]
        logger.debug("handing over to %s", argv)

        sys.stdout.flush()
        sys.stderr.flush()

        if self.use_exec:
            try:
                self._execve(str(path), argv, dict(env))
            except OSError as e:
                raise ProcessReplaceError(f"failed to execute {path}: {e}", binary_path=path) from e
            # execve only returns when replaced by a test double
            raise ProcessReplaceError(f"exec of {path} returned", binary_path=path)

        self._exit(self._spawn_and_wait(path, argv, env))
        raise ProcessReplaceError(f"exit after running {path} returned", binary_path=path)

    @staticmethod
    def _resolve(binary_path: Path) -> Path:
        path = Path(binary_path)
        if not path.is_file():
            raise ProcessReplaceError(f"kubectl binary not found at {path}", binary_path=path)
        if not os.access(path, os.X_OK):
            raise ProcessReplaceError(f"kubectl binary at {path} is not executable", binary_path=path)
        return path.absolute()

    def _spawn_and_wait(self, path: Path, argv: list[str], env: Mapping[str, str]) -> int:
        try:
            child = subprocess.Popen(argv, executable=str(path), env=dict(env))
        except OSError as e:
            raise ProcessReplaceError(f"failed to execute {path}: {e}", binary_path=path) from e

        def forward(signum: int, _frame: object) -> None:
            if self.child_shares_console and signum in _CONSOLE_SIGNALS:
                return
            if child.poll() is None:
                child.send_signal(signum)

        previous: dict[int, Any] = {}
        for signum in _FORWARDED_SIGNALS:
            try:
                previous[signum] = signal.signal(signum, forward)
            except (OSError, ValueError):
                # not settable from this thread or platform
                continue

        try:
            returncode = child.wait()
            # killed by a signal: report it the way a shell would
            return 128 - returncode if returncode < 0 else returncode
        finally:
            for signum, handler in previous.items():
                signal.signal(signum, handler)
