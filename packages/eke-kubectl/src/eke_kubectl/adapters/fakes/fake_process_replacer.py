"""Fake process replacer for testing."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, NoReturn, Sequence


class ProcessReplaced(Exception):
    """Raised by FakeProcessReplacer in place of exec.

    Tests catch it to observe what would have been executed.
    """

    def __init__(self, call: ReplaceCall) -> None:
        super().__init__(f"replaced with {call.binary_path}")
        self.call = call


@dataclass(frozen=True)
class ReplaceCall:
    """A recorded replace() call."""

    binary_path: Path
    args: tuple[str, ...]
    env: dict[str, str] = field(default_factory=dict)


class FakeProcessReplacer:
    """Fake implementation of ProcessReplacerPort for testing.

    replace() never returns: it records the call and raises ProcessReplaced,
    or the exception configured with set_exception().
    """

    def __init__(self) -> None:
        self._calls: list[ReplaceCall] = []
        self._exception: BaseException | None = None

    @property
    def calls(self) -> list[ReplaceCall]:
        return self._calls

    def set_exception(self, exception: BaseException | None) -> None:
        """Configure an exception to raise instead of ProcessReplaced."""
        self._exception = exception

    def replace(
        self,
        binary_path: Path,
        args: Sequence[str],
        env: Mapping[str, str],
    ) -> NoReturn:
        call = ReplaceCall(binary_path=Path(binary_path), args=tuple(args), env=dict(env))
        self._calls.append(call)

        if self._exception is not None:
            raise self._exception
        raise ProcessReplaced(call)
