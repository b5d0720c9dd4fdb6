"""Boundary configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .errors import ExitCode

DEFECT_EXIT_CODE_ENV = "TIDYFAIL_DEFECT_EXIT_CODE"


def _parse_exit_code(raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise ValueError(
            f"{DEFECT_EXIT_CODE_ENV} must be an integer, got {raw!r}"
        ) from exc


@dataclass(frozen=True)
class BoundaryConfig:
    """Settings for `tidyfail.boundary.run`.

    The defect code must differ from success (0) and from the classified
    failure code (1), and fit in a POSIX exit status.
    """

    defect_exit_code: int = int(ExitCode.DEFECT)

    def __post_init__(self) -> None:
        code = self.defect_exit_code
        if isinstance(code, bool) or not isinstance(code, int):
            raise ValueError(f"defect_exit_code must be an int, got {code!r}")
        if not 2 <= code <= 255:
            raise ValueError(f"defect_exit_code must be in 2..255, got {code}")

    @classmethod
    def from_env(cls) -> "BoundaryConfig":
        raw = os.environ.get(DEFECT_EXIT_CODE_ENV, "")
        if not raw.strip():
            return cls()
        return cls(defect_exit_code=_parse_exit_code(raw))
