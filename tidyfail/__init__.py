"""Print fatal errors in a sensible fashion.

Wrap the entry point once:

    import tidyfail

    @tidyfail.catch
    def main() -> None:
        path = tidyfail.expect(os.environ.get("APP_CONFIG"), "APP_CONFIG is not set")
        ...

Expected failures (`fail`, `expect`, `unwrap`, `converting` and their
`_color` variants) print one line to stderr and exit 1. Anything else is a
bug: the normal traceback is shown and the process exits 101. `finally`
blocks and context managers run before anything is printed.
"""

from .boundary import catch, is_active, run
from .config import BoundaryConfig
from .errors import (
    BoundaryAlreadyActiveError,
    ExitCode,
    Failure,
    FailureConsumedError,
    expect,
    expect_color,
    fail,
    fail_color,
)
from .result import Err, Ok, Result, converting, unwrap, unwrap_color
from .style import EMPHASIS_PREFIX, RESET_SUFFIX, emphasize

__all__ = [
    "BoundaryAlreadyActiveError",
    "BoundaryConfig",
    "EMPHASIS_PREFIX",
    "Err",
    "ExitCode",
    "Failure",
    "FailureConsumedError",
    "Ok",
    "RESET_SUFFIX",
    "Result",
    "catch",
    "converting",
    "emphasize",
    "expect",
    "expect_color",
    "fail",
    "fail_color",
    "is_active",
    "run",
    "unwrap",
    "unwrap_color",
]
