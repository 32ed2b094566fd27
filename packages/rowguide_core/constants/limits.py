"""Input limits for step transformations.

Patterns are bounded by realistic project sizes; anything larger is
treated as malformed input rather than expanded.
"""

from typing import Final

MAX_STEPS_PER_CALL: Final[int] = 10_000
MAX_EXPAND_COUNT: Final[int] = 1_000
MAX_TOTAL_COUNT: Final[int] = 100_000

# Zip tolerates rows whose bead totals differ by at most this much
ZIP_LENGTH_TOLERANCE: Final[int] = 1
