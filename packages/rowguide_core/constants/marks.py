"""Mark-related constants for Rowguide.

Six mark classes plus the unmarked state.
"""

from typing import Final

# 0 means unmarked / mark mode inactive
UNMARKED: Final[int] = 0
MAX_MARK: Final[int] = 6
MARK_MODE_COUNT: Final[int] = MAX_MARK + 1

# Mark mode history length (most recent modes kept)
MARK_HISTORY_LIMIT: Final[int] = 10
