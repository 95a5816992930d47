"""Clock adapters."""

import time


class SystemClock:
    """ClockPort reading the system wall clock."""

    def now_millis(self) -> int:
        """Return the current time as a Unix timestamp in milliseconds."""
        return int(time.time() * 1000)
