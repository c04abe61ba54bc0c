"""Elapsed-time helper shared by the matchers."""

import time


def elapsed_ms(start_time: float) -> int:
    """Milliseconds since ``start_time`` (a ``time.perf_counter()`` value)."""
    return int((time.perf_counter() - start_time) * 1000)
