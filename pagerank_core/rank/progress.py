"""Coarse progress notifications for host UIs.

The hook is fire-and-forget: its return value is ignored and computation
never depends on it.
"""

import math
from typing import Callable, Optional

ProgressCallback = Callable[[int], None]

POWER_ITERATION_REPORT_EVERY = 10  # iterations between reports
RANDOM_WALK_REPORT_SLICES = 10  # start-node slices per run


def notify(callback: Optional[ProgressCallback], done: int, total: int) -> None:
    """Send integer percent complete to ``callback`` if one was given."""
    if callback is None or total <= 0:
        return
    callback(int(100 * done / total))


def start_node_slices(node_count: int) -> list[tuple[int, int]]:
    """Split start nodes into ~10% slices, reported after each one."""
    step = max(1, math.ceil(node_count / RANDOM_WALK_REPORT_SLICES))
    return [
        (lo, min(lo + step, node_count)) for lo in range(0, node_count, step)
    ]
