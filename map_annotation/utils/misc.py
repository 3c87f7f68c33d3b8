import time
from typing import Callable, Iterator, Optional


def timestamp_ids(
    last_id: int = 0, clock: Optional[Callable[[], float]] = None
) -> Iterator[int]:
    """
    Millisecond timestamp ids that never repeat.

    Yields the current wall-clock time in milliseconds, bumped to
    ``previous + 1`` whenever the clock has not advanced past the
    previous id (rapid creation, clock going backwards, ids loaded from
    storage that lie in the future).
    """
    clock = clock or time.time
    previous = last_id
    while True:
        current = max(int(clock() * 1000), previous + 1)
        previous = current
        yield current
