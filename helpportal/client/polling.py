import logging
import time
from typing import Callable, Iterator, Optional, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)

REQUEST_POLL_SECONDS = 5.0
CHAT_POLL_SECONDS = 3.0


def poll(
    fetch: Callable[[], T],
    interval: float,
    *,
    max_polls: Optional[int] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> Iterator[T]:
    """
    Call fetch every `interval` seconds and yield its result whenever it
    differs from the previous one. The first result is always yielded.
    """
    last: object = object()
    polls = 0
    while max_polls is None or polls < max_polls:
        if polls:
            sleep(interval)
        polls += 1
        value = fetch()
        if value != last:
            last = value
            yield value
        else:
            logger.debug("Poll %d: no change", polls)
