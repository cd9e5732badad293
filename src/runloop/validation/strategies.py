"""
Polling helpers.

Process termination confirms death by polling a liveness probe a bounded
number of times; this module keeps that loop in one place.
"""

import logging
import time
from typing import Callable

logger = logging.getLogger(__name__)


def poll_until(
    predicate: Callable[[], bool],
    max_attempts: int = 10,
    delay: float = 0.1,
    context: str = "condition"
) -> bool:
    """
    Evaluate ``predicate`` until it returns True or the attempts run out.

    The predicate is checked once per attempt; ``delay`` seconds are slept
    between attempts (not after the last one). There is no wall-clock timeout
    beyond ``max_attempts * delay``.

    Args:
        predicate: Zero-argument callable returning True when done
        max_attempts: Maximum number of predicate evaluations
        delay: Delay between attempts in seconds
        context: Context description for log messages

    Returns:
        True if the predicate succeeded within the budget, False otherwise
    """
    for attempt in range(max_attempts):
        if predicate():
            if attempt > 0:
                logger.debug(f"'{context}' satisfied on attempt {attempt + 1}")
            return True
        if attempt < max_attempts - 1:
            time.sleep(delay)

    logger.debug(f"'{context}' not satisfied after {max_attempts} attempts")
    return False
