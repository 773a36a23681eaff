"""
Clock-time extraction for plan lines.

The model writes plans like "(3:00 PM) go to the market", with the time
embedded somewhere near the start of the line rather than in a fixed column.
The extractor anchors on the first run of digits in the line, finds the text
after it in the full response, then steps back two characters so the window
covers the opening "(" and the hour. That window is parsed as `h:mm a`.

Lines whose first number is not the hour (e.g. "1. (9:00 AM) eat") do not
parse. That is a known limitation of the format, not something to patch here.
"""

from __future__ import annotations
import logging
import re
from datetime import date, datetime
from typing import Optional

from .outcome import ParseOutcome, NO_TIME, TIME_NOT_FOUND, UNPARSEABLE_TIME

logger = logging.getLogger(__name__)

CLOCK_FORMAT = "%I:%M %p"      # h:mm a
WINDOW_SIZE = 8                # len("(3:00 PM") / len("10:00 AM")
_DIGIT_RUN = re.compile(r"\d+")


def extract_time(
    full_text: str,
    line: str,
    today: Optional[date] = None,
    log: logging.Logger = logger,
) -> ParseOutcome[datetime]:
    """
    Locate the clock time in `line` and anchor it to `today`.

    `line` is expected to be one of the lines of `full_text`; the window is
    taken from `full_text` so duplicate lines resolve to the first occurrence.
    """
    parts = _DIGIT_RUN.split(line, maxsplit=1)
    if len(parts) == 1:
        log.warning("Temporal memory possibly missing a time. %s", line)
        return ParseOutcome.failure(NO_TIME)

    # Need room for "(" plus the hour before the remainder. An empty remainder
    # (line ends in digits) matches at 0 and is rejected here too.
    found = full_text.find(parts[1])
    if found < 2:
        log.warning("Temporal memory possibly missing a time. %s", line)
        return ParseOutcome.failure(TIME_NOT_FOUND)

    offset = found - 2
    window = full_text[offset:offset + WINDOW_SIZE].strip().replace("(", "").rstrip(")")

    try:
        clock = datetime.strptime(window, CLOCK_FORMAT).time()
    except ValueError:
        log.error("Could not parse time from %r", window)
        return ParseOutcome.failure(UNPARSEABLE_TIME)

    return ParseOutcome.success(datetime.combine(today or date.today(), clock))
