"""
Line-oriented parsers for chat model responses.

  - parse_plans           "(9:00 AM) eat breakfast" lines → list[Plan]
  - parse_conversation    "Speaker: text" lines         → Conversation
  - parse_object_changes  "item: new state" lines       → {line index: ObjectChangeResponse}
  - parse_ranking         "5" or "[3, 1, 4]"            → list[int]

None of these raise on badly formatted model output: offending lines are
logged and skipped, and the worst case is an empty result.
"""

from __future__ import annotations
import logging
import re
from datetime import date
from typing import Optional

from .json_reader import try_parse
from .models import Conversation, Dialog, ObjectChangeResponse, Plan
from .time_extractor import extract_time

logger = logging.getLogger(__name__)

UNCHANGED = "unchanged"
_LINE_BREAK = re.compile(r"\r?\n")
_SPEAKER_SEPARATOR = re.compile(r":\s+")


# ---------------------------------------------------------------------------
# Plans
# ---------------------------------------------------------------------------

def parse_plans(
    raw_text: str,
    today: Optional[date] = None,
    log: logging.Logger = logger,
) -> list[Plan]:
    """Build one Plan per line that carries a parseable clock time, in order."""
    plans: list[Plan] = []
    for line in raw_text.split("\n"):
        if not line.strip():
            continue

        start = extract_time(raw_text, line, today=today, log=log)
        if not start.ok:
            log.debug("Skipping plan line (%s): %s", start.reason, line)
            continue

        plans.append(Plan(description=line.strip(), start_time=start.value))

    return plans


# ---------------------------------------------------------------------------
# Conversations
# ---------------------------------------------------------------------------

def parse_conversation(raw_text: str, participant_a: str, participant_b: str) -> Conversation:
    dialogs = []
    for line in _LINE_BREAK.split(raw_text):
        parts = _SPEAKER_SEPARATOR.split(line, maxsplit=1)
        if len(parts) != 2:     # preamble before the conversation starts
            continue
        speaker, text = parts[0].strip(), parts[1].strip()
        if speaker and text:
            dialogs.append(Dialog(speaker=speaker, text=text))

    return Conversation(participant_a, participant_b, tuple(dialogs))


# ---------------------------------------------------------------------------
# Object Changes
# ---------------------------------------------------------------------------

def parse_object_changes(
    raw_text: str,
    log: logging.Logger = logger,
) -> dict[int, ObjectChangeResponse]:
    """
    Map each response line index to the change it describes.

    Lines are split on the first ':' so values may contain colons
    ("clock: 3:00 PM"). Lines without a separator, with an empty side, or
    whose value is "Unchanged" have no entry.
    """
    changes: dict[int, ObjectChangeResponse] = {}
    for index, line in enumerate(raw_text.split("\n")):
        item, separator, value = line.partition(":")
        if not separator:
            continue

        item, value = item.strip(), value.strip()
        log.debug("Trying to change %s to %s", item, value)
        if item and value and value.lower() != UNCHANGED:
            changes[index] = ObjectChangeResponse(item=item, new_value=value)

    if not changes:
        log.warning("No objects were updated")

    return changes


# ---------------------------------------------------------------------------
# Memory Ranking
# ---------------------------------------------------------------------------

def parse_ranking(raw_text: str, log: logging.Logger = logger) -> list[int]:
    """Parse a bare integer or a JSON array of integers into ranking weights."""
    if "[" not in raw_text:
        try:
            return [int(raw_text.strip())]
        except ValueError:
            log.error("Failed to parse memory ranking %r. Continuing anyways...", raw_text)
            return []

    outcome = try_parse(raw_text, log=log)
    if not outcome.ok:
        log.error("Failed to parse json for memory ranking. Continuing anyways...")
        return []

    weights = outcome.value
    if not isinstance(weights, list) or not all(_is_int(w) for w in weights):
        log.error("Memory ranking is not a list of integers: %r", weights)
        return []
    return weights


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
