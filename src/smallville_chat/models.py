"""
Typed results produced from chat model responses.
All entities are built in one go by the parsers and never mutated afterwards.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


# ---------------------------------------------------------------------------
# Plans & Memories
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Plan:
    """A scheduled future action."""
    description: str
    start_time: datetime
    importance: float = 0.0

    def to_dict(self) -> dict:
        return {
            "description": self.description,
            "start_time": self.start_time.isoformat(),
            "importance": self.importance,
        }


@dataclass(frozen=True)
class Observation:
    """A past-tense memory derived from a plan that already happened."""
    description: str
    timestamp: datetime
    importance: int = 0

    def to_dict(self) -> dict:
        return {
            "description": self.description,
            "timestamp": self.timestamp.isoformat(),
            "importance": self.importance,
        }


# ---------------------------------------------------------------------------
# Reactions & Current Activity
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Reaction:
    """Whether an agent reacts to an observation, and how."""
    will_react: bool = False
    current_activity: Optional[str] = None    # only set when will_react
    emoji: Optional[str] = None               # only set when will_react

    def to_dict(self) -> dict:
        return {
            "will_react": self.will_react,
            "current_activity": self.current_activity,
            "emoji": self.emoji,
        }


@dataclass(frozen=True)
class CurrentPlan:
    """Snapshot of what an agent is doing right now. All empty on parse failure."""
    current_activity: str = ""
    emoji: str = ""
    last_activity: str = ""
    location: str = ""

    @property
    def is_empty(self) -> bool:
        return self == CurrentPlan()

    def to_dict(self) -> dict:
        return {
            "current_activity": self.current_activity,
            "emoji": self.emoji,
            "last_activity": self.last_activity,
            "location": self.location,
        }


# ---------------------------------------------------------------------------
# Conversations
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Dialog:
    speaker: str
    text: str

    def to_dict(self) -> dict:
        return {"speaker": self.speaker, "text": self.text}


@dataclass(frozen=True)
class Conversation:
    """Ordered turns between two agents, in the order the model wrote them."""
    participant_a: str
    participant_b: str
    dialogs: tuple[Dialog, ...] = ()

    def to_dict(self) -> dict:
        return {
            "participant_a": self.participant_a,
            "participant_b": self.participant_b,
            "dialogs": [d.to_dict() for d in self.dialogs],
        }


# ---------------------------------------------------------------------------
# Object State
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ObjectChangeResponse:
    item: str
    new_value: str

    def to_dict(self) -> dict:
        return {"item": self.item, "new_value": self.new_value}


# ---------------------------------------------------------------------------
# Agent context
# ---------------------------------------------------------------------------

@dataclass
class AgentProfile:
    """
    Minimal agent context consumed by the template prompt builder.

    The interpreter itself only needs `full_name`; any object exposing it
    (plus whatever the configured prompt builder reads) can stand in.
    """
    full_name: str
    description: str = ""
    location: str = ""
    activity: str = ""
    memories: list[str] = field(default_factory=list)
