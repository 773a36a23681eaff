"""
Prompt templates and the default prompt builder.

Template wording lives in YAML (see config/prompts.yaml); this module only
knows which templates exist and how placeholders are filled.

Placeholders:
  {agent_name} {agent_description} {agent_location} {agent_activity}
  {memories} {locations} {argument} {time}
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, fields
from datetime import datetime
from typing import Any, Iterable, Optional, Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PromptTemplates:
    """One template per interpreter operation."""
    reaction: str
    ask_question: str
    future_plans: str
    short_term_plans: str
    mid_term_plans: str
    current_plan: str
    conversation: str
    past_and_present: str
    object_updates: str
    pick_location: str
    memory_rank: str
    past_tense: str

    @classmethod
    def keys(cls) -> list[str]:
        return [f.name for f in fields(cls)]


class PromptBuilder(Protocol):
    """Turns an agent context and a template into a finished prompt."""

    def build(
        self,
        agent: Any,
        template: str,
        locations: Optional[Iterable[str]] = None,
        argument: Optional[str] = None,
    ) -> str: ...


class _BlankMissing(dict):
    """format_map mapping that renders unknown placeholders as empty."""

    def __missing__(self, key: str) -> str:
        logger.debug("Prompt placeholder {%s} has no value", key)
        return ""


class TemplatePromptBuilder:
    """
    Fills `str.format` placeholders from an AgentProfile-like object.

    Attributes missing on the agent render empty, so any object with a
    `full_name` can be used.
    """

    def __init__(self, clock=datetime.now) -> None:
        self.clock = clock

    def build(
        self,
        agent: Any,
        template: str,
        locations: Optional[Iterable[str]] = None,
        argument: Optional[str] = None,
    ) -> str:
        memories = getattr(agent, "memories", None) or []
        values = _BlankMissing(
            agent_name=getattr(agent, "full_name", ""),
            agent_description=getattr(agent, "description", ""),
            agent_location=getattr(agent, "location", ""),
            agent_activity=getattr(agent, "activity", ""),
            memories="\n".join(f"- {m}" for m in memories),
            locations=", ".join(locations) if locations else "",
            argument=argument or "",
            time=self.clock().strftime("%I:%M %p").lstrip("0"),
        )
        return template.format_map(values).strip()
