"""
Response Interpreter for agent ↔ chat model exchanges.

One method per question an agent asks the model:
  1. Build the prompt (agent context + operation template)
  2. Send it to the chat model at the operation's temperature
  3. Route the raw reply through the matching parser
  4. Return the typed result, or its empty value if the reply was unusable

The interpreter keeps no state between calls; one instance can serve many
agents concurrently.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, fields
from typing import Any, Iterable, Optional, Protocol

from .json_reader import extract_object, try_parse
from .models import Conversation, CurrentPlan, ObjectChangeResponse, Observation, Plan, Reaction
from .parsers import parse_conversation, parse_object_changes, parse_plans, parse_ranking
from .prompts import PromptBuilder, PromptTemplates
from .time_extractor import extract_time

logger = logging.getLogger(__name__)

CURRENT_PLAN_KEYS = ("activity", "emoji", "last_activity", "location")


class ChatModel(Protocol):
    """Anything that answers a prompt. Failures are the implementation's business."""

    def send_chat(self, prompt: str, temperature: float) -> str: ...


@dataclass(frozen=True)
class Temperatures:
    """Sampling temperature per operation, keyed like PromptTemplates."""
    reaction: float = 1.0
    ask_question: float = 0.9
    future_plans: float = 0.4
    short_term_plans: float = 0.7
    mid_term_plans: float = 0.6
    current_plan: float = 0.7       # higher value gives better emojis
    conversation: float = 0.7
    past_and_present: float = 0.1
    object_updates: float = 0.3
    pick_location: float = 0.0
    memory_rank: float = 0.1
    past_tense: float = 0.1

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"Temperature '{f.name}' must be within [0, 1], got {value}")


class ResponseInterpreter:
    """
    Turns chat model replies into typed agent results.

    Parameters
    ----------
    model : ChatModel
        Sends a prompt and returns the reply text.
    prompt_builder : PromptBuilder
        Renders operation templates for an agent.
    templates : PromptTemplates
        Template text per operation.
    locations : iterable of str
        World location names offered to location-aware prompts.
    temperatures : Temperatures | None
        Per-operation sampling temperatures (defaults if omitted).
    log : logging.Logger
        Receives diagnostics for unusable replies.
    """

    def __init__(
        self,
        model: ChatModel,
        prompt_builder: PromptBuilder,
        templates: PromptTemplates,
        locations: Iterable[str] = (),
        temperatures: Optional[Temperatures] = None,
        log: logging.Logger = logger,
    ) -> None:
        self.model = model
        self.prompt_builder = prompt_builder
        self.templates = templates
        self.locations = tuple(locations)
        self.temperatures = temperatures or Temperatures()
        self.log = log

    # ------------------------------------------------------------------ #
    # Reactions & Questions
    # ------------------------------------------------------------------ #

    def get_reaction(self, agent: Any, observation: str) -> Reaction:
        """Ask whether the agent reacts to `observation`. Expects a JSON object."""
        response = self._send("reaction", agent, argument=observation, with_locations=True)

        outcome = try_parse(response, log=self.log)
        if not outcome.ok or not isinstance(outcome.value, dict):
            self.log.error("Failed to parse json for reaction. Continuing anyways...")
            return Reaction()

        payload = outcome.value
        if not _as_bool(payload.get("react")):
            return Reaction()

        activity, emoji = payload.get("reaction"), payload.get("emoji")
        if activity is None or emoji is None:
            self.log.warning("Reaction is missing its activity or emoji: %s", payload)
            return Reaction()

        return Reaction(will_react=True, current_activity=str(activity), emoji=str(emoji))

    def ask(self, agent: Any, question: str) -> str:
        return self._send("ask_question", agent, argument=question, with_locations=True)

    # ------------------------------------------------------------------ #
    # Plans
    # ------------------------------------------------------------------ #

    def get_plans(self, agent: Any) -> list[Plan]:
        return parse_plans(self._send("future_plans", agent, with_locations=True), log=self.log)

    def get_short_term_plans(self, agent: Any) -> list[Plan]:
        return parse_plans(self._send("short_term_plans", agent, with_locations=True), log=self.log)

    def get_mid_term_plans(self, agent: Any) -> list[Plan]:
        return parse_plans(self._send("mid_term_plans", agent, with_locations=True), log=self.log)

    def get_current_plan(self, agent: Any) -> CurrentPlan:
        """
        Snapshot the agent's current activity.

        The reply may carry prose before the JSON object; parsing starts at
        the first '{'. All four keys are required, otherwise the empty
        CurrentPlan is returned.
        """
        response = self._send("current_plan", agent, with_locations=True)

        outcome = extract_object(response, log=self.log)
        if not outcome.ok:
            self.log.error("Returning empty current plan because could not parse the result")
            return CurrentPlan()

        payload = outcome.value
        missing = [key for key in CURRENT_PLAN_KEYS if payload.get(key) is None]
        if missing:
            self.log.error("Returning empty current plan, missing keys: %s", ", ".join(missing))
            return CurrentPlan()

        result = CurrentPlan(
            current_activity=str(payload["activity"]),
            emoji=str(payload["emoji"]),
            last_activity=str(payload["last_activity"]),
            location=str(payload["location"]),
        )
        self.log.info("[Activity] %s location: %s",
                      result.current_activity, getattr(agent, "location", ""))
        return result

    def convert_plans_to_memories(self, agent: Any, plans: list[Plan]) -> list[Observation]:
        """
        Rewrite finished plans as past-tense memories.

        Reply lines are matched to `plans` by position; lines without a
        usable time are dropped, extra lines are ignored.
        """
        if not plans:
            return []

        sentences = "; ".join(plan.description for plan in plans)
        response = self._send("past_tense", agent, argument=sentences)

        lines = [line for line in response.split("\n") if line.strip()]
        memories: list[Observation] = []
        for line, plan in zip(lines, plans):
            time = extract_time(response, line, log=self.log)
            if not time.ok:
                self.log.error("Could not parse time for memory: %s", line)
                continue
            memories.append(Observation(line.strip(), time.value, int(plan.importance)))

        return memories

    # ------------------------------------------------------------------ #
    # Conversations & World
    # ------------------------------------------------------------------ #

    def get_conversation(self, agent: Any, other: Any) -> Conversation:
        response = self._send("conversation", agent, argument=other.full_name)
        return parse_conversation(response, agent.full_name, other.full_name)

    def get_objects_changed_by(self, agent: Any) -> dict[int, ObjectChangeResponse]:
        """
        Work out which world objects the agent's activity changed.

        Two calls: the first restates the activity in past and present tense,
        the second uses that to list "item: new state" lines.
        """
        tenses = self._send("past_and_present", agent)
        response = self._send("object_updates", agent, argument=tenses, with_locations=True)
        return parse_object_changes(response, log=self.log)

    def get_exact_location(self, agent: Any) -> str:
        return self._send("pick_location", agent).strip()

    def get_ranking_weights(self, agent: Any) -> list[int]:
        return parse_ranking(self._send("memory_rank", agent), log=self.log)

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    def _send(
        self,
        operation: str,
        agent: Any,
        argument: Optional[str] = None,
        with_locations: bool = False,
    ) -> str:
        prompt = self.prompt_builder.build(
            agent,
            getattr(self.templates, operation),
            locations=self.locations if with_locations else None,
            argument=argument,
        )
        response = self.model.send_chat(prompt, getattr(self.temperatures, operation))
        if not response or not response.strip():
            self.log.warning("Empty model response for %s", operation)
            return ""
        return response


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return bool(value)
