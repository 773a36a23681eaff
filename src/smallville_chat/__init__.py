"""smallville-chat package exports."""

import logging

from smallville_chat.interpreter import ChatModel, ResponseInterpreter, Temperatures
from smallville_chat.json_reader import extract_object, try_parse
from smallville_chat.models import (
    AgentProfile,
    Conversation,
    CurrentPlan,
    Dialog,
    ObjectChangeResponse,
    Observation,
    Plan,
    Reaction,
)
from smallville_chat.outcome import ParseOutcome
from smallville_chat.parsers import (
    parse_conversation,
    parse_object_changes,
    parse_plans,
    parse_ranking,
)
from smallville_chat.prompts import PromptBuilder, PromptTemplates, TemplatePromptBuilder
from smallville_chat.time_extractor import extract_time

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "AgentProfile",
    "ChatModel",
    "Conversation",
    "CurrentPlan",
    "Dialog",
    "ObjectChangeResponse",
    "Observation",
    "ParseOutcome",
    "Plan",
    "PromptBuilder",
    "PromptTemplates",
    "Reaction",
    "ResponseInterpreter",
    "TemplatePromptBuilder",
    "Temperatures",
    "extract_object",
    "extract_time",
    "parse_conversation",
    "parse_object_changes",
    "parse_plans",
    "parse_ranking",
    "try_parse",
]
