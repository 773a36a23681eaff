"""
Shared fixtures: a scripted chat model and simple templates, so interpreter
tests never touch the network.
"""
from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from smallville_chat.interpreter import ResponseInterpreter
from smallville_chat.models import AgentProfile
from smallville_chat.prompts import PromptTemplates, TemplatePromptBuilder

PROJECT_ROOT = Path(__file__).resolve().parent.parent


class ScriptedModel:
    """Returns queued responses in order and records every call."""

    def __init__(self, *responses: str) -> None:
        self.responses = list(responses)
        self.calls: list[tuple[str, float]] = []

    def send_chat(self, prompt: str, temperature: float) -> str:
        self.calls.append((prompt, temperature))
        return self.responses.pop(0) if self.responses else ""

    @property
    def temperatures(self) -> list[float]:
        return [t for _, t in self.calls]


@pytest.fixture
def default_config() -> str:
    return str(PROJECT_ROOT / "config" / "prompts.yaml")


@pytest.fixture
def templates() -> PromptTemplates:
    return PromptTemplates(**{
        key: f"{key.upper()} for {{agent_name}} | {{argument}} | {{locations}}"
        for key in PromptTemplates.keys()
    })


@pytest.fixture
def builder() -> TemplatePromptBuilder:
    return TemplatePromptBuilder(clock=lambda: datetime(2024, 5, 1, 9, 5))


@pytest.fixture
def alice() -> AgentProfile:
    return AgentProfile(
        full_name="Alice Smith",
        description="A baker who loves mornings.",
        location="Bakery",
        activity="kneading dough",
        memories=["sold out of croissants", "met Bob at the park"],
    )


@pytest.fixture
def bob() -> AgentProfile:
    return AgentProfile(full_name="Bob Jones", location="Park")


@pytest.fixture
def make_interpreter(templates, builder):
    def _make(*responses: str, temperatures=None) -> tuple[ResponseInterpreter, ScriptedModel]:
        model = ScriptedModel(*responses)
        interpreter = ResponseInterpreter(
            model=model,
            prompt_builder=builder,
            templates=templates,
            locations=["Park", "Bakery"],
            temperatures=temperatures,
        )
        return interpreter, model
    return _make
