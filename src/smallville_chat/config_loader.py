"""
YAML Configuration Loader for the response interpreter.

Parses and validates:
  - prompts:       → PromptTemplates (one template per operation)
  - temperatures:  → Temperatures (optional per-operation overrides)

Both sections usually live in the same file (config/prompts.yaml).
"""

from __future__ import annotations
import logging
from dataclasses import replace
from pathlib import Path
from typing import Iterable, Optional

import yaml

from .interpreter import ChatModel, ResponseInterpreter, Temperatures
from .prompts import PromptBuilder, PromptTemplates, TemplatePromptBuilder

logger = logging.getLogger(__name__)

# Resolved against the project root, not the working directory.
DEFAULT_CONFIG_PATH = str(Path(__file__).resolve().parents[2] / "config" / "prompts.yaml")


# ---------------------------------------------------------------------------
# Prompt Templates
# ---------------------------------------------------------------------------

def load_prompt_templates(path: str) -> PromptTemplates:
    """
    Load prompt templates from a YAML file.

    Expected format:
        prompts:
          reaction: |
            {agent_name} just observed: {argument}
            ...
          ask_question: "..."

    Every operation needs a template; placeholders use str.format syntax,
    so literal braces must be doubled ({{ }}).
    """
    data = _load_yaml(path)
    prompts = data.get("prompts", data)
    if not isinstance(prompts, dict):
        raise ValueError(f"Expected 'prompts' to be a mapping in {path}")

    _require_fields(prompts, PromptTemplates.keys(), context=f"prompts in {path}")
    templates = PromptTemplates(**{key: str(prompts[key]) for key in PromptTemplates.keys()})
    logger.info("Loaded %d prompt templates from %s", len(PromptTemplates.keys()), path)
    return templates


# ---------------------------------------------------------------------------
# Temperatures
# ---------------------------------------------------------------------------

def load_temperatures(path: str) -> Temperatures:
    """
    Load per-operation temperature overrides.

    Expected format (all keys optional):
        temperatures:
          reaction: 1.0
          future_plans: 0.4
    """
    data = _load_yaml(path)
    raw = data.get("temperatures") or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Expected 'temperatures' to be a mapping in {path}")

    unknown = sorted(set(raw) - set(PromptTemplates.keys()))
    if unknown:
        raise ValueError(f"Unknown temperature keys in {path}: {', '.join(unknown)}")

    overrides = {}
    for key, value in raw.items():
        try:
            overrides[key] = float(value)
        except (TypeError, ValueError):
            raise ValueError(f"Temperature '{key}' in {path} is not a number: {value!r}")

    temperatures = replace(Temperatures(), **overrides)
    if overrides:
        logger.info("Loaded %d temperature overrides from %s", len(overrides), path)
    return temperatures


# ---------------------------------------------------------------------------
# Interpreter Builder
# ---------------------------------------------------------------------------

def build_interpreter(
    model: ChatModel,
    path: str = DEFAULT_CONFIG_PATH,
    locations: Iterable[str] = (),
    prompt_builder: Optional[PromptBuilder] = None,
) -> ResponseInterpreter:
    """
    Construct a ResponseInterpreter from a config file.

    The default path points at the checkout's config/prompts.yaml. Installs
    that don't ship the config directory must pass `path`.
    """
    interpreter = ResponseInterpreter(
        model=model,
        prompt_builder=prompt_builder or TemplatePromptBuilder(),
        templates=load_prompt_templates(path),
        locations=locations,
        temperatures=load_temperatures(path),
    )
    logger.info("Response interpreter ready with %d locations", len(interpreter.locations))
    return interpreter


# ---------------------------------------------------------------------------
# Internal Helpers
# ---------------------------------------------------------------------------

def _load_yaml(path: str) -> dict:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with p.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Expected YAML dict at top level in {path}, got {type(data)}")
    return data


def _require_fields(data: dict, fields: list[str], context: str = "") -> None:
    for field in fields:
        if field not in data:
            raise ValueError(
                f"Missing required field '{field}' in {context or 'config'}"
            )
