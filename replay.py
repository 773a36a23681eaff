#!/usr/bin/env python3
"""
replay.py — Run a captured model response through the response interpreter.

Useful when the model's formatting drifts: save the raw reply to a file and
see exactly what the interpreter makes of it, without calling the model.

Usage:
    python replay.py \\
        --kind   plans \\
        --input  captures/plans.txt \\
        [--agent "John Lin"] \\
        [--other "Eddy Lin"] \\
        [--config config/prompts.yaml] \\
        [--debug]

Prints the typed result as JSON on stdout.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from smallville_chat.config_loader import DEFAULT_CONFIG_PATH, build_interpreter
from smallville_chat.models import AgentProfile

KINDS = (
    "reaction", "plans", "short-term-plans", "mid-term-plans", "current-plan",
    "conversation", "objects", "ranking", "location",
)


class ReplayModel:
    """Chat model that answers every prompt with the captured response."""

    def __init__(self, response: str) -> None:
        self.response = response
        self.prompts: list[str] = []

    def send_chat(self, prompt: str, temperature: float) -> str:
        self.prompts.append(prompt)
        return self.response


def setup_logging(debug: bool = False) -> None:
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stderr),
        ]
    )
    if not debug:
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)
        logging.getLogger("openai").setLevel(logging.WARNING)


def parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Replay a captured chat model response through the interpreter"
    )
    p.add_argument("--kind",    required=True, choices=KINDS, help="Operation the response answered")
    p.add_argument("--input",   required=True, help="Path to the raw response text")
    p.add_argument("--agent",   default="Agent", help="Name of the asking agent")
    p.add_argument("--other",   default="Other", help="Conversation partner (conversation only)")
    p.add_argument("--config",  default=DEFAULT_CONFIG_PATH,
                   help=f"Prompt config YAML (default: {DEFAULT_CONFIG_PATH})")
    p.add_argument("--debug",   action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def replay(kind: str, response: str, agent: AgentProfile, other: AgentProfile,
           config_path: str = DEFAULT_CONFIG_PATH):
    interpreter = build_interpreter(ReplayModel(response), path=config_path)
    handlers = {
        "reaction":         lambda: interpreter.get_reaction(agent, "(replayed observation)"),
        "plans":            lambda: interpreter.get_plans(agent),
        "short-term-plans": lambda: interpreter.get_short_term_plans(agent),
        "mid-term-plans":   lambda: interpreter.get_mid_term_plans(agent),
        "current-plan":     lambda: interpreter.get_current_plan(agent),
        "conversation":     lambda: interpreter.get_conversation(agent, other),
        "objects":          lambda: interpreter.get_objects_changed_by(agent),
        "ranking":          lambda: interpreter.get_ranking_weights(agent),
        "location":         lambda: interpreter.get_exact_location(agent),
    }
    return handlers[kind]()


def to_jsonable(result):
    if hasattr(result, "to_dict"):
        return result.to_dict()
    if isinstance(result, dict):
        return {str(k): to_jsonable(v) for k, v in result.items()}
    if isinstance(result, list):
        return [to_jsonable(r) for r in result]
    return result


def main(argv=None) -> None:
    args = parse_args(argv)
    setup_logging(args.debug)
    logger = logging.getLogger("replay")

    input_path = Path(args.input)
    if not input_path.exists():
        logger.error("Response file not found: %s", input_path)
        sys.exit(1)

    response = input_path.read_text(encoding="utf-8")
    logger.info("Replaying %d chars as '%s'", len(response), args.kind)

    result = replay(
        args.kind,
        response,
        agent=AgentProfile(full_name=args.agent),
        other=AgentProfile(full_name=args.other),
        config_path=args.config,
    )
    print(json.dumps(to_jsonable(result), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
