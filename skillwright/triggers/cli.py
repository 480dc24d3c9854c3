"""CLI trigger: parse command-line arguments, run the matching tool, print its JSON result."""
import argparse
import sys
import uuid

from skillwright.logging_utils import clear_trace_id, set_trace_id
from skillwright.tools import get_tool_registry

# Commands that read the skills directory and need it to exist
LOADER_COMMANDS = ("match", "conflicts", "list", "get")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="main.py", description="Match, check and validate skills.")
    sub = parser.add_subparsers(dest="command", required=True)

    match = sub.add_parser("match", help="Find skills for a task description")
    match.add_argument("task", nargs="*", help="Task description (read from stdin if omitted)")
    match.add_argument("--min-confidence", type=float, default=None)

    conflicts = sub.add_parser("conflicts", help="Check a new skill against existing skills")
    conflicts.add_argument("--name", required=True)
    conflicts.add_argument("--description", required=True)
    conflicts.add_argument("--tag", dest="tags", action="append", default=None)
    conflicts.add_argument("--threshold", type=float, default=None)

    analyze = sub.add_parser("analyze", help="Score a skill description")
    analyze.add_argument("description")
    analyze.add_argument("--trigger", dest="triggers", action="append", default=None)

    validate = sub.add_parser("validate", help="Validate a SKILL.md file")
    validate.add_argument("path")

    tokens = sub.add_parser("tokens", help="Token counts per layer for a SKILL.md file")
    tokens.add_argument("path")

    create = sub.add_parser("create", help="Write a new SKILL.md into the skills directory")
    create.add_argument("--name", required=True)
    create.add_argument("--description", required=True)
    create.add_argument("--overview")
    create.add_argument("--prerequisite", dest="prerequisites", action="append", default=None)
    create.add_argument("--step", dest="steps", action="append", default=None)
    create.add_argument("--example", dest="examples", action="append", default=None)
    create.add_argument("--error-handling")
    create.add_argument("--limitations")
    create.add_argument("--tag", dest="tags", action="append", default=None)

    list_cmd = sub.add_parser("list", help="List skills in the skills directory")
    list_cmd.add_argument("--search")
    list_cmd.add_argument("--tag", dest="tags", action="append", default=None)
    list_cmd.add_argument("--include-deprecated", action="store_true")

    get = sub.add_parser("get", help="Show one skill's full SKILL.md")
    which = get.add_mutually_exclusive_group(required=True)
    which.add_argument("--id", dest="skill_id")
    which.add_argument("--name")
    return parser


def _without_none(call: dict) -> dict:
    return {k: v for k, v in call.items() if v is not None}


def _tool_call(args: argparse.Namespace) -> tuple[str, dict]:
    """Map parsed CLI arguments to (tool name, tool arguments)."""
    if args.command == "match":
        task = " ".join(args.task) if args.task else (sys.stdin.readline() or "").strip()
        return "match_skill", _without_none({"task_description": task, "min_confidence": args.min_confidence})
    if args.command == "conflicts":
        call = {"name": args.name, "description": args.description, "tags": args.tags}
        return "check_skill_conflicts", _without_none({**call, "overlap_threshold": args.threshold})
    if args.command == "analyze":
        return "analyze_description", {"description": args.description, "intended_triggers": args.triggers}
    if args.command == "validate":
        return "validate_skill", {"path": args.path}
    if args.command == "tokens":
        return "count_skill_tokens", {"path": args.path}
    if args.command == "create":
        return "create_skill", _without_none({
            "name": args.name,
            "description": args.description,
            "overview": args.overview,
            "prerequisites": args.prerequisites,
            "steps": args.steps,
            "examples": args.examples,
            "error_handling": args.error_handling,
            "limitations": args.limitations,
            "tags": args.tags,
        })
    if args.command == "list":
        return "list_skills", _without_none({
            "search": args.search,
            "tags": args.tags,
            "include_deprecated": args.include_deprecated,
        })
    return "get_skill", _without_none({"skill_id": args.skill_id, "name": args.name})


def run_cli(argv: list[str] | None = None) -> int:
    """Entry for CLI. Prints the tool result; returns 1 if the tool reported an error."""
    args = build_parser().parse_args(argv)
    tool_name, arguments = _tool_call(args)
    set_trace_id(str(uuid.uuid4()))
    try:
        result = get_tool_registry().execute(tool_name, arguments)
    finally:
        clear_trace_id()
    if result.startswith("Error:"):
        print(result, file=sys.stderr)
        return 1
    print(result)
    return 0
