"""Structured logging with trace_id and tool/skill events."""
import logging
import sys
from contextvars import ContextVar
from typing import Any

import structlog

# Context variable for trace_id so it is attached to every log in the current tool call
trace_id_ctx: ContextVar[str | None] = ContextVar("trace_id", default=None)


def get_trace_id() -> str | None:
    return trace_id_ctx.get()


def set_trace_id(trace_id: str) -> None:
    trace_id_ctx.set(trace_id)


def clear_trace_id() -> None:
    trace_id_ctx.set(None)


def add_trace_id(
    logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor: add trace_id to every event."""
    tid = get_trace_id()
    if tid:
        event_dict["trace_id"] = tid
    return event_dict


def configure_logging(log_level: str = "INFO") -> None:
    """Configure structlog and stdlib logging. Call once at startup.
    Logs go to stderr so that tool output on stdout stays machine-readable.
    """
    level = getattr(logging, log_level, logging.INFO)
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=level,
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            add_trace_id,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=True)
            if log_level == "DEBUG"
            else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


# Convenience: log skill and tool events with consistent event names
def log_skills_loaded(
    logger: structlog.stdlib.BoundLogger,
    directory: str,
    loaded: int,
    skipped: int,
    errors: int,
) -> None:
    logger.info("skills_loaded", directory=directory, loaded=loaded, skipped=skipped, errors=errors)


def log_tool_call_start(
    logger: structlog.stdlib.BoundLogger,
    tool_name: str,
    arguments: dict[str, Any],
) -> None:
    # Long free text (task descriptions, SKILL.md content) is truncated
    summary = {
        k: (v[:200] + "..." if isinstance(v, str) and len(v) > 200 else v)
        for k, v in arguments.items()
    }
    logger.info("tool_call_start", tool_name=tool_name, arguments=summary)


def log_tool_call_end(
    logger: structlog.stdlib.BoundLogger,
    tool_name: str,
    success: bool,
    result_length: int = 0,
    error: str | None = None,
) -> None:
    logger.info(
        "tool_call_end",
        tool_name=tool_name,
        success=success,
        result_length=result_length,
        error=error,
    )


def log_skill_matches(
    logger: structlog.stdlib.BoundLogger,
    candidates: int,
    matches: int,
    best_match: str | None,
    min_confidence: float,
    context: dict[str, Any] | None = None,
) -> None:
    logger.info(
        "skill_matches_found",
        candidates=candidates,
        matches=matches,
        best_match=best_match,
        min_confidence=min_confidence,
        context=context,
    )


def log_skill_conflicts(
    logger: structlog.stdlib.BoundLogger,
    skill_name: str,
    conflicts: list[str],
    overlap_threshold: float,
) -> None:
    logger.info(
        "skill_conflicts_found",
        skill_name=skill_name,
        conflicts=conflicts,
        overlap_threshold=overlap_threshold,
    )


def log_skill_created(
    logger: structlog.stdlib.BoundLogger,
    skill_name: str,
    path: str,
    layer1_tokens: int,
    layer2_tokens: int,
    conflicts: list[str],
) -> None:
    logger.info(
        "skill_created",
        skill_name=skill_name,
        path=path,
        layer1_tokens=layer1_tokens,
        layer2_tokens=layer2_tokens,
        conflicts=conflicts,
    )
