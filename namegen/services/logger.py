"""Loguru setup plus one-line structured log helpers for the name generator."""

import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from loguru import logger

from namegen.config import settings

LOG_DIR = Path(settings.log_dir)

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}"

# Stdlib loggers of the HTTP stack that would otherwise drown the app output
QUIET_LOGGERS = (
    "httpx",
    "httpcore",
    "uvicorn",
    "uvicorn.access",
    "uvicorn.error",
    "fastapi",
    "sse_starlette.sse",
)


def configure_logging() -> None:
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    logger.remove()
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=settings.app_log_level.upper(), colorize=True)
    logger.add(
        LOG_DIR / "namegen_{time:YYYY-MM-DD}.log",
        format=FILE_FORMAT,
        level="DEBUG",
        rotation="00:00",
        retention="7 days",
        compression="zip",
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(settings.noisy_log_level.upper())


configure_logging()


def _payload(**fields: Any) -> dict[str, Any]:
    return {"timestamp": datetime.now(timezone.utc).isoformat(), **fields}


def log_llm_call(
    model: str,
    caller: str,
    prompt_chars: int = 0,
    response_chars: int = 0,
    duration_ms: int = 0,
    status: str = "success",
    error: Optional[str] = None,
) -> None:
    """Record one generate call; failures go out at ERROR."""
    data = _payload(
        model=model,
        caller=caller,
        prompt_chars=prompt_chars,
        response_chars=response_chars,
        duration_ms=duration_ms,
        status=status,
        error=error,
    )
    if error:
        logger.error(f"GENERATE_FAILED: {data}")
        return
    logger.info(f"GENERATE: {data}")


def log_generation_step(round_name: str, step_type: str, status: str, data: Optional[dict] = None) -> None:
    logger.info(f"ROUND_STEP: {_payload(round=round_name, step_type=step_type, status=status, data=data)}")


def log_state_operation(
    operation: str,
    path: str,
    status: str,
    details: Optional[str] = None,
    error: Optional[str] = None,
) -> None:
    data = _payload(operation=operation, path=path, status=status, details=details, error=error)
    if error:
        # Corrupt state is recovered from, so it is a warning rather than an error
        logger.warning(f"STATE_FAILED: {data}")
        return
    logger.debug(f"STATE: {data}")


def log_event(event_type: str, message: str, **kwargs: Any) -> None:
    logger.info(f"EVENT: {_payload(event_type=event_type, message=message, **kwargs)}")
