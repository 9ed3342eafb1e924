"""
AI Logger - One JSON line per generation request and per response.

Importing this module also installs the console handler for the whole
"pabrik" logger tree; every module logs through
logging.getLogger("pabrik.<area>") and shares its format:

    [2024-06-01 10:00:00] INFO [pabrik.ai] AI Request: {"event": "ai_request", ...}

A request and its response carry the same request_id so they can be
paired in the log stream.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from app.ai.providers.base import AIResponse
from app.core.config import settings


LOG_FORMAT = "[%(asctime)s] %(levelname)s [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: int = logging.INFO) -> logging.Logger:
    """Attach a stdout handler to the "pabrik" logger once."""
    app_logger = logging.getLogger("pabrik")
    app_logger.setLevel(level)
    if not app_logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        app_logger.addHandler(handler)
    return app_logger


configure_logging(logging.DEBUG if settings.DEBUG else logging.INFO)

logger = logging.getLogger("pabrik.ai")


class AILogger:
    """
    Structured log lines around a text-generation call.

    Usage:
        ai_logger.log_request(request_id, user_prompt, "gemini", "gemini-2.5-flash",
                              metadata={"operation": "edit"})
        ai_logger.log_response(request_id, response, metadata={"operation": "edit"})
    """

    def __init__(self, target: Optional[logging.Logger] = None):
        self._logger = target or logger

    def _emit(self, level: int, label: str, record: Dict[str, Any], metadata: Optional[Dict[str, Any]]) -> None:
        record["timestamp"] = datetime.now(timezone.utc).isoformat()
        if metadata:
            record["metadata"] = metadata
        self._logger.log(level, f"{label}: {json.dumps(record, ensure_ascii=False)}")

    def log_request(
        self,
        request_id: str,
        prompt: str,
        provider: str,
        model: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Log an outgoing prompt. Only its length and a preview are written."""
        preview = prompt[:100] + "..." if len(prompt) > 100 else prompt
        self._emit(logging.INFO, "AI Request", {
            "event": "ai_request",
            "request_id": request_id,
            "provider": provider,
            "model": model,
            "prompt_length": len(prompt),
            "prompt_preview": preview,
        }, metadata)

    def log_response(
        self,
        request_id: str,
        response: AIResponse,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Log a generation result; failures go out at WARNING with the error."""
        record = {
            "event": "ai_response",
            "request_id": request_id,
            "provider": response.provider.value,
            "model": response.model,
            "success": response.success,
            "latency_ms": round(response.latency_ms, 2),
            "tokens": response.usage.total_tokens,
            "finish_reason": response.finish_reason,
            "response_length": len(response.content),
        }
        if not response.success:
            record["error"] = response.error

        level = logging.INFO if response.success else logging.WARNING
        self._emit(level, "AI Response", record, metadata)


ai_logger = AILogger()
