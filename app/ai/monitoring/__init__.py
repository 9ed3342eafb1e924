"""
Monitoring Module - Structured logging for AI operations.

Usage:
======
    from app.ai.monitoring import ai_logger

    ai_logger.log_request(request_id, prompt, provider, model)
    ai_logger.log_response(request_id, response)
"""

from app.ai.monitoring.logger import AILogger, ai_logger

__all__ = [
    "AILogger",
    "ai_logger",
]
