from __future__ import annotations

import logging

from ..engine.errors import (
    IllegalMove,
    InvalidColour,
    InvalidCoordinate,
    InvalidLayout,
    InvalidMove,
    UnknownAgent,
)


logger = logging.getLogger(__name__)


class BridgeError(Exception):
    """Protocol-level failure with an explicit reply code."""

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


def error_line(*, code: str, message: str) -> str:
    # keep replies on one line
    flat = " ".join(message.split())
    return f"error {code} {flat}" if flat else f"error {code}"


def exception_line(exc: Exception) -> str:
    """Render ``exc`` as an ``error`` reply, logging anything unexpected."""
    if isinstance(exc, BridgeError):
        return error_line(code=exc.code, message=exc.message)
    code = _exception_to_code(exc)
    if code == "internal_error":
        logger.exception("Unhandled exception in bridge")
        return error_line(code=code, message="internal error")
    return error_line(code=code, message=str(exc))


def _exception_to_code(exc: Exception) -> str:
    if isinstance(exc, InvalidColour):
        return "invalid_colour"
    if isinstance(exc, InvalidMove):
        return "invalid_move"
    if isinstance(exc, InvalidCoordinate):
        return "invalid_coordinate"
    if isinstance(exc, IllegalMove):
        return "illegal_move"
    if isinstance(exc, InvalidLayout):
        return "invalid_layout"
    if isinstance(exc, UnknownAgent):
        return "unknown_agent"
    return "internal_error"
