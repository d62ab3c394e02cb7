"""Root of the transcript-rag exception hierarchy.

``TranscriptRAGError`` records where it was raised and what caused it, so the
CLI and the API can render the same JSON error payload.
"""

import inspect
import traceback
from dataclasses import dataclass, field
from datetime import UTC, datetime
from types import FrameType
from typing import Any


@dataclass(frozen=True)
class RaiseSite:
    """The code location an error was raised from."""

    class_name: str
    method_name: str
    file_name: str
    line_number: int
    timestamp: str = field(default_factory=lambda: datetime.now(UTC).isoformat())

    @classmethod
    def from_frame(cls, frame: FrameType | None) -> "RaiseSite":
        if frame is None:
            return cls("<unknown>", "<unknown>", "<unknown>", 0)
        owner = frame.f_locals.get("self")
        return cls(
            class_name=type(owner).__name__ if owner is not None else "<module>",
            method_name=frame.f_code.co_name,
            file_name=frame.f_code.co_filename.replace("\\", "/").rsplit("/", 1)[-1],
            line_number=frame.f_lineno,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "class": self.class_name,
            "method": self.method_name,
            "file": self.file_name,
            "line": self.line_number,
            "timestamp": self.timestamp,
        }


class TranscriptRAGError(Exception):
    """Base class for every error the pipeline raises on purpose.

    Subclasses only override ``error_code``. ``context`` holds lookup keys
    (document ids, URLs, model names) and is exposed as ``extra_context``.
    """

    error_code: str = "TR_ERR_001"

    def __init__(
        self,
        message: str,
        *,
        cause: Exception | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.extra_context = context or {}
        self.location = RaiseSite.from_frame(self._raise_frame())
        self.stack_trace = self._format_cause(cause)

    def _raise_frame(self) -> FrameType | None:
        # Skip this helper and every __init__ in the subclass chain
        frame = inspect.currentframe()
        while frame is not None and frame.f_locals.get("self") is self:
            frame = frame.f_back
        return frame

    @staticmethod
    def _format_cause(cause: Exception | None) -> str | None:
        if cause is None or cause.__traceback__ is None:
            return None
        return "".join(traceback.format_exception(type(cause), cause, cause.__traceback__))

    def to_dict(self, include_trace: bool = False) -> dict[str, Any]:
        """Serialize for logs and API error bodies.

        ``include_trace`` adds the cause's traceback lines (debug mode only).
        """
        result: dict[str, Any] = {
            "error": {
                "type": type(self).__name__,
                "code": self.error_code,
                "message": self.message,
            },
            "location": self.location.to_dict(),
        }
        if self.extra_context:
            result["context"] = self.extra_context
        if include_trace and self.stack_trace:
            result["stack_trace"] = [line for line in self.stack_trace.splitlines() if line.strip()]
        if self.cause:
            result["cause"] = {"type": type(self.cause).__name__, "message": str(self.cause)}
        return result
