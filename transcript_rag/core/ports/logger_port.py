"""Logging port injected into services.

``logging.Logger`` satisfies this protocol, so services default to their
module logger and tests may pass any recorder with the same methods.
"""

from typing import Any, Protocol


class LoggerPort(Protocol):
    """Minimal logging interface used by the core services."""

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None: ...

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None: ...

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None: ...

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None: ...
