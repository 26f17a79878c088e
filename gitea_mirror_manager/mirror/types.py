"""Type hints for the mirror module."""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class MirrorLogger(Protocol):
    """Logging collaborator injected into every mirroring component.

    A bound structlog logger satisfies this protocol.
    """

    def info(self, event: str, *args: Any, **kwargs: Any) -> Any: ...

    def warning(self, event: str, *args: Any, **kwargs: Any) -> Any: ...

    def error(self, event: str, *args: Any, **kwargs: Any) -> Any: ...
