"""Protocol for deprecation sinks.

The engine emits notices; the host decides whether they warn, log, raise or
vanish by choosing the sink.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from resprops.deprecation.models import DeprecationNotice


@runtime_checkable
class DeprecationSink(Protocol):
    """Receives deprecation notices from the engine.

    Usage:
        class CollectingSink:
            def __init__(self) -> None:
                self.notices = []

            def emit(self, notice: DeprecationNotice) -> None:
                self.notices.append(notice)

        set_deprecation_sink(CollectingSink())
    """

    def emit(self, notice: DeprecationNotice) -> None:
        """Handle one notice.

        Args:
            notice: The notice to report.

        Raises:
            DeprecatedFeatureError: Escalating sinks raise instead of reporting.
        """
        ...
