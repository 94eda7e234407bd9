from __future__ import annotations

"""
Call-Site Source Contracts.

Narrow interfaces between a source of discovered log calls (an AST walker,
a test double, ...) and the consumer that accumulates them.
"""

from abc import ABC, abstractmethod

from compactlog.domain.log_level import LogLevel
from compactlog.domain.models import CallSite, LogGroup, SourceUnit


class CallVisitor(ABC):
    """Receives every log call discovered in a compilation unit."""

    @abstractmethod
    def on_call_discovered(
            self,
            call_site: CallSite,
            message: str,
            level: LogLevel,
            group: LogGroup,
    ) -> None:
        """
        Handle a single discovered call.

        Args:
            call_site: Opaque location handle of the call.
            message: Message template passed to the call.
            level: Severity implied by the logging method.
            group: Group descriptor owning the call.
        """


class CallProcessor(ABC):
    """Walks a compilation unit and reports log calls to a visitor."""

    @abstractmethod
    def process(self, unit: SourceUnit, visitor: CallVisitor) -> None:
        """
        Invoke ``visitor.on_call_discovered`` once per call, in discovery order.

        Args:
            unit: Compilation unit to inspect.
            visitor: Consumer of discovered calls.
        """
