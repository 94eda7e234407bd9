from __future__ import annotations

"""
Python Log Call Processor.

Walks the Abstract Syntax Tree of Python sources and reports every compacted
log call to a visitor. A log call has the shape

    ProtoLog.d(ProtoLogGroup.WM_DEBUG, "message %d", value)

where the method name selects the level and the first two arguments name the
owning group and the constant message template.
"""

import ast
import logging
from typing import List, Mapping, Optional, Tuple

from compactlog.core.visitor import CallProcessor, CallVisitor
from compactlog.domain.errors import InvalidCallSiteError
from compactlog.domain.log_level import LogLevel
from compactlog.domain.models import CallSite, LogGroup, SourceUnit

logger = logging.getLogger(__name__)

METHOD_LEVELS: Mapping[str, LogLevel] = {
    "v": LogLevel.VERBOSE,
    "d": LogLevel.DEBUG,
    "i": LogLevel.INFO,
    "w": LogLevel.WARN,
    "e": LogLevel.ERROR,
    "wtf": LogLevel.WTF,
}


class PythonCallProcessor(CallProcessor):
    """
    CallProcessor implementation backed by the stdlib ``ast`` module.

    Args:
        groups: Known log groups keyed by name.
        protolog_class: Name of the logging facade whose methods are compacted.
        group_class: Name of the class holding the group constants.
    """

    def __init__(
            self,
            groups: Mapping[str, LogGroup],
            protolog_class: str = "ProtoLog",
            group_class: str = "ProtoLogGroup",
    ) -> None:
        self._groups = dict(groups)
        self._protolog_class = protolog_class
        self._group_class = group_class

    def process(self, unit: SourceUnit, visitor: CallVisitor) -> None:
        """
        Parse the unit and report its log calls in source order.

        Raises:
            SyntaxError: If the unit is not valid Python.
            InvalidCallSiteError: If a log call cannot be compacted.
        """
        tree = ast.parse(unit.source, filename=unit.path)

        calls: List[Tuple[ast.Call, LogLevel]] = []
        for node in ast.walk(tree):
            if isinstance(node, ast.Call):
                level = self._match_level(node)
                if level is not None:
                    calls.append((node, level))

        calls.sort(key=lambda item: (item[0].lineno, item[0].col_offset))
        logger.debug(f"{unit.path}: {len(calls)} log calls found")

        for node, level in calls:
            call_site = CallSite(unit.path, node.lineno, node.col_offset)
            if len(node.args) < 2:
                raise InvalidCallSiteError(
                    "log call requires a group and a message argument", call_site
                )
            group = self._resolve_group(node.args[0], call_site)
            message = self._resolve_message(node.args[1], call_site)
            visitor.on_call_discovered(call_site, message, level, group)

    # -------------------------------------------------------------------------
    # PRIVATE HELPERS
    # -------------------------------------------------------------------------

    def _match_level(self, node: ast.Call) -> Optional[LogLevel]:
        func = node.func
        if not isinstance(func, ast.Attribute) or func.attr not in METHOD_LEVELS:
            return None
        if not _names_class(_dotted_name(func.value), self._protolog_class):
            return None
        return METHOD_LEVELS[func.attr]

    def _resolve_group(self, expr: ast.expr, call_site: CallSite) -> LogGroup:
        if isinstance(expr, ast.Attribute) and _names_class(_dotted_name(expr.value), self._group_class):
            name = expr.attr
        elif isinstance(expr, ast.Name):
            name = expr.id
        else:
            raise InvalidCallSiteError(
                f"first argument must reference a {self._group_class} constant", call_site
            )

        group = self._groups.get(name)
        if group is None:
            raise InvalidCallSiteError(f"unknown log group '{name}'", call_site)
        return group

    @staticmethod
    def _resolve_message(expr: ast.expr, call_site: CallSite) -> str:
        message = _constant_string(expr)
        if message is None:
            raise InvalidCallSiteError("message must be a constant string", call_site)
        return message


def _dotted_name(expr: ast.expr) -> Optional[str]:
    """Flatten ``a.b.c`` attribute chains; None for anything else."""
    if isinstance(expr, ast.Name):
        return expr.id
    if isinstance(expr, ast.Attribute):
        owner = _dotted_name(expr.value)
        return f"{owner}.{expr.attr}" if owner else None
    return None


def _names_class(dotted: Optional[str], class_name: str) -> bool:
    if not dotted:
        return False
    return dotted == class_name or dotted.endswith("." + class_name)


def _constant_string(expr: ast.expr) -> Optional[str]:
    """Evaluate string constants and their '+' concatenations."""
    if isinstance(expr, ast.Constant) and isinstance(expr.value, str):
        return expr.value
    if isinstance(expr, ast.BinOp) and isinstance(expr.op, ast.Add):
        left = _constant_string(expr.left)
        right = _constant_string(expr.right)
        if left is not None and right is not None:
            return left + right
    return None
