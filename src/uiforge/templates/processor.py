"""Template processor for generated code and reports.

A small, explicitly specified grammar:

- ``{{path.to.value}}`` substitutes a dotted-path lookup
- ``{{#each path}}...{{/each}}`` repeats its body once per element
- ``{{#if path}}...{{else}}...{{/if}}`` renders a branch on truthiness

Unresolved variable tokens are left verbatim so partial contexts still
produce inspectable output. Inside ``#each`` the element is the innermost
scope; lookups that miss fall back to enclosing scopes. ``this`` names the
current element and ``@index`` its position. A block tag alone on its line
consumes that line.

Rendering is stateless: parsed templates are cached as immutable trees.
"""

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Any

from uiforge.exceptions import TemplateSyntaxError

_TOKEN_RE = re.compile(r"\{\{\s*([#/]?)\s*([^{}]*?)\s*\}\}")
_STANDALONE_RE = re.compile(
    r"^[ \t]*(\{\{\s*(?:[#/][^{}]*?|else)\s*\}\})[ \t]*(?:\r?\n|\Z)",
    re.MULTILINE,
)
_BLOCK_HELPERS = {"each", "if"}


class _Missing:
    """Sentinel for unresolved lookups."""

    def __repr__(self) -> str:
        return "<missing>"


MISSING = _Missing()


# =============================================================================
# Syntax tree
# =============================================================================


@dataclass(frozen=True)
class TextNode:
    value: str


@dataclass(frozen=True)
class VariableNode:
    path: str
    raw: str


@dataclass(frozen=True)
class BlockNode:
    helper: str
    path: str
    body: tuple["Node", ...]
    alternate: tuple["Node", ...] = ()


Node = TextNode | VariableNode | BlockNode


@dataclass
class _OpenBlock:
    helper: str
    path: str
    body: list[Node]
    alternate: list[Node] | None = None

    @property
    def target(self) -> list[Node]:
        return self.alternate if self.alternate is not None else self.body


@lru_cache(maxsize=256)
def parse(template: str) -> tuple[Node, ...]:
    """Parse a template into an immutable node tree.

    Args:
        template: Template source

    Returns:
        Tuple of top-level nodes

    Raises:
        TemplateSyntaxError: On unknown helpers or unbalanced blocks
    """
    source = _STANDALONE_RE.sub(r"\1", template)

    root: list[Node] = []
    stack: list[_OpenBlock] = []

    def emit(node: Node) -> None:
        (stack[-1].target if stack else root).append(node)

    position = 0
    for match in _TOKEN_RE.finditer(source):
        if match.start() > position:
            emit(TextNode(source[position : match.start()]))
        position = match.end()

        marker, content = match.group(1), match.group(2)

        if marker == "#":
            helper, _, path = content.partition(" ")
            path = path.strip()
            if helper not in _BLOCK_HELPERS:
                raise TemplateSyntaxError(f"Unknown block helper: #{helper}")
            if not path:
                raise TemplateSyntaxError(f"Block #{helper} requires a path")
            stack.append(_OpenBlock(helper=helper, path=path, body=[]))
        elif marker == "/":
            if not stack:
                raise TemplateSyntaxError(f"Unexpected closing tag: /{content}")
            block = stack.pop()
            if content != block.helper:
                raise TemplateSyntaxError(
                    f"Mismatched closing tag: expected /{block.helper}, got /{content}"
                )
            emit(
                BlockNode(
                    helper=block.helper,
                    path=block.path,
                    body=tuple(block.body),
                    alternate=tuple(block.alternate or ()),
                )
            )
        elif content == "else":
            if not stack or stack[-1].helper != "if" or stack[-1].alternate is not None:
                raise TemplateSyntaxError("{{else}} is only valid once inside {{#if}}")
            stack[-1].alternate = []
        else:
            emit(VariableNode(path=content, raw=match.group(0)))

    if position < len(source):
        emit(TextNode(source[position:]))

    if stack:
        raise TemplateSyntaxError(f"Unclosed block: #{stack[-1].helper} {stack[-1].path}")

    return tuple(root)


# =============================================================================
# Lookup
# =============================================================================


@dataclass(frozen=True)
class _Frame:
    value: Any
    index: int | None = None


def _get(value: Any, key: str) -> Any:
    """Resolve one path segment against a value."""
    if isinstance(value, Mapping):
        if key in value:
            return value[key]
        if key == "length":
            return len(value)
        return MISSING
    if isinstance(value, str):
        return len(value) if key == "length" else MISSING
    if isinstance(value, Sequence):
        if key == "length":
            return len(value)
        if key.isdigit() and int(key) < len(value):
            return value[int(key)]
        return MISSING
    if key.startswith("_") or value is None:
        return MISSING
    return getattr(value, key, MISSING)


def _walk(value: Any, segments: list[str]) -> Any:
    for segment in segments:
        value = _get(value, segment)
        if value is MISSING:
            return MISSING
    return value


def _resolve(path: str, scopes: list[_Frame]) -> Any:
    """Resolve a dotted path against the scope chain (innermost first)."""
    if path == "@index":
        for frame in reversed(scopes):
            if frame.index is not None:
                return frame.index
        return MISSING

    segments = path.split(".")
    if segments[0] == "this":
        return _walk(scopes[-1].value, segments[1:])

    for frame in reversed(scopes):
        head = _get(frame.value, segments[0])
        if head is not MISSING:
            return _walk(head, segments[1:])
    return MISSING


def format_value(value: Any) -> str:
    """Convert a resolved value to template text."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, (list, tuple)):
        return ", ".join(format_value(v) for v in value)
    return str(value)


def _iterate(value: Any) -> list[Any]:
    if value is MISSING or value is None or isinstance(value, str):
        return []
    if isinstance(value, Mapping):
        return list(value.values())
    if isinstance(value, Sequence):
        return list(value)
    return []


def _truthy(value: Any) -> bool:
    return value is not MISSING and bool(value)


# =============================================================================
# Rendering
# =============================================================================


def _render_nodes(nodes: tuple[Node, ...], scopes: list[_Frame], out: list[str]) -> None:
    for node in nodes:
        if isinstance(node, TextNode):
            out.append(node.value)
        elif isinstance(node, VariableNode):
            value = _resolve(node.path, scopes)
            out.append(node.raw if value is MISSING else format_value(value))
        elif node.helper == "each":
            for index, item in enumerate(_iterate(_resolve(node.path, scopes))):
                scopes.append(_Frame(item, index))
                try:
                    _render_nodes(node.body, scopes, out)
                finally:
                    scopes.pop()
        elif _truthy(_resolve(node.path, scopes)):
            _render_nodes(node.body, scopes, out)
        else:
            _render_nodes(node.alternate, scopes, out)


def render(template: str, context: Mapping[str, Any]) -> str:
    """Render a template against a context mapping.

    Args:
        template: Template source
        context: Root data context

    Returns:
        Rendered text; unresolved tokens are kept verbatim

    Raises:
        TemplateSyntaxError: If the template is malformed
    """
    out: list[str] = []
    _render_nodes(parse(template), [_Frame(context)], out)
    return "".join(out)


class TemplateProcessor:
    """Object wrapper around :func:`render` for dependency injection.

    Usage:
        processor = TemplateProcessor()
        text = processor.render("Hello {{user.name}}", {"user": {"name": "Ada"}})
    """

    def render(self, template: str, context: Mapping[str, Any]) -> str:
        """Render a template against a context mapping."""
        return render(template, context)
