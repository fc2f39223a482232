# Copyright (c) 2024 Fernando Libedinsky
# Product: SearchToolkit
#
# SearchToolkit is open source software.

"""
Declarative rendering of provider responses into plain text.

A provider describes its output as a Layout: an ordered tuple of Field and
ListSection parts. Every value is optional; a part whose path does not
resolve, or whose value has the wrong type, renders nothing. The rendered
lines are joined with newlines, so a template may span several lines.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union


Path = tuple[Union[str, int], ...]
Formatter = Callable[[Any], Optional[str]]


# ------------------------------------------------------------------
# Value formatters: return the text to insert, or None to skip the line
# ------------------------------------------------------------------

def as_string(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def as_nonempty_string(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


def as_integer(value: Any) -> str | None:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return str(value)


def as_string_or_integer(value: Any) -> str | None:
    return as_string(value) if isinstance(value, str) else as_integer(value)


def as_cost(value: Any) -> str | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return f"{value:.4f}"


def as_present(value: Any) -> str | None:
    # guard for sections that only need an object to exist
    return "" if isinstance(value, Mapping) else None


def as_duckduckgo_url(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    # only site-relative paths get the host; absolute URLs are kept as given
    if value.startswith("/"):
        return f"https://duckduckgo.com{value}"
    return value


def resolve(data: Any, path: Path) -> Any:
    current = data
    for segment in path:
        if isinstance(segment, int):
            if not isinstance(current, list) or not -len(current) <= segment < len(current):
                return None
            current = current[segment]
        else:
            if not isinstance(current, Mapping):
                return None
            current = current.get(segment)
    return current


@dataclass(frozen=True)
class Field:
    """
    One line (or block) driven by a single value.

    `template` is formatted with `value`, the item `index` when rendered inside
    a list, and the layout context. `details` render right after this field,
    against the same object, and only when this field rendered.
    """
    path: Path
    template: str = "{value}"
    kind: Formatter = as_string
    details: tuple["Part", ...] = ()


@dataclass(frozen=True)
class Line:
    """A constant line, typically a blank separator inside `details`."""
    text: str = ""


@dataclass(frozen=True)
class ListSection:
    path: Path
    heading: tuple[str, ...] = ()
    item_header: Optional[str] = None
    fields: tuple["Part", ...] = ()
    item_footer: tuple[str, ...] = ("",)
    footer: tuple[str, ...] = ()
    limit: Optional[int] = None
    placeholder: Optional[str] = None


Part = Union[Field, Line, ListSection]


@dataclass(frozen=True)
class Layout:
    parts: tuple[Part, ...]
    placeholder: Optional[str] = None

    def render(self, data: Any, context: Mapping[str, Any] | None = None) -> str:
        lines = render_parts(self.parts, data, dict(context or {}))
        if not lines and self.placeholder is not None:
            lines = [self.placeholder]
        return "\n".join(lines)


def render_parts(parts: tuple[Part, ...], data: Any, context: dict[str, Any]) -> list[str]:
    lines: list[str] = []
    for part in parts:
        if isinstance(part, Line):
            lines.append(part.text)
        elif isinstance(part, Field):
            lines.extend(_render_field(part, data, context))
        else:
            lines.extend(_render_list(part, data, context))
    return lines


def _render_field(field: Field, data: Any, context: dict[str, Any]) -> list[str]:
    text = field.kind(resolve(data, field.path))
    if text is None:
        return []
    return [field.template.format(value=text, **context)] + render_parts(field.details, data, context)


def _render_list(section: ListSection, data: Any, context: dict[str, Any]) -> list[str]:
    items = resolve(data, section.path)
    if not isinstance(items, list) or not items:
        return [section.placeholder] if section.placeholder is not None else []

    if section.limit is not None:
        items = items[:section.limit]

    lines = list(section.heading)
    for index, item in enumerate(items, start=1):
        item_context = {**context, "index": index}
        if section.item_header is not None:
            lines.append(section.item_header.format(**item_context))
        lines.extend(render_parts(section.fields, item, item_context))
        lines.extend(section.item_footer)
    lines.extend(section.footer)
    return lines
