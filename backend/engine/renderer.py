"""
Placeholder and loop expansion for quote layouts.

Grammar inside section html/css:
  {{path}}                    dot path into the context, e.g. job.upliftCity
  {{#each path}}...{{/each}}  body repeated per element; {{this}} / {{this.x}} bind to it
  {{config.key}}              the section's own config map

Missing or null values render as "". Substituted values are HTML-escaped unless
the leaf key is in RAW_VALUE_KEYS, the path is under ``config.``, or the value is
wrapped in ``Trusted``. The template text itself is emitted verbatim.
"""
from __future__ import annotations

import html
import math
import re
from collections import ChainMap
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from functools import lru_cache
from typing import Any, Mapping, Optional, Sequence

from engine.pagination import DEFAULT_PAGE_SIZE, paginate
from models import LayoutConfig, RenderedLayout, RenderedSection, Section, SectionType

# Operator-controlled style and asset values; emitted without escaping.
RAW_VALUE_KEYS = frozenset({
    "logoUrl",
    "heroBannerUrl",
    "footerImageUrl",
    "primaryColor",
    "secondaryColor",
    "backgroundColor",
    "fontFamily",
    "maxWidth",
})

PAGINATED_COMPONENTS = {"InventoryTable": "inventory"}

_TOKEN_RE = re.compile(r"\{\{(.*?)\}\}", re.DOTALL)
_PATH_RE = re.compile(r"^[A-Za-z0-9_$@-]+(\.[A-Za-z0-9_$@-]+)*$")
_SINGLE_PLACEHOLDER_RE = re.compile(r"^\s*\{\{\s*([^{}#/]+?)\s*\}\}\s*$")
_EACH_RE = re.compile(r"^#each\s+(\S+)$")


class Trusted(str):
    """A context string that is already safe markup; never escaped."""
    __slots__ = ()


# --- Parse tree ---

@dataclass(frozen=True)
class _Text:
    text: str


@dataclass(frozen=True)
class _Var:
    path: str


@dataclass(frozen=True)
class _Each:
    path: str
    body: tuple
    open_tag: str


@lru_cache(maxsize=512)
def _parse(template: str) -> tuple:
    root: list = []
    # (open_tag, path, children) for each unclosed {{#each}}
    stack: list[tuple[str, str, list]] = []

    def current() -> list:
        return stack[-1][2] if stack else root

    pos = 0
    for m in _TOKEN_RE.finditer(template):
        if m.start() > pos:
            current().append(_Text(template[pos:m.start()]))
        pos = m.end()
        raw = m.group(0)
        inner = m.group(1).strip()
        each = _EACH_RE.match(inner)
        if each:
            if _PATH_RE.match(each.group(1)):
                stack.append((raw, each.group(1), []))
                continue
        elif inner == "/each":
            if stack:
                open_tag, path, children = stack.pop()
                current().append(_Each(path, tuple(children), open_tag))
                continue
        elif inner and _PATH_RE.match(inner):
            current().append(_Var(inner))
            continue
        current().append(_Text(raw))
    if pos < len(template):
        current().append(_Text(template[pos:]))

    # Unclosed blocks: keep the opening tag as text and splice the body in place.
    while stack:
        open_tag, _, children = stack.pop()
        current().extend([_Text(open_tag), *children])
    return tuple(root)


# --- Value lookup and formatting ---

_MISSING = object()


def _step(value: Any, key: str) -> Any:
    if isinstance(value, Mapping):
        return value.get(key, _MISSING)
    if isinstance(value, (list, tuple)) and key.isdigit():
        idx = int(key)
        return value[idx] if idx < len(value) else _MISSING
    return _MISSING


def lookup(context: Mapping[str, Any], path: str, scope: Sequence[Any] = ()) -> Any:
    """Resolve a dot path; ``this`` refers to the innermost loop element. Missing gives None."""
    parts = path.split(".")
    if parts[0] == "this":
        if not scope:
            return None
        value: Any = scope[-1]
        parts = parts[1:]
    else:
        value = context
    for part in parts:
        value = _step(value, part)
        if value is _MISSING or value is None:
            return None
    return value


def format_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            return ""
        return str(int(value)) if value.is_integer() else repr(value)
    if isinstance(value, Decimal):
        return format(value.normalize(), "f") if value == value.to_integral_value() else str(value)
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return ""


def _is_raw(path: str, value: Any) -> bool:
    if isinstance(value, Trusted):
        return True
    if path.startswith("config."):
        return True
    return path.rsplit(".", 1)[-1] in RAW_VALUE_KEYS


def _render_nodes(
    nodes: tuple,
    context: Mapping[str, Any],
    scope: tuple,
    escape: bool,
    out: list[str],
) -> None:
    for node in nodes:
        if isinstance(node, _Text):
            out.append(node.text)
        elif isinstance(node, _Var):
            value = lookup(context, node.path, scope)
            text = format_value(value)
            if escape and text and not _is_raw(node.path, value):
                text = html.escape(text, quote=True)
            out.append(text)
        else:
            items = lookup(context, node.path, scope)
            if not isinstance(items, (list, tuple)):
                continue
            for item in items:
                _render_nodes(node.body, context, scope + (item,), escape, out)


def render_template(template: Optional[str], context: Optional[Mapping[str, Any]], escape: bool = True) -> str:
    """Expand one template string. Never raises for missing data."""
    if not template:
        return ""
    out: list[str] = []
    _render_nodes(_parse(template), context or {}, (), escape, out)
    return "".join(out)


# --- Sections ---

def _resolve_props(value: Any, context: Mapping[str, Any]) -> Any:
    """Substitute placeholders through a built-in component's config, keeping value types."""
    if isinstance(value, Mapping):
        return {k: _resolve_props(v, context) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_resolve_props(v, context) for v in value]
    if isinstance(value, str):
        single = _SINGLE_PLACEHOLDER_RE.match(value)
        if single and _PATH_RE.match(single.group(1)):
            resolved = lookup(context, single.group(1))
            return "" if resolved is None else resolved
        if "{{" in value:
            return render_template(value, context, escape=False)
    return value


def _with_pagination(component: str, props: dict[str, Any], context: Mapping[str, Any]) -> dict[str, Any]:
    items_key = PAGINATED_COMPONENTS.get(component)
    if items_key is None:
        return props
    items = context.get(items_key)
    if not isinstance(items, (list, tuple)):
        items = []
    page_size = props.get("defaultPageSize", DEFAULT_PAGE_SIZE)
    state = paginate(len(items), context.get("inventoryCurrentPage", 1), page_size)
    props["pagination"] = state.as_props()
    props.setdefault("items", state.slice(items))
    return props


def render_section(section: Section, context: Mapping[str, Any]) -> RenderedSection:
    if section.type == SectionType.BUILT_IN:
        props = _resolve_props(section.config or {}, context)
        props = _with_pagination(section.component or "", props, context)
        return RenderedSection(
            id=section.id,
            label=section.label,
            type=section.type,
            component=section.component,
            props=props,
        )
    scoped: Mapping[str, Any] = context
    if section.config is not None:
        scoped = ChainMap({"config": section.config}, context)
    return RenderedSection(
        id=section.id,
        label=section.label,
        type=section.type,
        html=render_template(section.html, scoped),
        css=render_template(section.css, scoped) if section.css else None,
    )


def render_layout(config: LayoutConfig, context: Optional[Mapping[str, Any]]) -> RenderedLayout:
    """Render every visible section in order. Pure: the same inputs give byte-identical output."""
    ctx: Mapping[str, Any] = context or {}
    return RenderedLayout(
        global_styles=dict(config.global_styles),
        sections=[render_section(s, ctx) for s in config.sections if s.visible],
    )
