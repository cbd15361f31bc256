"""Lark Transformer that converts a CSS parse tree into a StylesheetModel."""

from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path

from lark import Lark, Token, Transformer
from lark.exceptions import LarkError

from cssarch.model.stylesheet import Declaration, SourceLocation, StyleRule, StylesheetModel
from cssarch.parser.errors import ParseError

GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"

_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
_IMPORTANT_RE = re.compile(r"\s*!\s*important\s*$", re.IGNORECASE)

# At-rules whose blocks hold keyframe selectors rather than style rules.
_SKIPPED_AT_RULES = frozenset({
    "@keyframes",
    "@-webkit-keyframes",
    "@-moz-keyframes",
    "@-o-keyframes",
})


def _strip_comments(source: str) -> str:
    """Blank out comments, keeping every line and column in place."""
    return _COMMENT_RE.sub(lambda m: re.sub(r"[^\n]", " ", m.group(0)), source)


def _position(body: Token, offset: int) -> SourceLocation:
    """Location of *offset* characters into a BODY token."""
    text = str(body)
    newlines = text.count("\n", 0, offset)
    if newlines == 0:
        return SourceLocation(line=body.line, column=body.column + offset)
    last = text.rfind("\n", 0, offset)
    return SourceLocation(line=body.line + newlines, column=offset - last)


def _split_declarations(text: str) -> list[tuple[int, str]]:
    """Split a block body on top-level semicolons, keeping start offsets."""
    chunks: list[tuple[int, str]] = []
    start = 0
    depth = 0
    quote: str | None = None
    escaped = False
    for i, ch in enumerate(text):
        if escaped:
            escaped = False
        elif ch == "\\":
            escaped = True
        elif quote:
            if ch == quote:
                quote = None
        elif ch in "\"'":
            quote = ch
        elif ch in "([":
            depth += 1
        elif ch in ")]":
            depth = max(0, depth - 1)
        elif ch == ";" and depth == 0:
            chunks.append((start, text[start:i]))
            start = i + 1
    chunks.append((start, text[start:]))
    return chunks


def _parse_declarations(body: Token | None) -> tuple[Declaration, ...]:
    if body is None:
        return ()
    text = str(body)
    declarations: list[Declaration] = []
    for start, chunk in _split_declarations(text):
        if ":" not in chunk:
            continue
        stripped = chunk.lstrip()
        offset = start + (len(chunk) - len(stripped))
        name, _, value = stripped.partition(":")
        name = name.strip()
        if not name:
            continue
        if not name.startswith("--"):
            name = name.lower()
        value = value.strip()
        important = bool(_IMPORTANT_RE.search(value))
        if important:
            value = _IMPORTANT_RE.sub("", value)
        declarations.append(
            Declaration(
                property=name,
                value=value,
                important=important,
                location=_position(body, offset),
            )
        )
    return tuple(declarations)


class _Sentinel:
    """Marker objects returned by transformer rules before layers are resolved."""


class _RuleSet(_Sentinel):
    def __init__(self, prelude: Token, body: Token | None):
        self.prelude = prelude
        self.body = body


class _LayerBlock(_Sentinel):
    def __init__(self, name: str | None, items: list[_Sentinel]):
        self.name = name
        self.items = items


class _AtBlock(_Sentinel):
    def __init__(self, keyword: str, items: list[_Sentinel]):
        self.keyword = keyword
        self.items = items


def _sentinels(items: list[object]) -> list[_Sentinel]:
    return [item for item in items if isinstance(item, _Sentinel)]


class CssTransformer(Transformer):  # type: ignore[type-arg]
    """Transform a Lark parse tree into intermediate sentinel objects."""

    def rule_set(self, items: list[Token]) -> _RuleSet:
        body = items[1] if len(items) > 1 else None
        return _RuleSet(items[0], body)

    def layer_block(self, items: list[object]) -> _LayerBlock:
        name: str | None = None
        if items and isinstance(items[0], Token) and items[0].type == "LAYER_NAME":
            name = str(items[0])
        return _LayerBlock(name, _sentinels(items))

    def layer_statement(self, items: list[Token]) -> None:
        return None

    def descriptor_block(self, items: list[Token]) -> None:
        return None

    def at_block(self, items: list[object]) -> _AtBlock:
        return _AtBlock(str(items[0]).lower(), _sentinels(items))

    def at_statement(self, items: list[Token]) -> None:
        return None

    def start(self, items: list[object]) -> list[_Sentinel]:
        return _sentinels(items)


def _collect(items: list[_Sentinel], layer: str | None, rules: list[StyleRule]) -> None:
    """Flatten nested blocks into rules, tracking the enclosing layer name."""
    for item in items:
        if isinstance(item, _RuleSet):
            rules.append(
                StyleRule(
                    selector=" ".join(str(item.prelude).split()),
                    declarations=_parse_declarations(item.body),
                    location=SourceLocation(line=item.prelude.line, column=item.prelude.column),
                    layer=layer,
                )
            )
        elif isinstance(item, _LayerBlock):
            nested = layer
            if item.name:
                nested = f"{layer}.{item.name}" if layer else item.name
            _collect(item.items, nested, rules)
        elif isinstance(item, _AtBlock):
            if item.keyword in _SKIPPED_AT_RULES:
                continue
            # @media, @supports, @container and friends are transparent.
            _collect(item.items, layer, rules)


@lru_cache(maxsize=1)
def _parser() -> Lark:
    return Lark(
        GRAMMAR_PATH.read_text(encoding="utf-8"),
        parser="lalr",
        start="start",
    )


def parse_css(source: str, source_name: str | None = None) -> StylesheetModel:
    """Parse CSS source into a StylesheetModel with rules in source order."""
    try:
        tree = _parser().parse(_strip_comments(source))
    except LarkError as e:
        line = getattr(e, "line", None)
        column = getattr(e, "column", None)
        # Lark reports -1 for positions at end of input.
        if line is not None and line < 1:
            line = column = None
        raise ParseError(str(e), line=line, column=column) from e
    items = CssTransformer().transform(tree)
    rules: list[StyleRule] = []
    _collect(items, None, rules)
    return StylesheetModel(rules=tuple(rules), source=source_name)


def load_stylesheet(path: str | Path) -> StylesheetModel:
    """Read and parse a CSS file; the model's source is the path as given."""
    css_path = Path(path)
    try:
        source = css_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ParseError(f"{css_path} is not valid UTF-8: {e.reason} at byte {e.start}") from e
    return parse_css(source, source_name=str(css_path))
