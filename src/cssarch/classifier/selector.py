"""Selector analysis: split selector lists into compounds and inspect them.

Only the structure the architecture checks need is recovered: type
selectors, classes, ids, attribute names and pseudo-classes per compound,
and the combinators between compounds. Anything inside ``()``, ``[]`` or
quotes is never split on.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache

__all__ = [
    "Compound",
    "ComplexSelector",
    "parse_selector",
    "split_selector_list",
    "var_references",
    "property_family",
]

_COMBINATOR_CHARS = ">+~"

_TOKEN_RE = re.compile(
    r"""
    (?P<cls>\.(?P<cname>(?:\\.|[\w-])+))                    # .class
    | (?P<id>\#(?P<iname>(?:\\.|[\w-])+))                   # #id
    | (?P<attr>\[\s*(?:[\w-]*\|)?(?P<aname>[\w-]+)[^\]]*\]) # [attr...]
    | (?P<pseudo>::?(?P<pname>[\w-]+)                       # :pseudo or ::pseudo
        (?:\((?:[^()]|\([^()]*\))*\))?)                     #   optional (args)
    | (?P<elem>\*|[A-Za-z][\w-]*)                           # element or *
    """,
    re.VERBOSE,
)

_VAR_RE = re.compile(r"var\(\s*(--[\w-]+)")

_VENDOR_RE = re.compile(r"^-(?:webkit|moz|ms|o)-")


@dataclass(frozen=True)
class Compound:
    """One compound selector, e.g. ``a.card[data-state]:hover``.

    ``recognized`` is False when the text holds tokens the analysis does
    not understand (the nesting selector ``&``, stray characters).
    """

    text: str
    element: str | None = None
    classes: tuple[str, ...] = ()
    ids: tuple[str, ...] = ()
    attributes: tuple[str, ...] = ()
    pseudos: tuple[str, ...] = ()
    recognized: bool = True

    @property
    def is_root(self) -> bool:
        return ":root" in self.pseudos or self.element == "html"

    @property
    def data_attributes(self) -> tuple[str, ...]:
        return tuple(a for a in self.attributes if a.startswith("data-"))

    @property
    def has_functional_pseudo(self) -> bool:
        return any("(" in p for p in self.pseudos)


@dataclass(frozen=True)
class ComplexSelector:
    """A selector without top-level commas: compounds joined by combinators."""

    text: str
    compounds: tuple[Compound, ...]
    combinators: tuple[str, ...] = ()

    @property
    def base(self) -> Compound:
        return self.compounds[0]

    @property
    def base_class(self) -> str | None:
        """The first class of the leading compound, if any."""
        classes = self.base.classes
        return classes[0] if classes else None

    @property
    def has_combinator(self) -> bool:
        return len(self.compounds) > 1

    @property
    def recognized(self) -> bool:
        return bool(self.compounds) and all(c.recognized for c in self.compounds)


def split_selector_list(text: str) -> list[str]:
    """Split ``a, .b > c`` on top-level commas."""
    parts: list[str] = []
    buf: list[str] = []
    depth = 0
    quote: str | None = None
    escaped = False
    for ch in text:
        if escaped:
            buf.append(ch)
            escaped = False
            continue
        if ch == "\\":
            buf.append(ch)
            escaped = True
            continue
        if quote:
            buf.append(ch)
            if ch == quote:
                quote = None
            continue
        if ch in "\"'":
            quote = ch
        elif ch in "([":
            depth += 1
        elif ch in ")]":
            depth = max(0, depth - 1)
        elif ch == "," and depth == 0:
            parts.append("".join(buf).strip())
            buf = []
            continue
        buf.append(ch)
    parts.append("".join(buf).strip())
    return [p for p in parts if p]


def _split_compounds(text: str) -> tuple[list[str], list[str]]:
    """Split a complex selector into compound texts and combinators.

    A leading combinator (relative selector) yields an empty first compound.
    """
    compounds: list[str] = []
    combinators: list[str] = []
    buf: list[str] = []
    pending: str | None = None
    depth = 0
    quote: str | None = None
    escaped = False

    def flush() -> None:
        nonlocal buf
        if buf:
            compounds.append("".join(buf))
            buf = []

    for ch in text:
        if escaped or quote or depth > 0 or ch == "\\" or ch in "\"'([":
            pass
        elif ch.isspace() or ch in _COMBINATOR_CHARS:
            flush()
            if ch in _COMBINATOR_CHARS:
                pending = ch
            elif pending is None:
                pending = " "
            continue

        if pending is not None:
            if not compounds:
                # Relative selector such as "> .child".
                compounds.append("")
            combinators.append(pending)
            pending = None

        buf.append(ch)
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
    flush()
    return compounds, combinators


def _parse_compound(text: str) -> Compound:
    if not text:
        return Compound(text="", recognized=False)
    element: str | None = None
    classes: list[str] = []
    ids: list[str] = []
    attributes: list[str] = []
    pseudos: list[str] = []
    recognized = True
    pos = 0
    for match in _TOKEN_RE.finditer(text):
        if match.start() != pos:
            recognized = False
        pos = match.end()
        if match.group("cls"):
            classes.append(match.group("cname").replace("\\", ""))
        elif match.group("id"):
            ids.append(match.group("iname"))
        elif match.group("attr"):
            attributes.append(match.group("aname").lower())
        elif match.group("pseudo"):
            pseudo = match.group("pseudo")
            prefix = "::" if pseudo.startswith("::") else ":"
            name = match.group("pname")
            args = pseudo[len(prefix) + len(name):]
            pseudos.append(prefix + name.lower() + args)
        elif match.group("elem"):
            if element is not None or classes or ids or attributes or pseudos:
                recognized = False
            element = match.group("elem").lower()
    if pos != len(text):
        recognized = False
    return Compound(
        text=text,
        element=element,
        classes=tuple(classes),
        ids=tuple(ids),
        attributes=tuple(attributes),
        pseudos=tuple(pseudos),
        recognized=recognized,
    )


@lru_cache(maxsize=4096)
def parse_selector(text: str) -> ComplexSelector:
    """Parse a single complex selector (no top-level commas)."""
    text = text.strip()
    compound_texts, combinators = _split_compounds(text)
    compounds = tuple(_parse_compound(c) for c in compound_texts)
    return ComplexSelector(text=text, compounds=compounds, combinators=tuple(combinators))


def var_references(value: str) -> tuple[str, ...]:
    """Custom property names read via ``var()`` in a declaration value.

    Nested references (``calc()``, fallbacks) are included, in order.
    """
    return tuple(_VAR_RE.findall(value))


def property_family(name: str) -> str:
    """The family a property belongs to: ``padding-inline`` -> ``padding``.

    Vendor prefixes are dropped; custom properties use their first segment.
    """
    if name.startswith("--"):
        stem = name[2:].lstrip("_")
    else:
        stem = _VENDOR_RE.sub("", name.lower())
    return stem.split("-", 1)[0]
