"""Left-to-right tokenizer for ``{{...}}`` placeholders.

A tag starts at ``{{`` and ends at the next ``}}``; its kind is decided by
the prefix of the text in between. Text that does not form a tag is never
reported, so callers copy it through untouched.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Collection, Iterator

OPEN = "{{"
CLOSE = "}}"

IF_OPEN = "if_open"
IF_CLOSE = "if_close"
EACH_OPEN = "each_open"
EACH_CLOSE = "each_close"
INCLUDE = "include"
FUNCTION = "function"
VARIABLE = "variable"

_PREFIXES = (
    ("#if_", IF_OPEN),
    ("/if_", IF_CLOSE),
    ("#each_", EACH_OPEN),
    ("/each_", EACH_CLOSE),
    ("include:", INCLUDE),
    ("function:", FUNCTION),
)


@dataclass(frozen=True)
class Tag:
    """A recognised placeholder and its position in the source text."""

    kind: str
    name: str
    start: int
    end: int
    args: str = ""


def classify(body: str, start: int, end: int) -> Tag:
    """Classify the text between ``{{`` and ``}}``.

    Prefixed tags with an empty name fall back to plain variables, which
    only change the output when a variable of that exact name exists.
    """
    for prefix, kind in _PREFIXES:
        if not body.startswith(prefix):
            continue
        rest = body[len(prefix) :]
        if kind == FUNCTION:
            name, _, args = rest.partition(":")
            if name:
                return Tag(FUNCTION, name, start, end, args)
        elif rest:
            return Tag(kind, rest, start, end)
        break
    return Tag(VARIABLE, body, start, end)


def next_tag(
    text: str, pos: int = 0, kinds: Collection[str] | None = None
) -> Tag | None:
    """Find the first tag at or after ``pos``, optionally limited to ``kinds``.

    When a candidate tag has another kind, scanning resumes one character
    after its opening braces, so tags nested inside its body are still seen.
    """
    while True:
        start = text.find(OPEN, pos)
        if start < 0:
            return None
        stop = text.find(CLOSE, start + len(OPEN))
        if stop < 0:
            return None
        tag = classify(text[start + len(OPEN) : stop], start, stop + len(CLOSE))
        if kinds is None or tag.kind in kinds:
            return tag
        pos = start + 1


def iter_tags(text: str, kinds: Collection[str] | None = None) -> Iterator[Tag]:
    """Yield non-overlapping tags of ``kinds`` in document order."""
    pos = 0
    while True:
        tag = next_tag(text, pos, kinds)
        if tag is None:
            return
        yield tag
        pos = tag.end


def closing_token(tag: Tag) -> str:
    """Return the literal close tag matching a block-opening tag."""
    if tag.kind == IF_OPEN:
        return f"{OPEN}/if_{tag.name}{CLOSE}"
    if tag.kind == EACH_OPEN:
        return f"{OPEN}/each_{tag.name}{CLOSE}"
    raise ValueError(f"Not a block-opening tag: {tag.kind}")
