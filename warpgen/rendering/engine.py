"""Template processing engine.

Runs a template through a fixed sequence of passes: conditional blocks,
includes, loops, functions, and finally variable substitution. Each pass is
a left-to-right scan; anomalies are collected as diagnostics and never
abort processing.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..core.exceptions import (
    IncludeCycleError,
    IncludeNotFoundError,
    ParseError,
    RecoverableError,
    TemplateNotFoundError,
    UnknownFunctionError,
)
from ..core.models import Diagnostic, RenderResult
from ..environment.conditions import evaluate
from ..environment.store import VariableStore
from . import functions
from .io import read_text
from .scanner import EACH_OPEN, FUNCTION, IF_OPEN, INCLUDE, VARIABLE
from .scanner import closing_token, iter_tags, next_tag

logger = logging.getLogger(__name__)


class _Pass:
    """Per-document processing state shared by the passes."""

    def __init__(self, store: VariableStore, base_dir: Path, source: Path | None):
        self.store = store
        self.base_dir = base_dir
        self.source = source
        self.diagnostics: list[Diagnostic] = []

    def record(self, error: RecoverableError) -> None:
        logger.warning(error.message)
        self.diagnostics.append(Diagnostic.from_error(error))


def expand_conditionals(text: str, store: VariableStore) -> str:
    """Replace each ``{{#if_C}}BODY{{/if_C}}`` with BODY or nothing.

    The close tag must repeat the condition name. An opening tag without a
    matching close is left in place. Blocks do not nest; a kept BODY is
    rescanned, so later sibling blocks inside it are still resolved.
    """
    pos = 0
    while True:
        tag = next_tag(text, pos, (IF_OPEN,))
        if tag is None:
            return text

        close = closing_token(tag)
        close_start = text.find(close, tag.end)
        if close_start < 0:
            logger.debug(f"Unterminated conditional block: {tag.name}")
            pos = tag.end
            continue

        body = text[tag.end : close_start] if evaluate(tag.name, store) else ""
        text = text[: tag.start] + body + text[close_start + len(close) :]
        pos = tag.start


def _expand_includes(text: str, state: _Pass, chain: tuple[Path, ...]) -> str:
    parts: list[str] = []
    pos = 0
    for tag in iter_tags(text, (INCLUDE,)):
        parts.append(text[pos : tag.start])
        pos = tag.end

        include_path = state.base_dir / tag.name
        key = include_path.resolve()
        if key in chain:
            state.record(
                IncludeCycleError(f"Include cycle at: {include_path}", state.source)
            )
            continue
        try:
            content = read_text(include_path)
        except (OSError, UnicodeDecodeError):
            state.record(
                IncludeNotFoundError(
                    f"Include template not found: {include_path}", state.source
                )
            )
            continue
        parts.append(_expand_includes(content, state, chain + (key,)))

    parts.append(text[pos:])
    return "".join(parts)


def expand_includes(text: str, state: _Pass) -> str:
    """Splice ``{{include:NAME}}`` files, resolved against the template directory.

    Spliced text is raw: only its own include tokens are expanded here, the
    remaining passes see it together with the rest of the document.
    """
    chain = (state.source.resolve(),) if state.source is not None else ()
    return _expand_includes(text, state, chain)


def expand_loops(text: str) -> str:
    """Loop blocks are recognised but not expanded."""
    tag = next_tag(text, 0, (EACH_OPEN,))
    if tag is not None:
        logger.debug(f"Loop block '{tag.name}' left unexpanded")
    return text


def expand_functions(text: str, state: _Pass) -> str:
    """Replace ``{{function:NAME:ARGS}}`` with the function result.

    Unlike conditionals and includes, which are expanded until none remain,
    this is a single pass: results are inserted as-is and not scanned again,
    so a result that looks like a function tag stays literal.
    """
    parts: list[str] = []
    pos = 0
    for tag in iter_tags(text, (FUNCTION,)):
        parts.append(text[pos : tag.start])
        pos = tag.end
        result = functions.call(tag.name, tag.args)
        if result is None:
            state.record(
                UnknownFunctionError(
                    f"Unknown template function: {tag.name}", state.source
                )
            )
            result = ""
        parts.append(result)

    parts.append(text[pos:])
    return "".join(parts)


def substitute(text: str, store: VariableStore) -> str:
    """Replace ``{{KEY}}`` with the value of every key in the store.

    Values are inserted verbatim and never interpreted as template syntax.
    Tokens naming absent variables are left untouched.
    """
    parts: list[str] = []
    copied = pos = 0
    while True:
        tag = next_tag(text, pos, (VARIABLE,))
        if tag is None:
            break
        if tag.name not in store:
            pos = tag.start + 1
            continue
        parts.append(text[copied : tag.start])
        parts.append(store[tag.name])
        copied = pos = tag.end

    parts.append(text[copied:])
    return "".join(parts)


def render(
    text: str,
    store: VariableStore,
    base_dir: Path | None = None,
    source: Path | None = None,
) -> RenderResult:
    """Run the full template pipeline on ``text``.

    Args:
        text: Template text
        store: Variables for conditions and substitution
        base_dir: Directory includes are resolved against (default: the
            source's directory, else the current directory)
        source: Template path, used in diagnostics and include-cycle checks

    Returns:
        Rendered text with the diagnostics collected on the way
    """
    if base_dir is None:
        base_dir = source.parent if source is not None else Path.cwd()
    state = _Pass(store, base_dir, source)

    text = expand_conditionals(text, store)
    text = expand_includes(text, state)
    text = expand_loops(text)
    text = expand_functions(text, state)
    text = substitute(text, store)

    return RenderResult(text=text, diagnostics=state.diagnostics)


def process_template(template_path: Path, store: VariableStore) -> RenderResult:
    """Read a template file and render it.

    Raises:
        TemplateNotFoundError: If the template file does not exist
        ParseError: If the template cannot be read as UTF-8 text
    """
    if not template_path.is_file():
        raise TemplateNotFoundError(template_path)

    logger.debug(f"Processing template: {template_path}")
    try:
        text = read_text(template_path)
    except (OSError, UnicodeDecodeError) as e:
        raise ParseError(f"Cannot read template {template_path}: {e}") from e
    return render(text, store, source=template_path)
