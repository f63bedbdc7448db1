"""Text-transform functions callable as ``{{function:NAME:ARGS}}``."""

from __future__ import annotations

import datetime as dt
import re
import uuid
from typing import Callable

TemplateFunction = Callable[[str], str]

FUNCTIONS: dict[str, TemplateFunction] = {}

_SEPARATED_CHAR = re.compile(r"[-_](.)")
_SEPARATORS = re.compile(r"[-_]")


def register_function(name: str) -> Callable[[TemplateFunction], TemplateFunction]:
    """Register a template function under ``name``."""

    def decorator(func: TemplateFunction) -> TemplateFunction:
        FUNCTIONS[name] = func
        return func

    return decorator


@register_function("uppercase")
def uppercase(value: str) -> str:
    return value.upper()


@register_function("lowercase")
def lowercase(value: str) -> str:
    return value.lower()


@register_function("snake_case")
def snake_case(value: str) -> str:
    return value.replace("-", "_").lower()


@register_function("kebab_case")
def kebab_case(value: str) -> str:
    return value.replace("_", "-").lower()


@register_function("camel_case")
def camel_case(value: str) -> str:
    """Drop ``-``/``_`` separators, upper-casing the character after each.

    The first character is left as it is.
    """
    joined = _SEPARATED_CHAR.sub(lambda m: m.group(1).upper(), value)
    return _SEPARATORS.sub("", joined)


@register_function("pascal_case")
def pascal_case(value: str) -> str:
    converted = camel_case(value)
    return converted[:1].upper() + converted[1:]


@register_function("current_year")
def current_year(_: str = "") -> str:
    return dt.date.today().strftime("%Y")


@register_function("current_date")
def current_date(_: str = "") -> str:
    return dt.date.today().isoformat()


@register_function("uuid")
def new_uuid(_: str = "") -> str:
    return str(uuid.uuid4())


def call(name: str, args: str) -> str | None:
    """Call a registered function; ``None`` when ``name`` is unknown."""
    func = FUNCTIONS.get(name)
    if func is None:
        return None
    return func(args)
