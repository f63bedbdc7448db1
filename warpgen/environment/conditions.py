"""Named boolean conditions used by ``{{#if_NAME}}`` blocks."""

from __future__ import annotations

from typing import Callable

from .store import VariableStore

Condition = Callable[[VariableStore], bool]

CONDITIONS: dict[str, Condition] = {}

_JAVASCRIPT_TYPES = {"javascript", "js", "node"}


def register_condition(*names: str) -> Callable[[Condition], Condition]:
    """Register a condition under one or more names."""

    def decorator(func: Condition) -> Condition:
        for name in names:
            CONDITIONS[name] = func
        return func

    return decorator


def _flag(variable: str) -> Condition:
    def check(store: VariableStore) -> bool:
        return store.get(variable) == "true"

    return check


@register_condition("python")
def _is_python(store: VariableStore) -> bool:
    return store.get("PROJECT_TYPE") == "python"


@register_condition("javascript", "js", "node")
def _is_javascript(store: VariableStore) -> bool:
    return store.get("PROJECT_TYPE") in _JAVASCRIPT_TYPES


@register_condition("wordpress")
def _is_wordpress(store: VariableStore) -> bool:
    return "wordpress" in store.get("PROJECT_TYPE")


@register_condition("php")
def _is_php(store: VariableStore) -> bool:
    return store.get("PROJECT_TYPE") == "php" or _is_wordpress(store)


register_condition("docker")(_flag("USE_DOCKER"))
register_condition("testing")(_flag("INCLUDE_TESTING"))
register_condition("ci")(_flag("INCLUDE_CI"))


def evaluate(name: str, store: VariableStore) -> bool:
    """Evaluate a named condition against the store.

    Unregistered names are true when the variable of that exact name equals
    the literal string ``"true"``.
    """
    condition = CONDITIONS.get(name)
    if condition is None:
        return store.get(name) == "true"
    return condition(store)
