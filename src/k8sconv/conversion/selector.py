"""Compile Kubernetes label selectors into Calico selector expressions.

The output grammar is small and fixed:

    key == 'value'
    key in { 'a', 'b' }
    key not in { 'a', 'b' }
    has(key)
    ! has(key)

with clauses joined by ``&&``. Clauses are accumulated as typed objects and
rendered once, so every operator has exactly one rendering.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Union

from k8sconv.conversion.constants import ORCHESTRATOR_SELECTOR
from k8sconv.k8s.models import LabelSelector, SelectorOperator


class SelectorKind(enum.Enum):
    """Whether a selector matches pods or namespaces."""

    POD = "pod"
    NAMESPACE = "namespace"


@dataclass(frozen=True)
class _Literal:
    text: str

    def render(self) -> str:
        return self.text


@dataclass(frozen=True)
class _Equals:
    key: str
    value: str

    def render(self) -> str:
        return f"{self.key} == '{self.value}'"


@dataclass(frozen=True)
class _SetMatch:
    key: str
    values: tuple[str, ...]
    negated: bool = False

    def render(self) -> str:
        op = "not in" if self.negated else "in"
        value_list = "', '".join(self.values)
        return f"{self.key} {op} {{ '{value_list}' }}"


@dataclass(frozen=True)
class _Has:
    key: str
    negated: bool = False

    def render(self) -> str:
        prefix = "! " if self.negated else ""
        return f"{prefix}has({self.key})"


Clause = Union[_Literal, _Equals, _SetMatch, _Has]


def _expression_clause(
    key: str, operator: SelectorOperator, values: tuple[str, ...]
) -> Clause:
    if operator is SelectorOperator.IN:
        return _SetMatch(key, values)
    if operator is SelectorOperator.NOT_IN:
        return _SetMatch(key, values, negated=True)
    if operator is SelectorOperator.EXISTS:
        return _Has(key)
    if operator is SelectorOperator.DOES_NOT_EXIST:
        return _Has(key, negated=True)
    raise ValueError(f"Unhandled selector operator: {operator}")


def selector_clauses(selector: LabelSelector, kind: SelectorKind) -> list[Clause]:
    """Return the clauses for a selector, in rendering order."""
    clauses: list[Clause] = []

    # Namespace selectors match namespaces, which carry no orchestrator label.
    if kind is SelectorKind.POD:
        clauses.append(_Literal(ORCHESTRATOR_SELECTOR))

    for key in sorted(selector.match_labels):
        clauses.append(_Equals(key, selector.match_labels[key]))

    # Expressions keep source order.
    for expr in selector.match_expressions:
        clauses.append(_expression_clause(expr.key, expr.operator, expr.values))

    return clauses


def compile_selector(selector: LabelSelector, kind: SelectorKind) -> str:
    """Compile a label selector into a selector expression.

    An empty namespace selector compiles to ``""``, which matches everything.
    """
    return " && ".join(c.render() for c in selector_clauses(selector, kind))
