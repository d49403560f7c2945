"""
Core schema classes for okschema.

Provides the Schema base every leaf and container derives from, the Check
record leaf constraints are stored as, and the FailureCollector containers
use to merge child outcomes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, ClassVar, Mapping

from .types import (
    MISSING,
    Constraint,
    Failure,
    Invalid,
    Kind,
    Outcome,
    Path,
    Predicate,
    Transform,
    Valid,
    kind_of,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Check:
    """
    A single configured constraint.

    `passes` decides the verdict, `measure` extracts what is reported as the
    detail's `actual` entry (the value itself when omitted).
    """

    constraint: Constraint
    passes: Predicate
    detail: Mapping[str, Any] = field(default_factory=dict)
    measure: Transform | None = None

    def __call__(self, value: Any, path: Path, label: str | None) -> Failure | None:
        try:
            if self.passes(value):
                return None
        except Exception as e:
            return Failure(path, self.constraint, {**self.detail, "error": str(e)}, label)

        actual = self.measure(value) if self.measure is not None else value
        return Failure(path, self.constraint, {**self.detail, "actual": actual}, label)


class FailureCollector:
    """
    Accumulates failures across one container validation.

    Every child outcome is taken, never short-circuited; `outcome()` yields
    Valid only when nothing was collected.
    """

    __slots__ = ("failures",)

    def __init__(self) -> None:
        self.failures: list[Failure] = []

    def add(self, failure: Failure | None) -> None:
        if failure is not None:
            self.failures.append(failure)

    def run(self, checks: tuple[Check, ...], value: Any, path: Path, label: str | None) -> None:
        for check in checks:
            self.add(check(value, path, label))

    def take(self, outcome: Outcome[Any]) -> Any:
        """Merge a child outcome; returns its value, or MISSING if it failed."""
        if isinstance(outcome, Invalid):
            self.failures.extend(outcome.failures)
            return MISSING
        return outcome.value

    def outcome(self, value: Any) -> Outcome[Any]:
        if self.failures:
            return Invalid(tuple(self.failures))
        return Valid(value)


def check_bounds(schema: Schema, low: Constraint, high: Constraint) -> None:
    """Raise ValueError when a configured lower bound exceeds the upper one."""
    lower = schema.constraint_detail(low)
    upper = schema.constraint_detail(high)
    if lower is not None and upper is not None and lower["limit"] > upper["limit"]:
        raise ValueError(
            f"{low.value} {lower['limit']} is greater than {high.value} {upper['limit']}"
        )


@dataclass(frozen=True, slots=True)
class Schema:
    """
    Immutable validator node.

    Every fluent method returns a new schema, so a finished tree can be
    shared across threads and validated any number of times.
    """

    kind: ClassVar[Kind]

    title: str | None = None
    description: str | None = None
    is_optional: bool = False
    is_nullable: bool = False
    checks: tuple[Check, ...] = ()

    def validate(self, value: Any) -> Outcome[Any]:
        """
        Validate a value from the root.

        Returns:
            Valid(value) with the validated (possibly narrowed) value
            Invalid(failures) listing every violated constraint
        """
        outcome = self.validate_at(value, ())
        if isinstance(outcome, Invalid):
            logger.debug(
                "%s schema rejected value with %d failure(s)",
                self.kind.value,
                len(outcome.failures),
            )
        return outcome

    def validate_at(self, value: Any, path: Path) -> Outcome[Any]:
        """Validate `value` located at `path`; containers recurse through this."""
        if value is MISSING:
            if self.is_optional:
                return Valid(MISSING)
            return Invalid((self._failure(path, Constraint.REQUIRED),))

        if value is None and self.is_nullable:
            return Valid(None)

        return self._check(value, path)

    def _check(self, value: Any, path: Path) -> Outcome[Any]:
        raise NotImplementedError

    def _failure(self, path: Path, constraint: Constraint, **detail: Any) -> Failure:
        return Failure(path, constraint, detail, self.title)

    def _type_failure(self, path: Path, value: Any) -> Invalid:
        failure = self._failure(
            path,
            Constraint.TYPE,
            expected=self.kind.value,
            actual=kind_of(value).value,
        )
        return Invalid((failure,))

    def _with_check(self, check: Check) -> Schema:
        """Add a check, replacing one of the same constraint in its original slot."""
        if check.constraint is not Constraint.TEST:
            for i, existing in enumerate(self.checks):
                if existing.constraint is check.constraint:
                    checks = (*self.checks[:i], check, *self.checks[i + 1 :])
                    return replace(self, checks=checks)
        return replace(self, checks=(*self.checks, check))

    def constraint_detail(self, constraint: Constraint) -> Mapping[str, Any] | None:
        """Return the configured detail of a constraint, if it is set."""
        for check in self.checks:
            if check.constraint is constraint:
                return check.detail
        return None

    def optional(self) -> Schema:
        """Accept an absent value; containers leave it out of their output."""
        return replace(self, is_optional=True)

    def nullable(self) -> Schema:
        """Accept JSON null."""
        return replace(self, is_nullable=True)

    def label(self, text: str) -> Schema:
        """Attach a human label to every failure this schema emits."""
        return replace(self, title=text)

    def desc(self, text: str) -> Schema:
        return replace(self, description=text)

    def test(self, message: str, predicate: Predicate) -> Schema:
        """
        Add a custom check.

        Usage:
            string().test("must be lowercase", str.islower)
        """
        if not callable(predicate):
            raise TypeError(f"Predicate must be callable, got {type(predicate).__name__}")
        return self._with_check(Check(Constraint.TEST, predicate, {"message": message}))
