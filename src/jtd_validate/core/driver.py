"""Per-instance validation loop and run outcome."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, List, Optional, Tuple, Union

from .engine import JtdEngine, SchemaEngine, ValidationError
from .options import ValidationOptions
from .reporter import ErrorReporter
from ..utils.error_handler import JTDValidateError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Checked:
    """The instance was validated; ``errors`` may be empty."""

    index: int
    errors: Tuple[ValidationError, ...] = ()

    @property
    def valid(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class Fatal:
    """The run cannot continue past this instance."""

    index: int
    error: JTDValidateError


InstanceResult = Union[Checked, Fatal]


@dataclass
class RunResult:
    instances_checked: int = 0
    instances_failed: int = 0
    errors_found: int = 0
    fatal: Optional[JTDValidateError] = None

    @property
    def failed(self) -> bool:
        return self.fatal is not None or self.instances_failed > 0

    @property
    def exit_code(self) -> int:
        if self.fatal is not None:
            return self.fatal.exit_code
        return 1 if self.instances_failed else 0


class ValidationDriver:
    """Validates instances one at a time against a single, already-checked schema."""

    def __init__(self, schema: Any, options: Optional[ValidationOptions] = None, engine: Optional[SchemaEngine] = None):
        self.schema = schema
        self.options = options or ValidationOptions()
        self.engine = engine or JtdEngine()

    def validate(self, instance: Any) -> List[ValidationError]:
        errors = self.engine.validate(self.schema, instance, self.options)
        if self.options.max_errors is not None:
            errors = errors[:self.options.max_errors]
        return errors

    def check(self, instance: Any, index: int) -> InstanceResult:
        try:
            errors = self.validate(instance)
        except JTDValidateError as e:
            return Fatal(index, e)
        return Checked(index, tuple(errors))

    def results(self, instances: Iterable[Any]) -> Iterator[InstanceResult]:
        """Yield a result per instance in stream order, stopping after the first :class:`Fatal`."""
        iterator = iter(instances)
        index = 0
        while True:
            index += 1
            try:
                instance = next(iterator)
            except StopIteration:
                return
            except JTDValidateError as e:
                yield Fatal(index, e)
                return

            result = self.check(instance, index)
            yield result
            if isinstance(result, Fatal):
                return

    def run(self, instances: Iterable[Any], reporter: ErrorReporter) -> RunResult:
        outcome = RunResult()
        for result in self.results(instances):
            if isinstance(result, Fatal):
                logger.debug("Instance %d: fatal %s", result.index, result.error.error_code)
                outcome.fatal = result.error
                break

            outcome.instances_checked += 1
            logger.debug("Instance %d: %d error(s)", result.index, len(result.errors))
            if result.errors:
                outcome.instances_failed += 1
                outcome.errors_found += len(result.errors)
                reporter.report(result.errors)

        logger.debug(
            "Checked %d instance(s): %d failed, %d error(s) reported",
            outcome.instances_checked,
            outcome.instances_failed,
            outcome.errors_found,
        )
        return outcome
