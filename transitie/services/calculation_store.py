"""Saving, updating, listing and deleting transition compensation calculations."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Iterator

from sqlalchemy.orm import Session

from transitie.core.log import get_logger, log_context, timeit
from transitie.domain import (
    CalculationResult,
    CalculationValidationError,
    CompensationEngine,
    CompensationInputs,
    EmploymentPeriod,
    MissingRequiredField,
    NotFound,
    Party,
    SavedCalculation,
)
from transitie.repositories import TransitieCalculationRepository

LOGGER = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, slots=True)
class ResultDrift:
    """A saved calculation whose stored result no longer matches its inputs.

    ``recomputed`` is None when the inputs can no longer be evaluated at all,
    for instance because the end year was removed from the cap table; ``error``
    then says why.
    """

    calculation_id: int
    stored: CalculationResult
    recomputed: CalculationResult | None
    error: CalculationValidationError | None = None

    @property
    def evaluable(self) -> bool:
        return self.recomputed is not None


class CalculationStore:
    """Persistence boundary for saved calculations.

    Each public method runs in its own transaction: it commits on success and
    rolls back on any error. Results are always recomputed by the engine from
    the inputs being stored, so a stored result never drifts from its inputs.
    Concurrent updates of the same calculation are last-write-wins.
    """

    def __init__(
        self,
        session: Session,
        engine: CompensationEngine,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._session = session
        self._engine = engine
        self._clock = clock
        self._repository = TransitieCalculationRepository(session)

    @contextmanager
    def _transaction(self) -> Iterator[None]:
        try:
            yield
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

    def save(
        self, party: Party, period: EmploymentPeriod, inputs: CompensationInputs
    ) -> SavedCalculation:
        """Evaluate ``inputs`` and store them with their result under a new id."""

        employee = (party.employee_name or "").strip()
        missing = []
        if not employee:
            missing.append("employee_name")
        try:
            self._engine.validate(period, inputs)
        except MissingRequiredField as exc:
            missing.extend(exc.fields)
        if missing:
            raise MissingRequiredField(missing)

        result = self._engine.evaluate(period, inputs)
        with self._transaction():
            record = self._repository.add(party, period, inputs, result)
        self._session.refresh(record)
        with log_context.bound(calculation_id=record.id):
            LOGGER.info(
                "Saved transition compensation for %s: %s",
                record.employee_name,
                result.capped_amount,
            )
        return self._repository.to_domain(record)

    def update(
        self,
        calculation_id: int,
        period: EmploymentPeriod,
        inputs: CompensationInputs,
        *,
        party: Party | None = None,
    ) -> SavedCalculation:
        """Replace the inputs of a saved calculation and recompute its result.

        A ``party`` name that is None keeps the stored name. An empty employer
        name clears it; an empty employee name is rejected.
        """

        with log_context.bound(calculation_id=calculation_id):
            record = self._repository.get(calculation_id)
            if record is None or record.is_deleted:
                raise NotFound(calculation_id)
            if party is not None:
                if party.employee_name is not None and not party.employee_name.strip():
                    raise MissingRequiredField(["employee_name"])
                party = Party(
                    employee_name=(
                        record.employee_name if party.employee_name is None else party.employee_name
                    ),
                    employer_name=(
                        record.employer_name if party.employer_name is None else party.employer_name
                    ),
                )

            result = self._engine.evaluate(period, inputs)
            with self._transaction():
                self._repository.replace(
                    record, period, inputs, result, party=party, when=self._clock()
                )
            self._session.refresh(record)
            LOGGER.info("Updated transition compensation: %s", result.capped_amount)
            return self._repository.to_domain(record)

    def get(self, calculation_id: int) -> SavedCalculation:
        record = self._repository.get(calculation_id)
        if record is None or record.is_deleted:
            raise NotFound(calculation_id)
        return self._repository.to_domain(record)

    def list_by_employee(self, name_filter: str | None = None) -> list[SavedCalculation]:
        """Return saved calculations whose employee name contains ``name_filter``.

        Matching ignores case; an empty filter returns everything. Newest first.
        """

        search = (name_filter or "").strip() or None
        with timeit(
            "Listing saved calculations",
            logger=LOGGER,
            level=logging.DEBUG,
            unit="calculations",
        ) as timer:
            records = self._repository.list_active(employee=search)
            timer.add(len(records))
            return [self._repository.to_domain(record) for record in records]

    def delete(self, calculation_id: int) -> None:
        """Delete a calculation; deleting it again is a no-op."""

        with log_context.bound(calculation_id=calculation_id):
            record = self._repository.get(calculation_id)
            if record is None:
                raise NotFound(calculation_id)
            if record.is_deleted:
                LOGGER.debug("Calculation already deleted")
                return
            with self._transaction():
                self._repository.mark_deleted(record, self._clock())
            LOGGER.info("Deleted transition compensation calculation")

    def find_drift(self) -> list[ResultDrift]:
        """Re-evaluate every saved calculation and report stored results that differ.

        Changing the cap table for a year that already has saved calculations
        shows up here. Calculations that no longer evaluate are reported with
        ``recomputed=None`` and the audit carries on with the rest.
        """

        drifted: list[ResultDrift] = []
        with timeit("Verifying saved calculations", logger=LOGGER, unit="calculations") as timer:
            for record in self._repository.list_active():
                saved = self._repository.to_domain(record)
                timer.add()
                try:
                    recomputed = self._engine.evaluate(saved.period, saved.inputs)
                except CalculationValidationError as exc:
                    with log_context.bound(calculation_id=saved.id):
                        LOGGER.error("Saved calculation can no longer be evaluated: %s", exc)
                    drifted.append(ResultDrift(saved.id, saved.result, None, exc))
                    continue
                if recomputed != saved.result:
                    drifted.append(ResultDrift(saved.id, saved.result, recomputed))
        if drifted:
            LOGGER.warning("%d saved calculation(s) differ from a fresh evaluation", len(drifted))
        return drifted
