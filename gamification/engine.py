import logging
from dataclasses import dataclass, field
from typing import Optional

from django.db import DatabaseError, transaction
from django.db.models import F

logger = logging.getLogger("ffpoints")


@dataclass
class PointsChange:
    """Confirmed outcome of one increment against the store."""
    record_id: int
    delta: int
    points: Optional[int] = None  # stored value after the write, None on failure
    error: Optional[str] = None

    @property
    def ok(self):
        return self.error is None


@dataclass
class BulkPointsResult:
    delta: int
    updated: list = field(default_factory=list)
    failed: list = field(default_factory=list)

    @property
    def changes(self):
        return self.updated + self.failed

    @property
    def partial(self):
        return bool(self.updated) and bool(self.failed)


class PointsEngine:
    """
    Applies signed deltas to any model with an integer `points` column.

    Every write is an atomic increment (UPDATE ... SET points = points + n),
    never a read-modify-write, and the confirmed stored value is read back.
    """

    @classmethod
    def apply_delta(cls, model, pk, delta: int) -> int:
        # A zero delta still round-trips to the store.
        updated = model.objects.filter(pk=pk).update(points=F("points") + delta)
        if not updated:
            raise model.DoesNotExist(f"{model.__name__} {pk} not found")

        points = model.objects.values_list("points", flat=True).get(pk=pk)
        logger.info(f"{model.__name__} {pk}: {delta:+d} points -> {points}")
        return points

    @classmethod
    def change(cls, model, pk, delta: int) -> PointsChange:
        """
        Single mutation as a command result. Failures are logged and reported,
        not raised, so the caller can leave its cached copy untouched.
        """
        try:
            with transaction.atomic():
                points = cls.apply_delta(model, pk, delta)
        except model.DoesNotExist:
            return PointsChange(record_id=pk, delta=delta, error="not_found")
        except DatabaseError as e:
            logger.exception(f"Failed to apply {delta:+d} points to {model.__name__} {pk}")
            return PointsChange(record_id=pk, delta=delta, error=str(e) or "database_error")

        return PointsChange(record_id=pk, delta=delta, points=points)

    @classmethod
    def apply_to_each(cls, model, pks, delta: int) -> BulkPointsResult:
        """
        Repeat the single-record mutation once per member.

        Each member gets its own savepoint; there is no grouping transaction,
        so a failure mid-batch leaves earlier members updated (no rollback).
        """
        result = BulkPointsResult(delta=delta)

        for pk in pks:
            outcome = cls.change(model, pk, delta)
            if outcome.ok:
                result.updated.append(outcome)
            else:
                result.failed.append(outcome)

        if result.failed:
            logger.warning(
                f"Bulk {delta:+d} on {model.__name__}: "
                f"{len(result.updated)} updated, {len(result.failed)} failed"
            )
        return result


class RosterCache:
    """
    In-memory view of point-bearing records (dicts with "id" and "points").

    Only confirmed writes are applied, and with the value the store reported,
    so the view never runs ahead of a failed write.
    """

    def __init__(self, records):
        self._records = {record["id"]: dict(record) for record in records}

    def __len__(self):
        return len(self._records)

    def __contains__(self, record_id):
        return record_id in self._records

    def get(self, record_id):
        return self._records.get(record_id)

    def apply(self, change: PointsChange) -> bool:
        record = self._records.get(change.record_id)
        if record is None or not change.ok:
            return False
        record["points"] = change.points
        return True

    def apply_bulk(self, result: BulkPointsResult) -> int:
        return sum(1 for change in result.updated if self.apply(change))

    def ordered(self):
        """Leaderboard order: highest points first, stable for ties."""
        return sorted(self._records.values(), key=lambda r: -r["points"])
