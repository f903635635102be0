"""
Consensus reconciliation across execution nodes.

Each node fetches the reserve independently; the per-node observations are
merged field by field with a median so that the result does not depend on
the order in which nodes answered.
"""

from datetime import datetime
from decimal import MAX_EMAX, Decimal, localcontext
from typing import Any, Callable, Dict, List, Sequence

import requests

from ..models import ReserveObservation

Aggregator = Callable[[Sequence[Any]], Any]


def median(values: Sequence[Any]) -> Any:
    """
    Median of numbers or datetimes.

    Even counts take the mean of the two central values. Numbers come back
    as Decimal.
    """
    if not values:
        raise ValueError("median of an empty sequence")

    ordered = sorted(values)
    mid = len(ordered) // 2
    if len(ordered) % 2 == 1:
        return ordered[mid]

    lo, hi = ordered[mid - 1], ordered[mid]
    if isinstance(lo, datetime):
        return lo + (hi - lo) / 2
    with localcontext() as ctx:
        ctx.prec = 100
        ctx.Emax = MAX_EMAX
        return (Decimal(lo) + Decimal(hi)) / 2


# Field name -> aggregation, one entry per ReserveObservation field.
RESERVE_AGGREGATION: Dict[str, Aggregator] = {
    "last_updated": median,
    "total_reserve": median,
}


def aggregate_by_fields(
    observations: Sequence[ReserveObservation],
    aggregators: Dict[str, Aggregator] = RESERVE_AGGREGATION,
) -> ReserveObservation:
    """Reduce node observations to one, each field on its own distribution."""
    if not observations:
        raise ValueError("no observations to aggregate")

    reconciled = {
        name: aggregate([getattr(o, name) for o in observations])
        for name, aggregate in aggregators.items()
    }
    return ReserveObservation(**reconciled)


class NodeModeRunner:
    """
    Runs a per-node fetch on every participating node, then aggregates.

    Any node failure aborts the whole round: partial data is never
    combined.
    """

    def __init__(
        self,
        node_count: int = 1,
        session_factory: Callable[[], requests.Session] = requests.Session,
    ):
        if node_count < 1:
            raise ValueError("node_count must be at least 1")
        self.node_count = node_count
        self.session_factory = session_factory

    def run(
        self,
        fetch: Callable[[requests.Session], ReserveObservation],
        aggregators: Dict[str, Aggregator] = RESERVE_AGGREGATION,
    ) -> ReserveObservation:
        observations: List[ReserveObservation] = []

        for node in range(1, self.node_count + 1):
            session = self.session_factory()
            try:
                observation = fetch(session)
            finally:
                session.close()
            print(
                f"[CONSENSUS] Node {node}/{self.node_count}: reserve={observation.total_reserve} "
                f"updated={observation.last_updated.isoformat()}"
            )
            observations.append(observation)

        reconciled = aggregate_by_fields(observations, aggregators)
        print(
            f"[CONSENSUS] ✓ Reconciled {len(observations)} observation(s): "
            f"reserve={reconciled.total_reserve} updated={reconciled.last_updated.isoformat()}"
        )
        return reconciled
