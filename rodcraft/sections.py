# rodcraft/sections.py
"""
SECTION QUERIES
===============

Interactive point evaluations: the user picks a rod and a local coordinate,
gets N, σ and u at that section, and every answer is kept in an append-only
history that the report can include later.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, Optional, Sequence, Tuple

from .fields import evaluate_rod
from .logger_mixin import LoggerMixin
from .model import RodResult


@dataclass(frozen=True)
class SectionQueryRecord:
    """One answered query."""
    id: str
    rod_id: int
    x: float
    N: float
    sigma: float
    u: float
    timestamp: datetime


class SectionQueryCalculator(LoggerMixin):
    """
    Append-only log of section evaluations for one postprocessing session.

    Parameters
    ----------
    results : Sequence[RodResult]
        Rods of the current calculation.
    clock : Callable[[], datetime], optional
        Time source for record timestamps (defaults to ``datetime.now``).
    debug : bool, optional
        Enables debug logging.

    Examples
    --------
    >>> calc = SectionQueryCalculator(result.rods)
    >>> record = calc.query(0, 0.5)
    >>> calc.get_history()[-1] is record
    True
    """

    def __init__(
        self,
        results: Sequence[RodResult],
        clock: Optional[Callable[[], datetime]] = None,
        debug: bool = False,
    ):
        super().__init__(debug=debug)
        self._rods: Dict[int, RodResult] = {rod.rod_id: rod for rod in results}
        self._clock = clock or datetime.now
        self._history = []

    def __len__(self) -> int:
        return len(self._history)

    def query(self, rod_id: int, x: float) -> SectionQueryRecord:
        """
        Evaluate N, sigma and u of rod ``rod_id`` at local coordinate ``x``.

        Raises
        ------
        KeyError
            No rod with that id in the current result.
        """
        if rod_id not in self._rods:
            raise KeyError(f"No rod with id {rod_id} in the current result")
        rod = self._rods[rod_id]

        if not 0.0 <= x <= rod.length:
            self.logger.warning(
                "x=%g lies outside rod %d (L=%g); extrapolating", x, rod_id, rod.length
            )

        N, sigma, u = evaluate_rod(rod, x)

        timestamp = self._clock()
        if self._history and timestamp < self._history[-1].timestamp:
            timestamp = self._history[-1].timestamp

        record = SectionQueryRecord(
            id=uuid.uuid4().hex,
            rod_id=rod_id,
            x=float(x),
            N=N,
            sigma=sigma,
            u=u,
            timestamp=timestamp,
        )
        self._history.append(record)
        self.logger.debug("Section query #%d: rod %d, x=%g", len(self._history), rod_id, x)
        return record

    def get_history(self) -> Tuple[SectionQueryRecord, ...]:
        """All records in insertion order (a snapshot; later queries don't change it)."""
        return tuple(self._history)

    def clear(self) -> None:
        self._history.clear()
        self.logger.debug("Section query history cleared")
