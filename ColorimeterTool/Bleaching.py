### Bleaching Module ###
# Date : 10/17/2026
# File : Bleaching.py

import logging
import math
from typing import Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


class TimeSeriesPoint(BaseModel):
    """One sample of the concentration-vs-time plot."""
    model_config = ConfigDict(frozen=True)

    elapsed_minutes: float
    concentration_mM: float


class BleachingRun(BaseModel):
    """
    State of a first-order photobleaching run.

    The concentration is evaluated in closed form from the start
    concentration and the total elapsed time, c(t) = c0 * exp(-k * t),
    so the result does not depend on how the elapsed time was split
    into ticks.

    Attributes
    ----------
    rate_constant_per_minute : float
        First-order rate constant k [1/min].  Must be >= 0.
    start_concentration_mM : float
        Concentration when the run was started [mM].
    elapsed_minutes : float
        Total simulated time since the start [min].
    concentration_mM : float
        Current concentration [mM].
    history : tuple of TimeSeriesPoint
        Most recent samples, oldest first.
    capacity : int
        Maximum length of ``history``.
    active : bool
        ``False`` once the run has been stopped.
    """
    model_config = ConfigDict(frozen=True)

    rate_constant_per_minute: float = Field(..., ge=0)
    start_concentration_mM: float = Field(..., ge=0)
    elapsed_minutes: float = 0.0
    concentration_mM: float = 0.0
    history: Tuple[TimeSeriesPoint, ...] = ()
    capacity: int = Field(default=600, ge=1)
    active: bool = True


def append_bounded(history: Sequence[TimeSeriesPoint],
                   point: TimeSeriesPoint,
                   capacity: int) -> Tuple[TimeSeriesPoint, ...]:
    """
    Appends a point and evicts the oldest ones beyond ``capacity``.
    """
    updated = tuple(history) + (point,)
    if len(updated) > capacity:
        updated = updated[len(updated) - capacity:]
    return updated


def start_bleach(initial_concentration_mM: float,
                 rate_constant_per_minute: float,
                 capacity: int = 600) -> BleachingRun:
    """
    Starts a bleaching run.

    Parameters
    ----------
    initial_concentration_mM : float
        Concentration at t = 0 [mM].  Negative values are clamped to 0.
    rate_constant_per_minute : float
        First-order rate constant [1/min].
    capacity : int, optional
        Time-series capacity.  Default is ``600``.

    Returns
    -------
    BleachingRun
        Active run whose history holds the single point (0, c0).
    """
    c0 = max(initial_concentration_mM, 0.0)
    logger.debug("Bleaching started at c0=%.4f mM, k=%.4g 1/min",
                 c0, rate_constant_per_minute)
    return BleachingRun(
        rate_constant_per_minute=rate_constant_per_minute,
        start_concentration_mM=c0,
        concentration_mM=c0,
        history=(TimeSeriesPoint(elapsed_minutes=0.0, concentration_mM=c0),),
        capacity=capacity)


def advance(run: BleachingRun, elapsed_minutes_since_last_tick: float) -> BleachingRun:
    """
    Advances a run by one tick.

    Parameters
    ----------
    run : BleachingRun
        Current run state.
    elapsed_minutes_since_last_tick : float
        Tick length [min].  Negative values are treated as 0.

    Returns
    -------
    BleachingRun
        Updated run; ``run.concentration_mM`` holds the new concentration.
        A stopped run is returned unchanged.
    """
    if not run.active:
        return run

    elapsed = run.elapsed_minutes + max(elapsed_minutes_since_last_tick, 0.0)
    concentration = max(
        run.start_concentration_mM *
        math.exp(-run.rate_constant_per_minute * elapsed), 0.0)

    point = TimeSeriesPoint(elapsed_minutes=elapsed,
                            concentration_mM=concentration)
    return run.model_copy(update={
        "elapsed_minutes": elapsed,
        "concentration_mM": concentration,
        "history": append_bounded(run.history, point, run.capacity),
    })


def stop_bleach(run: BleachingRun) -> BleachingRun:
    """Marks the run as stopped.  Stopping twice is a no-op."""
    if not run.active:
        return run
    logger.debug("Bleaching stopped after %.3f min at c=%.4f mM",
                 run.elapsed_minutes, run.concentration_mM)
    return run.model_copy(update={"active": False})
