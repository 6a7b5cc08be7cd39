### CalibrationData Class ###
# Date : 10/17/2026
# File : CalibrationData.py

import logging
import math
from typing import Optional, Sequence, Tuple

import numpy as np
from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

# Relative size below which a regression variance term is treated as zero
DEGENERATE_TOLERANCE = 1e-12


class CalibrationPoint(BaseModel):
    """
    A single recorded (concentration, absorbance) measurement.

    Attributes
    ----------
    concentration_mM : float
        Known concentration of the standard [mM].
    absorbance : float
        Absorbance reported by the instrument.
    is_temporary : bool
        ``True`` for unknown-sample points that are displayed but never
        used by the regression or exported by default.
    """
    model_config = ConfigDict(frozen=True)

    concentration_mM: float
    absorbance: float
    is_temporary: bool = False


class LinearFit(BaseModel):
    """
    Least-squares line A = slope * c + intercept.

    Attributes
    ----------
    slope : float
        Calibration sensitivity [1/mM].
    intercept : float
        Absorbance at zero concentration.
    r_squared : float
        Coefficient of determination in ``[0, 1]``.
    n_points : int
        Number of measurements the fit was computed from.
    """
    model_config = ConfigDict(frozen=True)

    slope: float = 0.0
    intercept: float = 0.0
    r_squared: float = 0.0
    n_points: int = 0

    @property
    def is_defined(self) -> bool:
        return self.n_points >= 2

    def predict(self, concentration_mM: float) -> float:
        return self.slope * concentration_mM + self.intercept


class CalibrationSet(BaseModel):
    """
    Calibration measurements owned by a session.

    Persistent standards and temporary unknown-sample points are kept in two separate
    containers, so the regression never has to filter.

    Attributes
    ----------
    measurements : tuple of CalibrationPoint
        Standards used by the fit, in insertion order.
    overlay : tuple of CalibrationPoint
        Temporary points shown on the calibration plot only.
    """
    model_config = ConfigDict(frozen=True)

    measurements: Tuple[CalibrationPoint, ...] = ()
    overlay: Tuple[CalibrationPoint, ...] = ()

    @property
    def points(self) -> Tuple[CalibrationPoint, ...]:
        """All points in display order, persistent points first."""
        return self.measurements + self.overlay

    def __len__(self) -> int:
        return len(self.measurements) + len(self.overlay)


def add_measurement(calibration: CalibrationSet,
                    concentration_mM: float,
                    absorbance: float,
                    temporary: bool = False) -> CalibrationSet:
    """
    Returns a new set with one more point appended.

    Temporary points go to the overlay and are ignored by ``fit``.
    """
    point = CalibrationPoint(concentration_mM=concentration_mM,
                             absorbance=absorbance,
                             is_temporary=temporary)
    logger.debug("Adding %s calibration point c=%.4f mM, A=%.4f",
                 "temporary" if temporary else "persistent",
                 concentration_mM, absorbance)

    if temporary:
        return calibration.model_copy(
            update={"overlay": calibration.overlay + (point,)})
    return calibration.model_copy(
        update={"measurements": calibration.measurements + (point,)})


def remove_temporary(calibration: CalibrationSet) -> CalibrationSet:
    """Returns the set with every temporary point stripped."""
    if not calibration.overlay:
        return calibration
    return calibration.model_copy(update={"overlay": ()})


def clear(calibration: Optional[CalibrationSet] = None) -> CalibrationSet:
    """Returns an empty calibration set."""
    return CalibrationSet()


def linear_regression(concentrations: Sequence[float],
                      absorbances: Sequence[float]) -> LinearFit:
    """
    Ordinary least-squares fit of absorbance against concentration.

    The fit is computed from running sums so the result does not depend on
    point order.  Zero or near-zero denominators fall back to a slope (or correlation)
    of 0 instead of propagating NaN.

    Parameters
    ----------
    concentrations : sequence of float
        x values [mM].
    absorbances : sequence of float
        y values.

    Returns
    -------
    LinearFit
        Slope, intercept and R^2.  Fewer than two points returns the
        degenerate zero fit.
    """
    x = np.asarray(concentrations, dtype=float)
    y = np.asarray(absorbances, dtype=float)
    n = x.size

    if n < 2:
        return LinearFit(n_points=n)

    sum_x = float(np.sum(x))
    sum_y = float(np.sum(y))
    sum_xy = float(np.sum(x * y))
    sum_x2 = float(np.sum(x * x))
    sum_y2 = float(np.sum(y * y))

    numerator = n * sum_xy - sum_x * sum_y
    denom_x = n * sum_x2 - sum_x * sum_x
    denom_y = n * sum_y2 - sum_y * sum_y

    # Repeated standards leave rounding residue in the variance terms
    # instead of an exact zero, so compare against the scale of the sums
    x_degenerate = abs(denom_x) <= DEGENERATE_TOLERANCE * max(1.0, n * sum_x2)
    y_degenerate = abs(denom_y) <= DEGENERATE_TOLERANCE * max(1.0, n * sum_y2)

    slope = 0.0 if x_degenerate else numerator / denom_x
    intercept = (sum_y - slope * sum_x) / n

    if x_degenerate or y_degenerate:
        r = 0.0
    else:
        r = numerator / math.sqrt(denom_x * denom_y)
    r_squared = min(r * r, 1.0)

    return LinearFit(slope=slope,
                     intercept=intercept,
                     r_squared=r_squared,
                     n_points=n)


def fit(calibration: CalibrationSet) -> LinearFit:
    """
    Fits the persistent measurements of a calibration set.

    The set is not modified.
    """
    measurements = calibration.measurements
    result = linear_regression([p.concentration_mM for p in measurements],
                               [p.absorbance for p in measurements])
    logger.debug("Calibration fit over %d points: m=%.6g, b=%.6g, R2=%.6g",
                 result.n_points, result.slope, result.intercept,
                 result.r_squared)
    return result


def fit_line(calibration: CalibrationSet,
             concentration_max_mM: float = 1.0
             ) -> Optional[Tuple[Tuple[float, float], Tuple[float, float]]]:
    """
    Computes the two endpoints of the fit line for plotting.

    The line spans from ``min(0, smallest x)`` to
    ``max(concentration_max_mM, largest x)`` over all displayed points.

    Returns
    -------
    endpoints : tuple or None
        ``((x0, y0), (x1, y1))``, or ``None`` when the fit is undefined.
    """
    line = fit(calibration)
    if not line.is_defined:
        return None

    xs = [p.concentration_mM for p in calibration.points]
    x_min = min(min(xs), 0.0)
    x_max = max(max(xs), concentration_max_mM)

    return (x_min, line.predict(x_min)), (x_max, line.predict(x_max))


def format_number(value: float, digits: int = 3) -> str:
    return f"{value:.{digits}f}"


def format_fit_statistics(line: LinearFit, digits: int = 3) -> str:
    """
    Renders slope, intercept and R^2 for display.

    An undefined fit is rendered with em-dashes rather than zeros.
    """
    if not line.is_defined:
        return "m = —, b = —, R² = —"
    return (f"m = {format_number(line.slope, digits)}, "
            f"b = {format_number(line.intercept, digits)}, "
            f"R² = {format_number(line.r_squared, digits)}")
