### UnknownSample Module ###
# Date : 10/17/2026
# File : UnknownSample.py

import logging
from typing import Optional, Tuple

import numpy as np
from pydantic import BaseModel, ConfigDict

from .CalibrationData import (CalibrationPoint, CalibrationSet, LinearFit,
                              add_measurement, fit)
from .ColorimeterConfig import DEFAULT_CONFIG, ColorimeterConfig
from .MeasurementSimulator import measure_absorbance

logger = logging.getLogger(__name__)


class UnknownSampleResult(BaseModel):
    """
    Outcome of an unknown-sample point.

    Attributes
    ----------
    true_concentration_mM : float
        Concentration drawn for the sample, revealed for teaching purposes.
    measured_absorbance : float
        Absorbance reported by the instrument for the sample.
    estimated_concentration_mM : float
        Concentration read back from the calibration line.
    fit : LinearFit
        Calibration used for the estimate.
    point : CalibrationPoint
        Temporary point added to the calibration plot.
    """
    model_config = ConfigDict(frozen=True)

    true_concentration_mM: float
    measured_absorbance: float
    estimated_concentration_mM: float
    fit: LinearFit
    point: CalibrationPoint


def estimate_concentration(measured_absorbance: float,
                           fit: LinearFit,
                           tolerance: float = 1e-12) -> float:
    """
    Inverts a calibration line, c = (A - b) / m.

    Parameters
    ----------
    measured_absorbance : float
        Non-negative absorbance of the unknown.
    fit : LinearFit
        Calibration line.
    tolerance : float, optional
        Slopes with ``abs(m) <= tolerance`` cannot be inverted and give 0.

    Returns
    -------
    concentration : float
        Estimated concentration [mM].
    """
    if abs(fit.slope) <= tolerance:
        return 0.0
    return (measured_absorbance - fit.intercept) / fit.slope


def seed_calibration(calibration: CalibrationSet,
                     wavelength_nm: float,
                     noise_enabled: bool,
                     config: ColorimeterConfig,
                     rng: np.random.Generator) -> CalibrationSet:
    """
    Measures two standards when the set cannot support a fit yet.

    The standards are 0 mM and ``min(0.6, concentration_max / 2)``.
    Sets that already hold two or more measurements are returned as is.
    """
    if len(calibration.measurements) >= 2:
        return calibration

    seeds = (0.0, min(0.6, config.concentration_max_mM / 2))
    for concentration in seeds:
        measured = measure_absorbance(wavelength_nm, concentration,
                                      config.path_length_cm, noise_enabled,
                                      config, rng)
        calibration = add_measurement(calibration, concentration, measured)
    logger.debug("Seeded calibration with standards at %s mM", seeds)
    return calibration


def run_unknown_sample(calibration: CalibrationSet,
                       wavelength_nm: float,
                       noise_enabled: bool = True,
                       config: Optional[ColorimeterConfig] = None,
                       rng: Optional[np.random.Generator] = None
                       ) -> Tuple[CalibrationSet, UnknownSampleResult]:
    """
    Measures a randomly drawn unknown and estimates it from the calibration.

    The estimate always comes from the regression line, never from the
    physical model, so it carries the calibration error a real workflow
    would see.

    Parameters
    ----------
    calibration : CalibrationSet
        Current calibration.  Seeded with two standards if it holds fewer
        than two measurements.
    wavelength_nm : float
        Measurement wavelength [nm].
    noise_enabled : bool, optional
        Add detector noise.  Default is ``True``.
    config : ColorimeterConfig or None, optional
        Simulator constants.
    rng : np.random.Generator or None, optional
        Random source for the unknown concentration and the noise.

    Returns
    -------
    calibration : CalibrationSet
        Updated set, with the unknown point in its overlay.
    result : UnknownSampleResult
        True and estimated concentration of the unknown.
    """
    if config is None:
        config = DEFAULT_CONFIG
    if rng is None:
        rng = np.random.default_rng()

    calibration = seed_calibration(calibration, wavelength_nm, noise_enabled,
                                   config, rng)

    c_max = min(1.0, config.concentration_max_mM)
    true_concentration = round(float(rng.random()) * c_max, 3)
    measured = measure_absorbance(wavelength_nm, true_concentration,
                                  config.path_length_cm, noise_enabled,
                                  config, rng)

    calibration = add_measurement(calibration, true_concentration, measured,
                                  temporary=True)
    line = fit(calibration)
    estimate = estimate_concentration(measured, line, config.slope_tolerance)

    logger.debug("Unknown sample: true c=%.3f mM, A=%.4f, estimated c=%.4f mM",
                 true_concentration, measured, estimate)

    result = UnknownSampleResult(true_concentration_mM=true_concentration,
                                 measured_absorbance=measured,
                                 estimated_concentration_mM=estimate,
                                 fit=line,
                                 point=calibration.overlay[-1])
    return calibration, result
