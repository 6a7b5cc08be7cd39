### AutoCalibration Module ###
# Date : 10/17/2026
# File : AutoCalibration.py

import logging
from typing import Callable, Optional, Tuple

import numpy as np
from pydantic import BaseModel, ConfigDict

from .CalibrationData import CalibrationSet, add_measurement
from .ColorimeterConfig import DEFAULT_CONFIG, ColorimeterConfig
from .MeasurementSimulator import measure_absorbance

logger = logging.getLogger(__name__)


class AutoCalibrationRun(BaseModel):
    """
    Progress through an automatic series of calibration standards.

    Attributes
    ----------
    targets : tuple of float
        Standard concentrations to measure, in order [mM].
    index : int
        Number of standards already measured.
    wavelength_nm : float
        Wavelength locked for the whole series [nm].
    original_concentration_mM : float
        Concentration to restore once the series completes [mM].
    active : bool
        ``False`` once the series completes or is stopped.
    """
    model_config = ConfigDict(frozen=True)

    targets: Tuple[float, ...]
    index: int = 0
    wavelength_nm: float
    original_concentration_mM: float
    active: bool = True

    @property
    def finished(self) -> bool:
        return self.index >= len(self.targets)


def calibration_targets(concentration_max_mM: float = 1.0,
                        steps: int = 11) -> Tuple[float, ...]:
    """
    Evenly spaced standards from 0 to ``min(1, concentration_max_mM)``.

    Values are rounded to three decimals.
    """
    c_max = min(1.0, concentration_max_mM)
    return tuple(
        round(float(c), 3) for c in np.linspace(0.0, c_max, steps))


def start_auto_calibration(wavelength_nm: float,
                           original_concentration_mM: float,
                           config: Optional[ColorimeterConfig] = None
                           ) -> AutoCalibrationRun:
    """Creates a new auto-calibration run at the given wavelength."""
    if config is None:
        config = DEFAULT_CONFIG

    targets = calibration_targets(config.concentration_max_mM,
                                  config.auto_calibration_steps)
    logger.debug("Auto-calibration started at %.1f nm with %d standards",
                 wavelength_nm, len(targets))
    return AutoCalibrationRun(
        targets=targets,
        wavelength_nm=wavelength_nm,
        original_concentration_mM=original_concentration_mM)


def step_auto_calibration(
    run: AutoCalibrationRun,
    calibration: CalibrationSet,
    noise_enabled: bool = True,
    config: Optional[ColorimeterConfig] = None,
    rng: Optional[np.random.Generator] = None,
    progress_cb: Optional[Callable] = None
) -> Tuple[AutoCalibrationRun, CalibrationSet, Optional[float]]:
    """
    Measures the next standard of an auto-calibration run.

    Parameters
    ----------
    run : AutoCalibrationRun
        Current run state.
    calibration : CalibrationSet
        Calibration the measurement is appended to.
    noise_enabled : bool, optional
        Add detector noise.  Default is ``True``.
    config : ColorimeterConfig or None, optional
        Simulator constants.
    rng : np.random.Generator or None, optional
        Random source for the noise.
    progress_cb : callable or None, optional
        Progress callback invoked as
        ``progress_cb(phase='auto_calibration', current=int, total=int)``
        after each standard is measured.

    Returns
    -------
    run : AutoCalibrationRun
        Updated run.  Inactive once every target has been measured.
    calibration : CalibrationSet
        Calibration including the new standard.
    concentration_mM : float or None
        Concentration the instrument should now show: the standard just
        measured, the original concentration when the series completes on
        this step, or ``None`` if the run was already inactive.
    """
    if not run.active:
        return run, calibration, None
    if config is None:
        config = DEFAULT_CONFIG

    if run.finished:
        logger.debug("Auto-calibration complete with %d standards",
                     len(run.targets))
        return (run.model_copy(update={"active": False}), calibration,
                run.original_concentration_mM)

    concentration = run.targets[run.index]
    measured = measure_absorbance(run.wavelength_nm, concentration,
                                  config.path_length_cm, noise_enabled,
                                  config, rng)
    calibration = add_measurement(calibration, concentration, measured)
    run = run.model_copy(update={"index": run.index + 1})

    # Optional: update GUI progress after each step
    if progress_cb:
        progress_cb(phase="auto_calibration",
                    current=run.index,
                    total=len(run.targets))

    return run, calibration, concentration


def stop_auto_calibration(run: AutoCalibrationRun) -> AutoCalibrationRun:
    """Stops a run.  Already collected standards are kept."""
    if not run.active:
        return run
    logger.debug("Auto-calibration stopped after %d of %d standards",
                 run.index, len(run.targets))
    return run.model_copy(update={"active": False})
