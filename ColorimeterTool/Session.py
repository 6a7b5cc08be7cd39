### Session Module ###
# Date : 10/17/2026
# File : Session.py

import logging
from typing import Callable, Optional, Tuple

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, model_validator

from . import AutoCalibration, Bleaching
from .CalibrationData import (CalibrationSet, add_measurement, clear,
                              remove_temporary)
from .ColorimeterConfig import DEFAULT_CONFIG, ColorimeterConfig
from .MeasurementSimulator import (InstrumentReading, MeasurementConditions,
                                   measure_absorbance, simulate_conditions)
from .UnknownSample import UnknownSampleResult, run_unknown_sample

logger = logging.getLogger(__name__)


class SessionState(BaseModel):
    """
    Everything a colorimeter front end needs to remember between events.

    The state is immutable; every action below returns a new instance.
    The front end owns the current state and any real timers, and passes
    the state back in on each event or tick.

    Attributes
    ----------
    config : ColorimeterConfig
        Simulator constants.
    wavelength_nm : float
        Selected wavelength [nm].
    concentration_mM : float
        Concentration of the sample in the cuvette [mM].
    noise_enabled : bool
        Whether detector noise is simulated.
    bleach_rate_per_minute : float
        Rate constant used when bleaching is started [1/min].
    calibration : CalibrationSet
        Recorded standards plus any unknown-sample point.
    time_series : tuple of TimeSeriesPoint
        Concentration-vs-time samples of the latest bleaching run.
    bleaching : BleachingRun or None
        Latest bleaching run, inactive once stopped.
    auto_calibration : AutoCalibrationRun or None
        Latest auto-calibration run, inactive once stopped or complete.
    unknown : UnknownSampleResult or None
        Result of the unknown sample currently on display.
    """
    model_config = ConfigDict(frozen=True)

    config: ColorimeterConfig = DEFAULT_CONFIG
    wavelength_nm: float
    concentration_mM: float
    noise_enabled: bool = True
    bleach_rate_per_minute: float
    calibration: CalibrationSet = Field(default_factory=CalibrationSet)
    time_series: Tuple[Bleaching.TimeSeriesPoint, ...] = ()
    bleaching: Optional[Bleaching.BleachingRun] = None
    auto_calibration: Optional[AutoCalibration.AutoCalibrationRun] = None
    unknown: Optional[UnknownSampleResult] = None

    @model_validator(mode="before")
    @classmethod
    def apply_config_defaults(cls, data):
        """Fills unset control values from the config's start-up defaults."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        config = data.get("config")
        if config is None:
            config = DEFAULT_CONFIG
        elif isinstance(config, dict):
            config = ColorimeterConfig(**config)

        data["config"] = config
        data.setdefault("wavelength_nm", config.default_wavelength_nm)
        data.setdefault("concentration_mM", config.default_concentration_mM)
        data.setdefault("bleach_rate_per_minute",
                        config.default_bleach_rate_per_minute)
        return data

    @classmethod
    def initial(cls, config: Optional[ColorimeterConfig] = None) -> "SessionState":
        return cls(config=config)

    @property
    def is_bleaching(self) -> bool:
        return self.bleaching is not None and self.bleaching.active

    @property
    def is_auto_calibrating(self) -> bool:
        return (self.auto_calibration is not None and
                self.auto_calibration.active)

    @property
    def conditions(self) -> MeasurementConditions:
        return MeasurementConditions(wavelength_nm=self.wavelength_nm,
                                     concentration_mM=self.concentration_mM,
                                     path_length_cm=self.config.path_length_cm,
                                     noise_enabled=self.noise_enabled)


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def set_inputs(state: SessionState,
               wavelength_nm: Optional[float] = None,
               concentration_mM: Optional[float] = None,
               noise_enabled: Optional[bool] = None,
               bleach_rate_per_minute: Optional[float] = None) -> SessionState:
    """
    Applies new control values, clamped to the configured input ranges.

    The wavelength cannot change while auto-calibration is running.
    """
    config = state.config
    update = {}
    if wavelength_nm is not None and not state.is_auto_calibrating:
        update["wavelength_nm"] = clamp(wavelength_nm,
                                        config.wavelength_min_nm,
                                        config.wavelength_max_nm)
    if concentration_mM is not None:
        update["concentration_mM"] = clamp(concentration_mM, 0.0,
                                           config.concentration_max_mM)
    if noise_enabled is not None:
        update["noise_enabled"] = noise_enabled
    if bleach_rate_per_minute is not None:
        update["bleach_rate_per_minute"] = max(bleach_rate_per_minute, 0.0)
    return state.model_copy(update=update)


def reading(state: SessionState,
            rng: Optional[np.random.Generator] = None) -> InstrumentReading:
    """Simulates the instrument display for the current state."""
    return simulate_conditions(state.conditions, state.config, rng)


def spectrum(state: SessionState) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Samples epsilon(lambda) and A(lambda) for the current sample."""
    config = state.config
    return config.spectrum.spectrum_curve(state.concentration_mM,
                                          config.path_length_cm,
                                          config.wavelength_min_nm,
                                          config.wavelength_max_nm,
                                          config.spectrum_step_nm)


def dismiss_unknown(state: SessionState) -> SessionState:
    """Removes the unknown-sample point from display."""
    if state.unknown is None and not state.calibration.overlay:
        return state
    return state.model_copy(update={
        "calibration": remove_temporary(state.calibration),
        "unknown": None,
    })


def measure(state: SessionState,
            rng: Optional[np.random.Generator] = None) -> SessionState:
    """Records the current sample as a calibration standard."""
    if state.is_auto_calibrating:
        return state
    state = dismiss_unknown(state)
    measured = measure_absorbance(state.wavelength_nm, state.concentration_mM,
                                  state.config.path_length_cm,
                                  state.noise_enabled, state.config, rng)
    return state.model_copy(update={
        "calibration": add_measurement(state.calibration,
                                       state.concentration_mM, measured)
    })


def clear_calibration(state: SessionState) -> SessionState:
    if state.is_auto_calibrating:
        return state
    return state.model_copy(update={"calibration": clear(state.calibration),
                                    "unknown": None})


def unknown_sample(
    state: SessionState,
    rng: Optional[np.random.Generator] = None
) -> Tuple[SessionState, UnknownSampleResult]:
    """
    Estimates a random unknown against the current calibration.

    Any previous unknown is dismissed first.
    """
    state = dismiss_unknown(state)
    calibration, result = run_unknown_sample(state.calibration,
                                             state.wavelength_nm,
                                             state.noise_enabled,
                                             state.config, rng)
    return state.model_copy(update={"calibration": calibration,
                                    "unknown": result}), result


def start_bleaching(state: SessionState) -> SessionState:
    """Starts bleaching from the current concentration.  No-op if running."""
    if state.is_bleaching:
        return state
    run = Bleaching.start_bleach(state.concentration_mM,
                                 state.bleach_rate_per_minute,
                                 state.config.history_capacity)
    return state.model_copy(update={"bleaching": run,
                                    "time_series": run.history})


def tick_bleaching(state: SessionState,
                   elapsed_minutes: Optional[float] = None) -> SessionState:
    """
    Advances the active bleaching run.

    Parameters
    ----------
    state : SessionState
        Current state.  Returned unchanged when no run is active.
    elapsed_minutes : float or None, optional
        Time since the previous tick [min].  ``None`` uses the nominal
        tick interval ``config.bleach_interval_ms``.
    """
    if not state.is_bleaching:
        return state
    if elapsed_minutes is None:
        elapsed_minutes = state.config.bleach_interval_ms / 60000.0  # ms --> min

    run = Bleaching.advance(state.bleaching, elapsed_minutes)
    return state.model_copy(update={
        "bleaching": run,
        "concentration_mM": run.concentration_mM,
        "time_series": run.history,
    })


def stop_bleaching(state: SessionState) -> SessionState:
    """Stops bleaching.  The time series is kept for display."""
    if not state.is_bleaching:
        return state
    return state.model_copy(
        update={"bleaching": Bleaching.stop_bleach(state.bleaching)})


def reset_bleaching(state: SessionState) -> SessionState:
    state = stop_bleaching(state)
    return state.model_copy(update={
        "concentration_mM": state.config.default_concentration_mM,
        "time_series": (),
    })


def start_auto_calibration(state: SessionState) -> SessionState:
    """
    Starts measuring a fresh series of standards.  No-op if running.

    The existing calibration is discarded.
    """
    if state.is_auto_calibrating:
        return state
    state = dismiss_unknown(state)
    run = AutoCalibration.start_auto_calibration(state.wavelength_nm,
                                                 state.concentration_mM,
                                                 state.config)
    return state.model_copy(update={"auto_calibration": run,
                                    "calibration": clear(state.calibration)})


def tick_auto_calibration(state: SessionState,
                          rng: Optional[np.random.Generator] = None,
                          progress_cb: Optional[Callable] = None
                          ) -> SessionState:
    """
    Measures the next standard of the active auto-calibration run.

    When the series completes the run becomes inactive and the original
    concentration is restored.
    """
    if not state.is_auto_calibrating:
        return state

    run, calibration, concentration = AutoCalibration.step_auto_calibration(
        state.auto_calibration, state.calibration, state.noise_enabled,
        state.config, rng, progress_cb)

    update = {"auto_calibration": run,
              "calibration": calibration}
    if concentration is not None:
        update["concentration_mM"] = concentration
    return state.model_copy(update=update)


def stop_auto_calibration(state: SessionState) -> SessionState:
    """Stops auto-calibration, keeping the standards measured so far."""
    if not state.is_auto_calibrating:
        return state
    return state.model_copy(update={
        "auto_calibration":
            AutoCalibration.stop_auto_calibration(state.auto_calibration)
    })


def reset_all(state: SessionState) -> SessionState:
    """Returns to the start-up state, keeping the configuration."""
    state = stop_auto_calibration(stop_bleaching(state))
    logger.debug("Session reset")
    return SessionState.initial(state.config).model_copy(
        update={"bleach_rate_per_minute": state.bleach_rate_per_minute})
