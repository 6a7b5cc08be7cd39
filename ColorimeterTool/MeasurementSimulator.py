### MeasurementSimulator Module ###
# Date : 10/17/2026
# File : MeasurementSimulator.py

import logging
import math
from typing import Optional

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from .BeerLambert import absorbance, transmittance_from_absorbance
from .ColorimeterConfig import DEFAULT_CONFIG, ColorimeterConfig

logger = logging.getLogger(__name__)


class MeasurementConditions(BaseModel):
    """
    Instrument settings for a single evaluation.

    Attributes
    ----------
    wavelength_nm : float
        Selected wavelength [nm].
    concentration_mM : float
        Sample concentration [mM].
    path_length_cm : float
        Cuvette path length [cm].  Fixed at 1 cm by the simulator UI.
    noise_enabled : bool
        Whether detector noise is added to the reading.
    """
    model_config = ConfigDict(frozen=True)

    wavelength_nm: float
    concentration_mM: float
    path_length_cm: float = 1.0
    noise_enabled: bool = True


class InstrumentReading(BaseModel):
    """
    Simulated colorimeter output.

    Attributes
    ----------
    absorbance : float
        Measured absorbance, clamped to be non-negative.
    transmittance : float
        Fractional transmittance in ``[0, 1]``.
    detector_signal : float
        Detector output normalised to ``detector_max`` at A = 0.
    """
    model_config = ConfigDict(frozen=True)

    absorbance: float = Field(..., ge=0)
    transmittance: float = Field(..., ge=0, le=1)
    detector_signal: float = Field(..., ge=0)

    @property
    def transmittance_percent(self) -> float:
        return 100.0 * self.transmittance


def standard_normal(rng: np.random.Generator) -> float:
    """
    Draws a standard normal variate with the Box-Muller transform.

    Uniform draws that are exactly 0 are rejected and redrawn so the
    logarithm is always finite.
    """
    u = 0.0
    v = 0.0
    while u == 0.0:
        u = rng.random()
    while v == 0.0:
        v = rng.random()
    return math.sqrt(-2.0 * math.log(u)) * math.cos(2.0 * math.pi * v)


def measure_absorbance(wavelength_nm: float,
                       concentration_mM: float,
                       path_length_cm: float = 1.0,
                       noise_enabled: bool = True,
                       config: Optional[ColorimeterConfig] = None,
                       rng: Optional[np.random.Generator] = None) -> float:
    """
    Returns the absorbance the instrument would report.

    The true Beer-Lambert absorbance is optionally perturbed by zero-mean
    Gaussian noise and then clamped to be >= 0.

    Parameters
    ----------
    wavelength_nm : float
        Measurement wavelength [nm].
    concentration_mM : float
        Sample concentration [mM].
    path_length_cm : float, optional
        Cuvette path length [cm].  Default is ``1.0``.
    noise_enabled : bool, optional
        Add noise with standard deviation ``config.noise_std_absorbance``.
    config : ColorimeterConfig or None, optional
        Simulator constants.  ``None`` uses the defaults.
    rng : np.random.Generator or None, optional
        Random source for the noise.  ``None`` creates a fresh generator.

    Returns
    -------
    absorbance : float
        Non-negative measured absorbance.
    """
    if config is None:
        config = DEFAULT_CONFIG

    measured = absorbance(wavelength_nm, concentration_mM, path_length_cm,
                          config.spectrum)
    if noise_enabled:
        if rng is None:
            rng = np.random.default_rng()
        measured += standard_normal(rng) * config.noise_std_absorbance

    measured = max(0.0, measured)
    logger.debug("Measured A=%.4f at %.1f nm for c=%.4f mM (noise %s)",
                 measured, wavelength_nm, concentration_mM,
                 "on" if noise_enabled else "off")
    return measured


def simulate_measurement(wavelength_nm: float,
                         concentration_mM: float,
                         path_length_cm: float = 1.0,
                         noise_enabled: bool = True,
                         config: Optional[ColorimeterConfig] = None,
                         rng: Optional[np.random.Generator] = None
                         ) -> InstrumentReading:
    """
    Simulates a full colorimeter reading.

    Parameters are the same as for ``measure_absorbance``.

    Returns
    -------
    InstrumentReading
        Absorbance, transmittance and normalised detector signal.
    """
    if config is None:
        config = DEFAULT_CONFIG

    measured = measure_absorbance(wavelength_nm, concentration_mM,
                                  path_length_cm, noise_enabled, config, rng)
    transmittance = transmittance_from_absorbance(measured)

    return InstrumentReading(absorbance=measured,
                             transmittance=transmittance,
                             detector_signal=transmittance * config.detector_max)


def simulate_conditions(conditions: MeasurementConditions,
                        config: Optional[ColorimeterConfig] = None,
                        rng: Optional[np.random.Generator] = None
                        ) -> InstrumentReading:
    """Shorthand for ``simulate_measurement`` driven by a conditions object."""
    return simulate_measurement(conditions.wavelength_nm,
                                conditions.concentration_mM,
                                conditions.path_length_cm,
                                conditions.noise_enabled, config, rng)
