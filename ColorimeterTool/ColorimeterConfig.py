### ColorimeterConfig Class ###
# Date : 10/17/2026
# File : ColorimeterConfig.py

from pydantic import BaseModel, Field, ConfigDict, model_validator
from .SpectralModel import SpectralModel


class ColorimeterConfig(BaseModel):
    """
    Configuration for a colorimeter simulation session.

    Every numeric constant used by the simulator lives here so that the
    physics, the calibration workflow and the timers can be exercised in
    isolation with non-default values.

    Parameters
    ----------
    spectrum : SpectralModel, optional
        Synthetic pigment spectrum.  Default is the betalain band at 538 nm.
    noise_std_absorbance : float, optional
        Standard deviation of the additive absorbance noise.  Must be >= 0.
        Default is ``0.005``.
    detector_max : float, optional
        Normalised detector output for zero absorbance.  Default is ``1.0``.
    path_length_cm : float, optional
        Cuvette path length [cm].  Default is ``1.0``.
    wavelength_min_nm, wavelength_max_nm : float, optional
        Wavelength range of the spectrum plot [nm].  Default is 380-700 nm.
    spectrum_step_nm : float, optional
        Sampling step of the spectrum plot [nm].  Default is ``2``.
    concentration_max_mM : float, optional
        Upper bound of the concentration input [mM].  Default is ``1.0``.
    default_wavelength_nm : float, optional
        Wavelength restored on reset [nm].  Default is ``538``.
    default_concentration_mM : float, optional
        Concentration restored on reset [mM].  Default is ``0.5``.
    default_bleach_rate_per_minute : float, optional
        Initial first-order bleaching rate constant [1/min].
        Default is ``0.1``.
    bleach_interval_ms : float, optional
        Interval between bleaching ticks [ms].  Default is ``250``.
    auto_calibration_interval_ms : float, optional
        Interval between auto-calibration steps [ms].  Default is ``300``.
    auto_calibration_steps : int, optional
        Number of evenly spaced standards measured by auto-calibration.
        Must be >= 2.  Default is ``11``.
    history_capacity : int, optional
        Maximum number of concentration-vs-time points retained.
        Default is ``600``.
    slope_tolerance : float, optional
        Calibration slopes with a magnitude below this value are treated as
        zero when estimating an unknown.  Default is ``1e-12``.
    """
    model_config = ConfigDict(frozen=True)

    spectrum: SpectralModel = Field(default_factory=SpectralModel)

    noise_std_absorbance: float = Field(default=0.005, ge=0)
    detector_max: float = Field(default=1.0, gt=0)
    path_length_cm: float = Field(default=1.0, ge=0)

    wavelength_min_nm: float = Field(default=380.0)
    wavelength_max_nm: float = Field(default=700.0)
    spectrum_step_nm: float = Field(default=2.0, gt=0)
    concentration_max_mM: float = Field(default=1.0, gt=0)

    default_wavelength_nm: float = 538.0
    default_concentration_mM: float = Field(default=0.5, ge=0)
    default_bleach_rate_per_minute: float = Field(default=0.1, ge=0)

    bleach_interval_ms: float = Field(default=250.0, gt=0)
    auto_calibration_interval_ms: float = Field(default=300.0, gt=0)
    auto_calibration_steps: int = Field(default=11, ge=2)
    history_capacity: int = Field(default=600, ge=1)

    slope_tolerance: float = Field(default=1e-12, ge=0)

    @model_validator(mode="after")
    def validate_wavelength_range(self):
        if self.wavelength_max_nm <= self.wavelength_min_nm:
            raise ValueError(
                "wavelength_max_nm must be greater than wavelength_min_nm")
        return self


# Shared instance used whenever a caller passes no config
DEFAULT_CONFIG = ColorimeterConfig()
