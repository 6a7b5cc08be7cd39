### SpectralModel Class ###
# Date : 10/17/2026
# File : SpectralModel.py

from pydantic import BaseModel, ConfigDict, Field
import numpy as np
from typing import Sequence, Tuple, Union


class SpectralModel(BaseModel):
    """
    Synthetic absorption spectrum of a betalain pigment.

    The molar absorptivity is modelled as a single Gaussian band sitting on
    a flat baseline.  The values are representative of beetroot betanin and
    are not meant to be spectroscopically exact.

    Attributes
    ----------
    peak_wavelength_nm : float
        Wavelength of maximum absorption [nm].
    peak_epsilon : float
        Height of the Gaussian band [L/(mol*cm)].
    sigma_nm : float
        Standard deviation of the band [nm].  Must be > 0.
    baseline_epsilon : float
        Wavelength-independent absorptivity added everywhere [L/(mol*cm)].
    """
    model_config = ConfigDict(frozen=True)

    peak_wavelength_nm: float = Field(
        default=538.0, description="Peak wavelength [nm]")
    peak_epsilon: float = Field(
        default=60000.0, ge=0, description="Peak molar absorptivity [L/(mol*cm)]")
    sigma_nm: float = Field(
        default=35.0, gt=0, description="Spectral width (standard deviation) [nm]")
    baseline_epsilon: float = Field(
        default=150.0, ge=0, description="Baseline molar absorptivity [L/(mol*cm)]")

    def epsilon_at(
        self, wavelength_nm: Union[float, Sequence[float], np.ndarray]
    ) -> Union[float, np.ndarray]:
        """
        Computes the molar absorptivity at one or more wavelengths.

        Parameters
        ----------
        wavelength_nm : float or array-like
            Wavelength(s) in nanometres.

        Returns
        -------
        epsilon : float or np.ndarray
            Molar absorptivity in L/(mol*cm).  A scalar input returns a
            ``float``; anything else returns an array of the same shape.
        """
        wavelengths = np.asarray(wavelength_nm, dtype=float)

        a = (wavelengths - self.peak_wavelength_nm) / self.sigma_nm
        epsilon = self.peak_epsilon * np.exp(-0.5 * a * a) + self.baseline_epsilon

        if epsilon.ndim == 0:
            return float(epsilon)
        return epsilon

    def spectrum_curve(
        self,
        concentration_mM: float,
        path_length_cm: float = 1.0,
        start_nm: float = 380.0,
        stop_nm: float = 700.0,
        step_nm: float = 2.0
    ) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        Samples epsilon(lambda) and A(lambda) across a wavelength range.

        The range is inclusive of ``stop_nm`` when it falls on the step grid,
        which gives 161 samples for the default 380-700 nm range.

        Parameters
        ----------
        concentration_mM : float
            Pigment concentration in millimolar.  Negative values give A = 0.
        path_length_cm : float, optional
            Cuvette path length in cm.  Default is ``1.0``.
        start_nm, stop_nm, step_nm : float, optional
            Sampling grid in nanometres.

        Returns
        -------
        wavelengths : np.ndarray
            Sampled wavelengths [nm].
        epsilon : np.ndarray
            Molar absorptivity at each wavelength [L/(mol*cm)].
        absorbance : np.ndarray
            Absorbance at each wavelength for the given sample.
        """
        n_samples = int(np.floor((stop_nm - start_nm) / step_nm + 1e-9)) + 1
        wavelengths = start_nm + step_nm * np.arange(n_samples)

        epsilon = self.epsilon_at(wavelengths)
        concentration_M = max(concentration_mM, 0.0) / 1000.0
        absorbance = epsilon * concentration_M * max(path_length_cm, 0.0)

        return wavelengths, epsilon, absorbance
