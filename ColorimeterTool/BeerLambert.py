### BeerLambert Module ###
# Date : 10/17/2026
# File : BeerLambert.py

import numpy as np
from typing import Optional
from .SpectralModel import SpectralModel

DEFAULT_SPECTRUM = SpectralModel()


def absorbance(wavelength_nm: float,
               concentration_mM: float,
               path_length_cm: float = 1.0,
               spectrum: Optional[SpectralModel] = None) -> float:
    """
    Computes absorbance with the Beer-Lambert law, A = epsilon * c * l.

    Parameters
    ----------
    wavelength_nm : float
        Measurement wavelength [nm].
    concentration_mM : float
        Pigment concentration [mM].  Converted to mol/L internally.
        Negative values are clamped to 0.
    path_length_cm : float, optional
        Cuvette path length [cm].  Negative values are clamped to 0.
        Default is ``1.0``.
    spectrum : SpectralModel or None, optional
        Pigment spectrum.  ``None`` uses the default betalain band.

    Returns
    -------
    absorbance : float
        Dimensionless absorbance, always >= 0.
    """
    if spectrum is None:
        spectrum = DEFAULT_SPECTRUM

    concentration_M = max(concentration_mM, 0.0) / 1000.0  # mM --> M
    path_length_cm = max(path_length_cm, 0.0)

    return spectrum.epsilon_at(wavelength_nm) * concentration_M * path_length_cm


def transmittance_from_absorbance(absorbance_value: float) -> float:
    """
    Converts absorbance to fractional transmittance, T = 10^-A.

    Negative absorbance is clamped to 0 so the result never exceeds 1.
    Very large absorbances underflow to exactly 0.
    """
    return float(np.power(10.0, -max(absorbance_value, 0.0)))
