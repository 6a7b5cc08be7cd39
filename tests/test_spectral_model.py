import math

import numpy as np
import pytest
from pydantic import ValidationError

from ColorimeterTool import ColorimeterConfig, SpectralModel


def test_epsilon_at_peak_is_peak_plus_baseline():
    spectrum = SpectralModel()
    assert spectrum.epsilon_at(538.0) == pytest.approx(60150.0)


def test_epsilon_two_sigma_off_peak():
    spectrum = SpectralModel()
    expected = 60000.0 * math.exp(-2.0) + 150.0
    assert spectrum.epsilon_at(608.0) == pytest.approx(expected)
    assert spectrum.epsilon_at(608.0) == pytest.approx(8268.0, rel=1e-3)


def test_epsilon_never_below_baseline():
    spectrum = SpectralModel()
    wavelengths = np.concatenate([np.linspace(-1e4, 1e4, 2001),
                                  np.linspace(380.0, 700.0, 321)])
    epsilon = spectrum.epsilon_at(wavelengths)
    assert np.all(epsilon >= spectrum.baseline_epsilon)
    assert spectrum.epsilon_at(1e6) == pytest.approx(spectrum.baseline_epsilon)


def test_epsilon_scalar_and_array_inputs():
    spectrum = SpectralModel()
    assert isinstance(spectrum.epsilon_at(500.0), float)
    values = spectrum.epsilon_at([500.0, 538.0, 576.0])
    assert isinstance(values, np.ndarray)
    assert values.shape == (3,)
    # symmetric about the peak
    assert values[0] == pytest.approx(values[2])


def test_spectrum_curve_default_grid():
    spectrum = SpectralModel()
    wavelengths, epsilon, absorbance = spectrum.spectrum_curve(0.5)
    assert wavelengths.size == 161
    assert wavelengths[0] == pytest.approx(380.0)
    assert wavelengths[-1] == pytest.approx(700.0)
    assert np.allclose(np.diff(wavelengths), 2.0)
    assert np.allclose(absorbance, epsilon * 0.0005)
    assert wavelengths[np.argmax(absorbance)] == pytest.approx(538.0)


def test_spectrum_curve_zero_concentration_is_flat_zero():
    _, _, absorbance = SpectralModel().spectrum_curve(0.0)
    assert np.all(absorbance == 0.0)


def test_custom_spectral_parameters():
    spectrum = SpectralModel(peak_wavelength_nm=480.0, peak_epsilon=1000.0,
                             sigma_nm=10.0, baseline_epsilon=0.0)
    assert spectrum.epsilon_at(480.0) == pytest.approx(1000.0)
    assert spectrum.epsilon_at(490.0) == pytest.approx(1000.0 * math.exp(-0.5))


def test_invalid_sigma_is_rejected():
    with pytest.raises(ValidationError):
        SpectralModel(sigma_nm=0.0)


def test_config_validation():
    with pytest.raises(ValidationError):
        ColorimeterConfig(noise_std_absorbance=-0.1)
    with pytest.raises(ValidationError):
        ColorimeterConfig(history_capacity=0)
    with pytest.raises(ValidationError):
        ColorimeterConfig(wavelength_min_nm=700.0, wavelength_max_nm=380.0)


def test_config_defaults():
    config = ColorimeterConfig()
    assert config.noise_std_absorbance == 0.005
    assert config.bleach_interval_ms == 250.0
    assert config.auto_calibration_interval_ms == 300.0
    assert config.history_capacity == 600
    assert config.spectrum.peak_wavelength_nm == 538.0
