import pytest

from ColorimeterTool import (CalibrationSet, LinearFit, add_measurement, clear,
                             estimate_concentration, fit, fit_line,
                             format_fit_statistics, linear_regression,
                             remove_temporary)


def build(points, temporary=()):
    calibration = CalibrationSet()
    for c, a in points:
        calibration = add_measurement(calibration, c, a)
    for c, a in temporary:
        calibration = add_measurement(calibration, c, a, temporary=True)
    return calibration


def test_perfect_line():
    calibration = build([(0.0, 0.0), (0.2, 1.0), (0.4, 2.0),
                         (0.6, 3.0), (0.8, 4.0), (1.0, 5.0)])
    line = fit(calibration)
    assert line.slope == pytest.approx(5.0, abs=1e-12)
    assert line.intercept == pytest.approx(0.0, abs=1e-12)
    assert line.r_squared == pytest.approx(1.0, abs=1e-12)
    assert line.n_points == 6
    assert line.is_defined


def test_fit_is_independent_of_point_order():
    points = [(0.1, 0.31), (0.5, 1.42), (0.3, 0.95), (0.9, 2.71)]
    forward = fit(build(points))
    backward = fit(build(list(reversed(points))))
    assert forward.slope == pytest.approx(backward.slope)
    assert forward.intercept == pytest.approx(backward.intercept)
    assert forward.r_squared == pytest.approx(backward.r_squared)


def test_noisy_data_has_r_squared_below_one():
    line = fit(build([(0.0, 0.02), (0.5, 0.48), (1.0, 1.05), (1.5, 1.47)]))
    assert 0.9 < line.r_squared < 1.0


@pytest.mark.parametrize("points", [[], [(0.5, 2.0)]])
def test_fewer_than_two_points_gives_zero_fit(points):
    line = fit(build(points))
    assert (line.slope, line.intercept, line.r_squared) == (0.0, 0.0, 0.0)
    assert not line.is_defined


def test_identical_concentrations_fall_back_to_zero_slope():
    line = linear_regression([0.5, 0.5, 0.5], [1.0, 2.0, 3.0])
    assert line.slope == 0.0
    assert line.intercept == pytest.approx(2.0)
    assert line.r_squared == 0.0


def test_repeated_standard_falls_back_to_zero_slope():
    # n*sum(x^2) - sum(x)^2 is a rounding residue here, not an exact zero
    calibration = build([(0.01, 2.0), (0.01, 1.995), (0.01, 2.01)])
    line = fit(calibration)
    assert line.slope == 0.0
    assert line.r_squared == 0.0
    assert line.intercept == pytest.approx((2.0 + 1.995 + 2.01) / 3)
    assert estimate_concentration(2.0, line) == 0.0


def test_many_repeats_of_small_standard_fall_back_to_zero_slope():
    line = linear_regression([0.001] * 5, [0.3, 0.31, 0.29, 0.305, 0.295])
    assert line.slope == 0.0
    assert line.r_squared == 0.0


def test_constant_absorbance_has_zero_r_squared():
    line = linear_regression([0.0, 0.5, 1.0], [0.7, 0.7, 0.7])
    assert line.slope == pytest.approx(0.0)
    assert line.intercept == pytest.approx(0.7)
    assert line.r_squared == 0.0


def test_temporary_points_do_not_affect_fit():
    base = [(0.0, 0.0), (0.5, 1.0), (1.0, 2.0)]
    with_unknown = build(base, temporary=[(0.3, 9.0)])
    assert fit(with_unknown) == fit(build(base))
    assert len(with_unknown) == 4
    assert with_unknown.points[-1].is_temporary
    assert [p.concentration_mM for p in with_unknown.points] == [0.0, 0.5, 1.0, 0.3]


def test_remove_temporary_and_clear():
    calibration = build([(0.0, 0.0), (1.0, 2.0)], temporary=[(0.4, 0.8)])
    stripped = remove_temporary(calibration)
    assert stripped.overlay == ()
    assert stripped.measurements == calibration.measurements
    assert len(clear(calibration)) == 0


def test_add_measurement_returns_new_set():
    original = build([(0.0, 0.0)])
    updated = add_measurement(original, 1.0, 2.0)
    assert len(original) == 1
    assert len(updated) == 2


def test_fit_does_not_modify_set():
    calibration = build([(0.0, 0.1), (1.0, 2.1)], temporary=[(0.5, 1.1)])
    before = calibration.model_dump()
    fit(calibration)
    assert calibration.model_dump() == before


def test_fit_line_endpoints():
    calibration = build([(0.2, 1.0), (0.4, 2.0)])
    (x0, y0), (x1, y1) = fit_line(calibration, concentration_max_mM=1.0)
    assert (x0, x1) == (0.0, 1.0)
    assert y0 == pytest.approx(0.0, abs=1e-12)
    assert y1 == pytest.approx(5.0)


def test_fit_line_extends_past_concentration_max():
    calibration = build([(0.0, 0.0), (1.5, 3.0)])
    (_, _), (x1, y1) = fit_line(calibration, concentration_max_mM=1.0)
    assert x1 == 1.5
    assert y1 == pytest.approx(3.0)


def test_fit_line_undefined_for_single_point():
    assert fit_line(build([(0.5, 1.0)])) is None


def test_format_fit_statistics():
    line = fit(build([(0.0, 1.0), (1.0, 3.0), (2.0, 5.0), (3.0, 7.0)]))
    assert format_fit_statistics(line) == "m = 2.000, b = 1.000, R² = 1.000"


def test_format_undefined_fit_uses_dashes():
    assert format_fit_statistics(LinearFit()) == "m = —, b = —, R² = —"
