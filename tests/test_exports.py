import pytest

from ColorimeterTool import (CalibrationSet, add_measurement,
                             calibration_to_csv, read_calibration_csv,
                             write_calibration_csv)


@pytest.fixture
def calibration():
    calibration = CalibrationSet()
    for c, a in [(0.0, 0.0), (0.2, 1.0), (0.4, 2.125)]:
        calibration = add_measurement(calibration, c, a)
    return add_measurement(calibration, 0.33, 1.7, temporary=True)


def test_csv_text(calibration):
    assert calibration_to_csv(calibration) == (
        "concentration_mM,absorbance_A\n0,0\n0.2,1\n0.4,2.125")


def test_csv_can_include_temporary_points(calibration):
    lines = calibration_to_csv(calibration, include_temporary=True).split("\n")
    assert len(lines) == 5
    assert lines[-1] == "0.33,1.7"


def test_empty_csv_is_header_only():
    assert calibration_to_csv(CalibrationSet()) == "concentration_mM,absorbance_A"


def test_write_and_read_back(tmp_path, calibration):
    path = tmp_path / "calibration.csv"
    write_calibration_csv(str(path), calibration)
    loaded = read_calibration_csv(str(path))
    assert loaded.overlay == ()
    assert [(p.concentration_mM, p.absorbance) for p in loaded.measurements] == \
        [(0.0, 0.0), (0.2, 1.0), (0.4, 2.125)]


def test_read_rejects_wrong_column_count(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_text("a,b,c\n1,2,3\n4,5,6\n", encoding="utf-8")
    with pytest.raises(ValueError):
        read_calibration_csv(str(path))


def test_write_and_read_back_keeps_full_precision(tmp_path):
    calibration = add_measurement(CalibrationSet(), 0.123456789012345,
                                  0.12345678901234)
    calibration = add_measurement(calibration, 1.0 / 3.0, 2.0 / 3.0)
    path = tmp_path / "precise.csv"
    write_calibration_csv(str(path), calibration)
    loaded = read_calibration_csv(str(path))
    assert [(p.concentration_mM, p.absorbance) for p in loaded.measurements] == \
        [(0.123456789012345, 0.12345678901234), (1.0 / 3.0, 2.0 / 3.0)]
