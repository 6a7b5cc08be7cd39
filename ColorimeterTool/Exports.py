### Exports Module ###
# Date : 10/17/2026
# File : Exports.py

import logging

import numpy as np

from .CalibrationData import CalibrationSet, add_measurement

logger = logging.getLogger(__name__)

CSV_HEADER = "concentration_mM,absorbance_A"


def format_value(value: float) -> str:
    # Shortest digit string that reads back to the same float
    return np.format_float_positional(float(value), trim="-")


def calibration_to_csv(calibration: CalibrationSet,
                       include_temporary: bool = False) -> str:
    """
    Serialises calibration points as CSV text.

    Values are written at full precision, so reading the file back gives
    the same floats.

    Parameters
    ----------
    calibration : CalibrationSet
        Points to export.
    include_temporary : bool, optional
        Also export unknown-sample points.  Default is ``False``.

    Returns
    -------
    csv_text : str
        Header ``concentration_mM,absorbance_A`` followed by one row per
        point, joined with newlines and without a trailing newline.
    """
    points = calibration.points if include_temporary else calibration.measurements
    rows = [f"{format_value(p.concentration_mM)},{format_value(p.absorbance)}"
            for p in points]
    return "\n".join([CSV_HEADER] + rows)


def write_calibration_csv(path: str,
                          calibration: CalibrationSet,
                          include_temporary: bool = False) -> None:
    with open(path, "w", encoding="utf-8") as f:
        f.write(calibration_to_csv(calibration, include_temporary))
    logger.info("Wrote calibration with %d points to %s",
                len(calibration.points if include_temporary
                    else calibration.measurements), path)


def read_calibration_csv(path: str) -> CalibrationSet:
    """
    Loads a calibration written by ``write_calibration_csv``.

    Every row becomes a persistent measurement.

    Raises
    ------
    ValueError
        If the file does not contain exactly two columns.
    """
    txt_content = np.loadtxt(path, skiprows=1, delimiter=",", ndmin=2)
    if txt_content.size and txt_content.shape[1] != 2:
        raise ValueError(
            f"Expected 2 columns in calibration file, found "
            f"{txt_content.shape[1]}: {path}")

    calibration = CalibrationSet()
    for concentration, absorbance in txt_content.reshape(-1, 2):
        calibration = add_measurement(calibration, float(concentration),
                                      float(absorbance))

    logger.info("Read calibration with %d points from %s",
                len(calibration.measurements), path)
    return calibration
