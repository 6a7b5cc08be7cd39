# ColorimeterTool/__init__.py

import logging

from .SpectralModel import SpectralModel
from .ColorimeterConfig import ColorimeterConfig
from .BeerLambert import absorbance, transmittance_from_absorbance
from .MeasurementSimulator import (MeasurementConditions, InstrumentReading,
                                   standard_normal, measure_absorbance,
                                   simulate_measurement)
from .CalibrationData import (CalibrationPoint, CalibrationSet, LinearFit,
                              add_measurement, remove_temporary, clear, fit,
                              fit_line, linear_regression,
                              format_fit_statistics)
from .Bleaching import (TimeSeriesPoint, BleachingRun, start_bleach, advance,
                        stop_bleach)
from .UnknownSample import (UnknownSampleResult, estimate_concentration,
                            run_unknown_sample)
from .AutoCalibration import (AutoCalibrationRun, calibration_targets,
                              start_auto_calibration, step_auto_calibration,
                              stop_auto_calibration)
from .Session import SessionState
from .Exports import (calibration_to_csv, write_calibration_csv,
                      read_calibration_csv)
from .logging_config import setup_logging

# Silent until a front end calls setup_logging
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "SpectralModel", "ColorimeterConfig", "absorbance",
    "transmittance_from_absorbance", "MeasurementConditions",
    "InstrumentReading", "standard_normal", "measure_absorbance",
    "simulate_measurement", "CalibrationPoint", "CalibrationSet", "LinearFit",
    "add_measurement", "remove_temporary", "clear", "fit", "fit_line",
    "linear_regression", "format_fit_statistics", "TimeSeriesPoint",
    "BleachingRun", "start_bleach", "advance", "stop_bleach",
    "UnknownSampleResult", "estimate_concentration", "run_unknown_sample",
    "AutoCalibrationRun", "calibration_targets", "start_auto_calibration",
    "step_auto_calibration", "stop_auto_calibration", "SessionState",
    "calibration_to_csv", "write_calibration_csv", "read_calibration_csv",
    "setup_logging"
]
