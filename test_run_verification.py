"""
Tests for the Wronskian verification sweep.
"""

import logging
import math
from pathlib import Path

import run_verification as verification
from errors import PrecisionLossError
from logging_config import disable_file_logging

EXAMPLE_CONFIG = Path(__file__).parent / "examples" / "engine_config.yaml"


def test_small_sweep(capsys):
    worst = verification.run_verification([0, 2], [-1.0, 0.0, 2.0], [0.5, 6.0, 40.0])
    assert worst < 1e-10
    out = capsys.readouterr().out
    assert "Points checked : 18" in out
    assert "Points failed  : 0" in out


def test_failures_give_infinity(monkeypatch, capsys):
    def fail(L, eta, rho, config=None):
        raise PrecisionLossError("forced", attempted=["steed"])

    monkeypatch.setattr(verification, "coulomb", fail)
    assert verification.run_verification([0], [1.0], [5.0]) == math.inf
    assert "Points failed  : 1" in capsys.readouterr().out


def test_main(monkeypatch, tmp_path):
    calls = {}

    def fake_run(tolerance, config):
        calls['tolerance'] = tolerance
        calls['config'] = config
        return 1e-12

    monkeypatch.setattr(verification, "run_verification", fake_run)
    log_file = tmp_path / "sweep.log"
    root_level = logging.getLogger().level
    try:
        code = verification.main(["--tolerance", "1e-9", "--config", str(EXAMPLE_CONFIG),
                                  "--log", str(log_file)])
    finally:
        disable_file_logging()
        logging.getLogger().setLevel(root_level)
    assert code == 0
    assert calls['tolerance'] == 1e-9
    assert calls['config'] is not None
    assert log_file.exists()


def test_main_reports_failure(monkeypatch):
    monkeypatch.setattr(verification, "run_verification", lambda tolerance, config: 1e-3)
    assert verification.main([]) == 1
