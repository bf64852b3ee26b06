"""Shared fixtures: historical record files and a stand-in density model."""
from __future__ import annotations

import stat
import sys
from pathlib import Path

import pytest

from dragdensity.config import ResolverConfig

SOLFSMY_TEXT = """\
# SOLFSMY.TXT
# YYYY DDD   JulianDay  F10   F81c  S10   S81c  M10   M81c  Y10   Y81c  Ssrc
  2019 365 2458848.5   71.0   70.2   66.1   67.8   70.3   71.0   68.9   69.4 4B05
  2020  73 2458922.5   70.9   70.4   65.9   67.5   70.0   70.8   68.5   69.1 4B05
  2020  74 2458923.5   71.2   70.5   66.2   67.6   70.4   70.9   68.8   69.2 4B05
  2020 174 2459023.5   69.8   70.1   64.9   66.3   69.0   69.5   67.5   68.1 4B05
  2020 365 2459214.5   83.0   79.6   76.0   75.2   80.1   79.0   78.3   77.7 4B05
  2021   4 2459218.5   77.5   78.9   73.4   74.0   76.1   77.3   75.0   75.6 4B05
"""


def ap_line(key: str, values: list[int], daily: int = 0) -> str:
    """An apindex-style record: yymmdd, filler to column 31, eight 3-char Ap values."""
    block = "".join(f"{v:3d}" for v in values)
    return f"{key}{' ' * 25}{block}{daily:4d}"


AP_TEXT = "\n".join([
    ap_line("200314", [3, 3, 4, 4, 5, 5, 6, 6], 4),
    ap_line("200315", [5, 10, 15, 20, 25, 30, 35, 40], 23),
    ap_line("210105", [2, 2, 2, 2, 2, 2, 2, 2], 2),
    "999999 trailer record",
]) + "\n"

MODEL_SCRIPT = """\
#!{python}
import os
import sys

with open(os.path.join(os.getcwd(), "args.txt"), "w") as f:
    f.write(os.getcwd() + "\\n")
    f.write(" ".join(sys.argv[1:]) + "\\n")
print({output!r})
"""


@pytest.fixture
def f107_path(tmp_path: Path) -> Path:
    p = tmp_path / "SOLFSMY.TXT"
    p.write_text(SOLFSMY_TEXT, encoding="utf-8")
    return p


@pytest.fixture
def ap_path(tmp_path: Path) -> Path:
    p = tmp_path / "apindex"
    p.write_text(AP_TEXT, encoding="utf-8")
    return p


def write_model(directory: Path, output: str) -> Path:
    """Write an executable that records its argv and cwd, then prints ``output``."""
    directory.mkdir(parents=True, exist_ok=True)
    exe = directory / "nrlmsise_test01"
    exe.write_text(MODEL_SCRIPT.format(python=sys.executable, output=output), encoding="utf-8")
    exe.chmod(exe.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return exe


@pytest.fixture
def model_dir(tmp_path: Path) -> Path:
    d = tmp_path / "msis"
    write_model(d, "1.234567e-11")
    return d


@pytest.fixture
def config(model_dir: Path, f107_path: Path, ap_path: Path) -> ResolverConfig:
    return ResolverConfig(
        model_executable=model_dir / "nrlmsise_test01",
        model_directory=model_dir,
        f107_path=f107_path,
        ap_path=ap_path,
        model_timeout_s=20.0,
    )
