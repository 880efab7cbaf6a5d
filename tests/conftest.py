"""Shared fixtures for the fuzzykit test suite."""

from collections.abc import Generator
import os

import pytest

from fuzzykit.config import set_default_config
from fuzzykit.fuzzy.core import mfs
from fuzzykit.fuzzy.model.variable import FuzzyVariable

SHOWER_FZ = """\
# shower controller
var temp 0 100 C
var flow 0 30 l/min
var valve 0 10

term temp cold trap 0 0 20 40
term temp hot s 37 60
term temp warm expr "not cold and not hot"
term flow low right 0 15
term flow high left 10 30
term valve closed right 0 10
term valve open left 0 10

executor mamdani
defuzz moment

rule r1 IF temp is hot THEN valve is closed
rule r2 IF temp is cold AND flow is low THEN valve is open
rule r3 IF temp is "very hot" THEN valve is "very closed" executor larsen
"""


@pytest.fixture(autouse=True)
def reset_default_config(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    for key in list(os.environ):
        if key.startswith("FUZZYKIT_"):
            monkeypatch.delenv(key)
    set_default_config(None)
    yield
    set_default_config(None)


@pytest.fixture
def temp() -> FuzzyVariable:
    var = FuzzyVariable("temp", 0, 100, "C")
    var.add_term("cold", mfs.right_linear(0, 50))
    var.add_term("medium", mfs.triangle(25, 50, 75))
    var.add_term("hot", mfs.left_linear(50, 100))
    return var


@pytest.fixture
def shower_source() -> str:
    return SHOWER_FZ


@pytest.fixture
def shower_file(tmp_path) -> str:
    path = tmp_path / "shower.fz"
    path.write_text(SHOWER_FZ, encoding="utf-8")
    return str(path)
