"""Test whether the examples are still working."""

import os
import runpy

import pytest

examples_path = os.path.join(os.path.dirname(os.path.abspath(__file__)),
                             "..", "examples")


@pytest.mark.examples
class TestExamples:
    def test_ex01(self):
        runpy.run_path(os.path.join(examples_path,
                                    "ex01_ising_metropolis.py"))

    def test_ex02(self):
        runpy.run_path(os.path.join(examples_path,
                                    "ex02_ising_temperature_comparison.py"))

    def test_ex03(self):
        runpy.run_path(os.path.join(examples_path,
                                    "ex03_ising_multipleMC.py"))

    def test_ex04(self):
        runpy.run_path(os.path.join(examples_path,
                                    "ex04_ising_wang_landau.py"))
