"""Tests for the Ising model configuration."""
import json

import numpy as np
import pytest

from mcstat import IsingGrid, NumpyRandomSource


class TestIsingGrid:
    def test_ground_state_energy(self):
        grid = IsingGrid(4, initType="positive", interaction_strength=1.5)
        assert grid.energy() == pytest.approx(-2 * 16 * 1.5)
        assert grid.magnetization() == 16
        assert grid.system_size() == 16

        grid = IsingGrid(3, initType="negative", dimension=3)
        assert grid.energy() == pytest.approx(-3 * 27)
        assert grid.magnetization() == -27

    @pytest.mark.parametrize("lattice_size,dimension", [(2, 2), (5, 2),
                                                        (7, 1), (3, 3)])
    def test_delta_energy_matches_energy_difference(self, lattice_size,
                                                    dimension):
        random_source = NumpyRandomSource(lattice_size * dimension)
        grid = IsingGrid(lattice_size, dimension=dimension,
                         random_source=random_source)
        for i in range(50):
            step = grid.propose_step(random_source)
            assert step.is_executable()
            assert step.selection_probability_factor() == 1.0
            old_energy = grid.energy()
            delta = step.delta_energy()
            step.execute()
            assert grid.energy() - old_energy == pytest.approx(delta)

    def test_json_round_trip(self):
        grid = IsingGrid(4, random_source=NumpyRandomSource(0),
                         interaction_strength=0.25)
        info = json.loads(json.dumps(grid.to_json()))
        loaded = IsingGrid.from_json(info)
        assert np.array_equal(loaded.lattice, grid.lattice)
        assert loaded.interaction_strength == 0.25
        assert loaded.energy() == grid.energy()

    def test_invalid_arguments(self):
        with pytest.raises(Exception):
            IsingGrid(4, initType="checkerboard")
        with pytest.raises(ValueError):
            IsingGrid(1)
