"""Tests for the Wang-Landau engine."""
import io
import os
from math import exp, log

import pytest

from mcstat import WangLandau, WangLandauParameters, NumpyRandomSource, \
    IsingGrid, Histogram, NumberBinning
from toy_models import FixedDeltaConfiguration, SequenceRandomSource, \
    TwoLevelSystem


class TestParameters:
    @pytest.mark.parametrize("arguments", [
        {"modification_factor_initial": 0.0},
        {"modification_factor_final": 0.0},
        {"modification_factor_multiplier": 1.0},
        {"modification_factor_multiplier": 0.0},
        {"flatness": 0.0},
        {"flatness": 1.1},
        {"sweep_steps": 0},
        {"maximal_steps": 0},
        {"energy_cutoff_lower": 1.0, "energy_cutoff_upper": -1.0},
    ])
    def test_validation(self, arguments):
        with pytest.raises(ValueError):
            WangLandauParameters(**arguments)

    def test_json(self):
        parameters = WangLandauParameters(0.5, 1e-4, 0.5, 0.9, 100, 10000,
                                          -2, 2)
        assert WangLandauParameters.from_json(parameters.to_json()) == \
            parameters


class TestSampling:
    def test_visits_and_modification_factor(self):
        parameters = WangLandauParameters(modification_factor_initial=0.5)
        simulation = WangLandau(TwoLevelSystem(4, 1), parameters,
                                NumpyRandomSource(0),
                                prototype_histogram=Histogram(
                                    values={0: 1, 1: 1}))
        simulation.run_steps(100)
        assert sum(simulation.incidence.values()) == 100
        assert sum(simulation.density_of_states.values()) == \
            pytest.approx(50.0)
        assert simulation.steps_done == 100
        assert set(simulation.density_of_states.keys()) == {0, 1}

    def test_non_executable_step_counts_as_visit(self):
        configuration = FixedDeltaConfiguration(1.0, executable=False)
        simulation = WangLandau(configuration, WangLandauParameters(),
                                SequenceRandomSource([]))
        assert simulation.run_steps(5) == 0
        assert simulation.incidence.items() == [(0.0, 5)]
        assert simulation.density_of_states.items() == [(0.0, 5.0)]

    def test_acceptance_rule(self):
        # g(0) = 3, g(1) = 1: a step up is always accepted, a step down
        # with probability exp(1 - 3).
        density_of_states = Histogram(values={0: 3.0, 1: 1.0})
        configuration = FixedDeltaConfiguration(1.0)
        simulation = WangLandau(configuration,
                                WangLandauParameters(
                                    modification_factor_initial=1e-9),
                                SequenceRandomSource([0.99]),
                                density_of_states=density_of_states)
        assert simulation.run_steps(1) == 1
        assert simulation.current_energy == 1.0

        configuration = FixedDeltaConfiguration(-1.0)
        configuration.executed_steps = -1
        density_of_states = Histogram(values={0: 3.0, 1: 1.0})
        random_numbers = [exp(-2.0) + 0.01, exp(-2.0) - 0.01]
        simulation = WangLandau(configuration,
                                WangLandauParameters(
                                    modification_factor_initial=1e-9),
                                SequenceRandomSource(random_numbers),
                                density_of_states=density_of_states)
        assert simulation.current_energy == 1.0
        assert simulation.run_steps(1) == 0
        assert simulation.run_steps(1) == 1
        assert simulation.current_energy == 0.0

    def test_energy_cutoffs(self):
        configuration = FixedDeltaConfiguration(1.0)
        parameters = WangLandauParameters(energy_cutoff_upper=2.5)
        simulation = WangLandau(configuration, parameters,
                                NumpyRandomSource(1))
        simulation.run_steps(50)
        assert simulation.current_energy <= 2.5
        assert max(simulation.density_of_states.keys()) <= 2.5

    def test_new_bins_start_at_minimum(self):
        density_of_states = Histogram(values={0.0: 7.0, -1.0: 4.0})
        configuration = FixedDeltaConfiguration(1.0)
        simulation = WangLandau(configuration, WangLandauParameters(
            modification_factor_initial=1e-9), NumpyRandomSource(2),
            density_of_states=density_of_states)
        simulation.run_steps(1)
        assert simulation.density_of_states[1.0] == \
            pytest.approx(4.0 + 1e-9)

    def test_prototype_histogram(self):
        prototype = Histogram(values={0: 12, 1: 3, 2: 1})
        simulation = WangLandau(TwoLevelSystem(), WangLandauParameters(),
                                NumpyRandomSource(0),
                                prototype_histogram=prototype)
        assert simulation.density_of_states.items() == \
            [(0, 0.0), (1, 0.0), (2, 0.0)]


class TestEpochs:
    def test_refine_keeps_density_of_states(self):
        simulation = WangLandau(TwoLevelSystem(), WangLandauParameters(
            modification_factor_initial=1.0,
            modification_factor_multiplier=0.5,
            modification_factor_final=0.3), NumpyRandomSource(3))
        simulation.run_steps(20)
        density_of_states = simulation.density_of_states.copy()

        simulation.refine()
        assert simulation.density_of_states == density_of_states
        assert len(simulation.incidence) == 0
        assert simulation.modification_factor == 0.5
        assert simulation.epoch == 1
        assert not simulation.converged

        simulation.refine()
        assert simulation.modification_factor == 0.25
        assert simulation.converged

    def test_density_of_states_non_decreasing_within_epoch(self):
        simulation = WangLandau(TwoLevelSystem(6, 2), WangLandauParameters(),
                                NumpyRandomSource(4))
        previous = {}
        for i in range(50):
            simulation.run_steps(3)
            for energy, value in simulation.density_of_states.items():
                assert value >= previous.get(energy, value)
                previous[energy] = value

    def test_two_level_convergence(self):
        # g(0)/g(1) = 1/3.
        parameters = WangLandauParameters(modification_factor_final=1e-6,
                                          modification_factor_multiplier=0.9,
                                          flatness=0.8, sweep_steps=2000,
                                          maximal_steps=10**7)
        simulation = WangLandau(TwoLevelSystem(4, 1), parameters,
                                NumpyRandomSource(2024))
        density_of_states = simulation.simulate()

        assert simulation.converged
        assert simulation.epoch <= 140
        assert simulation.modification_factor < 1e-6
        ratio = exp(density_of_states[0] - density_of_states[1])
        assert ratio == pytest.approx(1.0 / 3.0, rel=0.05)

    def test_ising_chain(self):
        # Periodic chain of six spins: g(-6) = g(6) = 2, g(-2) = g(2) = 30.
        lattice = IsingGrid(6, initType="positive", dimension=1)
        parameters = WangLandauParameters(modification_factor_final=1e-4,
                                          sweep_steps=1000)
        simulation = WangLandau(lattice, parameters, NumpyRandomSource(11))
        log_dos = simulation.simulate()

        assert simulation.converged
        assert log_dos.keys() == [-6.0, -2.0, 2.0, 6.0]
        log_dos.shift_bin_zero(-6.0)
        log_dos += log(2.0)
        assert exp(log_dos[-2.0]) == pytest.approx(30.0, rel=0.15)
        assert exp(log_dos[2.0]) == pytest.approx(30.0, rel=0.15)
        assert exp(log_dos[6.0]) == pytest.approx(2.0, rel=0.15)

    def test_step_cap(self):
        parameters = WangLandauParameters(flatness=1.0, sweep_steps=30,
                                          maximal_steps=100)
        simulation = WangLandau(TwoLevelSystem(5, 1), parameters,
                                NumpyRandomSource(5))
        simulation.simulate()
        assert simulation.steps_done == 100
        assert not simulation.converged

    def test_no_flatness_check_on_partial_sweep(self):
        parameters = WangLandauParameters(flatness=0.01, sweep_steps=30,
                                          maximal_steps=45)
        simulation = WangLandau(TwoLevelSystem(5, 1), parameters,
                                NumpyRandomSource(5))
        simulation.simulate()
        assert simulation.steps_done == 45
        assert simulation.epoch == 1
        assert sum(simulation.incidence.values()) == 15

    def test_cancellation(self):
        parameters = WangLandauParameters(sweep_steps=10)
        simulation = WangLandau(TwoLevelSystem(), parameters,
                                NumpyRandomSource(6))
        simulation.request_termination()
        simulation.simulate()
        assert simulation.steps_done == 10
        assert not simulation.converged


class TestCheckpoint:
    @pytest.mark.parametrize("interruption_steps", [4000, 1100, 1])
    def test_bit_identical_continuation(self, interruption_steps):
        def parameters(maximal_steps):
            return WangLandauParameters(modification_factor_final=1e-3,
                                        modification_factor_multiplier=0.7,
                                        sweep_steps=200,
                                        maximal_steps=maximal_steps)

        uninterrupted = WangLandau(TwoLevelSystem(8, 3), parameters(20000),
                                   NumpyRandomSource(77))
        uninterrupted.simulate()

        interrupted = WangLandau(TwoLevelSystem(8, 3),
                                 parameters(interruption_steps),
                                 NumpyRandomSource(77))
        interrupted.simulate()
        stream = io.StringIO()
        interrupted.save(stream)
        stream.seek(0)
        resumed = WangLandau.load(stream, TwoLevelSystem)
        assert resumed.steps_done == interruption_steps
        assert resumed.density_of_states == interrupted.density_of_states
        assert resumed.incidence == interrupted.incidence

        resumed.parameters.maximal_steps = 20000
        resumed.simulate()
        assert resumed.steps_done == uninterrupted.steps_done
        assert resumed.epoch == uninterrupted.epoch
        assert resumed.converged == uninterrupted.converged
        assert resumed.modification_factor == \
            uninterrupted.modification_factor
        assert resumed.density_of_states == uninterrupted.density_of_states
        assert resumed.configuration.state == \
            uninterrupted.configuration.state

    def test_checkpoints_during_run(self, tmp_path):
        parameters = WangLandauParameters(sweep_steps=50, maximal_steps=500)
        simulation = WangLandau(IsingGrid(3, initType="positive"),
                                parameters, NumpyRandomSource(8),
                                binning=NumberBinning(4, 0),
                                simulation_id="wl_run",
                                path_to_folder=str(tmp_path))
        simulation.simulate(checkpoints_after_sweeps=2, save_run=True)
        assert os.path.exists(os.path.join(str(tmp_path), "wl_run",
                                           "wl_run.json"))

        loaded = WangLandau.load_run("wl_run", IsingGrid,
                                     path_to_folder=str(tmp_path))
        assert loaded.steps_done == 500
        assert loaded.density_of_states == simulation.density_of_states
        assert loaded.density_of_states.binning == NumberBinning(4, 0)
        assert loaded.current_energy == simulation.current_energy
