"""Metropolis sampling at fixed temperature."""
from math import exp, log

import numpy as np

from mcstat.common.exceptions import DegenerateOperationError
from mcstat.common.parallelizer import printout
from .simulation_base import Simulation


class MetropolisParameters:
    """
    Parameters of a Metropolis simulation.

    Parameters
    ----------
    relaxation_steps : int
        Steps performed before the first measurement.

    measurement_number : int
        Number of measurements taken per temperature.

    steps_between_measurement : int
        Steps performed before each measurement.
    """

    def __init__(self, relaxation_steps=1000, measurement_number=1000,
                 steps_between_measurement=1000):
        for name, value in (("relaxation_steps", relaxation_steps),
                            ("measurement_number", measurement_number),
                            ("steps_between_measurement",
                             steps_between_measurement)):
            if int(value) != value or value < 0:
                raise ValueError(name + " has to be a non-negative integer.")
        self.relaxation_steps = int(relaxation_steps)
        self.measurement_number = int(measurement_number)
        self.steps_between_measurement = int(steps_between_measurement)

    def to_json(self):
        return {"relaxation_steps": self.relaxation_steps,
                "measurement_number": self.measurement_number,
                "steps_between_measurement": self.steps_between_measurement}

    @classmethod
    def from_json(cls, info):
        return cls(**info)

    def __eq__(self, other):
        return isinstance(other, MetropolisParameters) and \
            self.to_json() == other.to_json()


class Metropolis(Simulation):
    """
    Metropolis Monte Carlo simulation at fixed inverse temperature.

    Steps are accepted with the Metropolis-Hastings rule generalized to
    asymmetric proposals via the selection probability factor s of a step:
    accept if beta*dE <= -ln(s) or u < exp(-beta*dE)/s.

    Parameters
    ----------
    configuration : mcstat.simulation.configuration.Configuration
        Configuration that will be sampled.

    parameters : MetropolisParameters
        Relaxation and measurement settings.

    random_source : mcstat.simulation.random_source.RandomSource
        Source of randomness.

    measurement_hook : callable
        Called with the simulation object before each measurement.
    """

    FILE_FORMAT = "mcstat.metropolis"

    def __init__(self, configuration, parameters=None, random_source=None,
                 measurement_hook=None, simulation_id="mcstat_default",
                 path_to_folder="."):
        super(Metropolis, self).__init__(configuration, random_source,
                                         simulation_id=simulation_id,
                                         path_to_folder=path_to_folder)
        self.parameters = parameters if parameters is not None \
            else MetropolisParameters()
        self.measurement_hook = measurement_hook

    def run_steps(self, steps, beta=0.0):
        """
        Perform a number of Metropolis steps.

        Parameters
        ----------
        steps : int
            Number of steps to attempt.

        beta : float
            Inverse temperature.

        Returns
        -------
        accepted_steps : int
            Number of executed steps.
        """
        accepted_steps = 0
        for i in range(steps):
            step = self.configuration.propose_step(self.random_source)
            if not step.is_executable():
                continue
            if self.__check_acceptance(step, beta):
                step.execute()
                accepted_steps += 1
        return accepted_steps

    def __check_acceptance(self, step, beta):
        beta_times_delta_E = beta * step.delta_energy()
        selection_probability_factor = step.selection_probability_factor()
        randomNumber = self.random_source.uniform_double()
        if beta_times_delta_E <= -log(selection_probability_factor):
            return True
        return randomNumber < \
            exp(-beta_times_delta_E) / selection_probability_factor

    def simulate(self, beta, observable, accumulator=None):
        """
        Relax the configuration and measure an observable.

        Parameters
        ----------
        beta : float
            Inverse temperature.

        observable : callable
            Maps the configuration onto the measured value.

        accumulator : callable
            Receives every measured value. If None, the values are collected
            in a list.

        Returns
        -------
        samples : list or callable
            The list of measured values, or the given accumulator. If
            termination was requested, only the measurements taken so far.
        """
        samples = None
        if accumulator is None:
            samples = []
            accumulator = samples.append

        self.run_steps(self.parameters.relaxation_steps, beta)
        for measurement in range(self.parameters.measurement_number):
            self.run_steps(self.parameters.steps_between_measurement, beta)
            if self.measurement_hook is not None:
                self.measurement_hook(self)
            accumulator(observable(self.configuration))
            if self.is_terminating:
                printout("Simulation", self.id, "terminating after",
                         measurement + 1, "measurements.")
                break

        return samples if samples is not None else accumulator

    def simulate_temperatures(self, betas, observable):
        """
        Run simulate() for a sequence of inverse temperatures.

        The configuration is carried over from one temperature to the next.

        Returns
        -------
        samples : list
            One list of measured values per simulated temperature. Upon
            termination, temperatures not yet started are left out.
        """
        results = []
        for beta in betas:
            results.append(self.simulate(beta, observable))
            if self.is_terminating:
                break
        return results

    def autocorrelation_function(self, beta, observable, maximal_time,
                                 factor=5):
        """
        Measure the autocorrelation function of an observable.

        After relaxation, maximal_time*factor + 1 measurements are taken,
        one sweep apart. C(t) = <f_0 f_t> - <f>^2, where <f_0 f_t> is
        averaged over the factor windows starting at multiples of
        maximal_time and <f> over all measurements.

        Parameters
        ----------
        beta : float
            Inverse temperature.

        observable : callable
            Maps the configuration onto the measured value.

        maximal_time : int
            Largest time, in sweeps, at which C(t) is evaluated.

        factor : int
            Number of windows averaged over.

        Returns
        -------
        autocorrelation : numpy.ndarray
            C(t) for t = 0, ..., maximal_time.
        """
        if maximal_time < 1 or factor < 1:
            raise ValueError("maximal_time and factor have to be positive.")
        self.run_steps(self.parameters.relaxation_steps, beta)

        measurements = []
        for i in range(maximal_time * factor + 1):
            self.run_steps(self.configuration.system_size(), beta)
            measurements.append(observable(self.configuration))
        measurements = np.asarray(measurements, dtype=np.float64)
        measured_mean = np.mean(measurements, axis=0)

        start_times = np.arange(factor) * maximal_time
        autocorrelation = []
        for time in range(maximal_time + 1):
            products = measurements[start_times] * \
                measurements[start_times + time]
            autocorrelation.append(np.mean(products, axis=0) -
                                   measured_mean * measured_mean)
        return np.array(autocorrelation)

    def integrated_autocorrelation_time(self, beta, observable, maximal_time,
                                        factor=5):
        """
        Measure the integrated autocorrelation time of an observable.

        See autocorrelation_function() for the parameters.

        Returns
        -------
        tau : float or numpy.ndarray
            Integrated autocorrelation time in sweeps.
        """
        return self.integrated_autocorrelation_time_from_function(
            self.autocorrelation_function(beta, observable, maximal_time,
                                          factor))

    @staticmethod
    def integrated_autocorrelation_time_from_function(autocorrelation):
        """
        Integrate a measured autocorrelation function.

        tau = 1 + 2 sum_{t=1}^{N-1} (1 - t/N) C(t)/C(0), with N the maximal
        time of the autocorrelation function.

        Parameters
        ----------
        autocorrelation : array_like
            C(t) for t = 0, ..., N.

        Returns
        -------
        tau : float or numpy.ndarray
            Integrated autocorrelation time.
        """
        autocorrelation = np.asarray(autocorrelation, dtype=np.float64)
        if np.any(autocorrelation[0] == 0):
            raise DegenerateOperationError(
                "C(0) is zero, the observable did not fluctuate.")
        maximal_time = len(autocorrelation) - 1
        tau = np.ones_like(autocorrelation[0])
        for time in range(1, maximal_time):
            tau = tau + 2.0 * (1.0 - time / maximal_time) * \
                autocorrelation[time] / autocorrelation[0]
        if np.ndim(tau) == 0:
            return float(tau)
        return tau

    def to_json(self):
        """
        Convert object into JSON seriazable content.

        Returns
        -------
        info : dict
            Parameters, configuration and random source state.
        """
        return {"id": self.id,
                "parameters": self.parameters.to_json(),
                "configuration": self.configuration.to_json(),
                "random_source": self._random_source_to_json()}

    @classmethod
    def from_json(cls, info, configuration_class, random_source=None):
        return cls(configuration_class.from_json(info["configuration"]),
                   MetropolisParameters.from_json(info["parameters"]),
                   cls._random_source_from_json(info["random_source"],
                                                random_source),
                   simulation_id=info["id"])
