"""Wang-Landau estimation of the density of states."""
from math import exp, log

from mcstat.common.parallelizer import printout
from mcstat.histograms import Histogram
from .simulation_base import Simulation


class WangLandauParameters:
    """
    Parameters of a Wang-Landau simulation.

    Parameters
    ----------
    modification_factor_initial : float
        Logarithmic increment of the density of states in the first epoch.

    modification_factor_final : float
        The simulation has converged once the modification factor drops
        below this value.

    modification_factor_multiplier : float
        Factor (0 < m < 1) the modification factor is multiplied with after
        each flat epoch.

    flatness : float
        Flatness (0 < f <= 1) the visit histogram needs to reach to end an
        epoch.

    sweep_steps : int
        Steps performed between two flatness checks.

    maximal_steps : int
        Upper bound for the total number of steps. None means no bound.

    energy_cutoff_lower : float
        Energies below this value are never entered. None disables the
        cutoff.

    energy_cutoff_upper : float
        Energies above this value are never entered. None disables the
        cutoff.
    """

    def __init__(self, modification_factor_initial=1.0,
                 modification_factor_final=1e-6,
                 modification_factor_multiplier=0.9, flatness=0.8,
                 sweep_steps=1000, maximal_steps=None,
                 energy_cutoff_lower=None, energy_cutoff_upper=None):
        if not modification_factor_initial > 0:
            raise ValueError("Initial modification factor has to be "
                             "positive.")
        if not modification_factor_final > 0:
            raise ValueError("Final modification factor has to be positive.")
        if not 0 < modification_factor_multiplier < 1:
            raise ValueError("Modification factor multiplier has to be "
                             "between 0 and 1.")
        if not 0 < flatness <= 1:
            raise ValueError("Flatness has to be in (0, 1].")
        if int(sweep_steps) != sweep_steps or sweep_steps < 1:
            raise ValueError("Sweep steps have to be a positive integer.")
        if maximal_steps is not None and maximal_steps < 1:
            raise ValueError("Maximal steps have to be positive.")
        if energy_cutoff_lower is not None and \
                energy_cutoff_upper is not None and \
                energy_cutoff_lower > energy_cutoff_upper:
            raise ValueError("Lower energy cutoff above upper energy "
                             "cutoff.")
        self.modification_factor_initial = modification_factor_initial
        self.modification_factor_final = modification_factor_final
        self.modification_factor_multiplier = modification_factor_multiplier
        self.flatness = flatness
        self.sweep_steps = int(sweep_steps)
        self.maximal_steps = maximal_steps
        self.energy_cutoff_lower = energy_cutoff_lower
        self.energy_cutoff_upper = energy_cutoff_upper

    def to_json(self):
        return {
            "modification_factor_initial": self.modification_factor_initial,
            "modification_factor_final": self.modification_factor_final,
            "modification_factor_multiplier":
                self.modification_factor_multiplier,
            "flatness": self.flatness,
            "sweep_steps": self.sweep_steps,
            "maximal_steps": self.maximal_steps,
            "energy_cutoff_lower": self.energy_cutoff_lower,
            "energy_cutoff_upper": self.energy_cutoff_upper
        }

    @classmethod
    def from_json(cls, info):
        return cls(**info)

    def __eq__(self, other):
        return isinstance(other, WangLandauParameters) and \
            self.to_json() == other.to_json()


class WangLandau(Simulation):
    """
    Wang-Landau simulation estimating the density of states g(E).

    The random walk accepts a step from E_src to E_dst with probability
    min(1, exp(ln g(E_src) - ln g(E_dst)) / s), s being the selection
    probability factor of the step. After every step, the logarithmic
    density of states and the visit histogram of the current energy bin are
    incremented. Every sweep_steps steps the visit histogram is checked for
    flatness; a flat histogram ends the epoch, reducing the modification
    factor and clearing the visit histogram.

    The resulting logarithmic density of states is only defined up to an
    additive constant; use Histogram.shift_bin_zero() to normalize it.

    Parameters
    ----------
    configuration : mcstat.simulation.configuration.Configuration
        Configuration that will be sampled.

    parameters : WangLandauParameters
        Convergence settings.

    random_source : mcstat.simulation.random_source.RandomSource
        Source of randomness.

    binning : callable
        Binning of the energy axis. Defaults to identity binning, suitable
        for discrete energies.

    density_of_states : mcstat.histograms.Histogram
        Initial estimate of the logarithmic density of states, e.g. from a
        previous run. Its binning is used.

    prototype_histogram : mcstat.histograms.Histogram
        Histogram whose bins are known to be accessible. They are added to
        the density of states with value 0 if not present yet.
    """

    FILE_FORMAT = "mcstat.wang_landau"

    def __init__(self, configuration, parameters=None, random_source=None,
                 binning=None, density_of_states=None,
                 prototype_histogram=None, simulation_id="mcstat_default",
                 path_to_folder="."):
        super(WangLandau, self).__init__(configuration, random_source,
                                         simulation_id=simulation_id,
                                         path_to_folder=path_to_folder)
        self.parameters = parameters if parameters is not None \
            else WangLandauParameters()
        if density_of_states is None:
            density_of_states = Histogram(binning)
        self.density_of_states = density_of_states
        self.incidence = Histogram(self.density_of_states.binning)
        if prototype_histogram is not None:
            for energy in prototype_histogram:
                self.density_of_states.insert_if_absent(energy, 0.0)

        self.modification_factor = \
            self.parameters.modification_factor_initial
        self.epoch = 0
        self.steps_done = 0
        self.converged = False
        self.current_energy = configuration.energy()

    def run_steps(self, steps):
        """
        Perform Wang-Landau steps with the current modification factor.

        Non-executable steps and steps leaving the energy cutoffs count as
        a visit of the current energy.

        Parameters
        ----------
        steps : int
            Number of steps to perform.

        Returns
        -------
        accepted_steps : int
            Number of executed steps.
        """
        accepted_steps = 0
        for i in range(steps):
            step = self.configuration.propose_step(self.random_source)
            if step.is_executable():
                new_energy = self.current_energy + step.delta_energy()
                if self.__in_energy_range(new_energy) and \
                        self.__check_acceptance(step, new_energy):
                    step.execute()
                    self.current_energy = new_energy
                    accepted_steps += 1

            self.density_of_states.record_value(self.current_energy,
                                                self.modification_factor)
            self.incidence.record_visit(self.current_energy)
            self.steps_done += 1
        return accepted_steps

    def __in_energy_range(self, energy):
        if self.parameters.energy_cutoff_lower is not None and \
                energy < self.parameters.energy_cutoff_lower:
            return False
        if self.parameters.energy_cutoff_upper is not None and \
                energy > self.parameters.energy_cutoff_upper:
            return False
        return True

    def __log_density_of_states(self, energy):
        value = self.density_of_states.get(energy)
        if value is None:
            # New bins start at the lowest known estimate.
            initial = self.density_of_states.min_value() \
                if len(self.density_of_states) > 0 else 0.0
            value = self.density_of_states.insert_if_absent(energy, initial)
        return value

    def __check_acceptance(self, step, new_energy):
        log_acceptance = \
            self.__log_density_of_states(self.current_energy) - \
            self.__log_density_of_states(new_energy) - \
            log(step.selection_probability_factor())
        randomNumber = self.random_source.uniform_double()
        if log_acceptance >= 0.0:
            return True
        return randomNumber < exp(log_acceptance)

    def check_flatness(self):
        """
        Compute the flatness of the visit histogram of the current epoch.

        Returns
        -------
        flatness : float
            Minimal visit count divided by the mean visit count.
        """
        return self.incidence.flatness()

    def refine(self):
        """
        End the current epoch.

        Reduces the modification factor and clears the visit histogram;
        the density of states is not modified. Marks the simulation as
        converged once the modification factor drops below the final one.
        """
        self.modification_factor *= \
            self.parameters.modification_factor_multiplier
        self.incidence.clear()
        self.epoch += 1
        if self.modification_factor < \
                self.parameters.modification_factor_final:
            self.converged = True

    def simulate(self, checkpoints_after_sweeps=0, save_run=False):
        """
        Run the Wang-Landau simulation until convergence.

        The simulation also stops if termination is requested or the
        maximal number of steps is reached; check the converged attribute.

        Parameters
        ----------
        checkpoints_after_sweeps : int
            If positive, a checkpoint is written every that many sweeps.

        save_run : bool
            If True, the final state is written as a checkpoint.

        Returns
        -------
        density_of_states : mcstat.histograms.Histogram
            Unnormalized logarithmic density of states.
        """
        printout("Starting Wang-Landau simulation " + self.id + ".")
        maximal_steps = self.parameters.maximal_steps
        sweeps_since_checkpoint = 0
        sweep_steps = self.parameters.sweep_steps
        while not self.converged:
            # Flatness checks happen at multiples of sweep_steps, also when
            # a run was capped or resumed in the middle of a sweep.
            steps = sweep_steps - self.steps_done % sweep_steps
            if maximal_steps is not None:
                steps = min(steps, maximal_steps - self.steps_done)
                if steps <= 0:
                    printout("Wang-Landau simulation", self.id,
                             "reached the maximal number of steps without "
                             "converging, modification factor is",
                             self.modification_factor)
                    break

            self.run_steps(steps)
            if self.steps_done % sweep_steps == 0:
                flatness = self.check_flatness()
                if flatness >= self.parameters.flatness:
                    self.refine()
                    printout("Wang-Landau epoch", self.epoch,
                             "finished after", self.steps_done,
                             "steps with flatness", flatness,
                             "- modification factor is now",
                             self.modification_factor)

            sweeps_since_checkpoint += 1
            if checkpoints_after_sweeps > 0 and \
                    sweeps_since_checkpoint >= checkpoints_after_sweeps:
                self._save_run()
                sweeps_since_checkpoint = 0

            if self.is_terminating:
                printout("Wang-Landau simulation", self.id,
                         "terminating in epoch", self.epoch)
                break

        if self.converged:
            printout("Wang-Landau simulation", self.id, "converged after",
                     self.epoch, "epochs and", self.steps_done, "steps.")
        if save_run:
            self._save_run()
        return self.density_of_states

    def to_json(self):
        """
        Convert object into JSON seriazable content.

        Returns
        -------
        info : dict
            Everything needed to continue the simulation.
        """
        return {"id": self.id,
                "parameters": self.parameters.to_json(),
                "density_of_states": self.density_of_states.to_json(),
                "incidence": self.incidence.to_json(),
                "modification_factor": self.modification_factor,
                "epoch": self.epoch,
                "steps_done": self.steps_done,
                "converged": self.converged,
                "current_energy": self.current_energy,
                "configuration": self.configuration.to_json(),
                "random_source": self._random_source_to_json()}

    @classmethod
    def from_json(cls, info, configuration_class, random_source=None):
        density_of_states = Histogram.from_json(info["density_of_states"])
        loaded_simulation = cls(
            configuration_class.from_json(info["configuration"]),
            WangLandauParameters.from_json(info["parameters"]),
            cls._random_source_from_json(info["random_source"],
                                         random_source),
            density_of_states=density_of_states,
            simulation_id=info["id"])

        incidence = Histogram.from_json(info["incidence"])
        loaded_simulation.incidence = incidence
        loaded_simulation.modification_factor = info["modification_factor"]
        loaded_simulation.epoch = info["epoch"]
        loaded_simulation.steps_done = info["steps_done"]
        loaded_simulation.converged = info["converged"]
        loaded_simulation.current_energy = info["current_energy"]
        return loaded_simulation
