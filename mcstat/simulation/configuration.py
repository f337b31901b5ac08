"""Abstract base classes for configurations and the steps proposed on them."""

from abc import ABC, abstractmethod


class StepProposal(ABC):
    """
    Abstract base class for a step proposed on a configuration.

    A step is bound to the configuration it was proposed on. It may only be
    executed once, and only as long as the configuration has not been
    changed otherwise.
    """

    def __init__(self):
        pass

    @abstractmethod
    def is_executable(self):
        """
        Check whether the step can be performed at all.

        Returns
        -------
        executable : bool
            If False, the step is treated as a null move.
        """
        pass

    @abstractmethod
    def delta_energy(self):
        """
        Energy difference the step would cause.

        Returns
        -------
        delta_energy : float
            Energy after the step minus energy before the step.
        """
        pass

    def selection_probability_factor(self):
        """
        Correction factor for asymmetric proposal distributions.

        Ratio of the probability to propose the reverse step and the
        probability to propose this step. Symmetric proposals return 1.

        Returns
        -------
        factor : float
            Positive correction factor.
        """
        return 1.0

    @abstractmethod
    def execute(self):
        """Apply the step to the configuration it was proposed on."""
        pass


class Configuration(ABC):
    """Abstract base class for configurations (spin grids, etc.)."""

    def __init__(self):
        pass

    @abstractmethod
    def propose_step(self, random_source):
        """
        Propose a random step on this configuration.

        Parameters
        ----------
        random_source : mcstat.simulation.random_source.RandomSource
            Source of randomness for the proposal.

        Returns
        -------
        step : StepProposal
            The proposed, not yet executed step.

        """
        pass

    @abstractmethod
    def system_size(self):
        """
        Number of degrees of freedom; one sweep consists of that many steps.

        Returns
        -------
        size : int
        """
        pass

    @abstractmethod
    def energy(self):
        """
        Total energy of the configuration.

        Returns
        -------
        energy : float
        """
        pass

    @abstractmethod
    def to_json(self):
        """
        Convert object into JSON seriazable content.

        Returns
        -------
        info : dict
            Info that can be saved to a dict.
        """
        pass

    @classmethod
    def from_json(cls, info):
        """
        Create a configuration from the output of to_json().

        Parameters
        ----------
        info : dict
            Dictionary created by to_json().

        Returns
        -------
        configuration : Configuration
        """
        raise Exception(cls.__name__ + " cannot be loaded from a "
                        "checkpoint.")
