"""Sources of random numbers for the Monte Carlo engines."""
from abc import ABC, abstractmethod
import copy

import numpy as np


class RandomSource(ABC):
    """Abstract base class for random number sources."""

    @abstractmethod
    def uniform_double(self):
        """
        Draw a uniformly distributed number.

        Returns
        -------
        number : float
            Random number in [0, 1).
        """
        pass

    @abstractmethod
    def seed(self, seed):
        """Reset the source using an integer seed."""
        pass

    def uniform_integer(self, upper):
        """Draw a uniformly distributed integer in [0, upper)."""
        return min(int(self.uniform_double() * upper), upper - 1)

    @abstractmethod
    def get_state(self):
        """Return the JSON serializable internal state."""
        pass

    @abstractmethod
    def set_state(self, state):
        """Restore an internal state created by get_state()."""
        pass

    @abstractmethod
    def spawn(self, number):
        """
        Create statistically independent random sources.

        Parameters
        ----------
        number : int
            Number of sources to create.

        Returns
        -------
        sources : list
            List of new RandomSource objects.
        """
        pass


class NumpyRandomSource(RandomSource):
    """
    Random source based on a numpy Generator (PCG64).

    Parameters
    ----------
    seed : int or numpy.random.SeedSequence
        Seed of the generator. If None, fresh entropy is used.
    """

    def __init__(self, seed=None):
        self.seed(seed)

    def seed(self, seed):
        if isinstance(seed, np.random.SeedSequence):
            self.seed_sequence = seed
        else:
            self.seed_sequence = np.random.SeedSequence(seed)
        self.generator = np.random.Generator(
            np.random.PCG64(self.seed_sequence))

    def uniform_double(self):
        return self.generator.random()

    def uniform_integer(self, upper):
        return int(self.generator.integers(upper))

    def get_state(self):
        """
        Return the generator state and the seed sequence position.

        The seed sequence is part of the state so that sources spawned
        after a restore are the same as without the restore.
        """
        return {"bit_generator":
                copy.deepcopy(self.generator.bit_generator.state),
                "seed_sequence": {
                    "entropy": self.seed_sequence.entropy,
                    "spawn_key": list(self.seed_sequence.spawn_key),
                    "n_children_spawned":
                        self.seed_sequence.n_children_spawned}}

    def set_state(self, state):
        seed_sequence = state["seed_sequence"]
        self.seed_sequence = np.random.SeedSequence(
            seed_sequence["entropy"],
            spawn_key=tuple(seed_sequence["spawn_key"]),
            n_children_spawned=seed_sequence["n_children_spawned"])
        self.generator.bit_generator.state = \
            copy.deepcopy(state["bit_generator"])

    def spawn(self, number):
        return [NumpyRandomSource(child) for child in
                self.seed_sequence.spawn(number)]
