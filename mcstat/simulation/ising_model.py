"""Configuration and steps for the Ising model."""
from random import randrange

import numpy as np
matplotlib_avail = True
try:
    import matplotlib.pyplot as plt
except ImportError:
    matplotlib_avail = False
    pass

from .configuration import Configuration, StepProposal


class IsingGrid(Configuration):
    """
    Represents a hypercubic grid of spins.

    Such a grid is at the center of the Ising model. Spins can be either
    +1 or -1 (spin up/spin down). Periodic boundary conditions are assumed.
    The energy is E = -J sum_<ij> s_i s_j over nearest neighbour pairs.

    Parameters
    ----------
    lattice_size : int
        Size of the lattice (in every direction, a hypercubic lattice is
                         assumed). Must be at least 2.

    initType : string
        Type of initialization to be performed. Default "random", assgning
        spins at random. "positive" or "negative" initializes the lattice
        entirely with positive or negative spins, respectively.

    interaction_strength : float
        Interaction strength J of the Ising model.

    dimension : int
        Number of lattice dimensions.

    random_source : mcstat.simulation.random_source.RandomSource
        Used for random initialization. If None, Python's random module
        is used.
    """

    def __init__(self, lattice_size, initType="random",
                 interaction_strength=1.0, dimension=2, random_source=None):
        super(IsingGrid, self).__init__()
        if lattice_size < 2:
            raise ValueError("Ising lattices need at least two sites per "
                             "direction.")
        self.lattice_size = lattice_size
        self.dimension = dimension
        self.interaction_strength = interaction_strength
        shape = (self.lattice_size,) * self.dimension
        if initType == "random":
            self.lattice = np.empty(shape, dtype=np.int8)
            for index in np.ndindex(shape):
                if random_source is None:
                    randomNumber = randrange(2)
                else:
                    randomNumber = random_source.uniform_integer(2)
                self.lattice[index] = 1 if randomNumber == 1 else -1
        elif initType == "negative":
            self.lattice = -np.ones(shape, dtype=np.int8)
        elif initType == "positive":
            self.lattice = np.ones(shape, dtype=np.int8)
        else:
            raise Exception("Unknown init type")

    def local_field(self, index):
        """Sum of the spins neighbouring the given site."""
        field = 0
        for axis in range(self.dimension):
            for shift in (-1, 1):
                neighbour = list(index)
                neighbour[axis] = (neighbour[axis] + shift) % self.lattice_size
                field += int(self.lattice[tuple(neighbour)])
        return field

    def energy(self):
        """
        Calculate the total energy of the spin grid.

        Returns
        -------
        total_energy : float
            Total energy of the configuration.
        """
        bonds = 0
        for axis in range(self.dimension):
            bonds += int(np.sum(self.lattice.astype(np.int64) *
                                np.roll(self.lattice, 1, axis=axis)))
        return -1.0 * self.interaction_strength * bonds

    def magnetization(self):
        """Sum of all spins."""
        return int(np.sum(self.lattice, dtype=np.int64))

    def system_size(self):
        return int(self.lattice.size)

    def propose_step(self, random_source):
        """
        Propose flipping a randomly chosen spin.

        Parameters
        ----------
        random_source : mcstat.simulation.random_source.RandomSource
            Source of randomness used to pick the spin.

        Returns
        -------
        step : IsingStep
            Step flipping the chosen spin.
        """
        position = random_source.uniform_integer(self.system_size())
        index = np.unravel_index(position, self.lattice.shape)
        return IsingStep(self, tuple(int(i) for i in index))

    def to_json(self):
        """
        Convert object into JSON seriazable content.

        Returns
        -------
        info : dict
            Info that can be saved to a dict.

        """
        return {"name": type(self).__name__,
                "interaction_strength": self.interaction_strength,
                "lattice": self.lattice.tolist()}

    @classmethod
    def from_json(cls, info):
        lattice = np.array(info["lattice"], dtype=np.int8)
        grid = cls(lattice.shape[0], initType="positive",
                   interaction_strength=info["interaction_strength"],
                   dimension=lattice.ndim)
        grid.lattice = lattice
        return grid

    def visualize(self, ax=None):
        """
        Visualize a two dimensional Ising model spin grid.

        Parameters
        ----------
        ax : matplotlib.axes.Axes
            An axis to be used for plotting. If "None", one will be created.

        Returns
        -------
        ax : matplotlib.axes.Axes
            Axis to be used for plotting. If one was provided,
            the plot will have been added to this one.

        """
        if self.dimension != 2:
            raise Exception("Only two dimensional grids can be visualized.")
        if matplotlib_avail:
            if ax is None:
                fig = plt.figure(figsize=(9, 9))
                ax = fig.add_subplot(1, 1, 1)
            plusx, plusy = np.nonzero(self.lattice == 1)
            minusx, minusy = np.nonzero(self.lattice == -1)

            ax.scatter(plusx, plusy, label="plus", marker="s",
                       color="tab:red", s=470)
            ax.scatter(minusx, minusy, label="minus", marker="s",
                       color="tab:blue", s=470)

            return ax
        else:
            raise Exception("No matplotlib found, cannot visualize Ising "
                            "grid.")


class IsingStep(StepProposal):
    """
    Flip of a single spin in an IsingGrid.

    Parameters
    ----------
    grid : IsingGrid
        Grid the step was proposed on.

    index : tuple
        Lattice index of the spin to flip.
    """

    def __init__(self, grid: IsingGrid, index):
        super(IsingStep, self).__init__()
        self.grid = grid
        self.index = index

    def is_executable(self):
        return True

    def delta_energy(self):
        spin = int(self.grid.lattice[self.index])
        return 2.0 * self.grid.interaction_strength * spin * \
            self.grid.local_field(self.index)

    def execute(self):
        self.grid.lattice[self.index] *= -1
