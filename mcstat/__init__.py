"""
Monte Carlo for statistical mechanics.

Generic Metropolis and Wang-Landau engines operating on user supplied
configurations.
"""

from .version import __version__
from .histograms import Histogram, IdentityBinning, NumberBinning, \
    VectorBinning
from .simulation import Configuration, StepProposal, RandomSource, \
    NumpyRandomSource, IsingGrid, IsingStep, observables_calculations
from .montecarlo import Metropolis, MetropolisParameters, \
    MetropolisParallel, WangLandau, WangLandauParameters, Averager, \
    canonical_averages
from .common import printout, use_mpi, get_rank, get_size, get_comm, \
    barrier, kelvin_to_beta, DegenerateOperationError, CheckpointError
