"""Everything configuration/model related mcstat contains."""
from .configuration import Configuration, StepProposal
from .random_source import RandomSource, NumpyRandomSource
from .ising_model import IsingGrid, IsingStep
from . import observables_calculations
