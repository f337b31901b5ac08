"""Functionality shared by all parts of mcstat."""
from .parallelizer import printout, use_mpi, get_rank, get_size, get_comm, \
    barrier
from .converters import kelvin_to_beta, kelvin_to_rydberg
from .exceptions import McstatError, DegenerateOperationError, \
    CheckpointError
