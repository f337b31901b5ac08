"""Functions for safely printing and communicating in parallel."""
try:
    from mpi4py import MPI
except ModuleNotFoundError:
    pass


_use_mpi = False
comm = None


def set_mpi_status(new_value):
    """
    Set the MPI status.

    By setting the MPI status via this function it can be ensured that
    printing and replica distribution work in parallel.

    Parameters
    ----------
    new_value : bool
        Value the MPI status has.

    """
    global _use_mpi
    _use_mpi = new_value
    global comm
    if _use_mpi:
        comm = MPI.COMM_WORLD
    else:
        comm = None


def use_mpi():
    set_mpi_status(True)


def get_rank(_comm=None):
    """
    Get the rank of the current process.

    Always returns 0 in the serial case.

    Returns
    -------
    rank : int
        The rank of the current process.

    """
    if _comm is None:
        _comm = comm
    if _use_mpi:
        return _comm.Get_rank()
    return 0


def get_size(_comm=None):
    """
    Get the number of ranks.

    Returns
    -------
    size : int
        The number of ranks.
    """
    if _comm is None:
        _comm = comm
    if _use_mpi:
        return _comm.Get_size()
    else:
        return 1


def get_comm():
    """
    Return the MPI communicator, if MPI is being used.

    Returns
    -------
    comm : MPI.COMM_WORLD
        A MPI communicator.

    """
    return comm


def printout(*values, sep=' '):
    """
    Interface to built-in "print" for parallel runs. Can be used like print.

    Parameters
    ----------
    values
        Values to be printed.

    sep : string
        Separator between printed values.
    """
    outstring = sep.join([str(v) for v in values])

    if get_rank() == 0:
        print(outstring)


def barrier(_comm=None):
    if _comm is None:
        _comm = comm
    if _use_mpi:
        return _comm.Barrier()
    else:
        return


def gather(local_object, root=0):
    """
    Collect one Python object per rank on the root rank.

    Parameters
    ----------
    local_object : Any
        Picklable object contributed by this rank.

    root : int
        Rank receiving the objects.

    Returns
    -------
    gathered : list or None
        List of the objects ordered by rank on the root rank, None on all
        other ranks. In the serial case a list with one element.
    """
    if _use_mpi:
        return comm.gather(local_object, root=root)
    return [local_object]


def broadcast(root_object, root=0):
    """Distribute an object from the root rank to all ranks."""
    if _use_mpi:
        return comm.bcast(root_object, root=root)
    return root_object
