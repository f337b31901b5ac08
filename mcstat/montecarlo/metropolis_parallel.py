"""Independent Metropolis replicas, distributed over MPI ranks."""
from copy import deepcopy

from mcstat.common.parallelizer import get_rank, get_size, printout, \
    gather, broadcast, barrier
from mcstat.histograms import Histogram
from .metropolis import Metropolis, MetropolisParameters
from .simulation_base import Simulation


class MetropolisParallel(Simulation):
    """
    Run several independent Metropolis replicas and merge their results.

    Every replica owns a copy of the initial configuration and an
    independent random stream spawned from the given random source.
    If MPI is used, replicas are distributed round-robin over the ranks;
    otherwise all replicas run one after another on this process. The
    replicas share the cancellation flag of this object, which they only
    read at measurement boundaries.

    Parameters
    ----------
    configuration : mcstat.simulation.configuration.Configuration
        Initial configuration, copied for every replica.

    parameters : mcstat.montecarlo.metropolis.MetropolisParameters
        Parameters used by all replicas.

    random_source : mcstat.simulation.random_source.RandomSource
        Random source from which the replica streams are spawned.

    number_of_replicas : int
        Number of replicas. Defaults to the number of ranks.

    measurement_hook : callable
        Passed on to every replica.
    """

    def __init__(self, configuration, parameters=None, random_source=None,
                 number_of_replicas=None, measurement_hook=None,
                 simulation_id="mcstat_default", path_to_folder="."):
        super(MetropolisParallel, self).__init__(
            configuration, random_source, simulation_id=simulation_id,
            path_to_folder=path_to_folder)
        if number_of_replicas is None:
            number_of_replicas = get_size()
        if number_of_replicas < 1:
            raise ValueError("At least one replica is needed.")
        self.number_of_replicas = number_of_replicas
        self.parameters = parameters if parameters is not None \
            else MetropolisParameters()

        # All ranks spawn all streams so that replica i gets the same stream
        # regardless of the number of ranks.
        replica_random_sources = self.random_source.spawn(number_of_replicas)
        self.local_replica_indices = list(range(get_rank(),
                                                number_of_replicas,
                                                get_size()))
        self.replicas = []
        for index in self.local_replica_indices:
            replica = Metropolis(deepcopy(configuration), self.parameters,
                                 replica_random_sources[index],
                                 measurement_hook=measurement_hook,
                                 simulation_id=self.id + "_" + str(index),
                                 path_to_folder=path_to_folder)
            replica.cancellation_flag = self.cancellation_flag
            self.replicas.append(replica)
        printout("Running {0} replicas on {1} rank(s).".
                 format(number_of_replicas, get_size()))

    def simulate(self, beta, observable):
        """
        Measure an observable in all replicas.

        Parameters
        ----------
        beta : float
            Inverse temperature.

        observable : callable
            Maps a configuration onto the measured value.

        Returns
        -------
        samples : list
            One list of measured values per replica, ordered by replica
            index. Available on all ranks.
        """
        local_samples = {}
        for index, replica in zip(self.local_replica_indices, self.replicas):
            local_samples[index] = replica.simulate(beta, observable)

        all_samples = None
        gathered = gather(local_samples)
        if get_rank() == 0:
            merged = {}
            for rank_samples in gathered:
                merged.update(rank_samples)
            all_samples = [merged[index]
                           for index in range(self.number_of_replicas)]
        barrier()
        return broadcast(all_samples)

    def simulate_histogram(self, beta, observable, binning=None):
        """
        Histogram an observable over all replicas.

        Every replica records its measurements in its own histogram; the
        histograms are merged with Histogram.merge_add.

        Parameters
        ----------
        beta : float
            Inverse temperature.

        observable : callable
            Maps a configuration onto the measured value.

        binning : callable
            Binning of the observable axis.

        Returns
        -------
        histogram : mcstat.histograms.Histogram
            Visit counts of the measured values. Available on all ranks.
        """
        local_histograms = []
        for replica in self.replicas:
            histogram = Histogram(binning)
            replica.simulate(beta, observable,
                             accumulator=histogram.record_visit)
            local_histograms.append(histogram)

        merged = None
        gathered = gather(local_histograms)
        if get_rank() == 0:
            merged = Histogram(binning)
            for rank_histograms in gathered:
                for histogram in rank_histograms:
                    merged.merge_add(histogram)
        barrier()
        return broadcast(merged)
