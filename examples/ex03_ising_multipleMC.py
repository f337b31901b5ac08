from mcstat import MetropolisParallel, MetropolisParameters, IsingGrid, \
    NumpyRandomSource, Averager, NumberBinning, observables_calculations

"""
ex03_ising_multipleMC: Shows how multiple independent replicas can be used
to estimate observables. Run with mpirun and call mcstat.use_mpi() to
distribute the replicas over ranks.
"""

# Simple Ising Model.
inital_configuration = IsingGrid(6, initType="negative")
parameters = MetropolisParameters(relaxation_steps=1000,
                                  measurement_number=50,
                                  steps_between_measurement=36)

# Four replicas, each with its own copy of the configuration and an
# independent random stream.
simulation = MetropolisParallel(inital_configuration, parameters,
                                NumpyRandomSource(7), number_of_replicas=4)
all_samples = simulation.simulate(0.4, observables_calculations.energy)

# After having run the replicas, an Averager object can be used to calculate
# the observables.
averager = Averager()
for samples in all_samples:
    averager.add_samples(samples)
print(averager.mean, "+-", averager.standard_error)

# Alternatively, the replicas can fill histograms that are merged afterwards.
histogram = simulation.simulate_histogram(
    0.4, observables_calculations.absolute_magnetization,
    binning=NumberBinning(4.0, 0.0))
for magnetization, visits in histogram.items():
    print(magnetization, visits)
