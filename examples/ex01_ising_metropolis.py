from mcstat import Metropolis, MetropolisParameters, IsingGrid, \
    NumpyRandomSource, observables_calculations

"""
ex01_ising_metropolis: Performs one Metropolis simulation of the Ising model
at a specific inverse temperature and analyses the autocorrelation of the
energy.
"""

# Simple Ising Model; energies are given in units of the interaction.
random_source = NumpyRandomSource(42)
inital_configuration = IsingGrid(8, initType="negative")
parameters = MetropolisParameters(relaxation_steps=2000,
                                  measurement_number=200,
                                  steps_between_measurement=64)

# Perform a MC simulation at a certain inverse temperature.
beta = 0.3
simulation = Metropolis(inital_configuration, parameters, random_source)
energies = simulation.simulate(beta, observables_calculations.energy_per_site)
print("Mean energy per site:", sum(energies) / len(energies))

# How many sweeps does it take until the energy decorrelates?
tau = simulation.integrated_autocorrelation_time(
    beta, observables_calculations.energy, maximal_time=10, factor=10)
print("Integrated autocorrelation time of the energy (sweeps):", tau)
