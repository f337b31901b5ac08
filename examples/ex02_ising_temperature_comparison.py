from mcstat import Metropolis, MetropolisParameters, IsingGrid, \
    NumpyRandomSource, kelvin_to_beta, observables_calculations
import numpy as np

"""
ex02_ising_temperature_comparison: Runs a MC simulation of the Ising model
for multiple temperatures and gives the observables (energy and absolute
magnetization) for them.
"""

# Simple Ising Model, interaction strength in eV, temperatures in Kelvin.
temperatures = list(np.arange(100.0, 500.0, 100.0))
betas = [kelvin_to_beta(temperature) for temperature in temperatures]
inital_configuration = IsingGrid(6, initType="negative",
                                 interaction_strength=0.01)
parameters = MetropolisParameters(relaxation_steps=1000,
                                  measurement_number=100,
                                  steps_between_measurement=36)

# The configuration is carried over from one temperature to the next.
simulation = Metropolis(inital_configuration, parameters,
                        NumpyRandomSource(1))
results = simulation.simulate_temperatures(
    betas, observables_calculations.energy_and_magnetization)

for temperature, samples in zip(temperatures, results):
    samples = np.array(samples)
    print(temperature, np.mean(samples[:, 0]), np.mean(np.abs(samples[:, 1])))
