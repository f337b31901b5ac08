from mcstat import WangLandau, WangLandauParameters, IsingGrid, \
    NumpyRandomSource, canonical_averages
import numpy as np

"""
ex04_ising_wang_landau: Estimates the density of states of a small Ising
model with the Wang-Landau algorithm and calculates canonical averages
from it.
"""

lattice = IsingGrid(4, initType="positive")
parameters = WangLandauParameters(modification_factor_final=1e-3,
                                  modification_factor_multiplier=0.8,
                                  flatness=0.8, sweep_steps=1600)
simulation = WangLandau(lattice, parameters, NumpyRandomSource(3))
log_dos = simulation.simulate()

# The density of states is only known up to a constant. The two ground
# states fix it.
log_dos.shift_bin_zero(log_dos.min_x_value())
log_dos += np.log(2.0)
print("E\tg(E)")
for energy, log_g in log_dos.items():
    print(energy, np.exp(log_g))

betas = np.linspace(0.1, 1.0, 10)
averages = canonical_averages(log_dos, betas)
for beta, energy, heat_capacity in zip(betas, averages["energy"],
                                       averages["heat_capacity"]):
    print(beta, energy, heat_capacity)
