"""Canonical averages from a Wang-Landau density of states."""
import numpy as np


def canonical_averages(density_of_states, betas):
    """
    Reweight a logarithmic density of states to fixed temperatures.

    Parameters
    ----------
    density_of_states : mcstat.histograms.Histogram
        Logarithmic density of states over numeric energies.

    betas : array_like
        Inverse temperatures.

    Returns
    -------
    averages : dict
        Arrays (one entry per inverse temperature) for "energy",
        "energy_variance", "heat_capacity" (in units of k_B) and
        "free_energy" (up to the unknown normalization of the density of
        states).
    """
    energies, log_dos = density_of_states.to_arrays()
    energies = energies.astype(np.float64)
    log_dos = log_dos.astype(np.float64)
    betas = np.atleast_1d(np.asarray(betas, dtype=np.float64))

    mean_energy = np.empty_like(betas)
    energy_variance = np.empty_like(betas)
    free_energy = np.empty_like(betas)
    for i, beta in enumerate(betas):
        # Locate maximum Boltzmann factor (helps avoid overflows)
        exponent = log_dos - beta * energies
        exponent_max = np.max(exponent)
        boltz = np.exp(exponent - exponent_max)

        norm = np.sum(boltz)
        mean_energy[i] = np.sum(boltz * energies) / norm
        energy_variance[i] = np.sum(boltz * (energies - mean_energy[i])**2) \
            / norm
        if beta != 0:
            free_energy[i] = -(np.log(norm) + exponent_max) / beta
        else:
            free_energy[i] = np.nan

    return {"energy": mean_energy,
            "energy_variance": energy_variance,
            "heat_capacity": betas**2 * energy_variance,
            "free_energy": free_energy}
