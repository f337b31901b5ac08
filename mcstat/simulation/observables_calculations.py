"""
Collection of useful observable calculation functions.

An observable is any callable mapping a configuration onto a value that
supports addition and multiplication (floats, numpy arrays).
"""

import numpy as np


def energy(configuration):
    """Total energy of a configuration."""
    return configuration.energy()


def energy_per_site(configuration):
    """Total energy of a configuration divided by its system size."""
    return configuration.energy() / configuration.system_size()


def magnetization(configuration):
    """Total magnetization of a spin configuration."""
    return float(configuration.magnetization())


def absolute_magnetization(configuration):
    """Absolute value of the total magnetization of a spin configuration."""
    return abs(float(configuration.magnetization()))


def energy_and_magnetization(configuration):
    """Energy and magnetization as an array-valued observable."""
    return np.array([configuration.energy(),
                     float(configuration.magnetization())])
