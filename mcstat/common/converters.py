import scipy.constants
import ase.units


def kelvin_to_rydberg(temperature_K):
    """
    Convert a temperature from Kelvin to Rydberg energy units.

    Parameters
    ----------
    temperature_K : float
        Temperature in Kelvin.

    Returns
    -------
    temperature_Ry : float
        Temperature expressed in Rydberg.

    """
    k_B = scipy.constants.Boltzmann
    Ry_in_Joule = scipy.constants.Rydberg*scipy.constants.h*scipy.constants.c
    return (k_B*temperature_K)/Ry_in_Joule


def kelvin_to_beta(temperature_K, energy_unit="eV"):
    """
    Convert a temperature in Kelvin into an inverse temperature.

    Parameters
    ----------
    temperature_K : float
        Temperature in Kelvin. Must be positive.

    energy_unit : string
        Energy unit of the configuration energies the inverse temperature
        will be multiplied with. "eV", "Ry" and "J" are supported.

    Returns
    -------
    beta : float
        Inverse temperature 1/(k_B T) in 1/energy_unit.
    """
    if temperature_K <= 0.0:
        raise ValueError("Temperature has to be positive to define an "
                         "inverse temperature.")
    if energy_unit == "eV":
        return 1.0 / (ase.units.kB * temperature_K)
    elif energy_unit == "Ry":
        return 1.0 / kelvin_to_rydberg(temperature_K)
    elif energy_unit == "J":
        return 1.0 / (scipy.constants.Boltzmann * temperature_K)
    else:
        raise Exception("Invalid energy unit selected.")
