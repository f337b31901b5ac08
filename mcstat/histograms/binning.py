"""
Binning strategies for histograms.

A binning maps an arbitrary x-value onto the canonical representative of
the bin it falls into. All binnings are idempotent, i.e. binning a bin key
again returns the same key.
"""
import math
from numbers import Integral

import numpy as np


def _to_scalar(value):
    if isinstance(value, np.generic):
        return value.item()
    return value


class IdentityBinning:
    """Binning for discrete x-values; every value is its own bin."""

    def __call__(self, x):
        if isinstance(x, np.ndarray):
            return tuple(x.tolist())
        if isinstance(x, list):
            return tuple(_to_scalar(entry) for entry in x)
        return _to_scalar(x)

    def to_json(self):
        """
        Convert object into JSON seriazable content.

        Returns
        -------
        info : dict
            Info that can be saved to a dict.
        """
        return {"name": type(self).__name__}

    def __eq__(self, other):
        return type(other) is type(self)

    def __repr__(self):
        return "IdentityBinning()"


class NumberBinning:
    """
    Fixed-width binning of numbers.

    Bins are the intervals [reference + k*width, reference + (k+1)*width)
    represented by their lower edge.

    Parameters
    ----------
    width : int or float
        Width of a bin. Must be positive.

    reference : int or float
        Lower edge of one of the bins.
    """

    # Relative tolerance within which a value counts as lying on a bin edge.
    edge_tolerance = 1e-9

    def __init__(self, width=1, reference=0):
        width = _to_scalar(width)
        reference = _to_scalar(reference)
        if not width > 0:
            raise ValueError("Binning width has to be positive.")
        self.width = width
        self.reference = reference

    def __call__(self, x):
        x = _to_scalar(x)
        if isinstance(x, Integral) and isinstance(self.width, Integral) \
                and isinstance(self.reference, Integral):
            return int(self.reference +
                       ((x - self.reference) // self.width) * self.width)

        scaled = (x - self.reference) / self.width
        index = round(scaled)
        if not math.isclose(scaled, index, rel_tol=self.edge_tolerance,
                            abs_tol=self.edge_tolerance):
            index = math.floor(scaled)
        return float(self.reference + index * self.width)

    def to_json(self):
        """
        Convert object into JSON seriazable content.

        Returns
        -------
        info : dict
            Info that can be saved to a dict.
        """
        return {"name": type(self).__name__, "width": self.width,
                "reference": self.reference}

    def __eq__(self, other):
        return type(other) is type(self) and self.width == other.width \
            and self.reference == other.reference

    def __repr__(self):
        return "NumberBinning(width={0}, reference={1})".\
            format(self.width, self.reference)


class VectorBinning:
    """
    Fixed-width binning of vectors, applied component-wise.

    Parameters
    ----------
    width : int, float or sequence
        Width of a bin, either one for all components or one per component.

    reference : int, float or sequence
        Reference point, either one for all components or one per component.
    """

    def __init__(self, width=1, reference=0):
        self.width = width
        self.reference = reference

    def _component_binnings(self, dimension):
        widths = self.width if np.ndim(self.width) > 0 \
            else [self.width] * dimension
        references = self.reference if np.ndim(self.reference) > 0 \
            else [self.reference] * dimension
        if len(widths) != dimension or len(references) != dimension:
            raise Exception("Vector of dimension {0} does not match the "
                            "binning.".format(dimension))
        return [NumberBinning(w, r) for w, r in zip(widths, references)]

    def __call__(self, x):
        binnings = self._component_binnings(len(x))
        return tuple(binning(component)
                     for binning, component in zip(binnings, x))

    def to_json(self):
        """
        Convert object into JSON seriazable content.

        Returns
        -------
        info : dict
            Info that can be saved to a dict.
        """
        return {"name": type(self).__name__,
                "width": np.asarray(self.width).tolist(),
                "reference": np.asarray(self.reference).tolist()}

    def __eq__(self, other):
        return type(other) is type(self) \
            and np.array_equal(self.width, other.width) \
            and np.array_equal(self.reference, other.reference)

    def __repr__(self):
        return "VectorBinning(width={0}, reference={1})".\
            format(self.width, self.reference)


def binning_from_json(info):
    """
    Reconstruct a binning from the output of its to_json().

    Parameters
    ----------
    info : dict
        Dictionary created by to_json() of a binning.

    Returns
    -------
    binning : IdentityBinning, NumberBinning or VectorBinning
        The reconstructed binning.
    """
    name = info["name"]
    if name == "IdentityBinning":
        return IdentityBinning()
    elif name == "NumberBinning":
        return NumberBinning(info["width"], info["reference"])
    elif name == "VectorBinning":
        return VectorBinning(info["width"], info["reference"])
    else:
        raise Exception("Unknown binning: " + str(name))
