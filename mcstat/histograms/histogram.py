"""Ordered histogram storing binned values."""
import numpy as np

from mcstat.common import serialization
from mcstat.common.exceptions import DegenerateOperationError
from .binning import IdentityBinning, binning_from_json


def _is_zero(value):
    return bool(np.any(np.asarray(value) == 0))


class Histogram:
    """
    Histogram mapping binned x-values onto accumulated y-values.

    The binning is injected; it maps every x-value onto the key of its bin.
    Bins are created on first access. Iteration always follows the sorted
    order of the bin keys.

    Parameters
    ----------
    binning : callable
        Binning strategy, e.g. mcstat.histograms.NumberBinning. Defaults to
        IdentityBinning, meaning every x-value is its own bin.

    values : dict or iterable of (x, y) pairs
        Initial content, accumulated using record_value.
    """

    FILE_FORMAT = "mcstat.histogram"

    def __init__(self, binning=None, values=None):
        self.binning = binning if binning is not None else IdentityBinning()
        self._values = {}
        if values is not None:
            if isinstance(values, dict):
                values = values.items()
            for x, y in values:
                self.record_value(x, y)

    def bin_value(self, x):
        """Return the key of the bin x falls into."""
        return self.binning(x)

    # Accumulation
    def record_visit(self, x):
        """Increment the bin of x by one, creating it if necessary."""
        self.record_value(x, 1)

    def record_value(self, x, y):
        """Increment the bin of x by y, creating it if necessary."""
        key = self.binning(x)
        self._values[key] = self._values.get(key, 0) + y

    def __lshift__(self, x):
        self.record_visit(x)
        return self

    def insert_if_absent(self, x, y):
        """
        Insert y into the bin of x unless the bin already exists.

        Returns
        -------
        value : Any
            The value stored in the bin after the call.
        """
        key = self.binning(x)
        if key not in self._values:
            self._values[key] = y
        return self._values[key]

    def initialise_empty(self, other):
        """Replace the content by the bins of other, all set to zero."""
        self._values = {}
        for key in other:
            self._values[self.binning(key)] = 0

    # Access
    def value_at(self, x):
        """Value in the bin of x. A missing bin is created with value 0."""
        key = self.binning(x)
        if key not in self._values:
            self._values[key] = 0
        return self._values[key]

    def __getitem__(self, x):
        return self.value_at(x)

    def __setitem__(self, x, y):
        self._values[self.binning(x)] = y

    def get(self, x, default=None):
        """Value in the bin of x, or default if the bin does not exist."""
        return self._values.get(self.binning(x), default)

    def __contains__(self, x):
        return self.binning(x) in self._values

    def __len__(self):
        return len(self._values)

    def __iter__(self):
        return iter(sorted(self._values))

    def keys(self):
        return list(self)

    def values(self):
        return [self._values[key] for key in self]

    def items(self):
        return [(key, self._values[key]) for key in self]

    def clear(self):
        self._values = {}

    def copy(self):
        new_histogram = Histogram(self.binning)
        new_histogram._values = dict(self._values)
        return new_histogram

    # Arithmetic
    def merge_add(self, other):
        """
        Add all bins of another histogram to this one.

        Missing bins are created. The keys of other are binned with the
        binning of this histogram.
        """
        for key, value in other.items():
            self.record_value(key, value)
        return self

    def merge_divide(self, other):
        """
        Divide this histogram bin-wise by another histogram.

        Raises
        ------
        DegenerateOperationError
            If a bin of this histogram is missing in other or is zero there.
            In this case, this histogram is left unchanged.
        """
        divided = {}
        for key, value in self._values.items():
            divisor = other.get(key)
            if divisor is None:
                raise DegenerateOperationError(
                    "Cannot divide bin {0}, it is missing in the divisor "
                    "histogram.".format(key))
            if _is_zero(divisor):
                raise DegenerateOperationError(
                    "Cannot divide bin {0}, the divisor is zero.".format(key))
            divided[key] = value / divisor
        self._values = divided
        return self

    def __iadd__(self, other):
        if isinstance(other, Histogram):
            return self.merge_add(other)
        for key in self._values:
            self._values[key] = self._values[key] + other
        return self

    def __add__(self, other):
        result = self.copy()
        result += other
        return result

    def __itruediv__(self, other):
        if isinstance(other, Histogram):
            return self.merge_divide(other)
        if _is_zero(other):
            raise DegenerateOperationError("Cannot divide a histogram by "
                                           "zero.")
        for key in self._values:
            self._values[key] = self._values[key] / other
        return self

    def __truediv__(self, other):
        result = self.copy()
        result /= other
        return result

    def shift_bin_zero(self, x):
        """
        Subtract the value of the bin of x from all bins.

        Used to normalize a logarithmic density of states to a known
        reference bin.
        """
        reference = self.get(x)
        if reference is None:
            raise DegenerateOperationError(
                "Reference bin {0} does not exist.".format(self.binning(x)))
        for key in self._values:
            self._values[key] = self._values[key] - reference
        return self

    # Statistics
    def min_x_value(self):
        return min(self._values)

    def max_x_value(self):
        return max(self._values)

    def min_value(self):
        return min(self._values.values())

    def max_value(self):
        return max(self._values.values())

    def mean_value(self):
        if len(self._values) == 0:
            raise DegenerateOperationError("Mean of an empty histogram.")
        return sum(self._values.values()) / len(self._values)

    def flatness(self):
        """
        Ratio of the minimal and the mean y-value of all existing bins.

        Returns
        -------
        flatness : float
            Value between 0 and 1, 1 meaning a perfectly flat histogram.
        """
        mean = self.mean_value()
        if mean == 0:
            raise DegenerateOperationError("Flatness of a histogram with "
                                           "zero mean is undefined.")
        return self.min_value() / mean

    def to_arrays(self):
        """
        Return the content as numpy arrays.

        Returns
        -------
        x_values : numpy.ndarray
            Bin keys in sorted order (2D for vector keys).

        y_values : numpy.ndarray
            Corresponding values.
        """
        return np.array(self.keys()), np.array(self.values())

    # Comparison
    def __eq__(self, other):
        if not isinstance(other, Histogram):
            return NotImplemented
        if self.binning != other.binning or \
                set(self._values) != set(other._values):
            return False
        return all(np.array_equal(value, other._values[key])
                   for key, value in self._values.items())

    __hash__ = None

    def __repr__(self):
        return "Histogram(binning={0}, values={1})".\
            format(repr(self.binning), self.items())

    # Serialization
    def to_json(self):
        """
        Convert object into JSON seriazable content.

        Returns
        -------
        info : dict
            Binning and (bin, value) pairs in sorted bin order.
        """
        return {"binning": self.binning.to_json(),
                "values": [[key, value] for key, value in self.items()]}

    @classmethod
    def from_json(cls, info):
        """
        Create a histogram from the output of to_json().

        Parameters
        ----------
        info : dict
            Dictionary created by to_json().

        Returns
        -------
        histogram : Histogram
            The restored histogram.
        """
        histogram = cls(binning_from_json(info["binning"]))
        for key, value in info["values"]:
            if isinstance(key, list):
                key = tuple(key)
            if isinstance(value, list):
                value = np.array(value)
            histogram[key] = value
        return histogram

    def save(self, stream):
        """Save the histogram to an open text stream."""
        serialization.save(self.to_json(), stream, self.FILE_FORMAT)

    def save_to_file(self, path):
        """Save the histogram to a file."""
        serialization.save_to_file(self.to_json(), path, self.FILE_FORMAT)

    @classmethod
    def load(cls, stream):
        """Load a histogram from an open text stream."""
        return cls.from_json(serialization.load(stream, cls.FILE_FORMAT))

    @classmethod
    def load_from_file(cls, path):
        """Load a histogram from a file."""
        return cls.from_json(serialization.load_from_file(path,
                                                          cls.FILE_FORMAT))
