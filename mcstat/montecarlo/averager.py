"""Averager to extract information from multiple sample series."""
import numpy as np


class Averager:
    """
    Averager class used to average over multiple sample series.

    A series is e.g. the list of measurements of one Metropolis replica.
    All series are pooled for the averages.
    """

    def __init__(self):
        self.sample_series = []

    def add_samples(self, samples):
        """
        Add a series of measurements to the analysis.

        Parameters
        ----------
        samples : list
            Measured values of one simulation.
        """
        if len(samples) == 0:
            raise Exception("Cannot add an empty sample series.")
        self.sample_series.append(np.asarray(samples, dtype=np.float64))

    def _pooled_samples(self):
        if len(self.sample_series) == 0:
            raise Exception("No samples have been added to the averager.")
        return np.concatenate(self.sample_series, axis=0)

    @property
    def number_of_samples(self):
        """Total number of measurements over all series."""
        return sum(len(series) for series in self.sample_series)

    @property
    def mean(self):
        """Mean over all measurements."""
        return np.mean(self._pooled_samples(), axis=0)

    @property
    def variance(self):
        """Unbiased variance over all measurements."""
        samples = self._pooled_samples()
        if len(samples) < 2:
            raise Exception("At least two samples are needed for a "
                            "variance.")
        return np.var(samples, axis=0, ddof=1)

    @property
    def standard_error(self):
        """
        Standard error of the mean, estimated from the series means.

        Treats the series as independent; needs at least two of them.
        """
        if len(self.sample_series) < 2:
            raise Exception("At least two sample series are needed for a "
                            "standard error.")
        series_means = np.array([np.mean(series, axis=0)
                                 for series in self.sample_series])
        return np.std(series_means, axis=0, ddof=1) / \
            np.sqrt(len(self.sample_series))
