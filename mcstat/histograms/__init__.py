"""Histograms used as observable accumulators and density of states."""
from .binning import IdentityBinning, NumberBinning, VectorBinning, \
    binning_from_json
from .histogram import Histogram
