"""Everything Monte Carlo related mcstat contains."""
from .simulation_base import Simulation
from .metropolis import Metropolis, MetropolisParameters
from .metropolis_parallel import MetropolisParallel
from .wang_landau import WangLandau, WangLandauParameters
from .averager import Averager
from .thermodynamics import canonical_averages
