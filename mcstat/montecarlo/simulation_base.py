"""Base class of all Monte Carlo engines."""
import os
import signal
import threading

from mcstat.common import serialization
from mcstat.common.parallelizer import get_rank, printout
from mcstat.simulation.random_source import NumpyRandomSource


class Simulation:
    """
    Shared state and checkpointing of the Monte Carlo engines.

    The configuration and the random source are borrowed: the engine
    modifies them while running but never copies or replaces them.

    Parameters
    ----------
    configuration : mcstat.simulation.configuration.Configuration
        Configuration that will be sampled.

    random_source : mcstat.simulation.random_source.RandomSource
        Source of randomness. If None, an unseeded NumpyRandomSource is used.

    simulation_id : string
        Identifier, used as folder and file name for checkpoints.

    path_to_folder : string
        Folder in which checkpoint folders are created.
    """

    FILE_FORMAT = None

    def __init__(self, configuration, random_source=None,
                 simulation_id="mcstat_default", path_to_folder="."):
        self.configuration = configuration
        self.random_source = random_source if random_source is not None \
            else NumpyRandomSource()
        self.id = str(simulation_id)
        self.path_to_folder = path_to_folder
        self.cancellation_flag = threading.Event()

    # Cancellation
    @property
    def is_terminating(self):
        """True if termination was requested."""
        return self.cancellation_flag.is_set()

    def request_termination(self):
        """
        Ask the simulation to stop at the next measurement/sweep boundary.

        Running simulations return their partial results.
        """
        self.cancellation_flag.set()

    def reset_termination(self):
        """Clear a termination request so that the simulation can continue."""
        self.cancellation_flag.clear()

    def register_signal_handlers(self, signals=None):
        """
        Request termination when one of the given POSIX signals arrives.

        Parameters
        ----------
        signals : list
            Signals to handle. Defaults to SIGTERM, SIGINT and (where
            available) SIGUSR1.
        """
        if signals is None:
            signals = [signal.SIGTERM, signal.SIGINT]
            if hasattr(signal, "SIGUSR1"):
                signals.append(signal.SIGUSR1)
        for signal_number in signals:
            signal.signal(signal_number, self._handle_signal)

    def _handle_signal(self, signal_number, frame):
        printout("Simulation", self.id, "received signal", signal_number,
                 "and will terminate at the next boundary.")
        self.request_termination()

    # Checkpointing
    def to_json(self):
        raise NotImplementedError

    def _random_source_to_json(self):
        return {"name": type(self.random_source).__name__,
                "state": self.random_source.get_state()}

    @staticmethod
    def _random_source_from_json(info, random_source=None):
        if random_source is None:
            random_source = NumpyRandomSource()
        random_source.set_state(info["state"])
        return random_source

    def save(self, stream):
        """Save the full simulation state to an open text stream."""
        serialization.save(self.to_json(), stream, self.FILE_FORMAT)

    def save_to_file(self, path):
        """Save the full simulation state to a file."""
        serialization.save_to_file(self.to_json(), path, self.FILE_FORMAT)

    @classmethod
    def load(cls, stream, configuration_class, random_source=None):
        """
        Load a simulation from an open text stream.

        Parameters
        ----------
        stream : io.TextIOBase
            Stream created by save().

        configuration_class : type
            Class of the configuration, has to provide from_json().

        random_source : mcstat.simulation.random_source.RandomSource
            Random source the saved state is restored into. If None, a
            NumpyRandomSource is created.
        """
        return cls.from_json(serialization.load(stream, cls.FILE_FORMAT),
                             configuration_class, random_source)

    @classmethod
    def load_from_file(cls, path, configuration_class, random_source=None):
        """Load a simulation from a file created by save_to_file()."""
        return cls.from_json(serialization.load_from_file(path,
                                                          cls.FILE_FORMAT),
                             configuration_class, random_source)

    @classmethod
    def load_run(cls, simulation_id, configuration_class,
                 path_to_folder=".", random_source=None):
        """Load a simulation from the checkpoint written during a run."""
        simulation_id = str(simulation_id)
        return cls.load_from_file(os.path.join(path_to_folder, simulation_id,
                                               simulation_id + ".json"),
                                  configuration_class, random_source)

    @classmethod
    def from_json(cls, info, configuration_class, random_source=None):
        raise NotImplementedError

    def _save_run(self):
        if get_rank() == 0:
            folder = os.path.join(self.path_to_folder, self.id)
            if not os.path.exists(folder):
                os.makedirs(folder)
            printout("Simulation", self.id, "creating checkpoint.")
            self.save_to_file(os.path.join(folder, self.id + ".json"))
