"""JSON based saving and loading of histograms and simulation states."""
import json

import numpy as np

from .exceptions import CheckpointError

FORMAT_VERSION = 1


def to_builtin(value):
    """
    Convert numpy types (recursively) into JSON serializable builtins.

    Tuples are converted to lists, since JSON has no tuple type.
    """
    if isinstance(value, np.ndarray):
        return value.tolist()
    if isinstance(value, np.generic):
        return value.item()
    if isinstance(value, (list, tuple)):
        return [to_builtin(entry) for entry in value]
    if isinstance(value, dict):
        return {str(key): to_builtin(entry) for key, entry in value.items()}
    return value


def save(data, stream, file_format):
    """
    Write a dictionary as tagged JSON to an open text stream.

    Parameters
    ----------
    data : dict
        Content to be saved. Will be extended by format and version tags.

    stream : io.TextIOBase
        Stream to write to.

    file_format : string
        Identifier of the content, checked again upon loading.
    """
    save_dict = {"format": file_format, "version": FORMAT_VERSION}
    save_dict.update(to_builtin(data))
    try:
        json.dump(save_dict, stream, ensure_ascii=False, indent=4)
    except (OSError, TypeError, ValueError) as e:
        raise CheckpointError("Could not save " + file_format +
                              ": " + str(e)) from e


def save_to_file(data, path, file_format):
    """Write a dictionary as tagged JSON to a file."""
    try:
        with open(path, "w", encoding="utf-8") as f:
            save(data, f, file_format)
    except CheckpointError:
        raise
    except OSError as e:
        raise CheckpointError("Could not open " + str(path) +
                              " for writing: " + str(e)) from e


def load(stream, file_format):
    """
    Read tagged JSON from an open text stream.

    Parameters
    ----------
    stream : io.TextIOBase
        Stream to read from.

    file_format : string
        Identifier the content has to carry.

    Returns
    -------
    data : dict
        Loaded content.
    """
    try:
        data = json.load(stream)
    except (OSError, ValueError) as e:
        raise CheckpointError("Could not load " + file_format +
                              ": " + str(e)) from e
    if not isinstance(data, dict) or data.get("format") != file_format:
        raise CheckpointError("Stream does not contain a " + file_format +
                              ".")
    if data.get("version") != FORMAT_VERSION:
        raise CheckpointError("Unsupported " + file_format + " version: " +
                              str(data.get("version")))
    return data


def load_from_file(path, file_format):
    """Read tagged JSON from a file."""
    try:
        with open(path, encoding="utf-8") as f:
            return load(f, file_format)
    except CheckpointError:
        raise
    except OSError as e:
        raise CheckpointError("Could not open " + str(path) +
                              " for reading: " + str(e)) from e
