# utils/network_reader.py
# This file is part of Pulsar - A Pulse Network Simulator
#
# Reader for module description files

from pathlib import Path
from typing import Union

from utils.logger import get_logger


class NetworkFileError(Exception):
    """Exception raised when a module description file cannot be used."""

    pass


def read_network_file(filepath: Union[str, Path]) -> str:
    """Read a module description file.

    Expected format, one module per line::

        broadcaster -> a, b, c
        %a -> b
        &inv -> a

    Args:
        filepath: Path to the description file

    Returns:
        File contents

    Raises:
        NetworkFileError: If the file is missing, unreadable or empty
    """
    logger = get_logger()
    path = Path(filepath)

    if not path.exists():
        raise NetworkFileError(f"Network file not found: {filepath}")

    logger.debug(f"Reading network file: {filepath}")

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise NetworkFileError(f"Error reading network file: {e}")

    if not content.strip():
        raise NetworkFileError(f"Network file is empty: {filepath}")

    return content
