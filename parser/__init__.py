# parser/__init__.py
# This file is part of Pulsar - A Pulse Network Simulator
#
# Module description parsing components

"""Parsing of pulse network module descriptions.

A module description lists one module per line as ``label -> outputs``,
where the label prefix selects the module behaviour::

    broadcaster -> a, b, c     # the entry Relay
    %a -> b                    # a Latch
    &inv -> a                  # a Detector

Parsing turns the text into ``ModuleDecl`` records; building a network out of
them (and deriving Detector inputs) is left to ``core.network``.

Core Functions:
    parse: Converts description text into a list of module declarations

Example:
    >>> from parser import parse
    >>> [str(d) for d in parse("broadcaster -> a\\n%a -> rx")]
    ['broadcaster -> a', '%a -> rx']
"""

from typing import List

from .exceptions import ParseError
from .ast_nodes import ENTRY_MODULE, ModuleDecl, ModuleKind
from .grammar import _NetworkParser
from utils.logger import get_logger


def parse(source: str) -> List[ModuleDecl]:
    """Parse a module description into declarations.

    Uses a fresh parser instance for each invocation.

    Args:
        source: Module description text

    Returns:
        Module declarations in source order

    Raises:
        ParseError: The description is empty or malformed
    """
    logger = get_logger()
    logger.debug(f"Parsing module description ({len(source.splitlines())} lines)")

    parser = _NetworkParser()

    try:
        return parser.parse(source)

    except ParseError:
        logger.debug("ParseError encountered during description parsing")
        raise

    except Exception as exc:
        logger.debug(f"Unexpected parsing error: {type(exc).__name__}: {exc}")
        raise ParseError(str(exc)) from exc


__all__ = ["parse", "ParseError", "ModuleDecl", "ModuleKind", "ENTRY_MODULE"]

__version__ = "1.0.0"
__description__ = "Module description parsing components"
