# core/exceptions.py
# This file is part of Pulsar - A Pulse Network Simulator
#
# Exceptions raised while building, driving or extrapolating a pulse network

"""Domain-specific exceptions for pulse network simulation.

Malformed description text is reported by ``parser.exceptions.ParseError``;
the exceptions here cover everything after a description has been parsed.
"""


class NetworkError(RuntimeError):
    """Raised when a network is structurally inconsistent.

    Examples are duplicate module names, a Detector receiving a pulse from a
    module it was never wired to, or a query naming a module that does not
    exist.
    """

    pass


class ExtrapolationError(RuntimeError):
    """Raised when an extrapolation cannot reach a result within its bounds."""

    pass


class PeriodicityError(ExtrapolationError):
    """Raised when a watched node's rising edges are not evenly spaced.

    The least-common-multiple shortcut is only valid if every watched node
    first emits High at trigger ``k`` and then again at ``2k``.
    """

    pass
