# parser/exceptions.py
# This file is part of Pulsar - A Pulse Network Simulator
#
# Custom exceptions for module description parsing


class ParseError(RuntimeError):
    """Exception raised when a module description cannot be parsed.

    Covers illegal characters, declarations missing their arrow or outputs,
    unprefixed labels other than the entry module, and empty descriptions.
    """

    pass
