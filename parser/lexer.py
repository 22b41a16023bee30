# parser/lexer.py
# This file is part of Pulsar - A Pulse Network Simulator
#
# Lexical analyzer for module descriptions using SLY

"""Lexical analyzer for module description text.

Supported Tokens:
- Label prefixes: % (Latch), & (Detector)
- Punctuation: ->, ,
- Identifiers: module and sink names
- Newlines: tracked for line numbers, otherwise ignored
- Comments: from # to end of line, ignored
"""

from sly import Lexer
from utils.logger import get_logger


class NetworkLexer(Lexer):
    """SLY-based lexer for module descriptions.

    Attributes:
        tokens: Set of valid token types
        ignore: Characters to skip during tokenization
    """

    tokens = {
        "ID",
        "PERCENT",
        "AMPERSAND",
        "ARROW",
        "COMMA",
    }

    ignore = " \t\r"
    ignore_comment = r"\#.*"

    PERCENT = r"%"
    AMPERSAND = r"&"
    ARROW = r"->"
    COMMA = r","

    ID = r"[a-zA-Z_][a-zA-Z0-9_]*"

    @_(r"\n+")
    def ignore_newline(self, t):
        self.lineno += t.value.count("\n")

    def error(self, t):
        """Handle illegal characters during tokenization.

        Args:
            t: SLY token object containing error context

        Raises:
            ValueError: Always raised with character and line information
        """
        logger = get_logger()

        illegal_char = t.value[0]
        logger.debug(f"Illegal character '{illegal_char}' at line {self.lineno}")

        self.index += 1

        raise ValueError(
            f"Illegal character '{illegal_char}' at line {self.lineno}, "
            f"position {t.index}"
        )
