# parser/grammar.py
# This file is part of Pulsar - A Pulse Network Simulator
#
# LALR(1) grammar and parser for module descriptions using SLY

"""Module description grammar implementation using SLY parser generator.

Grammar:
    declarations : declaration | declarations declaration
    declaration  : label ARROW outputs
    label        : PERCENT ID | AMPERSAND ID | ID
    outputs      : ID | outputs COMMA ID

A bare ``ID`` label is only accepted for the entry module; every other module
must carry the ``%`` (Latch) or ``&`` (Detector) prefix.
"""

from typing import List

from sly import Parser
from .lexer import NetworkLexer
from .ast_nodes import ENTRY_MODULE, ModuleDecl, ModuleKind
from .exceptions import ParseError
from utils.logger import get_logger


class _NetworkParser(Parser):
    """SLY-based LALR(1) parser producing module declarations.

    Attributes:
        tokens: Token types from NetworkLexer
    """

    tokens = NetworkLexer.tokens

    @_("declarations")
    def start(self, p) -> List[ModuleDecl]:
        """Start rule: a description is a non-empty list of declarations."""
        return p.declarations

    @_("declarations declaration")
    def declarations(self, p) -> List[ModuleDecl]:
        return p.declarations + [p.declaration]

    @_("declaration")
    def declarations(self, p) -> List[ModuleDecl]:
        return [p.declaration]

    @_("label ARROW outputs")
    def declaration(self, p) -> ModuleDecl:
        kind, name, lineno = p.label
        return ModuleDecl(kind, name, tuple(p.outputs), lineno)

    @_("PERCENT ID")
    def label(self, p):
        """Latch label."""
        self._check_not_entry(p.ID, p.lineno)
        return ModuleKind.LATCH, p.ID, p.lineno

    @_("AMPERSAND ID")
    def label(self, p):
        """Detector label."""
        self._check_not_entry(p.ID, p.lineno)
        return ModuleKind.DETECTOR, p.ID, p.lineno

    @_("ID")
    def label(self, p):
        """Unprefixed label, valid only for the entry Relay."""
        if p.ID != ENTRY_MODULE:
            raise ParseError(
                f"Invalid module '{p.ID}' at line {p.lineno}: "
                f"expected a '%' or '&' prefix"
            )
        return ModuleKind.RELAY, p.ID, p.lineno

    @staticmethod
    def _check_not_entry(name: str, lineno: int) -> None:
        # The entry module receives the trigger pulse and must be a Relay
        if name == ENTRY_MODULE:
            raise ParseError(
                f"Invalid module '{name}' at line {lineno}: "
                f"the entry module takes no prefix"
            )

    @_("ID")
    def outputs(self, p) -> List[str]:
        return [p.ID]

    @_("outputs COMMA ID")
    def outputs(self, p) -> List[str]:
        return p.outputs + [p.ID]

    def parse(self, text: str) -> List[ModuleDecl]:
        """Parse description text into module declarations.

        Args:
            text: Module description, one declaration per line

        Returns:
            Declarations in source order

        Raises:
            ParseError: If the description is empty or malformed
        """
        logger = get_logger()

        if not text.strip():
            raise ParseError("Module description is empty.")

        try:
            declarations = super().parse(NetworkLexer().tokenize(text))

            if declarations is None:
                raise ParseError("Failed to parse module description (syntax error).")

            logger.debug(f"Parsed {len(declarations)} module declarations")
            return declarations

        except ParseError:
            logger.debug("Parse error encountered")
            raise
        except Exception as e:
            logger.debug(f"Unexpected parsing error: {e}")
            raise ParseError(f"Parse failed: {e}")

    def error(self, token):
        """Handle syntax errors during parsing.

        Args:
            token: Problematic token or None for end-of-input errors

        Raises:
            ParseError: Always raises with detailed error information
        """
        if token:
            error_msg = (
                f"Syntax error near '{token.value}' "
                f"(type: {token.type}) at line {token.lineno}, position {token.index}"
            )
        else:
            error_msg = "Syntax error: Unexpected end of module description"

        raise ParseError(error_msg)
