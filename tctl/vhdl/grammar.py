"""
Parser for embedded VHDL predicates.

Implements the VHDL condition subset with VHDL's operator precedence
and associativity, producing the AST defined in
``tctl.vhdl.ast_nodes``.
"""

from __future__ import annotations

import sly

from tctl.vhdl.ast_nodes import (
    Arithmetic,
    Comparison,
    Literal,
    LiteralKind,
    Logical,
    Name,
    Parenthesized,
    UnaryOperation,
    VHDLNode,
)
from tctl.vhdl.lexer import VHDLLexer


class ParseError(Exception):
    """Exception raised for parsing errors."""

    pass


class _SLYParser(sly.Parser):
    """
    SLY-based parser for VHDL expressions.

    Precedence (lowest to highest):
        1. and or xor nand nor xnor   (left-to-right)
        2. = /= < <= > >=             (non-associative)
        3. + - &                      (left-to-right)
        4. * / mod rem                (left-to-right)
        5. unary + -                  (right-to-left)
        6. ** abs not                 (right-to-left)
    """

    tokens = VHDLLexer.tokens

    precedence = (
        ("left", AND, OR, XOR, NAND, NOR, XNOR),
        ("nonassoc", EQ, NE, LT, LE, GT, GE),
        ("left", PLUS, MINUS, CONCAT),
        ("left", TIMES, DIVIDE, MOD, REM),
        ("right", SIGN),
        ("right", POW, ABS, NOT),
    )

    # --- Primaries ---

    @_("NAME")
    def expr(self, p):
        return Name(p.NAME)

    @_("TRUE", "FALSE")
    def expr(self, p):
        return Literal(LiteralKind.BOOLEAN, p[0])

    @_("INTEGER")
    def expr(self, p):
        return Literal(LiteralKind.INTEGER, p.INTEGER)

    @_("REAL")
    def expr(self, p):
        return Literal(LiteralKind.REAL, p.REAL)

    @_("CHAR")
    def expr(self, p):
        return Literal(LiteralKind.CHARACTER, p.CHAR)

    @_("STRING")
    def expr(self, p):
        return Literal(LiteralKind.STRING, p.STRING)

    @_("BIT_STRING")
    def expr(self, p):
        return Literal(LiteralKind.BIT_STRING, p.BIT_STRING)

    @_("LPAREN expr RPAREN")
    def expr(self, p):
        return Parenthesized(p.expr)

    # --- Unary operators ---

    @_("NOT expr", "ABS expr")
    def expr(self, p):
        return UnaryOperation(p[0], p.expr)

    @_("MINUS expr %prec SIGN", "PLUS expr %prec SIGN")
    def expr(self, p):
        return UnaryOperation(p[0], p.expr)

    # --- Binary operators ---

    @_(
        "expr AND expr",
        "expr OR expr",
        "expr XOR expr",
        "expr NAND expr",
        "expr NOR expr",
        "expr XNOR expr",
    )
    def expr(self, p):
        return Logical(p[1], p.expr0, p.expr1)

    @_(
        "expr EQ expr",
        "expr NE expr",
        "expr LT expr",
        "expr LE expr",
        "expr GT expr",
        "expr GE expr",
    )
    def expr(self, p):
        return Comparison(p[1], p.expr0, p.expr1)

    @_(
        "expr PLUS expr",
        "expr MINUS expr",
        "expr CONCAT expr",
        "expr TIMES expr",
        "expr DIVIDE expr",
        "expr MOD expr",
        "expr REM expr",
        "expr POW expr",
    )
    def expr(self, p):
        return Arithmetic(p[1], p.expr0, p.expr1)

    def error(self, token):
        if token:
            raise ParseError(
                f"Syntax error at '{token.value}' " f"(type: {token.type}, index: {token.index})"
            )
        raise ParseError("Syntax error: unexpected end of expression")


class VHDLParser:
    """
    Parser for VHDL expressions.

    Wraps the SLY-based parser with a clean public interface.
    Converts expression strings into AST nodes.
    """

    def __init__(self) -> None:
        self._lexer = VHDLLexer()
        self._parser = _SLYParser()

    def parse(self, text: str) -> VHDLNode:
        """
        Parse an expression string into an AST.

        Args:
            text: The VHDL expression to parse.

        Returns:
            The root node of the AST.

        Raises:
            LexerError: If the text contains an invalid character.
            ParseError: If the expression is syntactically invalid.
        """
        text = text.strip()
        if not text:
            raise ParseError("Syntax error: empty expression")

        result = self._parser.parse(self._lexer.tokenize(text))
        if result is None:
            raise ParseError("Syntax error: could not parse expression")
        return result

    def parse_condition(self, text: str) -> VHDLNode:
        """
        Parse a boolean condition.

        Args:
            text: The VHDL condition to parse.

        Returns:
            The root node, guaranteed to be a condition.

        Raises:
            LexerError: If the text contains an invalid character.
            ParseError: If the text is invalid or is not a condition
                (e.g. a bare name or an arithmetic expression).
        """
        node = self.parse(text)
        if not node.is_condition:
            raise ParseError(f"Not a condition: '{node}'")
        return node
