"""
Lexical analyzer for embedded VHDL predicates.

Tokenizes the VHDL condition subset used as atomic predicates inside
TCTL requirements (names, literals, arithmetic, relational and logical
operators, parentheses).
"""

from __future__ import annotations

import sly


class LexerError(Exception):
    """Exception raised for lexical analysis errors."""
    pass


class VHDLLexer(sly.Lexer):
    """
    Lexical analyzer for VHDL conditions.

    Token Types:
        NAME                            - Identifiers and selected names
        INTEGER, REAL, CHAR, STRING,
        BIT_STRING, TRUE, FALSE         - Literals
        AND, OR, XOR, NAND, NOR, XNOR   - Logical operators
        NOT, ABS                        - Unary keyword operators
        EQ, NE, LT, LE, GT, GE          - Relational operators
        PLUS, MINUS, CONCAT             - Adding operators
        TIMES, DIVIDE, MOD, REM, POW    - Multiplying operators
        LPAREN, RPAREN                  - Delimiters
    """

    tokens = {
        NAME,
        INTEGER, REAL, CHAR, STRING, BIT_STRING, TRUE, FALSE,
        AND, OR, XOR, NAND, NOR, XNOR,
        NOT, ABS,
        EQ, NE, LT, LE, GT, GE,
        PLUS, MINUS, CONCAT,
        TIMES, DIVIDE, MOD, REM, POW,
        LPAREN, RPAREN,
    }

    # Ignored characters
    ignore = " \t\r"

    @_(r"\n+")
    def ignore_newline(self, t):
        self.lineno += len(t.value)

    # Relational operators (order matters: longer patterns first)
    NE = r"/="
    LE = r"<="
    GE = r">="
    EQ = r"="
    LT = r"<"
    GT = r">"

    # ** must come before *
    POW = r"\*\*"
    TIMES = r"\*"
    DIVIDE = r"/"
    PLUS = r"\+"
    MINUS = r"-"
    CONCAT = r"&"
    LPAREN = r"\("
    RPAREN = r"\)"

    # Bit-string literals must come before identifiers (x"FF" starts with a letter)
    BIT_STRING = r'[bBoOxX]"[0-9a-fA-F_]+"'
    STRING = r'"[^"\n]*"'
    CHAR = r"'[^'\n]'"

    # Reals must come before integers
    REAL = r"\d+(_\d+)*\.\d+(_\d+)*([eE][+-]?\d+)?"
    INTEGER = r"\d+(_\d+)*"

    # Identifiers and keywords
    # Keywords are matched case-insensitively; only exact words are keywords.
    @_(r"[a-zA-Z][a-zA-Z0-9_]*(\.[a-zA-Z][a-zA-Z0-9_]*)*")
    def NAME(self, t):
        keywords = {
            "true": "TRUE",
            "false": "FALSE",
            "and": "AND",
            "or": "OR",
            "xor": "XOR",
            "nand": "NAND",
            "nor": "NOR",
            "xnor": "XNOR",
            "not": "NOT",
            "abs": "ABS",
            "mod": "MOD",
            "rem": "REM",
        }
        t.type = keywords.get(t.value.lower(), "NAME")
        return t

    def error(self, t):
        """Handle invalid characters."""
        raise LexerError(
            f"Invalid character '{t.value[0]}' at index {self.index}"
        )
