"""
Embedded VHDL predicate parser for TCTL.

Provides lexical analysis, parsing, and AST construction for the VHDL
condition subset that TCTL requirements use as atomic predicates,
e.g. ``recoveryMode = '1'`` or ``bootMode = '1' and ready = '0'``.
"""
