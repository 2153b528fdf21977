"""
TCTL expression parser.

Provides the expression tree, the recursive-descent grammar, physical
constraints, the embedded-language boundary, and the specification
document format for TCTL requirements.
"""
