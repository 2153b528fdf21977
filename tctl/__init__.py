"""
TCTL: requirement specifications in Timed Computation Tree Logic.

Parses and prints TCTL requirement documents whose atomic predicates are
written in an embedded hardware-description language (VHDL), including
path and branch quantifiers and physical time/energy constraints.
"""

__version__ = "0.1.0"
