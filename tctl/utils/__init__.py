"""Reading and reporting helpers for TCTL specification files."""
