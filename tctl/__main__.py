"""Allow ``python -m tctl``."""

from tctl.cli import main

main()
