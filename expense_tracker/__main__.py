"""Allow ``python -m expense_tracker``."""

from .dispatcher import main

main()
