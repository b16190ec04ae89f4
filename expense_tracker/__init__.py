"""Mini README: Package initializer for the command-line expense tracker.

The package is split into a command dispatcher (``dispatcher``) and a
persistence layer (``storage``). Only the logging factory is re-exported
here so importing the package stays free of database drivers.
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]
