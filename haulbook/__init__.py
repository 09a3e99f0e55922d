"""Mini README: Core package initializer for the Haulbook bookkeeping tool.

Haulbook records goods deliveries per customer together with business
expenses and turns them into daily summaries and printable reports. This
module only re-exports the logging helper so that sub-packages can share a
consistent logger without importing the web stack.
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]
