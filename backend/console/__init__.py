"""
Terminal console for the blood bank admin workflow.
"""

from .commands import AdminConsole, EXIT_OK, EXIT_FAILURE

__all__ = ["AdminConsole", "EXIT_OK", "EXIT_FAILURE"]
