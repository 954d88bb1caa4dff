"""
Utility functions and decorators.
"""

from .error_handlers import handle_api_errors
from .loggable import loggable

__all__ = ["handle_api_errors", "loggable"]
