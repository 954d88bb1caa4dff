"""
Custom exception classes for the application.

This module defines domain-specific exceptions that provide better error handling
and clearer error messages throughout the application.
"""


class ApplicationError(Exception):
    """Base exception for all application errors"""

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(ApplicationError):
    """Raised when there's a configuration issue"""

    def __init__(self, message: str, invalid_keys: list[str] | None = None):
        details = {"invalid_keys": invalid_keys} if invalid_keys else {}
        super().__init__(message, details)


class ValidationError(ApplicationError):
    """Raised when a required field or a parent reference is missing"""

    def __init__(self, message: str, invalid_fields: dict | None = None):
        details = {"invalid_fields": invalid_fields} if invalid_fields else {}
        super().__init__(message, details)


class NotFoundError(ApplicationError):
    """Raised when an aggregate or one of its children does not exist"""

    def __init__(self, resource: str, resource_id: int):
        details = {"resource": resource, "id": resource_id}
        super().__init__(f"{resource} '{resource_id}' not found", details)


class ConflictError(ApplicationError):
    """Raised when a write breaks a uniqueness constraint"""

    def __init__(self, message: str, resource: str | None = None):
        details = {"resource": resource} if resource else {}
        super().__init__(message, details)


class DatabaseError(ApplicationError):
    """Raised when database operations fail"""

    def __init__(self, operation: str, message: str):
        details = {"operation": operation}
        super().__init__(message, details)


class PlatformIntegrationError(ApplicationError):
    """Raised when the desktop integration (tray, browser) cannot be set up"""

    def __init__(self, component: str, message: str):
        details = {"component": component}
        super().__init__(message, details)
