"""Base exceptions for bot-permissions.

This module defines the base exception hierarchy for the bot-permissions library.
All exceptions inherit from BotPermissionsError and carry an error code and
structured details so the embedding feature can decide what to show users.
"""

from typing import Any, Dict, Optional


class BotPermissionsError(Exception):
    """Base exception for all bot-permissions errors.
    
    All exceptions in the bot-permissions library inherit from this base class
    and include structured error information for better debugging.
    """
    
    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        *args,
        **kwargs
    ):
        super().__init__(message, *args, **kwargs)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


def create_error_response(exception: BotPermissionsError) -> Dict[str, Any]:
    """Create standardized error response from exception.
    
    Args:
        exception: The bot-permissions exception
        
    Returns:
        Error response dictionary
    """
    return {
        "error": {
            "code": exception.error_code,
            "message": exception.message,
            "details": exception.details,
            "type": exception.__class__.__name__,
        }
    }
