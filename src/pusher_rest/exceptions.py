"""
Exception classes for Pusher REST Python SDK
"""

from typing import Optional, Dict, Any


class PusherSDKError(Exception):
    """Base exception for all Pusher SDK errors"""
    
    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.error_code = error_code
        self.details = details or {}


class ValidationError(PusherSDKError):
    """Exception raised for validation failures"""
    pass


class InvalidCredentialFormat(ValidationError):
    """Exception raised when a credential does not have the expected shape"""
    
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "INVALID_CREDENTIAL_FORMAT", details)


class InvalidArgument(ValidationError):
    """Exception raised when a caller violates a documented precondition"""
    
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "INVALID_ARGUMENT", details)


class EncodingError(PusherSDKError):
    """Exception raised when a query parameter value cannot be percent-encoded"""
    
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "ENCODING_ERROR", details)
