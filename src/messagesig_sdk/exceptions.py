"""
Exception classes for the message signatures SDK
"""

from typing import Optional, Dict, Any


class MessageSigSDKError(Exception):
    """Base exception for all message signatures SDK errors"""
    
    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.error_code = error_code
        self.details = details or {}


class ConfigurationError(MessageSigSDKError):
    """Exception raised for missing or invalid configuration"""
    
    def __init__(self, message: str, error_code: str = "INVALID_CONFIG", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)


class KeyImportError(MessageSigSDKError):
    """Exception raised when private key material cannot be imported"""
    
    def __init__(self, message: str, error_code: str = "KEY_IMPORT_FAILED", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)


class KeyResolutionError(MessageSigSDKError):
    """Exception raised when a public key cannot be resolved for a key id"""
    
    def __init__(self, message: str, key_id: str, error_code: str = "KEY_NOT_FOUND",
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)
        self.key_id = key_id
