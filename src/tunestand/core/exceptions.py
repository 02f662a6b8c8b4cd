"""
Custom exceptions for Tunestand.
"""


class TunestandError(Exception):
    """Base exception for Tunestand."""
    pass


class ConfigurationError(TunestandError):
    """Exception raised when configuration is invalid."""
    pass


class CatalogError(TunestandError):
    """Exception raised when a call to the hosted backend fails."""
    
    def __init__(self, message: str, status_code: int = None, code: str = None):
        super().__init__(message)
        self.status_code = status_code
        self.code = code


class NotFoundError(CatalogError):
    """Exception raised when a requested row does not exist."""
    pass


class RpcUnavailableError(CatalogError):
    """Exception raised when a backend function is not deployed."""
    pass


class AuthenticationError(CatalogError):
    """Exception raised when sign-in fails or a user session is required."""
    pass


class NetworkError(CatalogError, ConnectionError):
    """Exception raised when network operations fail."""
    pass
