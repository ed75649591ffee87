"""
Exception classes for the fedisig SDK
"""

from typing import Optional, Dict, Any


class FediSigError(Exception):
    """Base exception for all fedisig errors"""

    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (code: {self.error_code}, details: {self.details})"
        return f"{self.message} (code: {self.error_code})"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message='{self.message}', "
            f"error_code='{self.error_code}', details={self.details})"
        )


class InvalidUrlError(FediSigError):
    """Exception raised when a target URL is not a well-formed absolute URL"""

    def __init__(self, message: str, error_code: str = "INVALID_URL", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)


class MissingHeaderError(FediSigError):
    """
    Exception raised when a header required by the signing profile is absent.

    Base headers always populate the fixed profiles, so this indicates a
    programming error in header construction rather than bad input.
    """

    def __init__(self, message: str, error_code: str = "MISSING_HEADER", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)


class InvalidKeyError(FediSigError):
    """Exception raised when a private key PEM cannot be used for RSA signing"""

    def __init__(self, message: str, error_code: str = "INVALID_KEY", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)


class SigningError(FediSigError):
    """Exception raised when the signature primitive itself fails"""

    def __init__(self, message: str, error_code: str = "SIGNING_FAILED", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)


class ConfigurationError(FediSigError):
    """Exception raised for invalid SDK configuration"""

    def __init__(self, message: str, error_code: str = "INVALID_CONFIG", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)


class DeliveryError(FediSigError):
    """Exception raised when sending a signed request fails"""

    def __init__(self, message: str, error_code: str = "DELIVERY_FAILED",
                 http_status: int = 0, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)
        self.http_status = http_status
