"""
Service exceptions.

Every error the service reports to a caller is one of the classes below.
Each carries a stable ``kind`` (returned to the caller as ``error``) and the
HTTP status it maps to; the single handler registered in ``app.main`` turns
them into JSON responses.

Hierarchy:
    ServiceError
    ├── ValidationError          400
    │   └── CredentialValidationError
    ├── AuthError                401
    │   ├── InvalidCredentialsError
    │   ├── UnauthorizedError
    │   ├── MalformedTokenError
    │   ├── InvalidSignatureError
    │   └── TokenExpiredError
    ├── ConflictError            409
    │   ├── UsernameTakenError
    │   └── EmailTakenError
    └── DependencyError          503
        ├── StoreUnavailableError
        ├── HashingError
        ├── SigningError
        ├── UpstreamError        502
        │   ├── GeolocationUnavailableError
        │   └── WeatherProviderError
        └── UpstreamTimeoutError 504
            ├── GeolocationTimeoutError
            └── WeatherTimeoutError
"""

from typing import List, Optional

from fastapi import status


class ServiceError(Exception):
    """Base class for all errors surfaced to API callers."""

    kind: str = "ServiceError"
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal error."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"detail": self.message, "error": self.kind}


class ValidationError(ServiceError):
    kind = "ValidationError"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input."


class CredentialValidationError(ValidationError):
    """
    One or more registration fields broke their syntax rules.

    ``violations`` lists the rule kinds (InvalidUsername, InvalidEmail,
    InvalidPassword) in field order; ``kind`` is the first of them.
    """

    def __init__(self, violations: List[str], messages: Optional[List[str]] = None):
        self.violations = list(violations)
        self.kind = self.violations[0] if self.violations else ValidationError.kind
        super().__init__(" ".join(messages) if messages else "Invalid credentials.")

    def to_dict(self) -> dict:
        body = super().to_dict()
        body["violations"] = self.violations
        return body


class AuthError(ServiceError):
    kind = "Unauthorized"
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized access."


class InvalidCredentialsError(AuthError):
    # Same message for unknown identifier and wrong password.
    kind = "InvalidCredentials"
    default_message = "Username/email or password is wrong."


class UnauthorizedError(AuthError):
    kind = "Unauthorized"
    default_message = "Missing bearer token."


class MalformedTokenError(AuthError):
    kind = "MalformedToken"
    default_message = "Session token could not be parsed."


class InvalidSignatureError(AuthError):
    kind = "InvalidSignature"
    default_message = "Session token signature is invalid."


class TokenExpiredError(AuthError):
    kind = "TokenExpired"
    default_message = "Session token has expired."


class ConflictError(ServiceError):
    kind = "Conflict"
    status_code = status.HTTP_409_CONFLICT
    default_message = "A user with given credentials already exists."


class UsernameTakenError(ConflictError):
    kind = "UsernameTaken"
    default_message = "Username is already registered."


class EmailTakenError(ConflictError):
    kind = "EmailTaken"
    default_message = "Email is already registered."


class DependencyError(ServiceError):
    kind = "DependencyError"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = "Service temporarily unavailable. Try again."


class StoreUnavailableError(DependencyError):
    kind = "StoreUnavailable"
    default_message = "User store is unavailable. Try again."


class HashingError(DependencyError):
    kind = "HashingFailure"
    default_message = "Registration failed. Try again."


class SigningError(DependencyError):
    kind = "SigningFailure"
    default_message = "Login failed. Try again."


class UpstreamError(DependencyError):
    status_code = status.HTTP_502_BAD_GATEWAY


class UpstreamTimeoutError(DependencyError):
    status_code = status.HTTP_504_GATEWAY_TIMEOUT


class GeolocationUnavailableError(UpstreamError):
    kind = "GeolocationUnavailable"
    default_message = "Could not fetch user location."


class GeolocationTimeoutError(UpstreamTimeoutError):
    kind = "GeolocationTimeout"
    default_message = "Geolocation provider timed out."


class WeatherProviderError(UpstreamError):
    kind = "WeatherProviderError"
    default_message = "Could not fetch weather information."


class WeatherTimeoutError(UpstreamTimeoutError):
    kind = "WeatherTimeout"
    default_message = "Weather provider timed out."
