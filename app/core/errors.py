# /app/core/errors.py

"""
The error taxonomy shared by every service.

Services raise these; the single exception handler registered in `main.py`
turns them into `{"detail": ..., "error_code": ...}` JSON bodies using the
`status_code` each class carries.
"""

from typing import Optional


class AppError(Exception):
    error_code = "E_INTERNAL"
    status_code = 500
    default_message = "An unexpected error occurred."

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


# --- Input validation ---
class InvalidRequestError(AppError, ValueError):
    error_code = "E_VALIDATION"
    status_code = 422
    default_message = "The request is invalid."


class MissingKeyError(InvalidRequestError):
    error_code = "E_MISSING_KEY"
    default_message = "API Key is missing. Please check your account settings."


# --- Identity ---
class AuthError(AppError):
    error_code = "E_AUTH"
    status_code = 401
    default_message = "Authentication failed."


class UnauthenticatedError(AuthError):
    error_code = "E_UNAUTHENTICATED"
    default_message = "User must be logged in to perform this action."


class ForbiddenError(AppError):
    error_code = "E_FORBIDDEN"
    status_code = 403
    default_message = "You do not have permission to modify this item."


# --- Storage ---
class StorageUnavailableError(AppError):
    error_code = "E_STORAGE_UNAVAILABLE"
    status_code = 503
    default_message = "Storage is not configured. Please set DATABASE_URL in your environment."


class NotFoundError(AppError):
    error_code = "E_NOT_FOUND"
    status_code = 404
    default_message = "The requested item does not exist."


class CorruptedContentError(AppError):
    error_code = "E_CORRUPTED_CONTENT"
    status_code = 500
    default_message = "The stored item is damaged and cannot be read."


# --- Model output ---
class GenerationError(AppError):
    error_code = "E_GENERATION"
    status_code = 502
    default_message = "The AI service could not complete the request."


class EmptyResponseError(GenerationError):
    error_code = "E_EMPTY_RESPONSE"
    default_message = "No response from AI."


class MalformedResponseError(GenerationError):
    error_code = "E_MALFORMED_RESPONSE"
    default_message = "The AI response did not match the expected content structure."


# --- Cipher ---
class DecryptionFailedError(AppError):
    error_code = "E_DECRYPTION_FAILED"
    status_code = 400
    default_message = "Could not decrypt API Key. Please sign in again."
