# ============================================================================
# src/utils/exceptions.py
# ============================================================================
"""
Custom exceptions for the medical structuring pipeline.

The table reconstructor and response normalizer never raise on data; these
exceptions belong to the collaborators around them (recognizer, chat API).
"""


class MedicalStructuringError(Exception):
    """Base exception for all medical structuring errors."""
    pass


class ConfigurationError(MedicalStructuringError):
    """Invalid configuration."""
    pass


class RecognizerError(MedicalStructuringError):
    """Text recognition engine unavailable or failed."""
    pass


class ChatClientError(MedicalStructuringError):
    """Error talking to the chat-completion API."""
    pass


class MissingAPIKeyError(ChatClientError):
    """No API key configured for the chat endpoint."""
    pass


class ChatResponseError(ChatClientError):
    """Chat endpoint returned a non-success status."""
    def __init__(self, message: str, status: int, body: str = ""):
        super().__init__(message)
        self.status = status
        self.body = body


class ChatTimeoutError(ChatClientError):
    """Chat request exceeded the configured timeout."""
    pass


class ChatDecodingError(ChatClientError):
    """Chat endpoint body could not be decoded."""
    pass


class NoChoicesError(ChatDecodingError):
    """Chat endpoint answered without any choices."""
    pass
