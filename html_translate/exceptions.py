"""
Custom exceptions for the html_translate package.

Two families share one base class:

  - Tree errors (ParseError, NotFoundError, InvalidArgumentError) are VALUES.
    The tree engine never raises them; it attaches them to the result it
    returns so chained lookups short-circuit quietly.  Callers inspect
    ``result.error`` or call ``result.raise_for_error()``.
  - Translator errors are RAISED by the provider clients when a request
    fails, the response cannot be understood, or no translation exists.

A provider client turns a NotFoundError from the engine into a
TranslationNotFoundError and a ParseError into a MalformedResponseError.
"""

from typing import Optional


class HTMLTranslateError(Exception):
    """Base exception for all html_translate errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


# --- Tree engine: attached to results, never raised by the engine ---

class TreeError(HTMLTranslateError):
    """Base class for outcomes carried on a ResultNode."""
    pass


class ParseError(TreeError):
    """The input could not yield any usable tree (e.g. an empty string)."""
    pass


class NotFoundError(TreeError):
    """
    A find / find_next_sibling lookup matched nothing.

    This is a routine outcome when scraping live pages, not a failure of
    the parser.
    """

    def __init__(
        self,
        message: str,
        tag: Optional[str] = None,
        attr: Optional[tuple] = None,
        details: Optional[dict] = None
    ):
        super().__init__(message, details)
        self.tag = tag
        self.attr = attr


class InvalidArgumentError(TreeError):
    """An empty or malformed tag name or attribute filter was passed to a query."""
    pass


# --- Translator clients: raised ---

class TranslatorError(HTMLTranslateError):
    """Base class for failures raised by the provider clients."""

    def __init__(
        self,
        message: str,
        provider: Optional[str] = None,
        details: Optional[dict] = None
    ):
        super().__init__(message, details)
        self.provider = provider  # "google", "deepl", ... aids debugging


class RequestError(TranslatorError):
    """The HTTP request failed or the server answered with an error status."""

    def __init__(
        self,
        message: str = "request error, please try again later",
        provider: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[dict] = None
    ):
        super().__init__(message, provider, details)
        self.status_code = status_code


class TooManyRequestsError(RequestError):
    """The provider is rate limiting us (HTTP 429)."""

    def __init__(
        self,
        message: str = "too many requests, please try again later",
        provider: Optional[str] = None,
        details: Optional[dict] = None
    ):
        super().__init__(message, provider, status_code=429, details=details)


class TranslationNotFoundError(TranslatorError):
    """The response was understood but contained no translation."""

    def __init__(
        self,
        message: str = "translation not found",
        provider: Optional[str] = None,
        details: Optional[dict] = None
    ):
        super().__init__(message, provider, details)


class MalformedResponseError(TranslatorError):
    """The upstream response could not be parsed (bad HTML or JSON)."""
    pass


class LanguageNotSupportedError(TranslatorError):
    """The requested language is not in the provider's language table."""

    def __init__(
        self,
        language: str,
        provider: Optional[str] = None,
        details: Optional[dict] = None
    ):
        super().__init__(
            f"No support for the provided language: {language}",
            provider,
            details
        )
        self.language = language


class InvalidSourceOrTargetLanguageError(TranslatorError):
    """Source or target language is missing."""

    def __init__(
        self,
        message: str = "invalid source or target language",
        provider: Optional[str] = None,
        details: Optional[dict] = None
    ):
        super().__init__(message, provider, details)


class NotValidLengthError(TranslatorError):
    """Text is empty or longer than the provider accepts in one request."""

    def __init__(
        self,
        text: str,
        min_chars: int,
        max_chars: int,
        provider: Optional[str] = None
    ):
        super().__init__(
            f"Text length must be between {min_chars} and {max_chars} characters "
            f"(got {len(text)})",
            provider,
            details={"length": len(text)}
        )
        self.min_chars = min_chars
        self.max_chars = max_chars


class AuthenticationError(TranslatorError):
    """The provider needs an API key and none was supplied."""
    pass
