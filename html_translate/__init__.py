"""
html_translate

Scrapes translations out of web translation services.

Public API surface:
  Tree engine      — parse, Document, ResultNode, ResultList, query functions
  Tree nodes       — Node, ElementNode, TextNode
  Translators      — Translator (factory), TranslatorProvider, BaseTranslator,
                     GoogleTranslator, LingueeTranslator, DeeplTranslator,
                     AzureTranslator, MyMemoryTranslator, LibreTranslator,
                     ApertiumTranslator
  Convenience      — translate_text, translate_file, load_settings
  Error types      — ParseError, NotFoundError, InvalidArgumentError (values),
                     TranslatorError and subclasses (raised)
"""

# --- Tree engine ---
from .parser import parse
from .query import (
    Document,
    ResultList,
    ResultNode,
    attrs,
    children,
    find,
    find_all,
    find_next_sibling,
    full_text,
    text,
)
from .tree import ElementNode, Node, TextNode

# --- Translators ---
from .translator import BaseTranslator, Translator, TranslatorProvider
from .google import GoogleTranslator
from .linguee import LingueeTranslator
from .api_translators import (
    ApertiumTranslator,
    AzureTranslator,
    DeeplTranslator,
    LibreTranslator,
    MyMemoryTranslator,
)

# --- Convenience ---
from .config import Settings, load_settings
from .main import translate_file, translate_text
from .schemas import ElementQuery, TranslationRecord

# --- Exceptions ---
from .exceptions import (
    AuthenticationError,
    HTMLTranslateError,
    InvalidArgumentError,
    InvalidSourceOrTargetLanguageError,
    LanguageNotSupportedError,
    MalformedResponseError,
    NotFoundError,
    NotValidLengthError,
    ParseError,
    RequestError,
    TooManyRequestsError,
    TranslationNotFoundError,
    TranslatorError,
    TreeError,
)

__version__ = "0.1.0"
__all__ = [
    "parse",
    "Document",
    "ResultList",
    "ResultNode",
    "attrs",
    "children",
    "find",
    "find_all",
    "find_next_sibling",
    "full_text",
    "text",
    "ElementNode",
    "Node",
    "TextNode",
    "BaseTranslator",
    "Translator",
    "TranslatorProvider",
    "GoogleTranslator",
    "LingueeTranslator",
    "ApertiumTranslator",
    "AzureTranslator",
    "DeeplTranslator",
    "LibreTranslator",
    "MyMemoryTranslator",
    "Settings",
    "load_settings",
    "translate_file",
    "translate_text",
    "ElementQuery",
    "TranslationRecord",
    "AuthenticationError",
    "HTMLTranslateError",
    "InvalidArgumentError",
    "InvalidSourceOrTargetLanguageError",
    "LanguageNotSupportedError",
    "MalformedResponseError",
    "NotFoundError",
    "NotValidLengthError",
    "ParseError",
    "RequestError",
    "TooManyRequestsError",
    "TranslationNotFoundError",
    "TranslatorError",
    "TreeError",
]
