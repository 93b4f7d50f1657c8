"""
Google Translate client that scrapes the mobile web page.

No API key needed: the text goes out as query parameters, the answer
comes back as an HTML page, and the tree engine pulls the translation out
of the result container.
"""

from typing import List, Optional

from .exceptions import MalformedResponseError, TranslationNotFoundError
from .languages import GOOGLE_LANGUAGES_TO_CODES
from .logger import get_module_logger
from .parser import parse
from .query import Document, ResultNode
from .schemas import ElementQuery
from .translator import BaseTranslator

logger = get_module_logger("google")

GOOGLE_TRANSLATE_URL = "https://translate.google.com/m"

# Tried in order; the page layout differs between deployments.
RESULT_QUERIES = [
    ElementQuery(tag="div", attr_name="class", attr_value="t0"),
    ElementQuery(tag="div", attr_name="class", attr_value="result-container"),
]


class GoogleTranslator(BaseTranslator):
    """Translate via translate.google.com's mobile page."""

    provider = "google"
    supported_languages = GOOGLE_LANGUAGES_TO_CODES
    max_chars = 5000
    payload_key = "q"

    def __init__(
        self,
        source: str = "auto",
        target: str = "en",
        base_url: str = GOOGLE_TRANSLATE_URL,
        result_queries: Optional[List[ElementQuery]] = None,
        **kwargs
    ):
        super().__init__(source, target, **kwargs)
        self.base_url = base_url
        self.result_queries = result_queries or RESULT_QUERIES

    def _params(self, text: str) -> dict:
        return {"tl": self.target, "sl": self.source, self.payload_key: text}

    def extract_translation(self, document: Document) -> str:
        """
        Pull the translated phrase out of a parsed result page.

        Raises:
            MalformedResponseError: the page could not be parsed at all
            TranslationNotFoundError: none of the result queries matched
        """
        if document.error is not None:
            raise MalformedResponseError(
                f"Could not parse Google response: {document.error.message}",
                provider=self.provider
            )

        element: Optional[ResultNode] = None
        for query in self.result_queries:
            element = document.find(query.tag, query.attr)
            if element:
                break
            logger.warning(f"No match for {query}, trying next query")

        if element is None or element.error is not None:
            raise TranslationNotFoundError(
                provider=self.provider,
                details={"queries": [str(q) for q in self.result_queries]}
            )
        return element.full_text()

    def translate(self, text: str) -> str:
        """Translate ``text``; returns it unchanged when source equals target."""
        self._validate(text)
        if self.same_source_target():
            return text

        html = self.http.get_text(self.base_url, params=self._params(text))
        translated = self.extract_translation(parse(html))

        # Google echoes untranslatable input; keep the caller's original spacing.
        if translated.strip() == text.strip():
            return text
        return translated
