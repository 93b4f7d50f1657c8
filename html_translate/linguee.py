"""
Linguee dictionary client.

Looks a single word up on linguee.com and scrapes the featured dictionary
entries with the tree engine.  Each hit is an <a class="dictLink featured">
whose direct text is the translation; an optional
<span class="placeholder"> inside it holds a pronoun that is stripped out.
"""

from typing import List, Union
from urllib.parse import quote

from .exceptions import MalformedResponseError, TranslationNotFoundError
from .languages import LINGUEE_LANGUAGES_TO_CODES
from .logger import get_module_logger
from .parser import parse
from .query import Document
from .schemas import ElementQuery
from .translator import BaseTranslator

logger = get_module_logger("linguee")

LINGUEE_URL = "https://www.linguee.com/"

ENTRY_QUERY = ElementQuery(tag="a", attr_name="class", attr_value="dictLink featured")
PRONOUN_QUERY = ElementQuery(tag="span", attr_name="class", attr_value="placeholder")


def strip_pronoun(entry: str, pronoun: str) -> str:
    """
    Drop ``pronoun`` when it is the entry's leading or trailing word(s).

    Only whole words are removed, so "sich" never cuts into "aussichtslos".
    """
    words = entry.split()
    pronoun_words = pronoun.split()
    size = len(pronoun_words)
    if size and size < len(words):
        if words[:size] == pronoun_words:
            words = words[size:]
        elif words[-size:] == pronoun_words:
            words = words[:-size]
    return " ".join(words)


class LingueeTranslator(BaseTranslator):
    """Translate single words with the Linguee dictionary."""

    provider = "linguee"
    supported_languages = LINGUEE_LANGUAGES_TO_CODES
    max_chars = 50

    def __init__(self, source: str = "english", target: str = "german", base_url: str = LINGUEE_URL, **kwargs):
        super().__init__(source, target, **kwargs)
        self.base_url = base_url
        self._code_to_name = {code: name for name, code in LINGUEE_LANGUAGES_TO_CODES.items()}

    def search_url(self, word: str) -> str:
        source = self._code_to_name.get(self.source, self.source)
        target = self._code_to_name.get(self.target, self.target)
        return f"{self.base_url}{source}-{target}/search/?source={source}&query={quote(word)}"

    def extract_entries(self, document: Document) -> List[str]:
        """
        Collect the featured entries of a result page, pronouns removed.

        Raises:
            MalformedResponseError: the page could not be parsed at all
            TranslationNotFoundError: the page has no featured entries
        """
        if document.error is not None:
            raise MalformedResponseError(
                f"Could not parse Linguee response: {document.error.message}",
                provider=self.provider
            )

        entries = []
        for hit in document.find_all(ENTRY_QUERY.tag, ENTRY_QUERY.attr):
            pronoun = hit.find(PRONOUN_QUERY.tag, PRONOUN_QUERY.attr).text()
            entry = strip_pronoun(hit.text(), pronoun)
            if entry:
                entries.append(entry)

        if not entries:
            raise TranslationNotFoundError(provider=self.provider, details={"query": str(ENTRY_QUERY)})
        logger.debug(f"Found {len(entries)} dictionary entries")
        return entries

    def translate(self, word: str, return_all: bool = False) -> Union[str, List[str]]:
        """
        Look up ``word``.

        Args:
            word: A single word or short phrase (at most 50 characters)
            return_all: Return every featured entry instead of the first

        Returns:
            The first entry, or the list of entries with ``return_all``
        """
        if self.same_source_target() and word:
            return [word] if return_all else word
        self._validate(word)

        html = self.http.get_text(self.search_url(word))
        entries = self.extract_entries(parse(html))
        return entries if return_all else entries[0]
