"""
Translator base class and provider switch.

Uses the Factory pattern (Translator.create) to instantiate the right
provider from an explicit argument or the TRANSLATOR_PROVIDER env var.
Each provider implements BaseTranslator.translate(); batching, file
translation and language mapping are shared here.
"""

import os
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple, Union

import httpx

from .exceptions import (
    InvalidSourceOrTargetLanguageError,
    LanguageNotSupportedError,
    NotValidLengthError,
    TranslatorError,
)
from .http_client import DEFAULT_TIMEOUT, HttpClient
from .logger import get_module_logger
from .preprocessor import decode_html

logger = get_module_logger("translator")


class TranslatorProvider(Enum):
    """Supported translation providers."""
    GOOGLE = "google"
    LINGUEE = "linguee"
    DEEPL = "deepl"
    AZURE = "azure"
    MYMEMORY = "mymemory"
    LIBRE = "libre"
    APERTIUM = "apertium"


def split_text(text: str, max_chars: int) -> List[Tuple[str, str]]:
    """
    Split text into pieces of at most ``max_chars`` characters.

    Breaks at the last newline (else the last space) of each window when
    there is one in its second half.  Returns (piece, separator) pairs;
    the separator is the whitespace consumed at the break ("" for a hard
    cut and for the last piece), so join_chunks can rebuild the layout.
    A whitespace-only piece at the very start is dropped.
    """
    pieces = []
    rest = text
    while len(rest) > max_chars:
        window = rest[:max_chars + 1]
        cut = window.rfind("\n")
        if cut < max_chars // 2:
            cut = window.rfind(" ")
        if cut < max_chars // 2:
            pieces.append((rest[:max_chars], ""))
            rest = rest[max_chars:]
        else:
            pieces.append((rest[:cut], rest[cut]))
            rest = rest[cut + 1:]
    pieces.append((rest, ""))

    # Whitespace-only pieces are not sent; their text moves into the
    # previous separator so the layout survives.
    kept = []
    for piece, sep in pieces:
        if piece.strip():
            kept.append((piece, sep))
        elif kept:
            previous, previous_sep = kept[-1]
            kept[-1] = (previous, previous_sep + piece + sep)
    return kept or [(text, "")]


def join_chunks(translated: List[str], separators: List[str]) -> str:
    return "".join(chunk + sep for chunk, sep in zip(translated, separators))


class BaseTranslator(ABC):
    """Abstract base class for translation providers."""

    provider = "base"

    # name → code; None means codes are passed through unchecked
    supported_languages: Optional[dict] = None

    # Largest text one request may carry; longer input is chunked by
    # translate_batch / translate_file and rejected by translate().
    max_chars = 5000
    min_chars = 1

    def __init__(
        self,
        source: str = "auto",
        target: str = "en",
        proxy: Optional[str] = None,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
        client: Optional[httpx.Client] = None
    ):
        if not source or not target:
            raise InvalidSourceOrTargetLanguageError(provider=self.provider)
        self.source, self.target = self.map_language_to_code(source, target)
        self.http = HttpClient(self.provider, proxy=proxy, timeout=timeout, client=client)

    @abstractmethod
    def translate(self, text: str) -> str:
        """
        Translate one text that fits in a single request.

        Args:
            text: Text of ``min_chars`` to ``max_chars`` characters

        Returns:
            The translated text
        """
        pass

    # --- language handling ---

    def map_language_to_code(self, *languages: str) -> Tuple[str, ...]:
        """
        Resolve language names or codes to this provider's codes.

        "auto" and codes already in the table pass through; names are
        looked up case-insensitively.

        Raises:
            LanguageNotSupportedError: for anything else
        """
        table = self.supported_languages
        mapped = []
        for language in languages:
            if language == "auto" or table is None:
                mapped.append(language)
            elif language in table.values():
                mapped.append(language)
            elif language.lower() in table:
                mapped.append(table[language.lower()])
            elif language.lower() in {code.lower() for code in table.values()}:
                mapped.append(next(c for c in table.values() if c.lower() == language.lower()))
            else:
                raise LanguageNotSupportedError(language, provider=self.provider)
        return tuple(mapped)

    def same_source_target(self) -> bool:
        return self.source == self.target

    def get_supported_languages(self, as_dict: bool = False) -> Union[list, dict]:
        table = self.supported_languages or {}
        return dict(table) if as_dict else list(table.keys())

    def is_language_supported(self, language: str) -> bool:
        try:
            self.map_language_to_code(language)
        except LanguageNotSupportedError:
            return False
        return True

    def _validate(self, text: str) -> None:
        if not isinstance(text, str) or not text.strip() or len(text) > self.max_chars:
            raise NotValidLengthError(
                text if isinstance(text, str) else "",
                self.min_chars,
                self.max_chars,
                provider=self.provider
            )

    # --- bulk helpers ---

    def translate_batch(self, batch: List[str], max_workers: int = 4) -> List[str]:
        """
        Translate many texts concurrently.

        Output order matches input order.  Texts longer than ``max_chars``
        are split, translated piecewise and re-joined.  The first failure
        (in input order) is raised and pending requests are cancelled.
        """
        if self.same_source_target():
            return list(batch)

        plans = [split_text(text, self.max_chars) for text in batch]
        chunks = [piece for plan in plans for piece, _ in plan]
        logger.info(f"{self.provider}: translating {len(batch)} texts in {len(chunks)} requests")

        with ThreadPoolExecutor(max_workers=max(1, max_workers)) as pool:
            futures = [pool.submit(self.translate, chunk) for chunk in chunks]
            try:
                results = [future.result() for future in futures]
            except Exception:
                for future in futures:
                    future.cancel()
                raise

        translated = []
        offset = 0
        for plan in plans:
            count = len(plan)
            translated.append(join_chunks(results[offset:offset + count], [sep for _, sep in plan]))
            offset += count
        return translated

    def translate_file(
        self,
        path: Union[str, Path],
        output_dir: Optional[Union[str, Path]] = None,
        max_workers: int = 4
    ) -> Path:
        """
        Translate a text file and write ``translated_<name>`` next to the CWD
        (or into ``output_dir``).

        Returns:
            Path of the written file
        """
        path = Path(path)
        text = decode_html(path.read_bytes())

        translated = self.translate_batch([text], max_workers=max_workers)[0]

        output_dir = Path(output_dir) if output_dir is not None else Path.cwd()
        output_dir.mkdir(parents=True, exist_ok=True)
        output = output_dir / f"translated_{path.name}"
        output.write_text(translated, encoding="utf-8")
        logger.info(f"{self.provider}: wrote {output}")
        return output

    def close(self) -> None:
        self.http.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(source={self.source!r}, target={self.target!r})"


class Translator:
    """
    Factory class for creating translators with provider switch.

    Usage:
        # Using environment variable TRANSLATOR_PROVIDER
        translator = Translator.create(source="en", target="de")

        # Explicit provider
        translator = Translator.create(TranslatorProvider.DEEPL, target="de", api_key="...")
    """

    @staticmethod
    def create(
        provider: Optional[Union[TranslatorProvider, str]] = None,
        source: str = "auto",
        target: str = "en",
        **kwargs
    ) -> BaseTranslator:
        """
        Create a translator for the specified provider.

        Args:
            provider: Provider (defaults to env var TRANSLATOR_PROVIDER or 'google')
            source: Source language name or code
            target: Target language name or code
            **kwargs: Provider-specific options (api_key, region, proxy, ...)

        Returns:
            Configured translator
        """
        if provider is None:
            provider_str = os.getenv("TRANSLATOR_PROVIDER", "google").lower()
            try:
                provider = TranslatorProvider(provider_str)
            except ValueError:
                logger.warning(
                    f"Unknown TRANSLATOR_PROVIDER '{provider_str}', defaulting to google"
                )
                provider = TranslatorProvider.GOOGLE
        elif isinstance(provider, str):
            try:
                provider = TranslatorProvider(provider.lower())
            except ValueError:
                raise TranslatorError(f"Unsupported provider: {provider}", provider=provider)

        logger.info(f"Creating translator for provider: {provider.value}")

        # Imported here: the provider modules import BaseTranslator from this one.
        from .api_translators import (
            ApertiumTranslator,
            AzureTranslator,
            DeeplTranslator,
            LibreTranslator,
            MyMemoryTranslator,
        )
        from .google import GoogleTranslator
        from .linguee import LingueeTranslator

        classes = {
            TranslatorProvider.GOOGLE: GoogleTranslator,
            TranslatorProvider.LINGUEE: LingueeTranslator,
            TranslatorProvider.DEEPL: DeeplTranslator,
            TranslatorProvider.AZURE: AzureTranslator,
            TranslatorProvider.MYMEMORY: MyMemoryTranslator,
            TranslatorProvider.LIBRE: LibreTranslator,
            TranslatorProvider.APERTIUM: ApertiumTranslator,
        }
        return classes[provider](source=source, target=target, **kwargs)
