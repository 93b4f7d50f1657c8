"""
Convenience entry points that wire settings, factory and translators.

Used by run_translate.py and by callers that want one call per text
without managing a translator's lifetime.
"""

from pathlib import Path
from typing import Optional, Union

from .config import Settings, load_settings
from .logger import get_module_logger
from .schemas import TranslationRecord
from .translator import BaseTranslator, Translator, split_text

logger = get_module_logger("main")


def create_translator(
    provider: Optional[str] = None,
    source: Optional[str] = None,
    target: Optional[str] = None,
    settings: Optional[Settings] = None,
    **overrides
) -> BaseTranslator:
    """Build a translator from settings, with explicit arguments taking precedence."""
    settings = settings or load_settings()
    provider = (provider or settings.provider).lower()
    kwargs = settings.translator_kwargs(provider)
    kwargs.update(overrides)
    return Translator.create(
        provider,
        source=source or settings.source,
        target=target or settings.target,
        **kwargs
    )


def translate_text(
    text: str,
    provider: Optional[str] = None,
    source: Optional[str] = None,
    target: Optional[str] = None,
    settings: Optional[Settings] = None,
    **overrides
) -> TranslationRecord:
    """
    Translate one text of any length.

    Returns:
        TranslationRecord with the codes actually sent to the provider
    """
    with create_translator(provider, source, target, settings, **overrides) as translator:
        chunks = len(split_text(text, translator.max_chars))
        translated = translator.translate_batch([text])[0]
        return TranslationRecord(
            provider=translator.provider,
            source=translator.source,
            target=translator.target,
            text=text,
            translated=translated,
            chunks=chunks,
        )


def translate_file(
    path: Union[str, Path],
    provider: Optional[str] = None,
    source: Optional[str] = None,
    target: Optional[str] = None,
    output_dir: Optional[Union[str, Path]] = None,
    settings: Optional[Settings] = None,
    **overrides
) -> Path:
    """Translate a file; returns the path of the translated copy."""
    with create_translator(provider, source, target, settings, **overrides) as translator:
        return translator.translate_file(path, output_dir=output_dir)
