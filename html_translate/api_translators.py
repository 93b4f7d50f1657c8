"""
JSON API providers: DeepL, Azure, MyMemory, LibreTranslate, Apertium.

These services answer with JSON, so the tree engine is not involved; each
client only builds the request and digs the translation out of the
response, raising MalformedResponseError when the expected keys are
missing.
"""

import os
from typing import Any, Optional

from .exceptions import AuthenticationError, MalformedResponseError
from .languages import DEEPL_LANGUAGES_TO_CODES
from .logger import get_module_logger
from .translator import BaseTranslator

logger = get_module_logger("api_translators")

DEEPL_FREE_URL = "https://api-free.deepl.com/v2/translate"
DEEPL_PRO_URL = "https://api.deepl.com/v2/translate"
AZURE_URL = "https://api.cognitive.microsofttranslator.com/translate"
MYMEMORY_URL = "https://api.mymemory.translated.net/get"
LIBRE_URL = "https://libretranslate.com/translate"
APERTIUM_URL = "https://www.apertium.org/apy/translate"


def _dig(payload: Any, *path, provider: str) -> Any:
    """Follow keys / indexes into a JSON payload."""
    current = payload
    for key in path:
        try:
            current = current[key]
        except (KeyError, IndexError, TypeError):
            raise MalformedResponseError(
                f"Unexpected {provider} response: missing {'/'.join(str(p) for p in path)}",
                provider=provider,
                details={"response": payload}
            )
    return current


class DeeplTranslator(BaseTranslator):
    """DeepL REST API (needs an API key)."""

    provider = "deepl"
    supported_languages = DEEPL_LANGUAGES_TO_CODES
    max_chars = 5000

    def __init__(
        self,
        source: str = "en",
        target: str = "de",
        api_key: Optional[str] = None,
        use_free_api: bool = True,
        **kwargs
    ):
        self.api_key = api_key or os.getenv("DEEPL_API_KEY")
        if not self.api_key:
            raise AuthenticationError("DeepL API key not provided", provider=self.provider)
        super().__init__(source, target, **kwargs)
        self.base_url = DEEPL_FREE_URL if use_free_api else DEEPL_PRO_URL

    def translate(self, text: str) -> str:
        self._validate(text)
        if self.same_source_target():
            return text

        data = {"text": text, "target_lang": self.target.upper()}
        if self.source != "auto":
            data["source_lang"] = self.source.upper()

        response = self.http.post_form(
            self.base_url,
            data=data,
            headers={"Authorization": f"DeepL-Auth-Key {self.api_key}"}
        )
        return _dig(response, "translations", 0, "text", provider=self.provider)


class AzureTranslator(BaseTranslator):
    """Microsoft Azure Translator (needs a key and a region)."""

    provider = "azure"
    max_chars = 50000

    def __init__(
        self,
        source: str = "auto",
        target: str = "en",
        api_key: Optional[str] = None,
        region: Optional[str] = None,
        **kwargs
    ):
        self.api_key = api_key or os.getenv("AZURE_TRANSLATOR_KEY")
        if not self.api_key:
            raise AuthenticationError("Azure Translator key not provided", provider=self.provider)
        self.region = region or os.getenv("AZURE_TRANSLATOR_REGION")
        super().__init__(source, target, **kwargs)

    def translate(self, text: str) -> str:
        self._validate(text)
        if self.same_source_target():
            return text

        params = {"api-version": "3.0", "to": self.target}
        # Azure detects the language itself when "from" is left out.
        if self.source != "auto":
            params["from"] = self.source

        headers = {"Ocp-Apim-Subscription-Key": self.api_key}
        if self.region:
            headers["Ocp-Apim-Subscription-Region"] = self.region

        response = self.http.post_json(AZURE_URL, json=[{"Text": text}], params=params, headers=headers)
        return _dig(response, 0, "translations", 0, "text", provider=self.provider)


class MyMemoryTranslator(BaseTranslator):
    """MyMemory public API (no key, 500 bytes per request)."""

    provider = "mymemory"
    max_chars = 500
    base_url = MYMEMORY_URL

    def __init__(self, source: str = "en", target: str = "fr", email: Optional[str] = None, **kwargs):
        super().__init__(source, target, **kwargs)
        self.email = email

    def _params(self, text: str) -> dict:
        params = {"langpair": f"{self.source}|{self.target}", "q": text}
        if self.email:
            params["de"] = self.email
        return params

    def translate(self, text: str) -> str:
        self._validate(text)
        if self.same_source_target():
            return text
        response = self.http.get_json(self.base_url, params=self._params(text))
        return _dig(response, "responseData", "translatedText", provider=self.provider)


class ApertiumTranslator(MyMemoryTranslator):
    """Apertium APy; same request and response shape as MyMemory."""

    provider = "apertium"
    max_chars = 5000
    base_url = APERTIUM_URL

    def __init__(self, source: str = "en", target: str = "es", **kwargs):
        super().__init__(source, target, **kwargs)


class LibreTranslator(BaseTranslator):
    """LibreTranslate instance (public one needs a key, self-hosted ones may not)."""

    provider = "libre"
    max_chars = 5000

    def __init__(
        self,
        source: str = "auto",
        target: str = "en",
        api_key: Optional[str] = None,
        base_url: str = LIBRE_URL,
        **kwargs
    ):
        super().__init__(source, target, **kwargs)
        self.api_key = api_key or os.getenv("LIBRE_API_KEY")
        self.base_url = base_url

    def translate(self, text: str) -> str:
        self._validate(text)
        if self.same_source_target():
            return text

        body = {"q": text, "source": self.source, "target": self.target, "format": "text"}
        if self.api_key:
            body["api_key"] = self.api_key
        response = self.http.post_json(self.base_url, json=body)
        return _dig(response, "translatedText", provider=self.provider)
