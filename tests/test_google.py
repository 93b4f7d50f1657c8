"""
Tests for html_translate.google: request shape and result scraping.
"""

import httpx
import pytest

from html_translate.exceptions import (
    LanguageNotSupportedError,
    MalformedResponseError,
    NotValidLengthError,
    TooManyRequestsError,
    TranslationNotFoundError,
)
from html_translate.google import GoogleTranslator

# Trimmed copy of the mobile result page layout.
RESULT_PAGE = """<!DOCTYPE html>
<html lang="fr"><head><meta charset="utf-8"><title>Google Traduction</title>
<script>window.x = 1 < 2;</script></head>
<body><div class="header"><a href="/">Google</a></div>
<form action="/m"><input type="hidden" name="sl" value="en"><br>
<div class="result-container">Bonjour, le monde!</div>
</form></body></html>"""


def page_with(body: str) -> str:
    return f"<html><body>{body}</body></html>"


def test_translate_scrapes_result_container(mock_client):
    seen = {}

    def handler(request):
        seen["url"] = request.url
        return httpx.Response(200, html=RESULT_PAGE)

    translator = GoogleTranslator(source="en", target="fr", client=mock_client(handler))
    assert translator.translate("Hello, World!") == "Bonjour, le monde!"

    url = seen["url"]
    assert url.host == "translate.google.com"
    assert url.path == "/m"
    assert dict(url.params) == {"tl": "fr", "sl": "en", "q": "Hello, World!"}


def test_t0_container_wins_over_fallback(mock_client):
    html = page_with('<div class="t0">primary</div><div class="result-container">fallback</div>')
    translator = GoogleTranslator(target="de", client=mock_client(lambda r: httpx.Response(200, html=html)))

    assert translator.translate("text") == "primary"


def test_nested_markup_inside_result(mock_client):
    html = page_with('<div class="t0"> <span>Hallo</span> <b>Welt</b> </div>')
    translator = GoogleTranslator(target="de", client=mock_client(lambda r: httpx.Response(200, html=html)))

    assert translator.translate("Hello world") == "Hallo Welt"


def test_missing_result_raises_translation_not_found(mock_client):
    html = page_with('<div class="t0 extra">token match is not enough</div>')
    translator = GoogleTranslator(target="de", client=mock_client(lambda r: httpx.Response(200, html=html)))

    with pytest.raises(TranslationNotFoundError) as exc_info:
        translator.translate("Hello")
    assert exc_info.value.provider == "google"


def test_empty_page_raises_malformed_response(mock_client):
    translator = GoogleTranslator(target="de", client=mock_client(lambda r: httpx.Response(200, html="")))

    with pytest.raises(MalformedResponseError):
        translator.translate("Hello")


def test_echoed_text_is_returned_as_given(mock_client):
    html = page_with('<div class="t0">OK</div>')
    translator = GoogleTranslator(target="de", client=mock_client(lambda r: httpx.Response(200, html=html)))

    assert translator.translate("  OK ") == "  OK "


def test_rate_limit(mock_client):
    translator = GoogleTranslator(target="de", client=mock_client(lambda r: httpx.Response(429)))

    with pytest.raises(TooManyRequestsError):
        translator.translate("Hello")


def test_same_source_and_target_skips_request(mock_client):
    def handler(request):
        raise AssertionError("no request expected")

    translator = GoogleTranslator(source="english", target="en", client=mock_client(handler))
    assert translator.same_source_target()
    assert translator.translate("Hello") == "Hello"


def test_language_names_are_mapped_to_codes():
    with GoogleTranslator(source="English", target="chinese (simplified)") as translator:
        assert (translator.source, translator.target) == ("en", "zh-CN")
    with GoogleTranslator(source="auto", target="zh-cn") as translator:
        assert translator.target == "zh-CN"


def test_unsupported_language():
    with pytest.raises(LanguageNotSupportedError) as exc_info:
        GoogleTranslator(target="klingon")
    assert exc_info.value.language == "klingon"


@pytest.mark.parametrize("text", ["", "   ", "x" * 5001])
def test_text_length_is_validated(mock_client, text):
    translator = GoogleTranslator(target="de", client=mock_client(lambda r: httpx.Response(200)))

    with pytest.raises(NotValidLengthError):
        translator.translate(text)


def upper_handler(calls):
    def handler(request):
        calls.append(request.url.params["q"])
        translated = request.url.params["q"].upper()
        return httpx.Response(200, html=page_with(f"<div class='t0'>{translated}</div>"))
    return handler


def test_translate_batch_keeps_order(mock_client):
    calls = []
    translator = GoogleTranslator(target="de", client=mock_client(upper_handler(calls)))

    assert translator.translate_batch(["one", "two", "three"], max_workers=3) == ["ONE", "TWO", "THREE"]
    assert sorted(calls) == ["one", "three", "two"]


def test_translate_batch_splits_long_text(mock_client):
    calls = []
    translator = GoogleTranslator(target="de", client=mock_client(upper_handler(calls)))
    text = "word " * 1500

    result = translator.translate_batch([text, "short"])
    assert len(calls) == 3
    assert all(len(call) <= 5000 for call in calls)
    assert result == [text.upper().strip(), "SHORT"]


def test_translate_batch_raises_first_failure(mock_client):
    def handler(request):
        if request.url.params["q"] == "bad":
            return httpx.Response(200, html=page_with("<p>no result</p>"))
        return httpx.Response(200, html=page_with("<div class='t0'>fine</div>"))

    translator = GoogleTranslator(target="de", client=mock_client(handler))
    with pytest.raises(TranslationNotFoundError):
        translator.translate_batch(["good", "bad", "good"])


def test_translate_file(mock_client, tmp_path):
    source = tmp_path / "notes.txt"
    source.write_text("Hello\nWorld", encoding="utf-8")
    translator = GoogleTranslator(target="de", client=mock_client(upper_handler([])))

    output = translator.translate_file(source, output_dir=tmp_path / "out")
    assert output == tmp_path / "out" / "translated_notes.txt"
    assert output.read_text(encoding="utf-8") == "HELLO\nWORLD"
