"""
Best-effort HTML parser for scraped translation pages.

Turns an HTML string into a tree of ElementNode / TextNode objects wrapped
in a Document handle.  It is not an HTML5 tree builder: it only has to be
good enough to locate elements by tag name and attribute value in real,
imperfect pages.

Design principle: NEVER FAIL on bad HTML.  Unknown close tags are dropped,
unclosed elements are closed at the end of input, a stray '<' is text.
The only failure is an input that yields no nodes at all, and even that
comes back as a Document carrying a ParseError, not an exception.

Pipeline position: raw HTML string (see preprocessor.decode_html for bytes)
→ parse() → Document → query methods (see query.py).
"""

import re
from typing import List, Optional

from .exceptions import ParseError
from .logger import get_module_logger
from .query import Document
from .tree import DOCUMENT_TAG, ElementNode, TextNode, placeholder

logger = get_module_logger("parser")

# Elements that never have content and need no closing tag.
VOID_ELEMENTS = frozenset([
    "area", "base", "br", "col", "embed", "hr", "img", "input", "keygen",
    "link", "meta", "param", "source", "track", "wbr",
])

# Elements whose content is taken verbatim up to the matching close tag.
RAW_TEXT_ELEMENTS = frozenset(["script", "style"])

# Only these references are decoded; anything else is left as written.
ENTITIES = {
    "&amp;": "&",
    "&lt;": "<",
    "&gt;": ">",
    "&quot;": '"',
    "&#39;": "'",
}

ENTITY_PATTERN = re.compile("|".join(re.escape(e) for e in ENTITIES))

# <name attrs...> where quoted attribute values may themselves contain '>'.
START_TAG_PATTERN = re.compile(
    r"<([A-Za-z][^\s/>]*)((?:[^>\"']|\"[^\"]*\"|'[^']*')*)>"
)

END_TAG_PATTERN = re.compile(r"</([A-Za-z][^\s/>]*)[^>]*>")

ATTRIBUTE_PATTERN = re.compile(
    r"""([^\s"'<>/=]+)"""                 # name
    r"""(?:\s*=\s*"""
    r"""(?:"([^"]*)"|'([^']*)'|([^\s"'=<>`]+)))?"""  # optional value
)


def decode_entities(text: str) -> str:
    """Decode the minimal entity table; unknown references pass through."""
    if "&" not in text:
        return text
    return ENTITY_PATTERN.sub(lambda m: ENTITIES[m.group(0)], text)


def parse_attributes(blob: str) -> dict:
    """
    Parse the attribute part of a start tag.

    Names are lowercased, values decoded but otherwise kept verbatim.
    The first occurrence of a repeated attribute wins.
    """
    attrs = {}
    for match in ATTRIBUTE_PATTERN.finditer(blob):
        name = match.group(1).lower()
        if name in attrs:
            continue
        value = next((v for v in match.group(2, 3, 4) if v is not None), "")
        attrs[name] = decode_entities(value)
    return attrs


class TreeBuilder:
    """
    Open-element stack that assembles the tree from tokens.

    The bottom of the stack is the synthetic #document element.  It is
    never popped and becomes the root of the finished tree, so a query
    started from the document also sees the top-level elements.
    """

    def __init__(self):
        self.document = ElementNode(DOCUMENT_TAG)
        self.stack: List[ElementNode] = [self.document]
        self._pending_text: List[str] = []
        self.node_count = 0

    @property
    def current(self) -> ElementNode:
        return self.stack[-1]

    def text(self, data: str) -> None:
        if data:
            self._pending_text.append(data)

    def flush_text(self) -> None:
        # Adjacent runs (e.g. text around a literal '<') become one node.
        if not self._pending_text:
            return
        data = "".join(self._pending_text)
        self._pending_text = []
        if self.current is self.document and not data.strip():
            return
        self.current.append(TextNode(data))
        self.node_count += 1

    def start(self, tag: str, attrs: dict, self_closing: bool = False) -> ElementNode:
        self.flush_text()
        element = ElementNode(tag, attrs)
        self.current.append(element)
        self.node_count += 1
        if self_closing or element.tag in VOID_ELEMENTS:
            element.seal()
        else:
            self.stack.append(element)
        return element

    def end(self, tag: str) -> None:
        tag = tag.lower()
        # Close tags for void elements (</br>) and for elements that are
        # not open anywhere are ignored.
        for depth in range(len(self.stack) - 1, 0, -1):
            if self.stack[depth].tag == tag:
                break
        else:
            return
        self.flush_text()
        while len(self.stack) > depth:
            self.stack.pop().seal()

    def finish(self) -> Optional[ElementNode]:
        """Close everything still open and return the root, or None if empty."""
        self.flush_text()
        while len(self.stack) > 1:
            self.stack.pop().seal()

        if not self.document.children:
            return None
        self.document.seal()
        return self.document


class Tokenizer:
    """Scans the input and feeds a TreeBuilder."""

    def __init__(self, html: str, builder: TreeBuilder):
        self.html = html
        self.builder = builder
        self.pos = 0

    def run(self) -> None:
        html = self.html
        length = len(html)

        while self.pos < length:
            lt = html.find("<", self.pos)
            if lt == -1:
                self.builder.text(decode_entities(html[self.pos:]))
                break
            if lt > self.pos:
                self.builder.text(decode_entities(html[self.pos:lt]))
            self.pos = lt

            if html.startswith("<!--", lt):
                end = html.find("-->", lt + 4)
                self.pos = length if end == -1 else end + 3
            elif html.startswith("<!", lt) or html.startswith("<?", lt):
                end = html.find(">", lt + 2)
                self.pos = length if end == -1 else end + 1
            elif html.startswith("</", lt):
                self._end_tag()
            else:
                self._start_tag()

    def _literal_lt(self) -> None:
        self.builder.text("<")
        self.pos += 1

    def _end_tag(self) -> None:
        match = END_TAG_PATTERN.match(self.html, self.pos)
        if match is None:
            self._literal_lt()
            return
        self.builder.end(match.group(1))
        self.pos = match.end()

    def _start_tag(self) -> None:
        match = START_TAG_PATTERN.match(self.html, self.pos)
        if match is None:
            self._literal_lt()
            return

        tag = match.group(1).lower()
        blob = match.group(2).rstrip()
        self_closing = blob.endswith("/")
        if self_closing:
            blob = blob[:-1]

        self.builder.start(tag, parse_attributes(blob), self_closing)
        self.pos = match.end()

        if tag in RAW_TEXT_ELEMENTS and not self_closing:
            self._raw_text(tag)

    def _raw_text(self, tag: str) -> None:
        closing = re.compile(r"</%s\s*>" % re.escape(tag), re.IGNORECASE)
        match = closing.search(self.html, self.pos)
        end = match.start() if match else len(self.html)
        self.builder.text(self.html[self.pos:end])
        self.builder.end(tag)
        self.pos = match.end() if match else end


def parse(html: str) -> Document:
    """
    Parse an HTML string into a Document.

    Args:
        html: HTML text; fragments and malformed markup are fine

    Returns:
        Document wrapping the root element.  If nothing usable was found
        the Document carries a ParseError and a placeholder root, so any
        query on it degrades to "not found".
    """
    if not isinstance(html, str):
        return Document(
            placeholder(),
            ParseError(f"Expected HTML text, got {type(html).__name__}")
        )
    if not html.strip():
        return Document(placeholder(), ParseError("Empty HTML input"))

    builder = TreeBuilder()
    Tokenizer(html, builder).run()
    root = builder.finish()

    if root is None:
        return Document(
            placeholder(),
            ParseError("No elements or text found in input",
                       details={"length": len(html)})
        )

    logger.debug(f"Parsed {len(html)} chars into {builder.node_count} nodes (root <{root.tag}>)")
    return Document(root)
