"""
Document tree produced by the parser.

Two node kinds:
  ElementNode - lowercase tag name, attribute mapping, ordered children
  TextNode    - a run of decoded character data

Each node keeps a plain (non-owning) reference to its parent plus its
position among the parent's children, which is all find_next_sibling
needs.  The parser seals every element once its end is reached; after
that, children are a tuple and attributes a read-only mapping, so a tree
can be shared freely between threads.
"""

from types import MappingProxyType
from typing import Iterator, Mapping, Optional

# Tag of the synthetic element every parsed tree is rooted at.
DOCUMENT_TAG = "#document"

_EMPTY_ATTRS: Mapping[str, str] = MappingProxyType({})


class Node:
    """Common base for element and text nodes."""

    __slots__ = ("_parent", "_index")

    is_element = False
    is_text = False

    def __init__(self):
        self._parent: Optional["ElementNode"] = None
        self._index = 0

    @property
    def parent(self) -> Optional["ElementNode"]:
        return self._parent

    @property
    def index(self) -> int:
        """Position of this node in its parent's children."""
        return self._index

    @property
    def tag(self) -> str:
        return ""

    @property
    def attrs(self) -> Mapping[str, str]:
        return _EMPTY_ATTRS

    @property
    def children(self) -> tuple:
        return ()

    def next_sibling(self) -> Optional["Node"]:
        if self._parent is None:
            return None
        siblings = self._parent.children
        if self._index + 1 < len(siblings):
            return siblings[self._index + 1]
        return None

    def iter_descendants(self) -> Iterator["Node"]:
        """Yield every node below this one in preorder (self excluded)."""
        # Explicit stack: scraped pages can nest deeper than the recursion limit.
        stack = list(reversed(self.children))
        while stack:
            node = stack.pop()
            yield node
            if node.children:
                stack.extend(reversed(node.children))


class ElementNode(Node):
    """An element: tag name, attributes and ordered children."""

    __slots__ = ("_tag", "_attrs", "_children")

    is_element = True

    def __init__(self, tag: str, attrs: Optional[Mapping[str, str]] = None):
        super().__init__()
        self._tag = tag.lower()
        self._attrs = MappingProxyType(
            {k.lower(): v for k, v in (attrs or {}).items()}
        )
        self._children = []

    @property
    def tag(self) -> str:
        return self._tag

    @property
    def attrs(self) -> Mapping[str, str]:
        return self._attrs

    @property
    def children(self) -> tuple:
        children = self._children
        return children if isinstance(children, tuple) else tuple(children)

    @property
    def sealed(self) -> bool:
        return isinstance(self._children, tuple)

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Attribute lookup; names are case-insensitive."""
        return self._attrs.get(name.lower(), default)

    def append(self, node: Node) -> None:
        """Attach a child.  Only valid while the parser is still building."""
        if self.sealed:
            raise TypeError(f"<{self._tag}> is sealed and cannot take new children")
        node._parent = self
        node._index = len(self._children)
        self._children.append(node)

    def seal(self) -> None:
        if not self.sealed:
            self._children = tuple(self._children)

    def __repr__(self) -> str:
        attrs = "".join(f' {k}="{v}"' for k, v in self._attrs.items())
        return f"<{self._tag}{attrs}> ({len(self._children)} children)"


class TextNode(Node):
    """A run of character data with entities already decoded."""

    __slots__ = ("_data",)

    is_text = True

    def __init__(self, data: str):
        super().__init__()
        self._data = data

    @property
    def data(self) -> str:
        return self._data

    def __repr__(self) -> str:
        preview = self._data if len(self._data) <= 40 else self._data[:37] + "..."
        return f"TextNode({preview!r})"


def placeholder() -> ElementNode:
    """A childless, sealed element used where no real node exists."""
    node = ElementNode("")
    node.seal()
    return node
