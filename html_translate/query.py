"""
Read-only query operations over a parsed tree.

Every lookup returns a ResultNode: a node plus an optional error.  A
ResultNode that carries an error short-circuits every later query and
hands the SAME error object back, so extraction code can chain freely:

    doc.find("div", ("class", "t0")).find("span").full_text()

and check ``.error`` once at the end.  Nothing here mutates the tree, so
any number of threads may query one tree at the same time.
"""

import re
from types import MappingProxyType
from typing import Iterator, List, Mapping, Optional, Tuple, Union

from .exceptions import InvalidArgumentError, NotFoundError, TreeError
from .tree import Node, placeholder

# Accepted tag names for queries.
TAG_NAME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9:_.-]*$")

_EMPTY_ATTRS: Mapping[str, str] = MappingProxyType({})

Attr = Tuple[str, str]


class ResultNode:
    """A node returned by a query, or the error explaining why there is none."""

    __slots__ = ("node", "error")

    def __init__(self, node: Node, error: Optional[TreeError] = None):
        self.node = node
        self.error = error

    @classmethod
    def failed(cls, error: TreeError) -> "ResultNode":
        return cls(placeholder(), error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def __bool__(self) -> bool:
        return self.error is None

    @property
    def tag(self) -> str:
        return "" if self.error else self.node.tag

    def raise_for_error(self) -> Node:
        """Raise the carried error, otherwise return the wrapped node."""
        if self.error is not None:
            raise self.error
        return self.node

    # --- chainable forms of the module-level queries ---

    def find(self, tag: str, attr: Optional[Attr] = None) -> "ResultNode":
        return find(self, tag, attr)

    def find_all(self, tag: str, attr: Optional[Attr] = None) -> "ResultList":
        return find_all(self, tag, attr)

    def find_next_sibling(self) -> "ResultNode":
        return find_next_sibling(self)

    def attrs(self) -> Mapping[str, str]:
        return attrs(self)

    def children(self) -> tuple:
        return children(self)

    def text(self) -> str:
        return text(self)

    def full_text(self) -> str:
        return full_text(self)

    def __repr__(self) -> str:
        if self.error is not None:
            return f"ResultNode(error={self.error.message!r})"
        return f"ResultNode({self.node!r})"


class Document(ResultNode):
    """
    Handle returned by parse(): the root node plus an optional ParseError.

    The root is the synthetic #document element, so queries on the handle
    also match the top-level elements themselves.
    """

    __slots__ = ()

    @property
    def root(self) -> Node:
        return self.node

    @property
    def document_element(self) -> Node:
        """The single top-level element, or the root when there is not exactly one."""
        top = self.node.children
        if len(top) == 1 and top[0].is_element:
            return top[0]
        return self.node


class ResultList(list):
    """
    List of ResultNode returned by find_all.

    An empty list is a normal "no matches" answer.  ``error`` is only set
    when the query could not run at all: the input was already an errored
    result, or the arguments were invalid.
    """

    def __init__(self, results=(), error: Optional[TreeError] = None):
        super().__init__(results)
        self.error = error


NodeLike = Union[Node, ResultNode]


def _unwrap(node: NodeLike) -> Tuple[Node, Optional[TreeError]]:
    if isinstance(node, ResultNode):
        return node.node, node.error
    return node, None


def _check_query(tag, attr) -> Optional[InvalidArgumentError]:
    if not isinstance(tag, str) or not TAG_NAME_PATTERN.match(tag):
        return InvalidArgumentError(f"Invalid tag name: {tag!r}")
    if attr is None:
        return None
    if not isinstance(attr, tuple) or len(attr) != 2:
        return InvalidArgumentError(f"Attribute filter must be a (key, value) pair, got {attr!r}")
    key, value = attr
    if not isinstance(key, str) or not key.strip():
        return InvalidArgumentError(f"Invalid attribute name: {key!r}")
    if not isinstance(value, str):
        return InvalidArgumentError(f"Attribute value must be a string, got {type(value).__name__}")
    return None


def _matching(node: Node, tag: str, attr: Optional[Attr]) -> Iterator[Node]:
    tag = tag.lower()
    key = attr[0].lower() if attr else None
    for candidate in node.iter_descendants():
        if not candidate.is_element or candidate.tag != tag:
            continue
        if key is not None and candidate.attrs.get(key) != attr[1]:
            continue
        yield candidate


def find(node: NodeLike, tag: str, attr: Optional[Attr] = None) -> ResultNode:
    """
    First element below ``node`` (preorder, node itself excluded) with the
    given tag and, if ``attr`` is given, an attribute equal to the value.

    Attribute matching is exact: class="a b" does not match ("class", "a").
    """
    node, error = _unwrap(node)
    if error is not None:
        return ResultNode(node, error)

    invalid = _check_query(tag, attr)
    if invalid is not None:
        return ResultNode.failed(invalid)

    for match in _matching(node, tag, attr):
        return ResultNode(match)

    if attr:
        message = f'No <{tag.lower()}> element with {attr[0]}="{attr[1]}" found'
    else:
        message = f"No <{tag.lower()}> element found"
    return ResultNode.failed(NotFoundError(message, tag=tag.lower(), attr=attr))


def find_all(node: NodeLike, tag: str, attr: Optional[Attr] = None) -> ResultList:
    """Every element find() would consider a match, in document order."""
    node, error = _unwrap(node)
    if error is not None:
        return ResultList(error=error)

    invalid = _check_query(tag, attr)
    if invalid is not None:
        return ResultList(error=invalid)

    return ResultList(ResultNode(match) for match in _matching(node, tag, attr))


def find_next_sibling(node: NodeLike) -> ResultNode:
    """The node right after this one in its parent's children."""
    node, error = _unwrap(node)
    if error is not None:
        return ResultNode(node, error)

    sibling = node.next_sibling()
    if sibling is None:
        if node.parent is None:
            message = f"<{node.tag}> has no parent, so no siblings"
        else:
            message = f"<{node.tag}> is the last child of <{node.parent.tag}>"
        return ResultNode.failed(NotFoundError(message, tag=node.tag or None))
    return ResultNode(sibling)


def attrs(node: NodeLike) -> Mapping[str, str]:
    """Attribute mapping as parsed; empty for text nodes and errored results."""
    node, error = _unwrap(node)
    if error is not None:
        return _EMPTY_ATTRS
    return node.attrs


def children(node: NodeLike) -> tuple:
    """Direct children in document order."""
    node, error = _unwrap(node)
    if error is not None:
        return ()
    return node.children


def text(node: NodeLike) -> str:
    """
    Concatenated DIRECT text children only; text nested inside child
    elements is left out.  No trimming.
    """
    node, error = _unwrap(node)
    if error is not None:
        return ""
    if node.is_text:
        return node.data
    return "".join(child.data for child in node.children if child.is_text)


def full_text(node: NodeLike) -> str:
    """All text in the subtree, in document order, stripped at both ends."""
    node, error = _unwrap(node)
    if error is not None:
        return ""
    if node.is_text:
        return node.data.strip()
    parts: List[str] = [n.data for n in node.iter_descendants() if n.is_text]
    return "".join(parts).strip()
