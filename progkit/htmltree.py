"""A small HTML node tree with traversal helpers for links, outlines and titles."""

from __future__ import annotations

import argparse
import enum
import sys
from dataclasses import dataclass, field
from typing import Callable, Iterator, Optional
from xml.dom import Node as _DomNode

import html5lib


class NodeType(enum.IntEnum):
    """Kinds of node in a parsed HTML document."""

    ERROR = 0
    TEXT = 1
    DOCUMENT = 2
    ELEMENT = 3
    COMMENT = 4
    DOCTYPE = 5


@dataclass(eq=False)
class Node:
    """One node of an HTML document tree."""

    type: NodeType
    data: str = ""
    attr: list[tuple[str, str]] = field(default_factory=list)
    children: list[Node] = field(default_factory=list)


class TitleError(ValueError):
    """Raised when a document does not have exactly one non-empty title."""


NodeFunc = Callable[[Node], None]


def _convert(dom_node) -> Optional[Node]:
    kind = dom_node.nodeType
    if kind == _DomNode.DOCUMENT_NODE:
        node = Node(NodeType.DOCUMENT)
    elif kind == _DomNode.ELEMENT_NODE:
        node = Node(NodeType.ELEMENT, dom_node.tagName, list(dom_node.attributes.items()))
    elif kind == _DomNode.TEXT_NODE:
        return Node(NodeType.TEXT, dom_node.data)
    elif kind == _DomNode.COMMENT_NODE:
        return Node(NodeType.COMMENT, dom_node.data)
    elif kind == _DomNode.DOCUMENT_TYPE_NODE:
        return Node(NodeType.DOCTYPE, dom_node.name or "")
    else:
        return None

    for dom_child in dom_node.childNodes:
        child = _convert(dom_child)
        if child is None:
            continue
        previous = node.children[-1] if node.children else None
        if (
            child.type is NodeType.TEXT
            and previous is not None
            and previous.type is NodeType.TEXT
        ):
            previous.data += child.data
        else:
            node.children.append(child)
    return node


def parse_html(source) -> Node:
    """Parse HTML from a string, bytes or file object into a Node tree."""
    document = html5lib.parse(source, treebuilder="dom", namespaceHTMLElements=False)
    root = _convert(document)
    if root is None:
        raise ValueError("document could not be converted")
    return root


def for_each_node(
    node: Node, pre: Optional[NodeFunc] = None, post: Optional[NodeFunc] = None
) -> None:
    """Call pre before and post after visiting the children of every node."""
    if pre is not None:
        pre(node)
    for child in node.children:
        for_each_node(child, pre, post)
    if post is not None:
        post(node)


def iter_nodes(node: Node) -> Iterator[Node]:
    """Yield every node of the tree rooted at node in document order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def _is_element(node: Node, tag: str) -> bool:
    return node.type is NodeType.ELEMENT and node.data == tag


def visit(node: Node) -> list[str]:
    """Return the href of every anchor element, in document order."""
    return [
        value
        for n in iter_nodes(node)
        if _is_element(n, "a")
        for key, value in n.attr
        if key == "href"
    ]


def outline(node: Node) -> Iterator[tuple[str, ...]]:
    """Yield the stack of enclosing element names at every element."""

    def walk(current: Node, stack: tuple[str, ...]) -> Iterator[tuple[str, ...]]:
        if current.type is NodeType.ELEMENT:
            stack = (*stack, current.data)
            yield stack
        for child in current.children:
            yield from walk(child, stack)

    yield from walk(node, ())


def format_outline(node: Node) -> str:
    """Render the element structure as indented start and end tags."""
    lines: list[str] = []
    depth = 0

    def start(n: Node) -> None:
        nonlocal depth
        if n.type is NodeType.ELEMENT:
            lines.append(f"{'  ' * depth}<{n.data}>")
            depth += 1

    def end(n: Node) -> None:
        nonlocal depth
        if n.type is NodeType.ELEMENT:
            depth -= 1
            lines.append(f"{'  ' * depth}</{n.data}>")

    for_each_node(node, start, end)
    return "".join(line + "\n" for line in lines)


def titles(node: Node) -> list[str]:
    """Return the text of every title element that has content."""
    return [
        n.children[0].data
        for n in iter_nodes(node)
        if _is_element(n, "title") and n.children
    ]


def sole_title(node: Node) -> str:
    """Return the single non-empty title, raising TitleError otherwise."""
    title = ""
    for text in titles(node):
        if title:
            raise TitleError("multiple title elements")
        title = text
    if not title:
        raise TitleError("no title element")
    return title


def main(argv: Optional[list[str]] = None) -> int:
    """Read HTML from standard input and print links, outline or title."""
    parser = argparse.ArgumentParser(
        prog="htmltree", description="Inspect an HTML document read from standard input."
    )
    parser.add_argument("mode", choices=["links", "outline", "tree", "title"])
    args = parser.parse_args(argv)

    doc = parse_html(getattr(sys.stdin, "buffer", sys.stdin))
    if args.mode == "links":
        for link in visit(doc):
            print(link)
    elif args.mode == "outline":
        for stack in outline(doc):
            print("[" + " ".join(stack) + "]")
    elif args.mode == "tree":
        sys.stdout.write(format_outline(doc))
    else:
        try:
            print(sole_title(doc))
        except TitleError as exc:
            print(f"title: {exc}", file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())