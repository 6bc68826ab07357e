"""XML <-> structural tree codec.

`decode` projects a token stream onto nested dicts:

- the document becomes ``{root_tag: node}``
- attributes of an element live under ``"@attributes"``
- text directly inside an element, trimmed per text run (the text between
  two pieces of markup) and concatenated, lives under ``"#text"``; this
  applies whether or not the element also has child elements
- repeated sibling tags collapse into a list under the shared tag

The projection is one-way. `encode` re-indents the original token stream and
never goes through the dict form.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Iterator, List, Optional
from xml.sax.saxutils import escape

from devtoolbox.codec.xml_tokens import (
    CharData,
    Comment,
    Directive,
    EndElement,
    ProcInst,
    StartElement,
    Token,
    local_name,
)
from devtoolbox.domain.errors import MalformedDocumentError

ATTRIBUTES_KEY = "@attributes"
TEXT_KEY = "#text"
DEFAULT_INDENT = "  "

StructuralNode = Dict[str, Any]


def decode(tokens: Iterable[Token]) -> StructuralNode:
    """Build the structural tree for a whole document."""
    try:
        return _decode_element(iter(tokens), None)
    except RecursionError as exc:
        raise MalformedDocumentError("document nesting is too deep") from exc


def _attributes_of(start: StartElement) -> Dict[str, str]:
    return {local_name(name): value for name, value in start.attributes}


def _merge_child(node: StructuralNode, name: str, child: StructuralNode) -> None:
    existing = node.get(name)
    if existing is None:
        node[name] = child
    elif isinstance(existing, list):
        existing.append(child)
    else:
        node[name] = [existing, child]


def _decode_element(stream: Iterator[Token], open_tag: Optional[StartElement]) -> StructuralNode:
    """Consume tokens up to the end of `open_tag` (or the document when None)."""
    node: StructuralNode = {}
    text_parts: List[str] = []

    for token in stream:
        if isinstance(token, StartElement):
            child = _decode_element(stream, token)
            if token.attributes:
                child[ATTRIBUTES_KEY] = _attributes_of(token)
            name = local_name(token.name)
            if open_tag is None:
                node[name] = child
            else:
                _merge_child(node, name, child)
        elif isinstance(token, CharData):
            text = token.text.strip()
            if text:
                text_parts.append(text)
        elif isinstance(token, EndElement):
            if open_tag is None:
                raise MalformedDocumentError(f"unexpected end tag </{token.name}> at document level")
            if token.name != open_tag.name:
                raise MalformedDocumentError(
                    f"element <{open_tag.name}> closed by </{token.name}>"
                )
            if text_parts:
                node[TEXT_KEY] = "".join(text_parts)
            return node

    if open_tag is not None:
        raise MalformedDocumentError(f"unexpected end of document inside <{open_tag.name}>")
    return node


def _escape_attr(value: str) -> str:
    return escape(value, {'"': "&quot;", "\n": "&#10;", "\t": "&#9;", "\r": "&#13;"})


def _render_start(token: StartElement) -> str:
    attrs = "".join(f' {name}="{_escape_attr(value)}"' for name, value in token.attributes)
    return f"<{token.name}{attrs}>"


class _IndentWriter:
    """Newline/indent bookkeeping for the pretty printer.

    An element whose content produced no nested markup is closed on the line
    it was opened on.
    """

    def __init__(self, indent: str) -> None:
        self.indent = indent
        self.parts: List[str] = []
        self.depth = 0
        self.indented_in = False
        self.started = False

    def _newline(self) -> None:
        if self.started:
            self.parts.append("\n")
        self.started = True
        self.parts.append(self.indent * self.depth)

    def open(self, markup: str) -> None:
        self._newline()
        self.parts.append(markup)
        self.depth += 1
        self.indented_in = True

    def close(self, markup: str) -> None:
        self.depth -= 1
        if self.indented_in:
            self.indented_in = False
        else:
            self._newline()
        self.parts.append(markup)

    def leaf(self, markup: str) -> None:
        self._newline()
        self.parts.append(markup)
        self.indented_in = False

    def text(self, text: str) -> None:
        self.parts.append(text)
        self.started = True

    def getvalue(self) -> str:
        return "".join(self.parts)


def encode(tokens: Iterable[Token], indent: str = DEFAULT_INDENT) -> str:
    """Pretty-print a token stream with `indent` per nesting level.

    Whitespace-only character data is dropped; other text is kept verbatim
    (escaped) next to the surrounding markup.
    """
    writer = _IndentWriter(indent)

    for token in tokens:
        if isinstance(token, StartElement):
            writer.open(_render_start(token))
        elif isinstance(token, EndElement):
            if writer.depth == 0:
                raise MalformedDocumentError(f"unexpected end tag </{token.name}> at document level")
            writer.close(f"</{token.name}>")
        elif isinstance(token, CharData):
            if token.text.strip():
                writer.text(escape(token.text))
        elif isinstance(token, Comment):
            writer.leaf(f"<!--{token.text}-->")
        elif isinstance(token, ProcInst):
            data = f" {token.data}" if token.data else ""
            writer.leaf(f"<?{token.target}{data}?>")
        elif isinstance(token, Directive):
            writer.leaf(f"<!{token.text}>")

    if writer.depth:
        raise MalformedDocumentError("unexpected end of document: unclosed elements")
    return writer.getvalue()
