"""Streaming XML tokenizer built on expat.

`tokenize` yields tokens while the input is still being fed to the parser,
so consumers see the document prefix before a late syntax error surfaces.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple, Union
from xml.parsers import expat

from devtoolbox.domain.errors import MalformedDocumentError

_CHUNK_SIZE = 64 * 1024


@dataclass(frozen=True)
class StartElement:
    name: str
    attributes: Tuple[Tuple[str, str], ...] = ()


@dataclass(frozen=True)
class EndElement:
    name: str


@dataclass(frozen=True)
class CharData:
    text: str


@dataclass(frozen=True)
class Comment:
    text: str


@dataclass(frozen=True)
class ProcInst:
    target: str
    data: str


@dataclass(frozen=True)
class Directive:
    text: str


Token = Union[StartElement, EndElement, CharData, Comment, ProcInst, Directive]


def local_name(name: str) -> str:
    """Strip a namespace prefix: ``soap:Body`` -> ``Body``."""
    return name.rsplit(":", 1)[-1]


def _xml_decl(version: Optional[str], encoding: Optional[str], standalone: int) -> ProcInst:
    parts = []
    if version:
        parts.append(f'version="{version}"')
    if encoding:
        parts.append(f'encoding="{encoding}"')
    if standalone != -1:
        parts.append(f'standalone="{"yes" if standalone else "no"}"')
    return ProcInst("xml", " ".join(parts))


def _doctype(name: str, sysid: Optional[str], pubid: Optional[str]) -> Directive:
    text = f"DOCTYPE {name}"
    if pubid:
        text += f' PUBLIC "{pubid}"'
        if sysid:
            text += f' "{sysid}"'
    elif sysid:
        text += f' SYSTEM "{sysid}"'
    return Directive(text)


def _append_text(pending: List[Token], data: str) -> None:
    # expat splits one text run at its buffer size and at feed boundaries.
    if pending and isinstance(pending[-1], CharData):
        pending[-1] = CharData(pending[-1].text + data)
    else:
        pending.append(CharData(data))


def _take_ready(pending: List[Token]) -> List[Token]:
    """Pop the tokens that are complete; a trailing text run may still grow."""
    keep = 1 if pending and isinstance(pending[-1], CharData) else 0
    ready = pending[:len(pending) - keep]
    del pending[:len(pending) - keep]
    return ready


def _new_parser(pending: List[Token]) -> "expat.XMLParserType":
    parser = expat.ParserCreate()
    parser.ordered_attributes = True
    parser.buffer_text = True

    def on_start(name, attrs):
        pairs = tuple(zip(attrs[0::2], attrs[1::2]))
        pending.append(StartElement(name, pairs))

    def on_doctype(name, sysid, pubid, has_internal_subset):
        # Internal subsets are not reproduced.
        pending.append(_doctype(name, sysid, pubid))

    parser.StartElementHandler = on_start
    parser.EndElementHandler = lambda name: pending.append(EndElement(name))
    parser.CharacterDataHandler = lambda data: _append_text(pending, data)
    parser.CommentHandler = lambda data: pending.append(Comment(data))
    parser.ProcessingInstructionHandler = (
        lambda target, data: pending.append(ProcInst(target, data))
    )
    parser.XmlDeclHandler = (
        lambda version, encoding, standalone: pending.append(
            _xml_decl(version, encoding, standalone)
        )
    )
    parser.StartDoctypeDeclHandler = on_doctype
    return parser


def tokenize(content: str) -> Iterator[Token]:
    """Yield the token stream of `content`.

    Consecutive character data, including entity references, arrives as a
    single CharData token.

    Raises MalformedDocumentError (with expat's line/column message) as soon
    as the parser rejects the input, including truncated or empty documents.
    """
    pending: List[Token] = []
    parser = _new_parser(pending)

    try:
        for offset in range(0, len(content), _CHUNK_SIZE):
            parser.Parse(content[offset:offset + _CHUNK_SIZE], False)
            yield from _take_ready(pending)
        parser.Parse("", True)
    except expat.ExpatError as exc:
        raise MalformedDocumentError(str(exc)) from exc
    yield from pending
