"""XML tokenizer and structural codec."""

from .xml_codec import ATTRIBUTES_KEY, TEXT_KEY, StructuralNode, decode, encode
from .xml_tokens import (
    CharData,
    Comment,
    Directive,
    EndElement,
    ProcInst,
    StartElement,
    Token,
    local_name,
    tokenize,
)

__all__ = [
    "ATTRIBUTES_KEY",
    "TEXT_KEY",
    "StructuralNode",
    "decode",
    "encode",
    "CharData",
    "Comment",
    "Directive",
    "EndElement",
    "ProcInst",
    "StartElement",
    "Token",
    "local_name",
    "tokenize",
]
