"""Text conversion tools: JSON, XML and Base64.

Each method returns a ConversionResult; invalid input is reported through
`error` rather than raised.
"""

from __future__ import annotations

import base64
import binascii
import json
from dataclasses import dataclass
from typing import Any, Dict

import structlog

from devtoolbox.codec.xml_codec import decode, encode
from devtoolbox.codec.xml_tokens import tokenize
from devtoolbox.domain.errors import MalformedDocumentError

logger = structlog.get_logger()

NON_UTF8_WARNING = "Warning: Decoded content contains non-UTF-8 characters"


@dataclass
class ConversionResult:
    """Converted text or an error message (sometimes both, for warnings)."""

    result: str = ""
    error: str = ""

    @property
    def success(self) -> bool:
        return not self.error

    def to_dict(self) -> Dict[str, Any]:
        return {"result": self.result, "error": self.error}


class ConversionService:
    """Stateless conversions used by the editor tools."""

    def format_json(self, content: str) -> ConversionResult:
        try:
            data = json.loads(content)
        except ValueError as exc:
            return ConversionResult(error=f"Invalid JSON format: {exc}")
        return ConversionResult(result=json.dumps(data, ensure_ascii=False, indent=2))

    def compact_json(self, content: str) -> ConversionResult:
        try:
            data = json.loads(content)
        except ValueError as exc:
            return ConversionResult(error=f"Invalid JSON: {exc}")
        return ConversionResult(
            result=json.dumps(data, ensure_ascii=False, separators=(",", ":"))
        )

    def format_xml(self, content: str) -> ConversionResult:
        try:
            formatted = encode(tokenize(content.strip()))
        except MalformedDocumentError as exc:
            logger.debug("xml_format_rejected", error=str(exc))
            return ConversionResult(error=f"Invalid XML: {exc}")
        return ConversionResult(result=formatted)

    def xml_to_json(self, content: str) -> ConversionResult:
        """Project an XML document onto JSON (``@attributes`` / ``#text`` keys)."""
        try:
            tree = decode(tokenize(content.strip()))
        except MalformedDocumentError as exc:
            logger.debug("xml_conversion_rejected", error=str(exc))
            return ConversionResult(error=f"XML conversion error: {exc}")
        return ConversionResult(
            result=json.dumps(tree, ensure_ascii=False, indent=2, sort_keys=True)
        )

    def encode_base64(self, content: str) -> ConversionResult:
        encoded = base64.b64encode(content.encode("utf-8")).decode("ascii")
        return ConversionResult(result=encoded)

    def decode_base64(self, content: str) -> ConversionResult:
        try:
            raw = base64.b64decode(content.strip(), validate=True)
        except (binascii.Error, ValueError) as exc:
            return ConversionResult(error=f"Invalid Base64: {exc}")
        try:
            return ConversionResult(result=raw.decode("utf-8"))
        except UnicodeDecodeError:
            return ConversionResult(
                result=raw.decode("utf-8", errors="replace"),
                error=NON_UTF8_WARNING,
            )
