"""DevToolbox - sandboxed document workspace and text conversion tools.

- Every document lives under a single workspace root, grouped by tool scope
- All file operations are confined to that root by a path guard
- XML documents convert to a JSON-friendly structural tree
"""

__version__ = "0.1.0"
