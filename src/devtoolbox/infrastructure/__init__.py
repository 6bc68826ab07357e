"""Infrastructure layer: logging and sandboxed storage."""
