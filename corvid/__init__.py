"""Building blocks for small HTTP servers: cookies, mustache template parsing, SHA-1, base64 and filename helpers."""

__version__ = "0.1.0"