"""
Google Docs Manager utility functions.
"""

import sys


def log(message: str) -> None:
    """Log a message to stderr (MCP protocol compatibility).

    The MCP protocol uses stdout for JSON-RPC communication,
    so all logging must go to stderr to avoid corrupting the protocol.
    """
    print(message, file=sys.stderr)


def mask_secret(value: str | None, visible: int = 4) -> str:
    """Shorten a key or secret to a prefix that is safe to log."""
    if not value:
        return ""
    return f"{value[:visible]}..."
