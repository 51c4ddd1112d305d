"""
Google Docs Manager MCP Server

A Model Context Protocol (MCP) server exposing Google Docs and Drive
document management (create, read, update, list, delete, export, share,
search) as a small, fixed set of tools.
"""

__version__ = "0.1.0"
