"""
Bitbucket MCP

MCP server and CLI for searching and browsing Bitbucket Cloud.
"""

__version__ = "1.0.0"
