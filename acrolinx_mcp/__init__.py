"""Acrolinx MCP server exposing content quality tools to calling agents."""

__version__ = "0.1.0"
