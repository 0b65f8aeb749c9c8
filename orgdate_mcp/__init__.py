"""
Org Date MCP

Org-mode style date entry: parse terse date input into canonical Org timestamps.
"""

__version__ = "0.1.0"
