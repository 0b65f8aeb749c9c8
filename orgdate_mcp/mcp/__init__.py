"""
MCP server components: tools, resources and response schemas.
"""
