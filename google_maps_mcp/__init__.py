"""
Google Maps MCP Server.

Exposes Google Maps Platform lookups (places, geocoding, routing, elevation,
map URLs) as MCP tools that always answer with a ``{success, data|error}``
envelope.
"""

__version__ = "0.1.0"
