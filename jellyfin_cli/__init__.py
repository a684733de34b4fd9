"""
jellyfin-cli: an async client for browsing and streaming music from a Jellyfin server.
"""

__version__ = "0.1.0"
