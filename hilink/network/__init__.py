"""
Network module for HTTP session setup.
"""

from hilink.network.client import build_session, base_url

__all__ = ["build_session", "base_url"]
