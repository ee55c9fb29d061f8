"""
Director module - pass-through proxy to a director's REST API.
"""

from .proxy import DirectorProxy, get_director_proxy, parse_lenient

__all__ = ["DirectorProxy", "get_director_proxy", "parse_lenient"]
