"""Search subpackage - lexical product search, autocomplete and related terms."""
from .search_engine import SearchEngine

__all__ = ["SearchEngine"]
