"""
Formatters: strategies for embedding signature and expiry into a URL.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Tuple

from pathsign.core.types import URL


class Formatter(ABC):
    """
    Abstract base for envelope formats.

    Writers must be called expiry first, then signature; readers in the
    mirror order (signature, then expiry).
    """

    skip_query: bool = False

    @abstractmethod
    def add_expiry(self, url: URL, expiry: datetime) -> URL:
        pass

    @abstractmethod
    def add_signature(self, url: URL, sig: bytes) -> URL:
        pass

    @abstractmethod
    def extract_signature(self, url: URL) -> Tuple[URL, bytes]:
        pass

    @abstractmethod
    def extract_expiry(self, url: URL) -> Tuple[URL, datetime]:
        pass


def create_formatter(name: str, skip_query: bool = False) -> Formatter:
    if name == "path":
        from .path import PathFormatter
        return PathFormatter(skip_query=skip_query)
    else:
        raise ValueError(f"Unsupported formatter: {name}")


from .path import PathFormatter

__all__ = ["Formatter", "create_formatter", "PathFormatter"]
