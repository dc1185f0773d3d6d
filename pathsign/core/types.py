from dataclasses import dataclass
from urllib.parse import urlsplit, urlunsplit


@dataclass
class URL:
    """Mutable URL value passed through the formatter and signer.

    Formatters rewrite ``path`` in place (and may clear ``query``); nothing
    here ever touches scheme, netloc or fragment.
    """
    scheme: str = ""
    netloc: str = ""
    path: str = ""
    query: str = ""
    fragment: str = ""

    @classmethod
    def parse(cls, text: str) -> "URL":
        parts = urlsplit(text)
        return cls(
            scheme=parts.scheme,
            netloc=parts.netloc,
            path=parts.path,
            query=parts.query,
            fragment=parts.fragment,
        )

    def to_dict(self) -> dict:
        """Helper for canonicalization (fragment is never signed)."""
        return {
            "scheme": self.scheme,
            "netloc": self.netloc,
            "path": self.path,
            "query": self.query,
        }

    def __str__(self) -> str:
        return urlunsplit((self.scheme, self.netloc, self.path, self.query, self.fragment))
