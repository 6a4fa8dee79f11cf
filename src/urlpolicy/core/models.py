"""Core data models for URLPolicy.

This module defines the URL value type the classifiers operate on and the
context a URL is resolved against.
"""

import re
from dataclasses import dataclass
from typing import ClassVar, Optional
from urllib.parse import urljoin, urlsplit

from urlpolicy.core.constants import DEFAULT_BASE_URL


_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


# ============================================================================
# URL Context
# ============================================================================

@dataclass(frozen=True)
class URLContext:
    """Base against which relative URL text is resolved."""
    base: str

    DEFAULT: ClassVar["URLContext"]

    def __post_init__(self) -> None:
        """Reject bases that cannot anchor reference resolution."""
        parts = urlsplit(self.base)
        if not parts.scheme or not parts.netloc:
            raise ValueError(f"URL context base must be absolute: {self.base!r}")


# Unknown host, root path. Used for reparsing fragments so that nothing is
# inherited from the URL the fragment came from.
URLContext.DEFAULT = URLContext(DEFAULT_BASE_URL)


# ============================================================================
# URL Value
# ============================================================================

@dataclass(frozen=True)
class URLValue:
    """A URL resolved against a context.

    Construction never raises on malformed text. Problems are recorded in
    `parse_error` and leaf classifiers report such values as INVALID.

    The fragment keeps its leading "#" so that a URL ending in "#" (empty
    fragment) is distinguishable from one with no fragment at all.
    """
    context: URLContext
    original: str
    url: str
    scheme: str = ""
    host: Optional[str] = None
    port: Optional[int] = None
    path: str = ""
    query: str = ""
    fragment: Optional[str] = None
    parse_error: Optional[str] = None

    @classmethod
    def from_text(cls, context: URLContext, text: str) -> "URLValue":
        """Resolve `text` against `context` per RFC 3986.

        Args:
            context: Context supplying the base URL
            text: Absolute or relative URL text

        Returns:
            URLValue, with `parse_error` set if the text is malformed
        """
        # A reference's fragment is never inherited from the base, so it can
        # be split off before resolution. urljoin would drop an empty one.
        head, sep, tail = text.partition("#")
        fragment = sep + tail if sep else None

        if _CONTROL_CHARS.search(text):
            return cls(
                context=context,
                original=text,
                url=text,
                fragment=fragment,
                parse_error="URL contains control characters",
            )

        try:
            resolved = urljoin(context.base, head) if head else context.base.partition("#")[0]
            parts = urlsplit(resolved)
            port = parts.port
        except ValueError as e:
            return cls(
                context=context,
                original=text,
                url=text,
                fragment=fragment,
                parse_error=str(e),
            )

        return cls(
            context=context,
            original=text,
            url=resolved + (fragment or ""),
            scheme=parts.scheme.lower(),
            host=parts.hostname,
            port=port,
            path=parts.path,
            query=parts.query,
            fragment=fragment,
        )

    # Short alias used at call sites that read like "URL value of text"
    of = from_text

    @property
    def is_valid(self) -> bool:
        """Check if the text parsed without error."""
        return self.parse_error is None

    def get_fragment(self) -> Optional[str]:
        """Fragment including its leading "#", or None if absent."""
        return self.fragment
