"""
Signing string construction for draft-cavage HTTP Signatures

This module renders the ordered list of covered headers of a request into
the newline-joined signing string. Receivers recompute the same string
independently, so any change here breaks interoperability.
"""

from typing import Iterable

from ..exceptions import MissingHeaderError
from .types import Request
from .utils import normalize_header_name, request_target_path
from .signing_config import REQUEST_TARGET


class SigningStringBuilder:
    """
    Signing string builder for one request
    """

    def __init__(self, request: Request):
        """
        Initialize signing string builder.

        Args:
            request: Request whose headers are covered
        """
        self.request = request
        self.headers = request.headers.normalized()

    def build(self, include_headers: Iterable[str]) -> str:
        """
        Build the signing string.

        Args:
            include_headers: Ordered header names to cover; ``(request-target)``
                is rendered from the method and URL path

        Returns:
            str: Lines joined with ``\\n``, no trailing newline

        Raises:
            MissingHeaderError: If a covered header is absent from the request
        """
        lines = []
        for header_name in include_headers:
            name = normalize_header_name(header_name)
            if name == REQUEST_TARGET:
                lines.append(self._build_request_target_line())
            else:
                lines.append(self._build_header_line(name))
        return '\n'.join(lines)

    def _build_request_target_line(self) -> str:
        method = self.request.method.lower()
        path = request_target_path(self.request.url)
        return f"{REQUEST_TARGET}: {method} {path}"

    def _build_header_line(self, name: str) -> str:
        value = self.headers.get(name)
        if value is None:
            raise MissingHeaderError(
                f"Required header not found: {name}",
                details={"header": name, "available_headers": sorted(self.headers)}
            )
        return f"{name}: {value}"


def build_signing_string(request: Request, include_headers: Iterable[str]) -> str:
    """
    Build the signing string for a request.

    Args:
        request: Request to canonicalize
        include_headers: Ordered header names to cover

    Returns:
        str: Signing string

    Raises:
        MissingHeaderError: If a covered header is absent from the request
    """
    return SigningStringBuilder(request).build(include_headers)
