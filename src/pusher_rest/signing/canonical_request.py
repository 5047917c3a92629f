"""
Canonical request construction for query-string signing

This module serializes an HTTP method, path and query parameters into the
string that the request signature is computed over:

    METHOD\\nPATH\\nSORTED_QUERY_STRING

The query string holds ``name=value`` pairs sorted by the byte order of the
parameter names, with values percent-encoded by ``percent_encode``.
"""

from typing import Dict, Mapping, Union
from urllib.parse import unquote

from ..exceptions import EncodingError, InvalidArgument
from .types import AUTH_SIGNATURE_PARAM, HttpMethod
from .utils import percent_encode, to_bytes


class CanonicalRequestBuilder:
    """
    Canonical string builder for signed requests

    The builder holds no state between requests; build() sorts explicitly so
    the result never depends on mapping iteration order.
    """

    def __init__(
        self,
        method: Union[HttpMethod, str],
        path: str,
        query_params: Mapping[str, str]
    ):
        """
        Initialize canonical request builder.

        Args:
            method: Uppercase HTTP method
            path: Absolute API path, e.g. ``/apps/3/events``
            query_params: Parameters to sign. ``auth_signature`` is ignored
                since a signature does not sign itself.

        Raises:
            InvalidArgument: If the method or path is malformed
        """
        self.method = HttpMethod.parse(method)

        if not isinstance(path, str) or not path.startswith('/'):
            raise InvalidArgument(
                f"Path must be an absolute path starting with '/': {path!r}",
                {"path": path}
            )

        self.path = path
        self.query_params = {
            name: value for name, value in query_params.items()
            if name != AUTH_SIGNATURE_PARAM
        }

    def build(self) -> str:
        """
        Build the canonical string for signing.

        Returns:
            str: Method, path and sorted query string joined by newlines

        Raises:
            EncodingError: If a parameter cannot be encoded
        """
        query_string = build_query_string(self.query_params)
        return '\n'.join([self.method.value, self.path, query_string])


def build_query_string(query_params: Mapping[str, str]) -> str:
    """
    Build the sorted, percent-encoded query string for a parameter set.

    Args:
        query_params: Parameters to serialize

    Returns:
        str: ``name=value`` pairs joined by ``&``

    Raises:
        EncodingError: If a parameter name or value cannot be encoded
    """
    for name in query_params:
        if not isinstance(name, str):
            raise EncodingError(
                f"Query parameter names must be strings, got {type(name).__name__}",
                {"name_type": type(name).__name__}
            )

    names = sorted(query_params, key=to_bytes)
    return '&'.join(f"{name}={percent_encode(query_params[name])}" for name in names)


def build_canonical_string(
    method: Union[HttpMethod, str],
    path: str,
    query_params: Mapping[str, str]
) -> str:
    """
    Build canonical string for signing.

    Args:
        method: Uppercase HTTP method
        path: Absolute API path
        query_params: Parameters to sign

    Returns:
        str: Canonical string
    """
    builder = CanonicalRequestBuilder(method, path, query_params)
    return builder.build()


def parse_query_string(query_string: str) -> Dict[str, str]:
    """
    Parse a query string produced by build_query_string back into parameters.

    Args:
        query_string: Query string, with or without a leading ``?``

    Returns:
        dict: Decoded parameters
    """
    if query_string.startswith('?'):
        query_string = query_string[1:]

    params = {}
    if not query_string:
        return params

    for pair in query_string.split('&'):
        name, _, value = pair.partition('=')
        params[unquote(name)] = unquote(value)

    return params
