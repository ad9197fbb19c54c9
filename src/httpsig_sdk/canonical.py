"""
Signing string construction

Resolves the values covered by a signature from a request and joins them
into the signing string. Signer and verifier both go through
``build_signing_string`` so that they produce identical bytes.
"""

from typing import Any, Dict, Iterable, Optional
from urllib.parse import urlsplit

from .exceptions import ErrorKind, make_error, missing_header_error
from .types import HOST_HEADER, REQUEST_TARGET, SignatureParameters
from .utils import lowercase_headers, normalize_header_name


def _request_method(request: Any) -> Optional[str]:
    method = getattr(request, 'method', None)
    # Accept str based enums such as HttpMethod.POST
    method = getattr(method, 'value', method)
    return str(method) if method else None


def _request_url(request: Any) -> Optional[str]:
    url = getattr(request, 'url', None)
    return str(url) if url else None


def request_target_line(request: Any) -> str:
    """
    Build the ``(request-target)`` value for a request.

    The method is lower-cased; path, query and fragment are copied exactly
    as they appear on the URL.

    Args:
        request: Object with ``method`` and ``url`` attributes

    Returns:
        str: e.g. ``post /foo?param=value&pet=dog#bar``

    Raises:
        RequestError: If the request has no URL or no method
    """
    url = _request_url(request)
    if url is None:
        raise make_error(ErrorKind.URL_NOT_IN_REQUEST)

    method = _request_method(request)
    if method is None:
        raise make_error(ErrorKind.METHOD_NOT_IN_REQUEST)

    parts = urlsplit(url)
    target = parts.path or "/"
    if parts.query:
        target += "?" + parts.query
    if parts.fragment:
        target += "#" + parts.fragment

    return f"{method.lower()} {target}"


def resolve_header_values(header_list: Iterable[str], request: Any) -> Dict[str, str]:
    """
    Resolve the value of every name in ``header_list`` from ``request``.

    Args:
        header_list: Lower-cased header names, may contain ``(request-target)``
        request: Object with ``method``, ``url`` and ``headers``

    Returns:
        dict: Lower-cased header name to value

    Raises:
        RequestError: If a listed header cannot be resolved
    """
    request_headers = lowercase_headers(getattr(request, 'headers', None))
    values: Dict[str, str] = {}

    for name in header_list:
        name = normalize_header_name(name)
        if name == REQUEST_TARGET:
            values[name] = request_target_line(request)
            continue

        value = request_headers.get(name)
        if value is None and name == HOST_HEADER:
            value = _host_from_url(request)
        if value is None:
            raise missing_header_error(ErrorKind.MISSING_REQUIRED_HEADER, name)
        values[name] = value

    return values


_DEFAULT_PORTS = {'http': 80, 'https': 443}


def _host_from_url(request: Any) -> Optional[str]:
    # HTTP clients put Host on the wire from the URL host and non-default port
    url = _request_url(request)
    if url is None:
        return None
    parts = urlsplit(url)
    try:
        hostname, port = parts.hostname, parts.port
    except ValueError:
        return None
    if not hostname:
        return None
    if ':' in hostname:
        hostname = f'[{hostname}]'
    if port is not None and port != _DEFAULT_PORTS.get(parts.scheme.lower()):
        return f'{hostname}:{port}'
    return hostname


def build_signing_string(params: SignatureParameters) -> str:
    """
    Build the signing string for resolved parameters.

    Each covered header contributes one ``name: value`` line, in header list
    order, joined by a single newline with no trailing newline.

    Args:
        params: Resolved signature parameters

    Returns:
        str: Signing string
    """
    return "\n".join(f"{name}: {params.headers[name]}" for name in params.header_list)
