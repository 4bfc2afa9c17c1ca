"""Request materialization — binds a parameter bag to an operation's parameters.

``build_url`` produces the fully qualified URL, ``build_request_options`` the
method, headers and body. Both are pure: they read the operation and the
parameter bag and return freshly built values.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any
from urllib.parse import quote, quote_plus

from swagger_client.errors import RequiredParameterMissing, SchemaNotAllowed
from swagger_client.parser.base import Operation, Param, ParamLocation, RequestOptions, SpecDocument

DEFAULT_SCHEME = "https"

# Reserved parameter bag keys
BODY_KEY = "body"
SCHEME_KEY = "schema"


class SchemeCheck(str, Enum):
    """How a ``schema`` override in the parameter bag is validated."""

    INDEX = "index"  # must be a valid index into SpecDocument.schemes
    MEMBERSHIP = "membership"  # must be one of SpecDocument.schemes


def _located(operation: Operation) -> list[Param]:
    return [p for p in operation.parameters or [] if p.location is not None]


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)


def check_required(operation: Operation, params: Mapping[str, Any]) -> None:
    """Raise RequiredParameterMissing for the first required parameter absent from ``params``."""
    for p in _located(operation):
        if p.required and p.name not in params:
            raise RequiredParameterMissing(p.name, operation.name)


def resolve_scheme(spec: SpecDocument, params: Mapping[str, Any], scheme_check: SchemeCheck = SchemeCheck.INDEX) -> str:
    """Pick the URL scheme: the ``schema`` override if allowed, else the first declared scheme."""
    if SCHEME_KEY not in params:
        return spec.schemes[0] if spec.schemes else DEFAULT_SCHEME

    requested = params[SCHEME_KEY]
    if scheme_check == SchemeCheck.MEMBERSHIP:
        allowed = requested in spec.schemes
    else:
        allowed = _is_scheme_index(spec.schemes, requested)
    if not allowed:
        raise SchemaNotAllowed(requested)
    return _stringify(requested)


def _is_scheme_index(schemes: list[str], value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, str):
        if not (value.isascii() and value.isdecimal() and str(int(value)) == value):
            return False
        value = int(value)
    if not isinstance(value, int):
        return False
    return 0 <= value < len(schemes)


def render_path(operation: Operation, params: Mapping[str, Any], escape: bool = False) -> str:
    """Substitute path parameters and append query parameters to the path template.

    Only the first ``{name}`` placeholder of each path parameter is replaced.
    Optional parameters missing from ``params`` are left out.
    """
    path = operation.path
    for p in _located(operation):
        if p.name not in params:
            continue
        value = _stringify(params[p.name])

        if p.location == ParamLocation.PATH:
            if escape:
                value = quote(value, safe="")
            path = path.replace("{" + p.name + "}", value, 1)

        elif p.location == ParamLocation.QUERY:
            name = p.name
            if escape:
                name, value = quote_plus(name), quote_plus(value)
            separator = "&" if "?" in path else "?"
            path = f"{path}{separator}{name}={value}"
    return path


def build_url(
    spec: SpecDocument,
    operation: Operation,
    params: Mapping[str, Any],
    escape: bool = False,
    scheme_check: SchemeCheck = SchemeCheck.INDEX,
) -> str:
    """Build the fully qualified URL for ``operation``.

    Raises RequiredParameterMissing or SchemaNotAllowed.
    """
    check_required(operation, params)
    return render_url(spec, operation, params, escape=escape, scheme_check=scheme_check)


def render_url(
    spec: SpecDocument,
    operation: Operation,
    params: Mapping[str, Any],
    escape: bool = False,
    scheme_check: SchemeCheck = SchemeCheck.INDEX,
) -> str:
    """Like build_url, for callers that already ran check_required."""
    path = render_path(operation, params, escape=escape)
    scheme = resolve_scheme(spec, params, scheme_check)
    return f"{scheme}://{spec.base_url}{path}"


def build_request_options(operation: Operation, params: Mapping[str, Any]) -> RequestOptions:
    """Build method, headers and body for ``operation``.

    ``content-type`` is the ``consumes`` list joined with ``;`` while ``accept``
    carries the ``produces`` list as declared. Header parameters are applied
    afterwards and win on name collisions.
    """
    headers: dict[str, Any] = {}
    body: Any = {}

    if operation.consumes:
        headers["content-type"] = ";".join(operation.consumes)

    if operation.produces is not None:
        headers["accept"] = list(operation.produces)

    for p in _located(operation):
        if p.location == ParamLocation.BODY:
            body = params.get(BODY_KEY)

        elif p.location == ParamLocation.FORM_DATA and p.name in params:
            base = body if isinstance(body, Mapping) else {}
            body = {**base, p.name: params[p.name]}

        elif p.location == ParamLocation.HEADER and p.name in params:
            headers = {**headers, p.name: params[p.name]}

    return RequestOptions(method=operation.method, headers=headers, body=body)
