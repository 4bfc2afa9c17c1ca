"""Client facade: resolves operations and hands materialized requests to a transport."""

from collections.abc import Mapping
from pathlib import Path
from typing import Any, NamedTuple

from swagger_client.parser.base import Operation, RequestOptions, SpecDocument
from swagger_client.parser.swagger import load_spec
from swagger_client.registry import OperationRegistry
from swagger_client.request import SchemeCheck, build_request_options, check_required, render_url
from swagger_client.transport import RequestsTransport, Transport


class PreparedRequest(NamedTuple):
    url: str
    options: RequestOptions


class SwaggerClient:
    """Invokes operations of one loaded Swagger document by operationId or path."""

    def __init__(
        self,
        registry: OperationRegistry,
        spec: SpecDocument,
        transport: Transport | None = None,
        escape: bool = False,
        scheme_check: SchemeCheck = SchemeCheck.INDEX,
    ):
        self.registry = registry
        self.spec = spec
        self.escape = escape
        self.scheme_check = scheme_check
        self._transport = transport

    @classmethod
    def from_file(cls, file_path: Path, **kwargs) -> "SwaggerClient":
        """Create a client from a Swagger YAML/JSON file."""
        spec, registry = load_spec(file_path)
        return cls(registry, spec, **kwargs)

    @property
    def transport(self) -> Transport:
        if self._transport is None:
            self._transport = RequestsTransport()
        return self._transport

    def get_operation(self, name: str) -> Operation:
        return self.registry.resolve(name)

    def build_url(self, name: str, params: Mapping[str, Any]) -> str:
        """Fully qualified URL for the named operation."""
        op = self.get_operation(name)
        check_required(op, params)
        return self._url(op, params)

    def build_request_options(self, name: str, params: Mapping[str, Any]) -> RequestOptions:
        """Method, headers and body for the named operation."""
        return build_request_options(self.get_operation(name), params)

    def prepare(self, name: str, params: Mapping[str, Any]) -> PreparedRequest:
        """Validate ``params`` once, then build both the URL and the request options."""
        op = self.get_operation(name)
        check_required(op, params)
        return PreparedRequest(self._url(op, params), build_request_options(op, params))

    def exec(self, name: str, params: Mapping[str, Any]) -> Any:
        """Send the named operation through the transport and return its response unchanged."""
        url, options = self.prepare(name, params)
        return self.transport.fetch(url, options)

    def _url(self, op: Operation, params: Mapping[str, Any]) -> str:
        return render_url(self.spec, op, params, escape=self.escape, scheme_check=self.scheme_check)
