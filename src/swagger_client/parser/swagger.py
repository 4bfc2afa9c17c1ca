"""Swagger 2.0 document loader.

Parses a Swagger 2.0 document (YAML or JSON) into a SpecDocument and an
OperationRegistry.
"""

import logging
from pathlib import Path

import yaml

from swagger_client.parser.base import Operation, Param, ParamLocation, SpecDocument
from swagger_client.registry import LookupKind, OperationRegistry

logger = logging.getLogger(__name__)

HTTP_METHODS = ("GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS")

PARAMETER_REF_PREFIX = "#/parameters/"


def load_spec(file_path: Path) -> tuple[SpecDocument, OperationRegistry]:
    """Load a Swagger file into its SpecDocument and OperationRegistry."""
    text = Path(file_path).read_text(encoding="utf-8")
    return parse_swagger(yaml.safe_load(text))


def parse_swagger(doc: dict) -> tuple[SpecDocument, OperationRegistry]:
    """Convert an already-parsed Swagger document."""
    if not isinstance(doc, dict):
        raise ValueError("Swagger document must be a mapping")

    spec = SpecDocument(
        base_url=_base_url(doc.get("host", ""), doc.get("basePath")),
        schemes=list(doc.get("schemes") or []),
    )

    registry = OperationRegistry()
    shared_params = doc.get("parameters") or {}
    default_consumes = doc.get("consumes")
    default_produces = doc.get("produces")

    for path, path_item in _mapping(doc.get("paths"), "paths").items():
        path_item = _mapping(path_item, path)
        path_params = path_item.get("parameters") or []
        for method, operation in path_item.items():
            if method.upper() not in HTTP_METHODS:
                continue

            operation = _mapping(operation, f"{method} {path}")
            raw_params = _merge_parameters(
                _dereference(path_params, shared_params),
                _dereference(operation.get("parameters") or [], shared_params),
            )
            op = Operation(
                path=path,
                method=method.upper(),
                operation_id=operation.get("operationId"),
                summary=operation.get("summary") or "",
                parameters=_parse_parameters(raw_params) if raw_params else None,
                consumes=_media_types(operation.get("consumes", default_consumes)),
                produces=_media_types(operation.get("produces", default_produces)),
            )
            if registry.get(LookupKind.BY_PATH, path) is not None:
                logger.debug("Path %s already registered, %s %s not reachable by path", path, op.method, path)
            registry.add(op)

    return spec, registry


def _mapping(value, where: str) -> dict:
    """YAML nulls (an empty key) read as empty; anything else that is not a mapping is rejected."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"Expected a mapping at {where}, got {type(value).__name__}")
    return value


def _base_url(host: str, base_path: str | None) -> str:
    if not base_path or base_path == "/":
        return host
    return host + "/" + base_path.strip("/")


def _media_types(value: list[str] | None) -> list[str] | None:
    if value is None:
        return None
    return list(value)


def _dereference(params: list[dict], shared: dict) -> list[dict]:
    """Resolve ``#/parameters/<name>`` references; other references are dropped."""
    result = []
    for p in params:
        ref = p.get("$ref")
        if ref is None:
            result.append(p)
        elif ref.startswith(PARAMETER_REF_PREFIX) and ref[len(PARAMETER_REF_PREFIX):] in shared:
            result.append(shared[ref[len(PARAMETER_REF_PREFIX):]])
        else:
            logger.debug("Skipping unresolvable parameter reference %s", ref)
    return result


def _merge_parameters(path_params: list[dict], op_params: list[dict]) -> list[dict]:
    """Path-level parameters first; operation parameters override on (name, in)."""
    overridden = {(p.get("name"), p.get("in")) for p in op_params}
    inherited = [p for p in path_params if (p.get("name"), p.get("in")) not in overridden]
    return inherited + op_params


def _parse_parameters(params: list[dict]) -> list[Param]:
    result = []
    for p in params:
        if "name" not in p:
            logger.debug("Skipping parameter without a name: %s", p)
            continue
        result.append(
            Param(
                name=p["name"],
                location=_location(p.get("in")),
                required=p.get("required", False),
                param_type=p.get("type", p.get("schema", {}).get("type", "string")),
                description=p.get("description", ""),
            )
        )
    return result


def _location(value: str | None) -> ParamLocation | None:
    if value is None:
        return None
    try:
        return ParamLocation(value)
    except ValueError:
        logger.debug("Unsupported parameter location %r, parameter will be ignored", value)
        return None
