"""Operation registry — resolves operation names by id first, then by path."""

from collections.abc import Iterator, Mapping
from enum import Enum

from swagger_client.errors import OperationNotFound
from swagger_client.parser.base import Operation


class LookupKind(str, Enum):
    """Keyspaces of the registry, in lookup order."""

    BY_ID = "id"
    BY_PATH = "path"


LOOKUP_ORDER = (LookupKind.BY_ID, LookupKind.BY_PATH)


class OperationRegistry:
    """Operations of one loaded document, keyed by operation id and by path."""

    def __init__(self):
        self._keyspaces: dict[LookupKind, dict[str, Operation]] = {kind: {} for kind in LOOKUP_ORDER}
        self._operations: list[Operation] = []

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Operation]) -> "OperationRegistry":
        """Build a registry from a single mapping with ``id:``/``path:`` prefixed keys.

        Keys without a known prefix raise ValueError.
        """
        registry = cls()
        for key, operation in mapping.items():
            prefix, sep, name = key.partition(":")
            try:
                kind = LookupKind(prefix)
            except ValueError:
                raise ValueError(f"Registry key must start with 'id:' or 'path:': {key!r}") from None
            if not sep or not name:
                raise ValueError(f"Registry key has no name: {key!r}")
            registry.register(kind, name, operation)
        return registry

    def register(self, kind: LookupKind, name: str, operation: Operation) -> None:
        self._keyspaces[kind][name] = operation
        self._remember(operation)

    def add(self, operation: Operation) -> None:
        """Register an operation under its id (if any) and its path.

        The first operation registered for a path keeps the path key.
        """
        if operation.operation_id:
            self.register(LookupKind.BY_ID, operation.operation_id, operation)
        self._keyspaces[LookupKind.BY_PATH].setdefault(operation.path, operation)
        self._remember(operation)

    def get(self, kind: LookupKind, name: str) -> Operation | None:
        return self._keyspaces[kind].get(name)

    def resolve(self, name: str) -> Operation:
        """Return the operation registered as ``name``, trying ids before paths."""
        for kind in LOOKUP_ORDER:
            operation = self._keyspaces[kind].get(name)
            if operation is not None:
                return operation
        raise OperationNotFound(name)

    def operations(self) -> list[Operation]:
        """All registered operations in registration order, including ones shadowed in both keyspaces."""
        return list(self._operations)

    def _remember(self, operation: Operation) -> None:
        if not any(operation is o for o in self._operations):
            self._operations.append(operation)

    def __contains__(self, name: object) -> bool:
        return any(name in self._keyspaces[kind] for kind in LOOKUP_ORDER)

    def __iter__(self) -> Iterator[Operation]:
        return iter(self.operations())

    def __len__(self) -> int:
        return len(self.operations())


def resolve(registry: OperationRegistry, name: str) -> Operation:
    """Resolve ``name`` against ``registry``; raises OperationNotFound."""
    return registry.resolve(name)
