"""Errors raised while resolving and materializing operations."""


class SwaggerClientError(Exception):
    """Base class for every error raised by swagger_client."""


class OperationNotFound(SwaggerClientError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Operation not found: {name!r}")


class RequiredParameterMissing(SwaggerClientError):
    def __init__(self, parameter: str, operation: str):
        self.parameter = parameter
        self.operation = operation
        super().__init__(f"Missing required parameter {parameter!r} for operation {operation!r}")


class SchemaNotAllowed(SwaggerClientError):
    def __init__(self, scheme):
        self.scheme = scheme
        super().__init__(f"Scheme not allowed: {scheme!r}")
