"""
Gateway from structured API-call descriptions to Classroom operations.

The gateway looks up ``(resource, method)`` in the operation registry, maps the
LLM's canonical parameter order onto the handler's signature, invokes it and
unwraps list responses through the operation's typed response model.
"""
from __future__ import annotations

import inspect
import logging
import typing as t

from pydantic import BaseModel, ValidationError

from classroom_api.client import ClassroomClient
from orchestrator.errors import (
    CommandError,
    InvalidMethodError,
    InvalidParamsError,
    RemoteCallError,
)
from orchestrator.models import RemoteResult
from registry import OPERATION_REGISTRY, Operation, methods_for

logger = logging.getLogger(__name__)


def is_create_method(method: str) -> bool:
    return "create" in method.lower()


def is_list_method(method: str) -> bool:
    return "list" in method.lower()


def order_arguments(method: str, params: t.Sequence[t.Any]) -> list[t.Any]:
    """Map canonical params onto the handler's positional arguments.

    Create calls are authored as ``[courseId, resourceBody]`` but the
    underlying operation takes ``(resourceBody, courseId)``; any further
    params are dropped. Every other method receives ``params`` unchanged.
    """
    if is_create_method(method):
        if len(params) < 2:
            raise InvalidParamsError(
                f"'{method}' expects params [courseId, resourceBody], got {len(params)} value(s)"
            )
        return [params[1], params[0]]
    return list(params)


class ClassroomGateway:
    """Invokes registered Classroom operations."""

    def __init__(
        self,
        client: t.Optional[ClassroomClient] = None,
        registry: t.Optional[dict[tuple[str, str], Operation]] = None,
    ) -> None:
        self.client = client if client is not None else ClassroomClient()
        self.registry = OPERATION_REGISTRY if registry is None else registry

    def resolve(self, resource: str, method: str) -> Operation:
        """Return the registered operation or raise ``InvalidMethodError``."""
        operation = self.registry.get((resource, method))
        if operation is None:
            available = methods_for(resource, self.registry)
            logger.warning(
                "Rejected unregistered operation %s.%s (available: %s)",
                resource, method, available or "unknown resource",
            )
            raise InvalidMethodError(resource, method, available)
        return operation

    def invoke(self, resource: str, method: str, params: t.Sequence[t.Any]) -> RemoteResult:
        """Invoke ``resource.method`` with ``params`` and return its result.

        Raises:
            InvalidMethodError: If the operation is not registered
            InvalidParamsError: If the params do not fit the operation's signature
            RemoteCallError: If the Classroom call itself fails
        """
        operation = self.resolve(resource, method)
        args = order_arguments(method, params or [])

        try:
            inspect.signature(operation.handler).bind(self.client, *args)
        except TypeError as e:
            raise InvalidParamsError(
                f"Invalid params for {resource}.{method} (expected {operation.params}): {e}"
            ) from e

        logger.info("Invoking %s.%s", resource, method)
        try:
            raw = operation.handler(self.client, *args)
        except CommandError:
            raise
        except Exception as e:
            logger.error("Unexpected failure in %s.%s", resource, method, exc_info=True)
            raise RemoteCallError(f"Error executing {resource}.{method}: {e}") from e

        result = RemoteResult(resource=resource, method=method, raw=raw)
        if is_list_method(method):
            result.items = self._unwrap_items(operation, raw)
        return result

    def _unwrap_items(self, operation: Operation, raw: t.Any) -> list[dict[str, t.Any]]:
        """Read the collection of a list response through its typed schema."""
        if operation.response_model is None or operation.collection_field is None:
            return []
        try:
            parsed = operation.response_model.model_validate(raw or {})
        except ValidationError as e:
            raise RemoteCallError(
                f"Unexpected response shape from {operation.resource}.{operation.method}: {e}"
            ) from e
        items = getattr(parsed, operation.collection_field, None) or []
        return [
            item.model_dump(exclude_none=True) if isinstance(item, BaseModel) else item
            for item in items
        ]
