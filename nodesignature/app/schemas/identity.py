"""
Work unit identity.

The accumulator never depends on a concrete item type. Anything that
can report a namespace and a name (an orchestrator pod object, a row
read from storage, a test double) can be added to a signature by
implementing the two-method WorkUnitIdentity capability.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

from nodesignature.app.errors import IdentitySourceError


DEFAULT_NAMESPACE = "default"


@runtime_checkable
class WorkUnitIdentity(Protocol):
    """
    Interface for anything that names one member of a working set.

    Implementations may raise while resolving either value; the
    accumulator reports that as an IdentitySourceError and adds
    nothing for the failing item.
    """

    def get_namespace(self) -> str:
        ...

    def get_name(self) -> str:
        ...


class WorkUnit(BaseModel):
    """
    Plain (namespace, name) identity.
    """

    namespace: str = Field(..., description="Namespace of the work unit")
    name: str = Field(..., description="Name, unique within the namespace")

    model_config = ConfigDict(frozen=True)

    def get_namespace(self) -> str:
        return self.namespace

    def get_name(self) -> str:
        return self.name

    @property
    def key(self) -> tuple[str, str]:
        return (self.namespace, self.name)

    @classmethod
    def from_manifest(cls, obj: Mapping[str, Any]) -> "WorkUnit":
        """
        Build a WorkUnit from a Kubernetes-style object mapping.

        Reads ``metadata.namespace`` and ``metadata.name``. Objects
        without a namespace are placed in the ``default`` namespace,
        as the API server does for namespaced kinds.
        """
        metadata = obj.get("metadata") or {}
        name = metadata.get("name")
        if not name:
            raise ValueError("Object manifest has no metadata.name")
        return cls(
            namespace=metadata.get("namespace") or DEFAULT_NAMESPACE,
            name=name,
        )


def resolve_identity(item: WorkUnitIdentity) -> tuple[str, str]:
    """
    Return the (namespace, name) pair reported by ``item``.

    Raises IdentitySourceError if the item fails to report either value
    or reports something other than a string.
    """
    try:
        namespace = item.get_namespace()
        name = item.get_name()
    except Exception as exc:
        raise IdentitySourceError(
            f"cannot resolve identity of {type(item).__name__}: {exc}"
        ) from exc

    if not isinstance(namespace, str) or not isinstance(name, str):
        raise IdentitySourceError(
            f"identity of {type(item).__name__} must be strings, got "
            f"namespace={type(namespace).__name__} "
            f"name={type(name).__name__}"
        )

    return namespace, name


__all__ = [
    "WorkUnitIdentity",
    "WorkUnit",
    "DEFAULT_NAMESPACE",
    "resolve_identity",
]
