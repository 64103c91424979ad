"""sourceref - resolve loose, pasted references to exactly one ADT object."""

from sourceref.core.errors import ResolverError
from sourceref.refs.routing import RefKind, ReferenceRoute, route_ref
from sourceref.resolver.engine import SourceRefResolver, resolve_source_ref
from sourceref.resolver.generation import RequestGeneration
from sourceref.resolver.models import ResolvedBy, ResolvedReference

__version__ = "0.1.0"

__all__ = [
    "RefKind",
    "ReferenceRoute",
    "RequestGeneration",
    "ResolvedBy",
    "ResolvedReference",
    "ResolverError",
    "SourceRefResolver",
    "resolve_source_ref",
    "route_ref",
]
