"""Reference resolution against the object search."""

from sourceref.resolver.engine import SourceRefResolver, TermPhase, resolve_source_ref
from sourceref.resolver.generation import RequestGeneration
from sourceref.resolver.models import ResolvedBy, ResolvedReference

__all__ = [
    "RequestGeneration",
    "ResolvedBy",
    "ResolvedReference",
    "SourceRefResolver",
    "TermPhase",
    "resolve_source_ref",
]
