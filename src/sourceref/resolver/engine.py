"""Disambiguation engine: resolve a loose reference to one ADT object.

The object search is fuzzy and capped. A term whose narrow search shows a
single hit may still collide with another object once the cap is relaxed, so
every apparently unique hit is revalidated with a wider search before it is
trusted.

Each derived term runs through a small state machine:

    searching
      -> exhausted                          no hit survives the type filter
      -> exact-unique-pending-revalidation  exactly one hit named like the term
      -> broad-unique-pending-revalidation  no exact name, but a single hit
      -> ambiguous-recorded                 several exact or broad hits
    exact-unique-pending-revalidation
      -> resolved                           still unique at the wide cap
      -> ambiguous-recorded | exhausted
    broad-unique-pending-revalidation
      -> exhausted                          single hit kept as a candidate
      -> ambiguous-recorded

``resolved`` ends the whole resolution immediately. Otherwise, after all
terms, a broad candidate corroborated by at least two terms wins; any
remaining signal is reported as ``ambiguous`` (exact collisions first), and
no signal at all as ``not_found``.

Searches run strictly one at a time, in term order.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

import structlog

from sourceref.backend.models import ObjectSummary
from sourceref.backend.protocol import SearchBackend
from sourceref.config.constants import ABAP_FILE_EXTENSION
from sourceref.config.models import SearchConfig
from sourceref.core.errors import ResolverError
from sourceref.core.languages import extension_of
from sourceref.core.logging import get_logger
from sourceref.refs.normalize import base_name, normalize_ref, strip_diff_prefix
from sourceref.refs.routing import is_adt_uri
from sourceref.refs.terms import derive_search_terms
from sourceref.refs.types import filter_by_expected_types, infer_expected_types
from sourceref.resolver.models import ResolvedBy, ResolvedReference

log = get_logger(__name__)


class TermPhase(StrEnum):
    SEARCHING = "searching"
    EXACT_UNIQUE_PENDING_REVALIDATION = "exact-unique-pending-revalidation"
    BROAD_UNIQUE_PENDING_REVALIDATION = "broad-unique-pending-revalidation"
    AMBIGUOUS_RECORDED = "ambiguous-recorded"
    EXHAUSTED = "exhausted"
    RESOLVED = "resolved"


@dataclass
class _Ambiguity:
    term: str
    candidates: list[ObjectSummary]


@dataclass
class _SingleCandidate:
    match: ObjectSummary
    terms: list[str] = field(default_factory=list)


@dataclass
class _ResolutionState:
    """Signals accumulated across terms of one resolution."""

    searched_terms: list[str] = field(default_factory=list)
    exact_ambiguity: _Ambiguity | None = None
    broad_ambiguity: _Ambiguity | None = None
    single_candidates: dict[str, _SingleCandidate] = field(default_factory=dict)
    resolved: ObjectSummary | None = None

    def record_exact_ambiguity(self, term: str, candidates: list[ObjectSummary]) -> None:
        if self.exact_ambiguity is None:
            self.exact_ambiguity = _Ambiguity(term, candidates)

    def record_broad_ambiguity(self, term: str, candidates: list[ObjectSummary]) -> None:
        if self.broad_ambiguity is None:
            self.broad_ambiguity = _Ambiguity(term, candidates)

    def record_single_candidate(self, term: str, match: ObjectSummary) -> None:
        entry = self.single_candidates.setdefault(match.uri, _SingleCandidate(match))
        entry.terms.append(term)


def find_exact_name_matches(results: list[ObjectSummary], term: str) -> list[ObjectSummary]:
    wanted = term.strip().upper()
    return [entry for entry in results if entry.name.strip().upper() == wanted]


def summarize_matches(matches: Sequence[ObjectSummary]) -> list[str]:
    """Deduplicated "NAME TYPE" labels, in first-seen order."""
    return list(dict.fromkeys(entry.summary() for entry in matches))


def _coerce_summaries(raw: Sequence[ObjectSummary | Mapping[str, Any]]) -> list[ObjectSummary]:
    return [
        entry if isinstance(entry, ObjectSummary) else ObjectSummary.model_validate(entry)
        for entry in raw
    ]


class SourceRefResolver:
    """Resolves references against a SearchBackend.

    Stateless between calls: concurrent resolve() calls share nothing but the
    backend. Superseding stale calls is the caller's job (see
    sourceref.resolver.generation).
    """

    def __init__(self, backend: SearchBackend, config: SearchConfig | None = None) -> None:
        self._backend = backend
        self._config = config or SearchConfig()

    async def resolve(self, ref: str) -> ResolvedReference:
        """Resolve one reference.

        Raises:
            ResolverError: invalid_ref, not_found, ambiguous or search_failed.
        """
        normalized = normalize_ref(ref)
        if not normalized:
            raise ResolverError.invalid_ref(ref, "Empty reference; nothing to open.")

        with structlog.contextvars.bound_contextvars(ref=normalized):
            return await self._resolve_normalized(normalized)

    async def _resolve_normalized(self, normalized: str) -> ResolvedReference:
        if is_adt_uri(normalized):
            display_name = base_name(normalized)
            log.debug("resolved_by_uri")
            return ResolvedReference(normalized, display_name, ResolvedBy.URI)

        name = base_name(strip_diff_prefix(normalized))
        extension = extension_of(name)
        if extension and extension != ABAP_FILE_EXTENSION:
            raise ResolverError.invalid_ref(
                normalized,
                f'Reference "{normalized}" looks like a .{extension} file, not an ABAP object.',
                extension=extension,
            )

        terms = derive_search_terms(normalized, self._config.max_terms)
        if not terms:
            raise ResolverError.invalid_ref(
                normalized, f'Reference "{normalized}" yields no search terms.'
            )

        expected = infer_expected_types(name)
        state = _ResolutionState()
        for term in terms:
            phase = await self._run_term(normalized, term, expected, state)
            if phase is TermPhase.RESOLVED and state.resolved is not None:
                return self._resolved(state.resolved, [term])

        return self._conclude(normalized, expected, state)

    async def _run_term(
        self,
        ref: str,
        term: str,
        expected: frozenset[str] | None,
        state: _ResolutionState,
    ) -> TermPhase:
        phase = TermPhase.SEARCHING
        results: list[ObjectSummary] = []

        while phase not in (TermPhase.RESOLVED, TermPhase.AMBIGUOUS_RECORDED, TermPhase.EXHAUSTED):
            if phase is TermPhase.SEARCHING:
                results = await self._search(ref, term, self._config.narrow_limit, expected)
                state.searched_terms.append(term)
                exact = find_exact_name_matches(results, term)
                if not results:
                    phase = TermPhase.EXHAUSTED
                elif len(exact) == 1:
                    phase = TermPhase.EXACT_UNIQUE_PENDING_REVALIDATION
                elif len(exact) > 1:
                    state.record_exact_ambiguity(term, exact)
                    phase = TermPhase.AMBIGUOUS_RECORDED
                elif len(results) == 1:
                    phase = TermPhase.BROAD_UNIQUE_PENDING_REVALIDATION
                else:
                    state.record_broad_ambiguity(term, results)
                    phase = TermPhase.AMBIGUOUS_RECORDED

            elif phase is TermPhase.EXACT_UNIQUE_PENDING_REVALIDATION:
                widened = await self._search(ref, term, self._config.revalidation_limit, expected)
                exact = find_exact_name_matches(widened, term)
                if len(exact) == 1:
                    state.resolved = exact[0]
                    phase = TermPhase.RESOLVED
                elif len(exact) > 1:
                    log.debug("revalidation_found_collision", term=term, matches=len(exact))
                    state.record_exact_ambiguity(term, exact)
                    phase = TermPhase.AMBIGUOUS_RECORDED
                else:
                    phase = TermPhase.EXHAUSTED

            elif phase is TermPhase.BROAD_UNIQUE_PENDING_REVALIDATION:
                widened = await self._search(ref, term, self._config.revalidation_limit, expected)
                if len(widened) == 1:
                    state.record_single_candidate(term, widened[0])
                    phase = TermPhase.EXHAUSTED
                elif len(widened) > 1:
                    state.record_broad_ambiguity(term, widened)
                    phase = TermPhase.AMBIGUOUS_RECORDED
                else:
                    phase = TermPhase.EXHAUSTED

        log.debug("term_done", term=term, phase=phase.value)
        return phase

    async def _search(
        self,
        ref: str,
        term: str,
        limit: int,
        expected: frozenset[str] | None,
    ) -> list[ObjectSummary]:
        try:
            raw = await self._backend.search(term, limit)
            results = _coerce_summaries(raw)
        except ResolverError:
            raise
        except Exception as e:
            log.warning("search_failed", term=term, limit=limit, error=str(e))
            raise ResolverError.search_failed(ref, e) from e
        filtered = filter_by_expected_types(results, expected)
        log.debug("search", term=term, limit=limit, hits=len(results), kept=len(filtered))
        return filtered

    def _resolved(self, match: ObjectSummary, terms: list[str]) -> ResolvedReference:
        log.info("resolved_by_search", object_uri=match.uri, terms=terms)
        return ResolvedReference(match.uri, match.name, ResolvedBy.SEARCH)

    def _conclude(
        self,
        ref: str,
        expected: frozenset[str] | None,
        state: _ResolutionState,
    ) -> ResolvedReference:
        candidates = list(state.single_candidates.values())
        if len(candidates) == 1 and len(candidates[0].terms) >= 2:
            return self._resolved(candidates[0].match, candidates[0].terms)

        expected_types = sorted(expected) if expected else None
        limit = self._config.max_candidates

        if state.exact_ambiguity is not None and state.exact_ambiguity.candidates:
            log.info("ambiguous_exact", term=state.exact_ambiguity.term)
            raise ResolverError.ambiguous(
                ref,
                searched_terms=state.searched_terms,
                expected_types=expected_types,
                candidates=summarize_matches(state.exact_ambiguity.candidates)[:limit],
                term=state.exact_ambiguity.term,
            )

        broad = state.broad_ambiguity.candidates if state.broad_ambiguity else []
        if broad or candidates:
            labels = summarize_matches([entry.match for entry in candidates] + broad)
            log.info("ambiguous_broad", candidates=len(labels))
            raise ResolverError.ambiguous(
                ref,
                searched_terms=state.searched_terms,
                expected_types=expected_types,
                candidates=labels[:limit],
            )

        log.info("not_found", terms=state.searched_terms)
        raise ResolverError.not_found(ref, state.searched_terms, expected_types)


async def resolve_source_ref(
    ref: str,
    backend: SearchBackend,
    config: SearchConfig | None = None,
) -> ResolvedReference:
    """Resolve one reference with a throwaway SourceRefResolver."""
    return await SourceRefResolver(backend, config).resolve(ref)
