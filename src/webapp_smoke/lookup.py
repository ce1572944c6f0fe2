"""
Checked lookups
===============

Every domain follows the same shape: query the control plane, pick the
resource whose name was built from the deployment id, record whether it was
found, then grade its secondary properties. The helpers here hold that control
flow so the domain modules only describe names, queries and expectations.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence

from botocore.exceptions import BotoCoreError, ClientError

from webapp_smoke.logging_utils import log_json
from webapp_smoke.results import Outcome, ResultLog

Resource = Dict[str, Any]

QUERY_ERRORS = (ClientError, BotoCoreError)


@dataclass(frozen=True)
class PropertyCheck:
    """A secondary property of a located resource.

    ``holds`` passing records ``passed``. Otherwise ``otherwise`` is recorded at
    ``severity``; when ``otherwise`` is None nothing is recorded at all.
    """

    holds: Callable[[Resource], bool]
    passed: Callable[[Resource], str]
    otherwise: Optional[Callable[[Resource], str]] = None
    severity: Outcome = Outcome.WARNING


@dataclass(frozen=True)
class ResourceLookup:
    """How to recognise one named resource.

    ``locate`` only reads the matching fields. ``label`` and ``query`` are needed
    by ``checked_lookup``, which runs the query itself.
    """

    name: str
    match: Callable[[Resource], bool]
    found: Callable[[Resource], str]
    missing: str
    label: str = ""
    query: Optional[Callable[[], Iterable[Resource]]] = None
    missing_outcome: Outcome = Outcome.FAILED
    properties: Sequence[PropertyCheck] = field(default_factory=tuple)


def error_code(exc: BaseException) -> str:
    if isinstance(exc, ClientError):
        return exc.response.get("Error", {}).get("Code", "")
    return ""


def absent_on(call: Callable[[], Resource], *codes: str) -> List[Resource]:
    """Run a describe/get call, mapping the given error codes to "no result"."""
    try:
        return [call()]
    except ClientError as exc:
        if error_code(exc) in codes:
            return []
        raise


def _log_query_failure(log: ResultLog, label: str, exc: BaseException) -> None:
    log_json(
        "query_failed",
        level=logging.WARNING,
        domain=log.domain,
        query=label,
        error_code=error_code(exc),
        error=str(exc),
    )


def evaluate(log: ResultLog, name: str, resource: Resource, properties: Sequence[PropertyCheck]) -> None:
    for prop in properties:
        if prop.holds(resource):
            log.ok(name, prop.passed(resource))
        elif prop.otherwise is not None:
            log.record(prop.severity, name, prop.otherwise(resource))


def locate(log: ResultLog, lookup: ResourceLookup, candidates: Iterable[Resource]) -> Optional[Resource]:
    resource = next((candidate for candidate in candidates if lookup.match(candidate)), None)
    if resource is None:
        log.record(lookup.missing_outcome, lookup.name, lookup.missing)
        return None

    log.ok(lookup.name, lookup.found(resource))
    evaluate(log, lookup.name, resource, lookup.properties)
    return resource


def guarded(
    log: ResultLog,
    name: str,
    label: str,
    call: Callable[[], Any],
    outcome: Optional[Outcome] = Outcome.FAILED,
) -> Optional[Any]:
    """Run a control-plane query; on error record it at ``outcome`` and return None.

    Passing ``outcome=None`` only logs the failure, for optional lookups whose
    absence is reported by the caller.
    """
    try:
        return call()
    except QUERY_ERRORS as exc:
        _log_query_failure(log, label, exc)
        if outcome is not None:
            log.record(outcome, name, f"{label}: {exc}")
        return None


def checked_lookup(log: ResultLog, lookup: ResourceLookup) -> Optional[Resource]:
    if lookup.query is None:
        raise ValueError(f"{lookup.name}: checked_lookup needs a query")
    candidates = guarded(log, lookup.name, lookup.label, lambda: list(lookup.query()))
    if candidates is None:
        return None
    return locate(log, lookup, candidates)
