"""Ordered alternatives for one logical write against an inconsistent backend."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CandidateRequest:
    """One (method, path) the backend might accept for a logical operation.

    Candidates are tried in order; only a 404 moves on to the next one.
    Which candidate the backend treats as authoritative is undocumented.
    """

    method: str
    path: str


def method_url_matrix(methods: tuple[str, ...], paths: tuple[str, ...]) -> list[CandidateRequest]:
    """Every method against every path, methods varying slowest."""
    return [CandidateRequest(method, path) for method in methods for path in paths]
