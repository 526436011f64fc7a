"""Declarative table of pass-through endpoints.

Each row maps an inbound route to one upstream path. Upstream paths drift
between API versions, so every path can be overridden by name with the
CRICKET_UPSTREAM_PATHS env var (the aggregate document uses the name "home").
"""

import string
from dataclasses import dataclass, replace

AGGREGATE_NAME = "home"
AGGREGATE_PATH = "homeList"


@dataclass(frozen=True)
class ProxyEndpoint:
    name: str
    routes: tuple[str, ...]
    upstream_path: str
    method: str = "GET"
    required: tuple[str, ...] = ()
    optional: tuple[str, ...] = ()
    summary: str = ""

    @property
    def params(self) -> tuple[str, ...]:
        return self.required + self.optional


# Parameterised routes are also registered without the id segment so a
# missing id is answered with 400 instead of 404.
PROXY_ENDPOINTS = (
    ProxyEndpoint(
        name="recent",
        routes=("/api/recent",),
        upstream_path="recentMatches",
        summary="Recently finished matches",
    ),
    ProxyEndpoint(
        name="scorecard",
        routes=("/api/scorecard/{match_id}", "/api/scorecard"),
        upstream_path="scorecardByMatchId",
        method="POST",
        required=("match_id",),
        summary="Full scorecard for a match",
    ),
    ProxyEndpoint(
        name="match_info",
        routes=("/api/match-info/{match_id}", "/api/match-info"),
        upstream_path="matchInfo",
        required=("match_id",),
        summary="Match details (venue, toss, squads)",
    ),
    ProxyEndpoint(
        name="points_table",
        routes=("/api/points-table/{series_id}", "/api/points-table"),
        upstream_path="pointsTable",
        required=("series_id",),
        summary="Points table for a series",
    ),
    ProxyEndpoint(
        name="rankings",
        routes=("/api/rankings",),
        upstream_path="teamRanking",
        optional=("type",),
        summary="Team rankings",
    ),
    ProxyEndpoint(
        name="search",
        routes=("/api/search",),
        upstream_path="search",
        required=("q",),
        summary="Free-text search",
    ),
)


def template_fields(template: str) -> set[str]:
    """Names of the {placeholders} in an upstream path template."""
    return {field for _, field, _, _ in string.Formatter().parse(template) if field}


def configure_endpoints(
    overrides: dict[str, str],
    endpoints: tuple[ProxyEndpoint, ...] = PROXY_ENDPOINTS,
) -> tuple[ProxyEndpoint, ...]:
    """Apply upstream path overrides by endpoint name."""
    known = {e.name for e in endpoints} | {AGGREGATE_NAME}
    unknown = set(overrides) - known
    if unknown:
        raise ValueError(f"Unknown endpoint names in CRICKET_UPSTREAM_PATHS: {sorted(unknown)}")

    configured = tuple(
        replace(e, upstream_path=overrides[e.name]) if e.name in overrides else e
        for e in endpoints
    )
    for e in configured:
        # Only required params are guaranteed present at substitution time.
        extra = template_fields(e.upstream_path) - set(e.required)
        if extra:
            raise ValueError(f"Upstream path for {e.name} uses unknown placeholders: {sorted(extra)}")
    if template_fields(aggregate_path(overrides)):
        raise ValueError("Upstream path for home cannot contain placeholders")
    return configured


def aggregate_path(overrides: dict[str, str]) -> str:
    return overrides.get(AGGREGATE_NAME, AGGREGATE_PATH)
