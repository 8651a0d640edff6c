"""Matching layer - package/service filters and the service matcher."""

from grpc_transcoder.matching.filters import PackageFilter, ServiceFilter
from grpc_transcoder.matching.matcher import MatchResult, match_services

__all__ = [
    "PackageFilter",
    "ServiceFilter",
    "MatchResult",
    "match_services",
]
