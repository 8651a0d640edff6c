"""
Service Matcher

Walks a decoded DescriptorSet and collects the fully-qualified names of
services that pass both the package and the service filter.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from grpc_transcoder.descriptor.models import DescriptorSet
from grpc_transcoder.errors import PatternCompileError
from grpc_transcoder.matching.filters import PackageFilter, ServiceFilter


@dataclass
class MatchResult:
    """Sorted qualified service names plus any pattern compile error."""
    services: List[str] = field(default_factory=list)
    error: Optional[PatternCompileError] = None

    @property
    def ok(self) -> bool:
        """True when every configured pattern compiled."""
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "services": list(self.services),
            "pattern_errors": self.error.patterns if self.error else [],
        }


def match_services(descriptor_set: DescriptorSet,
                   packages: Iterable[str] = (),
                   services: Iterable[str] = (),
                   ignore_case: bool = True) -> MatchResult:
    """Return matching services found in matching packages.

    A file whose package fails the package filter is skipped entirely.
    Duplicates are kept. The list is sorted once all files are walked.

    Args:
        descriptor_set: Decoded descriptor set
        packages: Package prefixes (empty admits every package)
        services: Service name patterns (empty admits every service)
        ignore_case: Compile service patterns case-insensitively
    """
    package_filter = PackageFilter.from_prefixes(packages)
    service_filter = ServiceFilter.compile(services, ignore_case=ignore_case)

    found: List[str] = []
    for entry in descriptor_set:
        if not package_filter.matches(entry.package):
            continue
        for service in entry.services:
            if service_filter.matches(service.name):
                found.append(entry.qualified_name(service))

    found.sort()
    return MatchResult(services=found, error=service_filter.error)
