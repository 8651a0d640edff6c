"""
Package and Service Filters

Predicates used by the matcher. An empty filter admits everything, so
running without --packages or --services selects every service in the
descriptor.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from grpc_transcoder.errors import PatternCompileError

# re.compile raises more than re.error: huge repeat counts overflow and
# deeply nested groups exhaust the parser's recursion.
COMPILE_ERRORS = (re.error, OverflowError, RecursionError)


@dataclass(frozen=True)
class PackageFilter:
    """Admit files whose package starts with one of the prefixes.

    Prefixes are plain text, not path segments: ``acme.ex`` admits
    ``acme.example``.
    """
    prefixes: Tuple[str, ...] = ()

    @classmethod
    def from_prefixes(cls, prefixes: Iterable[str]) -> 'PackageFilter':
        return cls(prefixes=tuple(prefixes))

    def matches(self, package: str) -> bool:
        if not self.prefixes:
            return True
        return any(package.startswith(p) for p in self.prefixes)


@dataclass(frozen=True)
class ServiceFilter:
    """Admit services whose unqualified name matches a pattern.

    Patterns are searched anywhere in the name. Patterns that fail to
    compile are left out of matching and reported through ``error``.
    """
    patterns: Tuple[str, ...] = ()
    compiled: Tuple[re.Pattern, ...] = ()
    error: Optional[PatternCompileError] = field(default=None, compare=False)

    @classmethod
    def compile(cls, patterns: Iterable[str], ignore_case: bool = True) -> 'ServiceFilter':
        """Compile patterns, collecting every failure instead of stopping.

        Args:
            patterns: Regular expression sources
            ignore_case: Compile with re.IGNORECASE so ``echo.*`` admits
                         ``EchoService``
        """
        flags = re.IGNORECASE if ignore_case else 0
        sources = tuple(patterns)
        compiled: List[re.Pattern] = []
        failures: List[Tuple[str, Exception]] = []

        for source in sources:
            try:
                compiled.append(re.compile(source, flags))
            except COMPILE_ERRORS as e:
                failures.append((source, e))

        error = PatternCompileError(failures) if failures else None
        return cls(patterns=sources, compiled=tuple(compiled), error=error)

    def matches(self, name: str) -> bool:
        # Emptiness is judged on configured patterns; if every pattern is
        # invalid nothing matches.
        if not self.patterns:
            return True
        return any(rx.search(name) for rx in self.compiled)
