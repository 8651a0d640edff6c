"""
Descriptor Data Models

Immutable views over a decoded FileDescriptorSet. Only the fields needed
for service matching are kept: file name, package and service names.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Tuple


@dataclass(frozen=True)
class ServiceEntry:
    """An RPC service declared in a proto file."""
    name: str


@dataclass(frozen=True)
class FileEntry:
    """One proto source file contributing to the descriptor set."""
    name: str = ""
    package: str = ""
    services: Tuple[ServiceEntry, ...] = field(default_factory=tuple)

    def qualified_name(self, service: ServiceEntry) -> str:
        """Fully-qualified name of a service in this file.

        No special case for an empty package: the result is ``.Name``.
        """
        return f"{self.package}.{service.name}"


@dataclass(frozen=True)
class DescriptorSet:
    """Ordered collection of decoded proto files."""
    files: Tuple[FileEntry, ...] = field(default_factory=tuple)

    def __iter__(self) -> Iterator[FileEntry]:
        return iter(self.files)

    def __len__(self) -> int:
        return len(self.files)

    @property
    def service_count(self) -> int:
        """Total services across all files."""
        return sum(len(f.services) for f in self.files)

    @property
    def packages(self) -> Tuple[str, ...]:
        """Distinct package names in file order."""
        return tuple(dict.fromkeys(f.package for f in self.files))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "files": [
                {
                    "name": f.name,
                    "package": f.package,
                    "services": [s.name for s in f.services],
                }
                for f in self.files
            ],
            "service_count": self.service_count,
        }
