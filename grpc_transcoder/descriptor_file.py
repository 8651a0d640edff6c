"""
Descriptor File

Main entry point for library use: one object that loads, size-checks and
decodes a descriptor file and matches services against it.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional, Union

from grpc_transcoder.descriptor.limits import DescriptorBudget
from grpc_transcoder.descriptor.models import DescriptorSet
from grpc_transcoder.descriptor.reader import read_descriptor_set
from grpc_transcoder.matching.matcher import MatchResult, match_services
from grpc_transcoder.render.envoy_filter import encode_descriptor


class DescriptorFile:
    """High-level access to a FileDescriptorSet on disk.

    Example:
        from grpc_transcoder import DescriptorFile

        desc = DescriptorFile("proto.pb")
        result = desc.match(packages=["acme.echo"], services=["echo.*"])
        print(result.services)

    Attributes:
        path: Location of the descriptor file
        raw: Descriptor bytes exactly as read
        descriptor_set: Decoded DescriptorSet
    """

    def __init__(self, path: Union[str, Path], budget: Optional[DescriptorBudget] = None):
        """Load and decode a descriptor file.

        Args:
            path: Path to a binary FileDescriptorSet
            budget: Size ceiling (default: 1,000,000 bytes)

        Raises:
            DescriptorReadError, DescriptorTooLarge, DescriptorDecodeError
        """
        self.path = Path(path)
        self.raw, self.descriptor_set = read_descriptor_set(self.path, budget=budget)
        self._encoded: Optional[str] = None

    @property
    def size(self) -> int:
        """Descriptor size in bytes."""
        return len(self.raw)

    @property
    def encoded(self) -> str:
        """Base64 encoding of the raw descriptor."""
        if self._encoded is None:
            self._encoded = encode_descriptor(self.raw)
        return self._encoded

    def match(self, packages: Iterable[str] = (), services: Iterable[str] = (),
              ignore_case: bool = True) -> MatchResult:
        """Match services in this descriptor; see ``match_services``."""
        return match_services(self.descriptor_set, packages, services, ignore_case=ignore_case)

    def summary(self) -> str:
        """One-line description for diagnostics."""
        ds: DescriptorSet = self.descriptor_set
        return (f"{self.path}: {self.size} bytes, {len(ds)} files, "
                f"{len(ds.packages)} packages, {ds.service_count} services")
