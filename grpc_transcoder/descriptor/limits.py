"""Size budget for descriptor payloads."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from grpc_transcoder.errors import DescriptorTooLarge

# Kubernetes custom resources hold at most a megabyte; the descriptor is
# embedded in one, so anything larger cannot be delivered.
MAX_DESCRIPTOR_BYTES = 1_000_000


def check_descriptor_size(length: int, limit: int = MAX_DESCRIPTOR_BYTES,
                          path: Optional[str] = None) -> None:
    """Raise DescriptorTooLarge if ``length`` exceeds ``limit``."""
    if length > limit:
        raise DescriptorTooLarge(length, limit, path=path)


@dataclass(frozen=True)
class DescriptorBudget:
    """Size ceiling applied before a descriptor is decoded."""

    max_bytes: int = MAX_DESCRIPTOR_BYTES

    def ensure_size(self, length: int, path: Optional[str] = None) -> None:
        check_descriptor_size(length, self.max_bytes, path=path)
