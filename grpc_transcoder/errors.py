"""
Transcoder Errors

Exception types raised while reading descriptors, matching services and
rendering the EnvoyFilter document.
"""

from __future__ import annotations

from typing import List, Optional, Tuple


class TranscoderError(ValueError):
    """Base class for all grpc-transcoder errors."""


class DescriptorReadError(TranscoderError):
    """Descriptor file could not be opened or read."""

    def __init__(self, path: str, cause: OSError):
        self.path = path
        self.cause = cause
        reason = cause.strerror or str(cause)
        super().__init__(f"error reading descriptor file {path!r}: {reason}")


class DescriptorTooLarge(TranscoderError):
    """Descriptor exceeds the size budget and cannot be delivered."""

    def __init__(self, size: int, limit: int, path: Optional[str] = None):
        self.size = size
        self.limit = limit
        self.path = path
        where = f" {path!r}" if path else ""
        super().__init__(
            f"descriptor file{where} is too large ({size} bytes); "
            f"CRDs cannot be larger than {limit} bytes"
        )


class DescriptorDecodeError(TranscoderError):
    """Bytes are not a valid FileDescriptorSet."""

    def __init__(self, cause: Exception, path: Optional[str] = None):
        self.cause = cause
        self.path = path
        where = f" {path!r}" if path else ""
        super().__init__(f"error decoding descriptor{where} as FileDescriptorSet: {cause}")


class PatternCompileError(TranscoderError):
    """One or more service patterns failed to compile.

    Carries every failure so a caller can report them together. This error
    is returned alongside match results rather than raised by the matcher.
    """

    def __init__(self, failures: List[Tuple[str, Exception]]):
        self.failures = list(failures)
        count = len(self.failures)
        noun = "pattern" if count == 1 else "patterns"
        lines = [f"{count} service {noun} failed to compile:"]
        for pattern, err in self.failures:
            lines.append(f"\t* {pattern!r}: {err}")
        super().__init__("\n".join(lines))

    @property
    def patterns(self) -> List[str]:
        """Source strings of the patterns that failed."""
        return [pattern for pattern, _ in self.failures]

    def __len__(self) -> int:
        return len(self.failures)


class OptionsError(TranscoderError):
    """Invalid command-line or programmatic configuration."""


class TemplateError(TranscoderError):
    """EnvoyFilter template could not be loaded or rendered."""
