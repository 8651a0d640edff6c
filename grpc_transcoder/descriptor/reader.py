"""
Descriptor Reader

Loads a binary FileDescriptorSet from disk and decodes it into the
immutable models in ``grpc_transcoder.descriptor.models``.

Produce input with protoc, for example:

    protoc --include_imports --include_source_info \\
        --descriptor_set_out=proto.pb echo.proto
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple, Union

from google.protobuf import descriptor_pb2
from google.protobuf.message import DecodeError

from grpc_transcoder.descriptor.limits import DescriptorBudget
from grpc_transcoder.descriptor.models import DescriptorSet, FileEntry, ServiceEntry
from grpc_transcoder.errors import DescriptorDecodeError, DescriptorReadError


def load_descriptor_bytes(path: Union[str, Path]) -> bytes:
    """Read raw descriptor bytes.

    Raises:
        DescriptorReadError: if the file is missing or unreadable
    """
    path = Path(path)
    try:
        return path.read_bytes()
    except OSError as e:
        raise DescriptorReadError(str(path), e) from e


def _text(value, what: str) -> str:
    # proto2 string fields come back as bytes when they are not valid UTF-8
    if not isinstance(value, str):
        raise UnicodeError(f"{what} is not valid UTF-8: {value!r}")
    return value


def decode_descriptor_set(data: bytes, path: Optional[str] = None) -> DescriptorSet:
    """Decode FileDescriptorSet bytes into a DescriptorSet.

    Only file name, package and service names are kept. No filtering is
    applied here.

    Raises:
        DescriptorDecodeError: if the bytes are malformed or truncated, or a
                               name or package is not valid UTF-8
    """
    fds = descriptor_pb2.FileDescriptorSet()
    try:
        fds.ParseFromString(data)
    except DecodeError as e:
        raise DescriptorDecodeError(e, path=path) from e

    files = []
    try:
        for f in fds.file:
            name = _text(f.name, "file name")
            package = _text(f.package, f"package of {name!r}")
            services = tuple(
                ServiceEntry(name=_text(s.name, f"service name in {name!r}"))
                for s in f.service
            )
            files.append(FileEntry(name=name, package=package, services=services))
    except UnicodeError as e:
        raise DescriptorDecodeError(e, path=path) from e
    return DescriptorSet(files=tuple(files))


def read_descriptor_set(path: Union[str, Path],
                        budget: Optional[DescriptorBudget] = None) -> Tuple[bytes, DescriptorSet]:
    """Load, size-check and decode a descriptor file.

    The on-disk size is checked before the file is read, and the bytes
    actually read are checked again before decoding; an oversized file is
    never parsed.

    Returns:
        Tuple of (raw bytes, decoded DescriptorSet)
    """
    budget = budget or DescriptorBudget()
    path = Path(path)
    try:
        size = path.stat().st_size
    except OSError as e:
        raise DescriptorReadError(str(path), e) from e
    budget.ensure_size(size, path=str(path))

    data = load_descriptor_bytes(path)
    budget.ensure_size(len(data), path=str(path))
    return data, decode_descriptor_set(data, path=str(path))
