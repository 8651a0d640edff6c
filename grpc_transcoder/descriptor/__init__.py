"""Descriptor layer - loading, size budget and FileDescriptorSet decoding."""

from grpc_transcoder.descriptor.limits import (
    MAX_DESCRIPTOR_BYTES,
    DescriptorBudget,
    check_descriptor_size,
)
from grpc_transcoder.descriptor.models import (
    DescriptorSet,
    FileEntry,
    ServiceEntry,
)
from grpc_transcoder.descriptor.reader import (
    decode_descriptor_set,
    load_descriptor_bytes,
    read_descriptor_set,
)

__all__ = [
    "MAX_DESCRIPTOR_BYTES",
    "DescriptorBudget",
    "check_descriptor_size",
    "DescriptorSet",
    "FileEntry",
    "ServiceEntry",
    "decode_descriptor_set",
    "load_descriptor_bytes",
    "read_descriptor_set",
]
