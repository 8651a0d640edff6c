"""gRPC-JSON transcoder EnvoyFilter generator.

Reads a protobuf FileDescriptorSet, selects services by package prefix and
name pattern, and renders an Istio EnvoyFilter installing Envoy's
grpc_json_transcoder filter for them.

Example:
    from grpc_transcoder import DescriptorFile

    desc = DescriptorFile("proto.pb")
    result = desc.match(packages=["acme.example"], services=["http.*", "echo.*"])
    print(result.services)
"""

from grpc_transcoder.descriptor import (
    MAX_DESCRIPTOR_BYTES,
    DescriptorBudget,
    DescriptorSet,
    FileEntry,
    ServiceEntry,
    check_descriptor_size,
    decode_descriptor_set,
    load_descriptor_bytes,
    read_descriptor_set,
)
from grpc_transcoder.descriptor_file import DescriptorFile
from grpc_transcoder.errors import (
    TranscoderError,
    DescriptorReadError,
    DescriptorTooLarge,
    DescriptorDecodeError,
    PatternCompileError,
    OptionsError,
    TemplateError,
)
from grpc_transcoder.matching import (
    MatchResult,
    PackageFilter,
    ServiceFilter,
    match_services,
)
from grpc_transcoder.options import TranscoderOptions
from grpc_transcoder.render import EnvoyFilterRenderer

__all__ = [
    "DescriptorFile",
    "DescriptorSet",
    "FileEntry",
    "ServiceEntry",
    "DescriptorBudget",
    "MAX_DESCRIPTOR_BYTES",
    "check_descriptor_size",
    "decode_descriptor_set",
    "load_descriptor_bytes",
    "read_descriptor_set",
    "MatchResult",
    "PackageFilter",
    "ServiceFilter",
    "match_services",
    "TranscoderOptions",
    "EnvoyFilterRenderer",
    "TranscoderError",
    "DescriptorReadError",
    "DescriptorTooLarge",
    "DescriptorDecodeError",
    "PatternCompileError",
    "OptionsError",
    "TemplateError",
]

__version__ = "0.1.0"
