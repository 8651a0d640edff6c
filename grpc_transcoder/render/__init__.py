"""Output layer - EnvoyFilter YAML rendering."""

from grpc_transcoder.render.envoy_filter import (
    EnvoyFilterRenderer,
    create_environment,
    encode_descriptor,
)

__all__ = [
    "EnvoyFilterRenderer",
    "create_environment",
    "encode_descriptor",
]
