"""
Transcoder Options

Validated configuration for one transcoder run, built from command-line
flags or constructed directly by library callers.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List

from pydantic import BaseModel, Field, ValidationError, ValidationInfo, field_validator

from grpc_transcoder.errors import OptionsError

DEFAULT_SERVICE_NAME = "grpc-transcoder"
DEFAULT_PORT = 80

# Kubernetes object names and label values used for the workload (DNS-1123 label)
SERVICE_NAME_PATTERN = r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?$"


def split_list(values: Iterable[str], strip: bool = True) -> List[str]:
    """Flatten comma-separated flag values into a clean list.

    ``["a,b", " c "]`` becomes ``["a", "b", "c"]``; empty items are dropped.
    With ``strip=False`` items are kept verbatim, so a regex like
    ``" Service"`` keeps its leading space.
    """
    out: List[str] = []
    for value in values:
        for item in value.split(','):
            if strip:
                item = item.strip()
            if item:
                out.append(item)
    return out


class TranscoderOptions(BaseModel):
    """Everything the matcher and the EnvoyFilter renderer need."""
    descriptor: str = Field(min_length=1)
    service_name: str = Field(default=DEFAULT_SERVICE_NAME, max_length=63,
                              pattern=SERVICE_NAME_PATTERN)
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    packages: List[str] = Field(default_factory=list)
    services: List[str] = Field(default_factory=list)
    add_whitespace: bool = True
    convert_grpc_status: bool = True
    ignore_case: bool = True

    model_config = {"frozen": True}

    @field_validator("packages", "services", mode="before")
    @classmethod
    def _split(cls, value: Any, info: ValidationInfo) -> List[str]:
        if value is None:
            return []
        if isinstance(value, str):
            value = [value]
        # package prefixes are identifiers; service patterns are kept verbatim
        return split_list(value, strip=info.field_name == "packages")

    @classmethod
    def build(cls, **kwargs: Any) -> 'TranscoderOptions':
        """Validate options, raising OptionsError instead of ValidationError."""
        try:
            return cls(**kwargs)
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                for err in e.errors()
            )
            raise OptionsError(f"invalid options: {problems}") from e

    def template_context(self) -> Dict[str, Any]:
        """Passthrough values for the EnvoyFilter template."""
        return {
            "service_name": self.service_name,
            "port": self.port,
            "add_whitespace": self.add_whitespace,
            "convert_grpc_status": self.convert_grpc_status,
        }
