"""
EnvoyFilter Renderer

Renders the Istio EnvoyFilter that installs Envoy's gRPC-JSON transcoder
for the matched services. The template is loaded once when the renderer
is built and reused for every render.
"""

from __future__ import annotations

import base64
from typing import Any, Dict, Optional

import jinja2

from grpc_transcoder.errors import TemplateError
from grpc_transcoder.matching.matcher import MatchResult
from grpc_transcoder.options import TranscoderOptions

TEMPLATE_PACKAGE = "grpc_transcoder"
TEMPLATE_DIR = "templates"
DEFAULT_TEMPLATE = "envoy_filter.yaml.j2"


def encode_descriptor(data: bytes) -> str:
    """Standard base64 with padding, as Envoy's proto_descriptor_bin expects."""
    return base64.b64encode(data).decode("ascii")


def create_environment(loader: Optional[jinja2.BaseLoader] = None) -> jinja2.Environment:
    """Jinja2 environment for YAML output (no HTML autoescaping)."""
    return jinja2.Environment(
        loader=loader or jinja2.PackageLoader(TEMPLATE_PACKAGE, TEMPLATE_DIR),
        autoescape=False,
        undefined=jinja2.StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


class EnvoyFilterRenderer:
    """Render EnvoyFilter documents from match results.

    Example:
        renderer = EnvoyFilterRenderer()
        yaml_text = renderer.render(options, result, descriptor_bytes)

    Raises:
        TemplateError: if the template cannot be loaded (at construction)
                       or rendered
    """

    def __init__(self, template_name: str = DEFAULT_TEMPLATE,
                 environment: Optional[jinja2.Environment] = None):
        self._env = environment or create_environment()
        try:
            self._template = self._env.get_template(template_name)
        except jinja2.TemplateError as e:
            raise TemplateError(f"cannot load template {template_name!r}: {e}") from e
        self.template_name = template_name

    def context(self, options: TranscoderOptions, result: MatchResult,
                descriptor: bytes) -> Dict[str, Any]:
        """Merge match results, the encoded descriptor and passthrough options."""
        ctx = options.template_context()
        ctx["descriptor_binary"] = encode_descriptor(descriptor)
        ctx["proto_services"] = list(result.services)
        return ctx

    def render(self, options: TranscoderOptions, result: MatchResult,
               descriptor: bytes) -> str:
        try:
            return self._template.render(self.context(options, result, descriptor))
        except jinja2.TemplateError as e:
            raise TemplateError(f"cannot render template {self.template_name!r}: {e}") from e
