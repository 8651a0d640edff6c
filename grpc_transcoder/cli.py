#!/usr/bin/env python3
"""
gRPC Transcoder CLI

Generates an Istio EnvoyFilter that enables Envoy's gRPC-JSON transcoder
for the services in a protobuf descriptor set.

Usage:
    # All services in the descriptor
    grpc-transcoder --descriptor proto.pb

    # Attach to port 9000 of workload "foo", echo services in acme.example only
    grpc-transcoder -p 9000 -s foo --packages acme.example \\
        --services 'http.*,echo.*' --descriptor proto.pb

    # Just list the services that would be transcoded
    grpc-transcoder --descriptor proto.pb --list-services
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from grpc_transcoder.descriptor_file import DescriptorFile
from grpc_transcoder.errors import TranscoderError
from grpc_transcoder.options import DEFAULT_PORT, DEFAULT_SERVICE_NAME, TranscoderOptions
from grpc_transcoder.render.envoy_filter import EnvoyFilterRenderer

TRUE_VALUES = {'1', 't', 'true', 'y', 'yes', 'on'}
FALSE_VALUES = {'0', 'f', 'false', 'n', 'no', 'off'}


def parse_bool(value: str) -> bool:
    """Parse a boolean flag value (``-w=false``, ``--add_whitespace true``)."""
    lowered = value.strip().lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    raise argparse.ArgumentTypeError(f"invalid boolean value: {value!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='grpc-transcoder',
        description='Generate an Istio EnvoyFilter for gRPC-JSON transcoding',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example:
  grpc-transcoder [--port 80] [--service foo] [--packages acme.example] \\
      [--services 'http.*,echo.*'] --descriptor /path/to/descriptor
        """
    )

    parser.add_argument('--descriptor', '-d', required=True,
                        help='Location of the proto descriptor set (protoc --descriptor_set_out)')
    parser.add_argument('--service', '-s', default=DEFAULT_SERVICE_NAME,
                        help='Value of the `app` label for the EnvoyFilter workload selector '
                             f'(default: {DEFAULT_SERVICE_NAME})')
    parser.add_argument('--port', '-p', type=int, default=DEFAULT_PORT,
                        help='Port the HTTP/JSON -> gRPC transcoding filter attaches to '
                             f'(default: {DEFAULT_PORT})')

    # Filtering
    parser.add_argument('--packages', action='append', metavar='PREFIXES',
                        help='Comma separated proto package prefixes, e.g. acme.example '
                             '(repeatable; default: all packages)')
    parser.add_argument('--services', action='append', metavar='PATTERNS',
                        help="Comma separated regular expressions matched against service names, "
                             "e.g. 'http.*,echo.*' (repeatable; default: all services)")
    parser.add_argument('--case-sensitive', action='store_true',
                        help='Match service patterns case-sensitively')

    # Filter options
    parser.add_argument('--add_whitespace', '--add-whitespace', '-w', dest='add_whitespace',
                        type=parse_bool, nargs='?', const=True, default=True,
                        help='JSON pretty print (default: true)')
    parser.add_argument('--convert_grpc_status', '--convert-grpc-status', '-c',
                        dest='convert_grpc_status',
                        type=parse_bool, nargs='?', const=True, default=True,
                        help='Convert gRPC status to JSON (default: true)')

    # Output
    parser.add_argument('--output', '-o',
                        help='Write the document to this file instead of stdout')
    parser.add_argument('--list-services', action='store_true',
                        help='Print matched service names, one per line, instead of YAML')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Verbose output')
    return parser


def generate(options: TranscoderOptions, renderer: Optional[EnvoyFilterRenderer] = None,
             verbose: bool = False) -> str:
    """Run the pipeline and return the text to emit.

    With no renderer the matched names are returned one per line.
    Pattern compile errors are reported on stderr but do not stop output.
    """
    if verbose:
        print(f"[>] Reading descriptor {options.descriptor}", file=sys.stderr)
    desc = DescriptorFile(options.descriptor)
    if verbose:
        print(f"[>] {desc.summary()}", file=sys.stderr)

    result = desc.match(options.packages, options.services, ignore_case=options.ignore_case)
    if result.error is not None:
        print(f"[!] error extracting services from descriptor: {result.error}", file=sys.stderr)
    if verbose:
        print(f"[>] Matched {len(result.services)} services", file=sys.stderr)
        for name in result.services:
            print(f"    {name}", file=sys.stderr)

    if renderer is None:
        return ''.join(f"{name}\n" for name in result.services)
    return renderer.render(options, result, desc.raw)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        options = TranscoderOptions.build(
            descriptor=args.descriptor,
            service_name=args.service,
            port=args.port,
            packages=args.packages or [],
            services=args.services or [],
            add_whitespace=args.add_whitespace,
            convert_grpc_status=args.convert_grpc_status,
            ignore_case=not args.case_sensitive,
        )
        renderer = None if args.list_services else EnvoyFilterRenderer()
        output = generate(options, renderer, verbose=args.verbose)
    except TranscoderError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.output:
        try:
            Path(args.output).write_text(output)
        except OSError as e:
            print(f"Error: cannot write {args.output!r}: {e}", file=sys.stderr)
            return 1
        if args.verbose:
            print(f"[>] Wrote {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(output)
    return 0


def cli_main():
    """Entry point for CLI."""
    sys.exit(main())


if __name__ == "__main__":
    cli_main()
