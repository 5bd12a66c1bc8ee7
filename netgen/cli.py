"""Command-line entry point.

Usage::

    netgen tcp-echo --config echo.yaml
    netgen tcp-echo --name my-echo --port 4100 --max-line-len 8192
    netgen tcp-worker --config worker.yaml --out-dir ./build/worker
    netgen http-fastapi --config api.yaml
"""

from __future__ import annotations

import argparse
import sys
from typing import Optional

from netgen import __version__
from netgen.config import EchoConfig, EchoParams, GeneratorSettings, HttpConfig, WorkerConfig
from netgen.errors import NetgenError
from netgen.scaffolder import ProjectGenerator, TemplateRenderer
from netgen.utils import print_error, print_success, print_summary_table

_KIND_LABELS: dict[str, str] = {
    "tcp-echo": "TCP echo",
    "tcp-worker": "TCP worker-pool",
    "http-fastapi": "HTTP FastAPI",
}


def build_parser() -> argparse.ArgumentParser:
    """Create the ``netgen`` argument parser."""
    parser = argparse.ArgumentParser(
        prog="netgen",
        description="Network service generator (TCP echo, TCP worker-pool, HTTP FastAPI)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  netgen tcp-echo --config echo.yaml\n"
            "  netgen tcp-echo --name my-echo --port 4100 --tracing\n"
            "  netgen tcp-worker --config worker.yaml --out-dir ./build/worker\n"
            "  netgen http-fastapi --config api.yaml\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="List every generated file",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    echo = subparsers.add_parser("tcp-echo", help="Generate a TCP echo server")
    echo.add_argument("--config", default=None, help="Path to a YAML service document")
    echo.add_argument(
        "--name", "-n",
        default="tcp-echo-server",
        help="Project name when no config is given (default: tcp-echo-server)",
    )
    echo.add_argument(
        "--port", "-p",
        type=int,
        default=4000,
        help="Listen port when no config is given (default: 4000)",
    )
    echo.add_argument("--tracing", action="store_true", help="Enable debug tracing")
    echo.add_argument(
        "--github-actions",
        action="store_true",
        help="Also generate a GitHub Actions workflow",
    )
    echo.add_argument("--max-line-len", type=int, default=None, help="Longest accepted line")
    echo.add_argument("--out-dir", default=None, help="Override the output directory")

    worker = subparsers.add_parser("tcp-worker", help="Generate a TCP worker-pool server")
    worker.add_argument("--config", required=True, help="Path to a YAML service document")
    worker.add_argument("--out-dir", default=None, help="Override the output directory")

    http = subparsers.add_parser("http-fastapi", help="Generate a FastAPI HTTP service")
    http.add_argument("--config", required=True, help="Path to a YAML service document")
    http.add_argument("--out-dir", default=None, help="Override the output directory")

    return parser


def _load_service(
    args: argparse.Namespace,
) -> EchoConfig | EchoParams | WorkerConfig | HttpConfig:
    """Return the service document (or echo parameters) selected by *args*."""
    if args.command == "tcp-echo":
        if args.config:
            return EchoConfig.from_yaml(args.config)
        return EchoParams(
            name=args.name,
            port=args.port,
            tracing=args.tracing,
            github_actions=args.github_actions,
            max_line_len=args.max_line_len,
        )
    if args.command == "tcp-worker":
        return WorkerConfig.from_yaml(args.config)
    return HttpConfig.from_yaml(args.config)


def main(argv: Optional[list[str]] = None) -> None:
    """CLI entry point for ``netgen`` and ``python -m netgen``."""
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = GeneratorSettings.from_env()

    try:
        config = _load_service(args)
        generator = ProjectGenerator(TemplateRenderer(settings.template_dir))
        result = generator.generate_from_config(config, out_dir=args.out_dir)
    except (NetgenError, OSError) as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)
    except ValueError as exc:
        # Pydantic rejects bad --name / --port values for the echo parameters.
        print_error(f"Error: invalid parameters: {exc}")
        sys.exit(1)

    if args.verbose or settings.verbose:
        print_summary_table(
            {path.relative_to(result.destination).as_posix(): "written" for path in result.files},
            title="Generated files",
        )
    print_success(f"Generated {_KIND_LABELS[args.command]} project in {result.destination}")


if __name__ == "__main__":
    main()
