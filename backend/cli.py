#!/usr/bin/env python3
"""
Command line entry point: render a component schematic into a pod spec.

    python cli.py render component.yaml --param replicas=3 --format json
    python cli.py gvk core.hydra.io/v1alpha1.Singleton
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from component_spec import SchemaError, load_component
from group_version_kind import FormatError, GroupVersionKind
from log_config import configure_logging
from parameter_resolver import ParameterError
from pod_builder import render_pod_spec


logger = logging.getLogger("hydra.cli")


def _parse_param_values(items: List[str]) -> Dict[str, Any]:
    """Turn ``name=value`` pairs into a mapping; values are read as YAML scalars."""
    values: Dict[str, Any] = {}
    for item in items:
        name, sep, raw = item.partition("=")
        if not sep or not name:
            raise ValueError(f"Invalid --param '{item}', expected name=value")
        try:
            values[name] = yaml.safe_load(raw) if raw else ""
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid value for --param '{name}': {exc}") from exc
    return values


def _render(args: argparse.Namespace) -> int:
    if not Path(args.component).exists():
        logger.critical("Component file not found: %s", args.component)
        return 1

    try:
        values = _parse_param_values(args.param)
        component = load_component(args.component)
        rendered = render_pod_spec(component, values, fmt=args.format)
    except (SchemaError, ParameterError, ValueError, OSError) as exc:
        logger.error("Failed to render %s: %s", args.component, exc)
        return 1

    if args.output:
        try:
            Path(args.output).parent.mkdir(parents=True, exist_ok=True)
            Path(args.output).write_text(rendered, encoding="utf-8")
        except OSError as exc:
            logger.error("Failed to write %s: %s", args.output, exc)
            return 1
        logger.info("Pod spec written to %s", args.output)
    else:
        sys.stdout.write(rendered)
    return 0


def _gvk(args: argparse.Namespace) -> int:
    try:
        gvk = GroupVersionKind.parse(args.value)
    except FormatError as exc:
        logger.error("Invalid GroupVersionKind '%s': %s", args.value, exc)
        return 1
    sys.stdout.write(f"group={gvk.group}\nversion={gvk.version}\nkind={gvk.kind}\n")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Hydra component schematic tools")
    subparsers = parser.add_subparsers(dest="command", required=True)

    render = subparsers.add_parser("render", help="Render a component into a pod spec")
    render.add_argument("component", help="Component file (JSON or YAML)")
    render.add_argument(
        "--param",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Parameter value, may be repeated",
    )
    render.add_argument(
        "--format",
        choices=["yaml", "json"],
        default=os.getenv("HYDRA_RENDER_FORMAT", "yaml"),
        help="Output format",
    )
    render.add_argument("--output", help="Write to this file instead of stdout")
    render.set_defaults(handler=_render)

    gvk = subparsers.add_parser("gvk", help="Split a group/version.kind identifier")
    gvk.add_argument("value")
    gvk.set_defaults(handler=_gvk)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    configure_logging(stream=sys.stderr)

    parser = build_parser()
    args = parser.parse_args(argv)
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
