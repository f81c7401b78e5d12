#!/usr/bin/env python3
"""prdplan CLI entrypoint."""

import argparse
import json
import logging
import sys
import uuid
from pathlib import Path

from prdplan.decompose.models import DecompositionResult, InvalidInputError, Project
from prdplan.decompose.report import render_markdown
from prdplan.decompose.service import decompose, refine
from prdplan.lib.config import load_config
from prdplan.lib.telemetry import JsonlPatternSink
from prdplan.lib.templates import load_task_templates
from prdplan.lib.validate import ValidationError, validate_file


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def get_config_dir(args) -> Path:
    """Config dir from --config-dir, else the current directory."""
    if args.config_dir:
        return Path(args.config_dir)
    return Path.cwd()


def write_output(args, result: DecompositionResult, title: str, config) -> None:
    if args.format == "markdown":
        text = render_markdown(result, title=title, config=config)
    else:
        text = json.dumps(result.to_dict(), indent=2)

    if args.output:
        Path(args.output).write_text(text + "\n")
        print(f"Wrote {args.output}", file=sys.stderr)
    else:
        print(text)


def cmd_decompose(args) -> int:
    """Decompose a PRD file."""
    prd_path = Path(args.prd_file)
    if not prd_path.exists():
        print(f"ERROR: PRD file not found: {prd_path}", file=sys.stderr)
        return 1

    config_dir = get_config_dir(args)
    try:
        config = load_config(config_dir)
    except ValueError as e:
        print(f"ERROR: Invalid configuration: {e}", file=sys.stderr)
        return 2
    templates = load_task_templates(config_dir)

    project = Project(
        id=args.id or str(uuid.uuid4()),
        name=args.name or prd_path.stem,
        description=args.description or "",
        prd=prd_path.read_text(),
    )
    sink = JsonlPatternSink(config.pattern_log_path) if config.pattern_log_path else None

    try:
        result = decompose(project, config=config, templates=templates, pattern_sink=sink)
    except InvalidInputError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    write_output(args, result, project.name, config)
    return 0


def cmd_refine(args) -> int:
    """Apply a delta file to a saved decomposition."""
    try:
        result_data = validate_file(Path(args.result_file), "result")
        delta_data = validate_file(Path(args.delta_file), "delta")
    except ValidationError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    config_dir = get_config_dir(args)
    try:
        config = load_config(config_dir)
    except ValueError as e:
        print(f"ERROR: Invalid configuration: {e}", file=sys.stderr)
        return 2

    try:
        refined = refine(DecompositionResult.from_dict(result_data), delta_data, config=config)
    except InvalidInputError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    for warning in refined.warnings:
        print(f"WARNING: {warning}", file=sys.stderr)

    write_output(args, refined, "Refined Decomposition", config)
    return 0


def add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument('--config-dir', '-c', help='Directory holding prdplan.env and templates.yaml (default: cwd)')
    p.add_argument('--format', '-f', choices=['json', 'markdown'], default='json')
    p.add_argument('--output', '-o', help='Write to file instead of stdout')
    p.add_argument('--verbose', '-v', action='store_true', help='Debug logging')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="prdplan", description="PRD to task graph decomposition")
    subparsers = parser.add_subparsers(dest='command', required=True)

    # prdplan decompose
    p_decompose = subparsers.add_parser('decompose', help='Decompose a PRD into tasks')
    p_decompose.add_argument('prd_file', help='Path to PRD markdown/text file')
    p_decompose.add_argument('--name', '-n', help='Project name (default: file stem)')
    p_decompose.add_argument('--description', '-d', help='Project description')
    p_decompose.add_argument('--id', help='Project ID (default: random UUID)')
    add_common_args(p_decompose)
    p_decompose.set_defaults(func=cmd_decompose)

    # prdplan refine
    p_refine = subparsers.add_parser('refine', help='Apply task/dependency edits to a saved decomposition')
    p_refine.add_argument('result_file', help='JSON written by decompose')
    p_refine.add_argument('delta_file', help='JSON delta (tasks_to_add, tasks_to_remove, ...)')
    add_common_args(p_refine)
    p_refine.set_defaults(func=cmd_refine)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)
    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
