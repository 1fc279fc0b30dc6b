"""Command-line entry point: export, build or preview a saved project."""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence

from .core import config, exporter, generator, storage

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="siteforge", description="Generate static sites from SiteForge projects")
    parser.add_argument("--settings", type=Path, help="JSON settings file (lang, escape_content)")
    parser.add_argument("--lang", help="Override the document language")
    parser.add_argument("--escape", action="store_true", help="HTML-escape user content and drop inline handlers")
    sub = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("export", "Export an editable project (pages plus dev scaffold)"),
        ("build", "Build the deployment bundle"),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("project", type=Path, help="Project JSON file")
        cmd.add_argument("output", type=Path, help="Output directory, or archive path with --zip")
        cmd.add_argument("--zip", action="store_true", help="Write a ZIP archive instead of a directory")

    preview = sub.add_parser("preview", help="Compile a single page for preview")
    preview.add_argument("project", type=Path, help="Project JSON file")
    preview.add_argument("--page", dest="page_id", help="Page id (defaults to the first page)")
    preview.add_argument("--output", type=Path, help="Write to this file instead of stdout")
    return parser


def _options(args: argparse.Namespace) -> config.CompileOptions:
    options = config.load_options(args.settings)
    if args.lang:
        options = replace(options, lang=args.lang)
    if args.escape:
        options = replace(options, escape_content=True)
    return options


def run(args: argparse.Namespace) -> int:
    options = _options(args)
    project = storage.load_project(args.project)

    if args.command == "preview":
        html = generator.render_preview(project, args.page_id, options)
        if args.output:
            args.output.write_text(html, encoding="utf-8")
            logger.info("Preview written to %s", args.output)
        else:
            sys.stdout.write(html)
        return 0

    build = exporter.export_project if args.command == "export" else exporter.build_site
    files = build(project, options)
    if args.zip:
        storage.write_zip(files, args.output)
    else:
        storage.write_files(files, args.output)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    logging.basicConfig(
        level=config.log_level(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    args = _build_parser().parse_args(argv)
    try:
        return run(args)
    except generator.PageNotFoundError as exc:
        logger.error("%s", exc)
        return 2
    except (OSError, ValueError) as exc:
        # json.JSONDecodeError is a ValueError
        logger.error("%s failed: %s", args.command, exc)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
