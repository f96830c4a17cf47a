"""
Generate an architecture diagram for a two-tier project.

Usage:
  archmap                                   # ./server/src + ./client/app -> ./architecture.md
  archmap --project-root ../shop            # another project
  archmap --stdout                          # print the Markdown instead of writing it
  archmap --config archmap.yaml             # override extraction rules
  archmap --strict                          # exit 2 on validation errors or warnings
"""

import argparse
import os
import sys
from typing import List, Optional

from archmap import config
from archmap.errors import ArchmapError, DiagramValidationError
from archmap.pipeline.controller import PipelineController
from archmap.sources import load_tree
from archmap.validation import raise_on_errors
from archmap.writer import build_markdown, write_markdown


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="archmap",
        description="Infer a Mermaid architecture diagram from a server and a client source tree.",
    )
    parser.add_argument("--project-root", default=".", help="Project root (default: current directory)")
    parser.add_argument("--server-dir", default=config.SERVER_DIR, help="Server tree, relative to the root")
    parser.add_argument("--client-dir", default=config.CLIENT_DIR, help="Client tree, relative to the root")
    parser.add_argument("--output", default=config.OUTPUT_FILE, help="Markdown file, relative to the root")
    parser.add_argument("--title", default=config.TITLE, help="Heading above the diagram")
    parser.add_argument("--no-title", action="store_true", help="Omit the heading")
    parser.add_argument("--config", default=None, help="YAML file with extraction rule overrides")
    parser.add_argument(
        "--resolve-pending",
        action="store_true",
        default=config.RESOLVE_PENDING,
        help="Retry failed page->controller/gateway lookups after all files are read",
    )
    parser.add_argument("--stdout", action="store_true", help="Print the Markdown instead of writing it")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 2 when validation reports errors or warnings",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    server_dir = os.path.join(args.project_root, args.server_dir)
    client_dir = os.path.join(args.project_root, args.client_dir)

    print("[ARCHMAP] Analyzing project to generate the Mermaid diagram...", file=sys.stderr)
    try:
        rules = config.load_rules(args.config)
        # Whole server tree first; client extraction depends on it.
        server_files = load_tree(server_dir, rules)
        client_files = load_tree(client_dir, rules)
    except ArchmapError as e:
        print(f"[ARCHMAP] ❌ {e}", file=sys.stderr)
        return 1

    controller = PipelineController(rules)
    context = controller.run(
        server_files,
        client_files,
        client_dir,
        resolve_pending=args.resolve_pending,
    )

    markdown = build_markdown(context.mermaid, None if args.no_title else args.title)

    if args.stdout:
        sys.stdout.write(markdown)
    else:
        output_path = os.path.join(args.project_root, args.output)
        write_markdown(output_path, markdown)
        print(f"[ARCHMAP] ✅ Diagram written to '{output_path}'", file=sys.stderr)

    # The document is still produced; strict mode only changes the exit status.
    if args.strict:
        try:
            raise_on_errors(context.model, strict=True)
        except DiagramValidationError as e:
            print(f"[ARCHMAP] ❌ {e}", file=sys.stderr)
            return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
