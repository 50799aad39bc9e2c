#!/usr/bin/env python3
"""
tfdoc - Terraform block tree to JSON document converter

Main entry point for tfdoc. Loads an evaluated block tree through an
importer, converts it and writes the resulting JSON document.
"""

import json
import logging
import sys
import argparse
from typing import List, Optional

from tfdoc import __version__
from tfdoc.config import ConfigManager, get_config
from tfdoc.converter import TerraformConverter
from tfdoc.errors import TfDocError
from tfdoc.importers import BaseImporter, MockImporter, TreeFileImporter
from tfdoc.models import ParserOptions


def setup_logging(config: ConfigManager, debug: bool = False):
    """Configure logging for the application."""
    level = logging.DEBUG if debug else getattr(logging, str(config.log_level).upper(), logging.INFO)
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if config.log_filename:
        handlers.append(logging.FileHandler(config.log_filename))

    logging.basicConfig(
        level=level,
        format=config.log_format,
        handlers=handlers,
        force=True
    )


def build_parser_options(args: argparse.Namespace, config: ConfigManager) -> ParserOptions:
    """
    Merge command line flags over the configured parser options.

    Args:
        args: Parsed command line arguments
        config: Loaded configuration

    Returns:
        The effective ParserOptions
    """
    options = config.parser_options
    updates = {}
    if args.debug:
        updates["debug"] = True
    if args.stop_on_hcl_error:
        updates["stop_on_hcl_error"] = True
    if args.allow_downloads:
        updates["allow_downloads"] = True
    if args.var_files:
        updates["tfvars_paths"] = list(options.tfvars_paths) + list(args.var_files)
    return options.model_copy(update=updates)


def create_importer(importer_name: str, tree_path: Optional[str], options: ParserOptions) -> BaseImporter:
    """
    Create the requested importer.

    Raises:
        ValueError: if the tree importer is selected without a tree path
    """
    if importer_name == "mock":
        return MockImporter(options)
    if not tree_path:
        raise ValueError("--tree is required for the tree importer")
    return TreeFileImporter(tree_path, options, logger=logging.getLogger("tfdoc.importers"))


def run_conversion(importer: BaseImporter) -> dict:
    """Convert every module the importer provides."""
    modules = importer.get_modules()
    converter = TerraformConverter(
        modules,
        lineage=importer.get_lineage(),
        logger=logging.getLogger("tfdoc.converter")
    )
    return converter.visit_json()


def write_output(document: dict, output_path: Optional[str], indent: Optional[int]):
    text = json.dumps(document, indent=indent)
    if output_path:
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(text + "\n")
        logging.info(f"Wrote document to {output_path}")
    else:
        sys.stdout.write(text + "\n")


def parse_arguments(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="tfdoc - Terraform block tree to JSON document converter",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --tree tree.json                       # Convert a parser tree to stdout
  python main.py --tree tree.yaml --output out.json     # Convert a YAML tree to a file
  python main.py --tree tree.json --stop-on-hcl-error   # Fail on recorded parser errors
  python main.py --importer mock                        # Convert the built-in sample
        """
    )

    parser.add_argument(
        "--importer",
        choices=["tree", "mock"],
        default="tree",
        help="Importer to use (default: tree)"
    )

    parser.add_argument(
        "--tree",
        type=str,
        help="Path to the block tree file written by the parser (JSON or YAML)"
    )

    parser.add_argument(
        "--output", "-o",
        type=str,
        help="Write the JSON document to this file instead of stdout"
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to a configuration file (default: config.yaml)"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable verbose diagnostics"
    )

    parser.add_argument(
        "--stop-on-hcl-error",
        action="store_true",
        help="Stop when the parser reported HCL errors"
    )

    parser.add_argument(
        "--allow-downloads",
        action="store_true",
        help="Allow the parser to download remote modules"
    )

    parser.add_argument(
        "--var-file",
        dest="var_files",
        action="append",
        default=[],
        help="Variables file used by the parser (repeatable)"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"tfdoc {__version__}"
    )

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_arguments(argv)
    config = ConfigManager(args.config) if args.config else get_config()
    setup_logging(config, debug=args.debug or config.parser_options.debug)

    try:
        options = build_parser_options(args, config)
        importer = create_importer(args.importer, args.tree, options)
        document = run_conversion(importer)
        write_output(document, args.output, config.output_indent)

    except (TfDocError, ValueError, OSError) as e:
        logging.error(f"Conversion failed: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
