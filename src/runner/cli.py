"""
CLI for compiling page object documents.

Usage:
    python -m src.runner.cli compile <source_dir> --output <dir>
    python -m src.runner.cli actions clickable
"""

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from src.translator.errors import CompilerError
from src.translator.registries.actions import list_actions

from .config import RunnerConfig
from .engine import TranslatorRunner

logger = logging.getLogger(__name__)


def cmd_compile(args) -> int:
    """Compile every page object under a directory."""
    try:
        config = RunnerConfig.from_env(
            source_dir=Path(args.source_dir),
            output_dir=Path(args.output) if args.output else None,
            module_name=args.module,
            package_root=args.package_root,
            max_workers=args.workers,
        )
    except ValidationError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1
    if not config.source_dir.is_dir():
        logger.error(f"Source directory not found: {config.source_dir}")
        return 1

    summary = TranslatorRunner(config).run()
    for result in summary.results:
        if result.status == "success":
            print(f"✅ {result.full_name}")
        else:
            print(f"❌ {result.source}: {result.error}")
    print(f"\n{len(summary.succeeded)} compiled, {len(summary.failed)} failed")
    return 0 if summary.is_success else 1


def cmd_actions(args) -> int:
    """List the actions an element interface provides."""
    try:
        actions = list_actions(args.interface)
    except CompilerError as e:
        logger.error(str(e))
        return 1

    print(f"\n{'Action':<20} {'Returns':<10} {'Parameters':<20} {'Interface':<12}")
    print("-" * 64)
    for action in actions:
        parameters = ", ".join(t.simple_name for t in action.parameter_types)
        print(
            f"{action.name:<20} "
            f"{action.return_type.simple_name:<10} "
            f"{parameters:<20} "
            f"{action.interface:<12}"
        )
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    parser = argparse.ArgumentParser(description="Compile page object documents")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Compile command
    compile_parser = subparsers.add_parser("compile", help="Compile a directory of page objects")
    compile_parser.add_argument("source_dir", help="Directory containing *.utam.json files")
    compile_parser.add_argument("--output", help="Output directory (default: PAGEC_OUTPUT_DIR)")
    compile_parser.add_argument("--module", help="Module name, e.g. my-app")
    compile_parser.add_argument("--package-root", help="Package segment after the module name")
    compile_parser.add_argument("--workers", type=int, help="Parallel translations")

    # Actions command
    actions_parser = subparsers.add_parser("actions", help="List actions of an element interface")
    actions_parser.add_argument("interface", help="Interface name, e.g. clickable or basic")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    commands = {
        "compile": cmd_compile,
        "actions": cmd_actions,
    }
    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
