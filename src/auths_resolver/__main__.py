"""CLI entrypoint. Resolves one repository URL and prints the result as JSON."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

import yaml
from loguru import logger

from auths_resolver import __version__
from auths_resolver.config import Config, cfg, load_config_with_env
from auths_resolver.core.constants import FORGE_TYPES
from auths_resolver.core.errors import ResolverConfigurationError
from auths_resolver.models import ResolveResult
from auths_resolver.resolver import Resolver


def setup_logging(verbose: bool = False) -> None:
    """Configure loguru. Replace default logging."""
    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else "INFO",
        format=(
            "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
            "<cyan>{name}</cyan> | {message}"
        ),
    )


def reload_config(config_path: Path) -> Config:
    """Load config from path and update global cfg."""
    data = load_config_with_env(config_path)
    cfg.reload(data)
    return cfg


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="auths-resolver",
        description="Resolve an auths identity bundle from a git repository URL",
    )
    parser.add_argument("repo_url", help="Repository URL (https://github.com/owner/repo)")
    parser.add_argument(
        "--forge",
        "-f",
        choices=FORGE_TYPES,
        default=None,
        help="Forge type; overrides detection from the hostname",
    )
    parser.add_argument(
        "--identity",
        "-i",
        default=None,
        help="Only accept this controller DID",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=Path("config.yaml"),
        help="Path to config file (default: config.yaml)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


async def _run(resolver: Resolver, args: argparse.Namespace) -> ResolveResult:
    return await resolver.resolve(args.repo_url, args.forge, args.identity)


def main(argv: list[str] | None = None) -> int:
    """Main entrypoint. Returns the process exit code."""
    args = build_parser().parse_args(argv)

    setup_logging(args.verbose)

    try:
        config = reload_config(args.config)
    except (ResolverConfigurationError, yaml.YAMLError, OSError) as exc:
        logger.error("Invalid config {}: {}", args.config, exc)
        return 2

    resolver = Resolver.from_config(config)
    result = asyncio.run(_run(resolver, args))

    print(json.dumps(result.to_dict(), indent=2))
    if not result.ok:
        logger.error("Resolve failed: {}", result.error)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
