#!/usr/bin/env python3
"""
Main driver script for the release notes generator.

This script provides the command-line interface and coordinates all modules
to generate release notes for a GitHub milestone.

Usage (example):
    python -m release_notes.main --milestone 1.18.0 --token GITHUB_TOKEN --username octocat
    python -m release_notes.main --milestone 1.18.0 --ollama --model gemma3:27b
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from .config import DEFAULT_ORGANIZATION, DEFAULT_OUTPUT_DIR, DEFAULT_REPOSITORY, ConfigurationError, build_config
from .preparator import ReleaseNotesPreparator

logger = logging.getLogger("release-notes")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate release notes for a GitHub milestone.",
        add_help=False,
        allow_abbrev=False,
    )
    parser.add_argument("--help", "-h", action="store_true", help="show this help message")
    parser.add_argument("--token", help="GitHub token or export GITHUB_TOKEN env variable")
    parser.add_argument("--org", default=DEFAULT_ORGANIZATION,
                        help=f'GitHub organization (default is "{DEFAULT_ORGANIZATION}")')
    parser.add_argument("--repo", default=DEFAULT_REPOSITORY,
                        help=f'GitHub repository (default is "{DEFAULT_REPOSITORY}")')
    parser.add_argument("--username", help="GitHub username or export GITHUB_USERNAME env variable")
    parser.add_argument("--milestone", default="",
                        help="GitHub milestone for which we want to generate release notes e.g. 1.18.0")
    parser.add_argument("--ollama", action="store_true",
                        help="use Ollama instead of an AI Lab service (requires --model)")
    parser.add_argument("--model",
                        help='name of ollama model for generating highlighted PRs e.g. gemma3:27b '
                             '(before running this script run "ollama run gemma3:27b")')
    parser.add_argument("--port", help="port on which the service is running (45621 for AI Lab, 11434 for Ollama)")
    parser.add_argument("--endpoint",
                        help='endpoint of a running service, default is "/v1/chat/completions" '
                             'for AI Lab and "/api/generate" for Ollama')
    parser.add_argument("--template", help="path to a custom Jinja2 release notes template")
    parser.add_argument("--output-dir", default=DEFAULT_OUTPUT_DIR, help="directory to write the release notes to")
    parser.add_argument("--verbose", "-v", action="store_true", help="enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """
    Main entry point for the release notes generator.

    Parses command line arguments, resolves the configuration and runs the
    release notes pipeline. Missing configuration is reported and the program
    returns without generating anything.
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    if not argv:
        parser.print_help()
        return

    args, unknown = parser.parse_known_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    for option in unknown:
        logger.warning("Unknown option: %s", option)
    if args.help:
        parser.print_help()

    try:
        config = build_config(args, os.environ)
    except ConfigurationError as e:
        print(e)
        return

    try:
        logger.info("Starting release notes generation for %s/%s milestone %s",
                    config.organization, config.repository, config.milestone)
        ReleaseNotesPreparator(config).generate()
        logger.info("Release notes generation completed successfully")

    except KeyboardInterrupt:
        logger.info("Release notes generation interrupted by user")
        print("\nOperation cancelled by user")
        sys.exit(1)
    except Exception as e:
        logger.error("Release notes generation failed: %s", e)
        print(f"Error: release notes generation failed - {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
