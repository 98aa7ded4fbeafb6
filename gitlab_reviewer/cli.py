# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
CLI for gitlab-reviewer.

Prints the members of the GitLab project behind `origin`, for picking reviewers:

  gitlab-reviewer              # name<TAB>username per line
  gitlab-reviewer -json        # indented JSON array
  gitlab-reviewer -refresh     # skip the fresh cache, ask GitLab first
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from .render import render
from .resolver import MemberResolver, ResolverConfig

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gitlab-reviewer",
        description="List GitLab project members for the current repository (cached for 24h).",
        epilog="Examples:\n"
               "  %(prog)s | fzf | cut -f2      # pick a reviewer username\n"
               "  %(prog)s -refresh -json       # bypass the fresh cache, JSON output",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-refresh", "--refresh", action="store_true", help="Force refresh the cache from GitLab API")
    parser.add_argument("-json", "--json", action="store_true", help="Output as JSON instead of TSV")
    parser.add_argument("-C", "--repo-path", default=None, help="Repository to inspect (default: current directory)")
    parser.add_argument(
        "--cache-dir",
        default=None,
        help="Cache directory (default: $GITLAB_REVIEWER_CACHE_DIR or ~/.cache/gitlab-reviewer)",
    )
    parser.add_argument("--token-file", default=None, help="GitLab personal access token file (default: ~/.gitlab_pat)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(list(argv) if argv is not None else None)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    config = ResolverConfig.from_env(
        repo_path=args.repo_path,
        cache_root=args.cache_dir,
        token_path=args.token_file,
    )
    resolution = MemberResolver(config).resolve(refresh=bool(args.refresh))

    try:
        sys.stdout.write(render(resolution.members, as_json=bool(args.json)))
        sys.stdout.flush()
    except (OSError, TypeError, ValueError) as e:
        logger.error(f"error writing output: {e}")
        return 1
    return 0
