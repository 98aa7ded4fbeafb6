# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Resolve the reviewer list for the current repository.

Strategies are tried in order; the first success wins:

    cache        fresh cache file (skipped with refresh=True)
    api          GitLab `members/all`, written back to the cache on success
    stale-cache  cache file regardless of age
    history      distinct `git log` author names (no usernames)

If even the history scan fails the result is an empty list, never an error.
Every discarded failure is logged and recorded in `Resolution.diagnostics`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from .cache import CACHE_TTL_S, cache_path_for, gitlab_reviewer_cache_dir, read_cache, write_cache
from .exceptions import CacheError, GitLabReviewerError, HistoryError, RemoteParseError, RemoteURLError
from .gitlab_api import DEFAULT_TOKEN_PATH, MEMBERS_PER_PAGE, fetch_from_gitlab
from .history import fetch_from_git_log
from .members import Member
from .remote import ProjectRef, get_remote_url, parse_gitlab_remote

_logger = logging.getLogger(__name__)

Diagnostic = Tuple[int, str]  # (logging level, message)


@dataclass(frozen=True)
class ResolverConfig:
    repo_path: Path = Path(".")
    cache_root: Path = field(default_factory=gitlab_reviewer_cache_dir)
    token_path: Path = DEFAULT_TOKEN_PATH
    ttl_s: int = CACHE_TTL_S
    timeout_s: float = 10
    per_page: int = MEMBERS_PER_PAGE

    @classmethod
    def from_env(
        cls,
        *,
        repo_path: Optional[Path] = None,
        cache_root: Optional[Path] = None,
        token_path: Optional[Path] = None,
    ) -> "ResolverConfig":
        """Defaults from the environment, with optional explicit overrides."""
        return cls(
            repo_path=Path(repo_path) if repo_path else Path("."),
            cache_root=Path(cache_root).expanduser() if cache_root else gitlab_reviewer_cache_dir(),
            token_path=Path(token_path).expanduser() if token_path else DEFAULT_TOKEN_PATH,
        )


@dataclass(frozen=True)
class Target:
    """What is known about the project before any strategy runs."""

    remote_url: Optional[str] = None
    project: Optional[ProjectRef] = None
    cache_path: Optional[Path] = None
    error: Optional[GitLabReviewerError] = None


@dataclass(frozen=True)
class StrategyResult:
    members: Optional[List[Member]] = None
    diagnostics: Tuple[Diagnostic, ...] = ()

    @property
    def ok(self) -> bool:
        return self.members is not None


@dataclass
class Resolution:
    members: List[Member]
    source: str
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def warnings(self) -> List[str]:
        return [msg for (level, msg) in self.diagnostics if level >= logging.WARNING]


def _failed(level: int, message: str) -> StrategyResult:
    return StrategyResult(members=None, diagnostics=((level, message),))


class MemberResolver:
    """Runs the fallback chain against injected configuration and fetchers."""

    def __init__(
        self,
        config: ResolverConfig,
        *,
        remote_url_fn: Callable[[Path], str] = get_remote_url,
        api_fetch_fn: Callable[..., List[Member]] = fetch_from_gitlab,
        history_fetch_fn: Callable[[Path], List[Member]] = fetch_from_git_log,
    ):
        self.config = config
        self.remote_url_fn = remote_url_fn
        self.api_fetch_fn = api_fetch_fn
        self.history_fetch_fn = history_fetch_fn

    def locate(self) -> Target:
        try:
            remote_url = self.remote_url_fn(self.config.repo_path)
        except RemoteURLError as e:
            return Target(error=e)

        cache_path = cache_path_for(remote_url, self.config.cache_root)
        try:
            project = parse_gitlab_remote(remote_url)
        except RemoteParseError as e:
            return Target(remote_url=remote_url, cache_path=cache_path, error=e)
        return Target(remote_url=remote_url, project=project, cache_path=cache_path)

    def strategies(self, *, refresh: bool) -> List[Tuple[str, Callable[[Target], StrategyResult]]]:
        chain: List[Tuple[str, Callable[[Target], StrategyResult]]] = []
        if not refresh:
            chain.append(("cache", self.from_fresh_cache))
        chain.extend(
            [
                ("api", self.from_api),
                ("stale-cache", self.from_stale_cache),
                ("history", self.from_history),
            ]
        )
        return chain

    def resolve(self, *, refresh: bool = False) -> Resolution:
        target = self.locate()
        diagnostics: List[Diagnostic] = []

        for source, strategy in self.strategies(refresh=refresh):
            result = strategy(target)
            for level, message in result.diagnostics:
                _logger.log(level, message)
            diagnostics.extend(result.diagnostics)
            if result.ok:
                _logger.debug(f"resolved {len(result.members or [])} members from {source}")
                return Resolution(members=list(result.members or []), source=source, diagnostics=diagnostics)

        return Resolution(members=[], source="none", diagnostics=diagnostics)

    # -----------------------------------------------------------------------------
    # Strategies
    # -----------------------------------------------------------------------------

    def from_fresh_cache(self, target: Target) -> StrategyResult:
        if target.cache_path is None:
            return _failed(logging.DEBUG, f"no cache path: {target.error}")
        try:
            members = read_cache(target.cache_path, respect_ttl=True, ttl_s=self.config.ttl_s)
        except CacheError as e:
            return _failed(logging.INFO, f"cache miss: {e}")
        return StrategyResult(members=members)

    def from_api(self, target: Target) -> StrategyResult:
        if target.project is None:
            return _failed(logging.WARNING, f"GitLab API failed: {target.error}")
        try:
            members = self.api_fetch_fn(
                target.project,
                token_path=self.config.token_path,
                timeout=self.config.timeout_s,
                per_page=self.config.per_page,
            )
        except GitLabReviewerError as e:
            return _failed(logging.WARNING, f"GitLab API failed: {e}")

        notes: Tuple[Diagnostic, ...] = ()
        if target.cache_path is not None:
            try:
                write_cache(target.cache_path, members)
            except OSError as e:
                notes = ((logging.WARNING, f"could not write cache: {e}"),)
        return StrategyResult(members=members, diagnostics=notes)

    def from_stale_cache(self, target: Target) -> StrategyResult:
        if target.cache_path is None:
            return _failed(logging.DEBUG, "no cache path for stale cache lookup")
        try:
            members = read_cache(target.cache_path, respect_ttl=False)
        except CacheError as e:
            return _failed(logging.INFO, f"stale cache unavailable: {e}")
        return StrategyResult(members=members, diagnostics=((logging.WARNING, "using stale cache"),))

    def from_history(self, target: Target) -> StrategyResult:
        fallback_note = (
            logging.WARNING,
            "falling back to git log contributors (no GitLab usernames available)",
        )
        try:
            members = self.history_fetch_fn(self.config.repo_path)
        except HistoryError as e:
            return StrategyResult(members=None, diagnostics=(fallback_note, (logging.WARNING, str(e))))
        return StrategyResult(members=members, diagnostics=(fallback_note,))


def get_members(config: ResolverConfig, *, refresh: bool = False) -> List[Member]:
    return MemberResolver(config).resolve(refresh=refresh).members
