# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
End-to-end pytest tests for cli.py against real throwaway repositories.

No token file is provided, so the API step fails before any request is made.
"""

import json
import logging

from gitlab_reviewer import cli
from gitlab_reviewer.cache import write_cache
from gitlab_reviewer.members import Member
from gitlab_reviewer.render import render_json, render_tsv


def _run(capsys, repo, tmp_path, *flags):
    argv = [*flags, "-C", str(repo), "--cache-dir", str(tmp_path / "cache"), "--token-file", str(tmp_path / "no-pat")]
    code = cli.main(argv)
    return code, capsys.readouterr().out


def test_history_fallback_end_to_end(make_repo, tmp_path, capsys, caplog):
    repo = make_repo(authors=["Ann", "Bob", "Ann"], origin="git@gitlab.example.com:team/proj.git")

    with caplog.at_level(logging.WARNING):
        code, out = _run(capsys, repo, tmp_path)

    assert code == 0
    assert out == "Ann\t\nBob\t\n"
    warnings = [r for r in caplog.records if r.levelno >= logging.WARNING]
    assert warnings
    assert any("GitLab API failed" in r.getMessage() for r in warnings)


def test_json_matches_tsv(make_repo, tmp_path, capsys):
    repo = make_repo(authors=["Ann", "Bob"], origin="https://gitlab.example.com/team/proj.git")

    _, tsv = _run(capsys, repo, tmp_path)
    code, out = _run(capsys, repo, tmp_path, "-json")

    assert code == 0
    from_json = [(m["name"], m["username"]) for m in json.loads(out)]
    from_tsv = [tuple(line.split("\t")) for line in tsv.splitlines()]
    assert from_json == from_tsv == [("Bob", ""), ("Ann", "")]


def test_cached_members_printed(make_repo, tmp_path, capsys):
    repo = make_repo(authors=["Ann"], origin="git@gitlab.example.com:team/proj.git")
    write_cache(tmp_path / "cache" / "team-proj.json", [Member("Zed", "zed"), Member("Amy", "amy")])

    code, out = _run(capsys, repo, tmp_path)
    assert code == 0
    assert out == "Zed\tzed\nAmy\tamy\n"

    # -refresh skips the fresh cache; with no token the stale-cache step still serves it.
    code, out = _run(capsys, repo, tmp_path, "-refresh")
    assert code == 0
    assert out == "Zed\tzed\nAmy\tamy\n"


def test_outside_repository_prints_nothing(tmp_path, capsys):
    code, out = _run(capsys, tmp_path / "missing", tmp_path, "--json")
    assert code == 0
    assert json.loads(out) == []


def test_output_failure_exits_nonzero(make_repo, tmp_path, monkeypatch):
    repo = make_repo(authors=["Ann"], origin="git@gitlab.example.com:team/proj.git")

    class BrokenStdout:
        def write(self, s):
            raise BrokenPipeError("stdout closed")

        def flush(self):
            pass

    monkeypatch.setattr(cli.sys, "stdout", BrokenStdout())
    code = cli.main(["-C", str(repo), "--cache-dir", str(tmp_path / "c"), "--token-file", str(tmp_path / "x")])
    assert code == 1


def test_render_formats():
    members = [Member("Ann Example", "ann"), Member("Dana", "")]
    assert render_tsv(members) == "Ann Example\tann\nDana\t\n"
    assert render_json(members) == (
        "[\n"
        '  {\n    "name": "Ann Example",\n    "username": "ann"\n  },\n'
        '  {\n    "name": "Dana",\n    "username": ""\n  }\n'
        "]\n"
    )
    assert render_json([]) == "[]\n"


def test_flags_accept_single_and_double_dash():
    parser = cli._build_parser()
    args = parser.parse_args(["-refresh", "-json"])
    assert args.refresh and args.json
    args = parser.parse_args(["--refresh", "--json"])
    assert args.refresh and args.json
    args = parser.parse_args([])
    assert not args.refresh and not args.json
