import subprocess
from types import SimpleNamespace

import pytest

from workspacelib import branches
from workspacelib.branches import BranchKind, resolve_branch, split_branch_token
from workspacelib.git_ops import ProbeState, probe_git


def _subprocess_result(stdout="", returncode=0):
    return SimpleNamespace(stdout=stdout, stderr="", returncode=returncode)


def _fake_refs(monkeypatch, existing):
    """Pretend only `existing` refs resolve; record every git call."""
    calls = []

    def fake_run(cmd, **kwargs):
        calls.append(cmd)
        ref = cmd[-1]
        if "rev-parse" in cmd and ref in existing:
            return _subprocess_result(stdout="0123456789abcdef\n")
        raise subprocess.CalledProcessError(1, cmd, output="", stderr="")

    monkeypatch.setattr(subprocess, "run", fake_run)
    return calls


@pytest.mark.parametrize(
    "token, remote, clean",
    [
        ("origin/feature/x", "origin/feature/x", "feature/x"),
        ("remotes/origin/feature/x", "origin/feature/x", "feature/x"),
        ("feature/x", "origin/feature/x", "feature/x"),
        ("claude/origin/x", "origin/claude/origin/x", "claude/origin/x"),
    ],
)
def test_split_branch_token(token, remote, clean):
    assert split_branch_token(token) == (remote, clean)


def test_resolve_remote_prefixed_token_has_clean_name(monkeypatch):
    _fake_refs(monkeypatch, {"origin/hotfix"})
    res = resolve_branch("origin/hotfix")
    assert res.kind is BranchKind.REMOTE
    assert res.found_ref == "origin/hotfix"
    assert res.clean_name == "hotfix"
    assert not res.clean_name.startswith("origin/")


def test_resolve_checks_remote_before_local(monkeypatch):
    calls = _fake_refs(monkeypatch, {"origin/feature", "feature"})
    res = resolve_branch("feature")
    assert res.kind is BranchKind.REMOTE
    assert res.found_ref == "origin/feature"
    # Remote hit short-circuits; the local name is never probed.
    assert [c[-1] for c in calls] == ["origin/feature"]


def test_resolve_falls_back_to_local(monkeypatch):
    calls = _fake_refs(monkeypatch, {"feature"})
    res = resolve_branch("feature")
    assert res.kind is BranchKind.LOCAL
    assert res.found_ref == "feature"
    assert [c[-1] for c in calls] == ["origin/feature", "feature"]


def test_resolve_new_branch(monkeypatch):
    _fake_refs(monkeypatch, set())
    res = resolve_branch("remotes/origin/feature/auth")
    assert res.kind is BranchKind.NEW
    assert res.found_ref == ""
    assert res.clean_name == "feature/auth"


def test_probe_distinguishes_missing_git(monkeypatch):
    def fake_run(cmd, **kwargs):
        raise FileNotFoundError("git")

    monkeypatch.setattr(subprocess, "run", fake_run)
    assert probe_git(["rev-parse", "--verify", "main"]).state is ProbeState.ERROR
    assert not branches.branch_exists("main")


def test_probe_empty_output_is_not_found(monkeypatch):
    monkeypatch.setattr(subprocess, "run", lambda cmd, **kw: _subprocess_result(stdout="\n"))
    res = probe_git(["rev-parse", "--verify", "main"])
    assert res.state is ProbeState.NOT_FOUND
    assert res.output == ""


def test_get_branch_info_strips_origin_for_display(monkeypatch):
    def fake_run(cmd, **kwargs):
        if "@{u}" in cmd:
            return _subprocess_result(stdout="origin/feature/x\n")
        return _subprocess_result(stdout="feature/x\n")

    monkeypatch.setattr(subprocess, "run", fake_run)
    info = branches.get_branch_info("/wt")
    assert info.branch == "feature/x"
    assert info.tracking == "feature/x"
    assert info.describe() == "feature/x → feature/x"


def test_get_branch_info_without_upstream(monkeypatch):
    def fake_run(cmd, **kwargs):
        if "@{u}" in cmd:
            raise subprocess.CalledProcessError(128, cmd)
        return _subprocess_result(stdout="topic\n")

    monkeypatch.setattr(subprocess, "run", fake_run)
    info = branches.get_branch_info("/wt")
    assert info.tracking is None
    assert info.describe() == "topic"


def test_fetch_failure_is_tolerated(monkeypatch):
    def fake_run(cmd, **kwargs):
        raise subprocess.CalledProcessError(128, cmd, output="", stderr="no remote")

    monkeypatch.setattr(subprocess, "run", fake_run)
    assert branches.fetch_remote("/repo") is False
