"""Tests for relnotes.git.repository module."""

from __future__ import annotations

from pathlib import Path

from relnotes.core.result import Err, Found, NotFound, Ok, ProbeFailed
from relnotes.git.repository import Repository
from relnotes.output.console import MockConsole
from relnotes.platform.process import DryRunExecutor
from relnotes.test.fakes import SHA_A, ScriptedExecutor, fail


def _repo(tmp_path: Path, executor: ScriptedExecutor) -> Repository:
    return Repository(tmp_path, executor=executor, remote="origin")


class TestResolveCommit:
    def test_returns_sha(self, tmp_path: Path) -> None:
        executor = ScriptedExecutor().on("rev-parse", result=Ok(f"{SHA_A}\n"))

        assert _repo(tmp_path, executor).resolve_commit("HEAD") == Ok(SHA_A)
        assert executor.calls == [("rev-parse", "--verify", "--quiet", "HEAD^{commit}")]

    def test_unknown_ref(self, tmp_path: Path) -> None:
        executor = ScriptedExecutor().on("rev-parse", result=fail(1))

        result = _repo(tmp_path, executor).resolve_commit("nope")

        assert isinstance(result, Err)
        assert result.error.kind == "ref_resolution"
        assert "nope" in result.error.message

    def test_dry_run_keeps_symbolic_ref(self, tmp_path: Path) -> None:
        repo = Repository(tmp_path, executor=DryRunExecutor(MockConsole()))

        assert repo.resolve_commit("HEAD~1") == Ok("HEAD~1")


class TestTagCommit:
    def test_found(self, tmp_path: Path) -> None:
        executor = ScriptedExecutor().on("rev-parse", result=Ok(SHA_A))

        assert _repo(tmp_path, executor).tag_commit("app-v1") == Found(SHA_A)
        assert executor.calls[0][-1] == "refs/tags/app-v1^{commit}"

    def test_missing_tag_is_not_found(self, tmp_path: Path) -> None:
        executor = ScriptedExecutor().on("rev-parse", result=fail(1))

        assert isinstance(_repo(tmp_path, executor).tag_commit("app-v1"), NotFound)

    def test_git_error_is_probe_failure(self, tmp_path: Path) -> None:
        executor = ScriptedExecutor().on(
            "rev-parse", result=fail(128, "fatal: not a git repository")
        )

        probe = _repo(tmp_path, executor).tag_commit("app-v1")

        assert isinstance(probe, ProbeFailed)
        assert probe.error.returncode == 128


class TestTagAndPush:
    def test_create_tag(self, tmp_path: Path) -> None:
        executor = ScriptedExecutor()

        assert _repo(tmp_path, executor).create_tag("app-v1", SHA_A) == Ok(None)
        assert executor.calls == [("tag", "app-v1", SHA_A)]

    def test_force_tag(self, tmp_path: Path) -> None:
        executor = ScriptedExecutor()

        _repo(tmp_path, executor).create_tag("app", SHA_A, force=True)

        assert executor.calls == [("tag", "-f", "app", SHA_A)]

    def test_push_uses_configured_remote(self, tmp_path: Path) -> None:
        executor = ScriptedExecutor()
        repo = Repository(tmp_path, executor=executor, remote="upstream")

        repo.push_tag("app-v1")
        repo.push_tag("app", force=True)

        assert executor.calls == [
            ("push", "upstream", "refs/tags/app-v1"),
            ("push", "--force", "upstream", "refs/tags/app"),
        ]

    def test_push_failure_keeps_exit_code(self, tmp_path: Path) -> None:
        executor = ScriptedExecutor().on("push", result=fail(128, "remote: denied"))

        result = _repo(tmp_path, executor).push_tag("app-v1")

        assert isinstance(result, Err)
        assert result.error.kind == "tool_execution"
        assert result.error.returncode == 128
        assert result.error.hint == "remote: denied"

    def test_commands_target_repository(self, tmp_path: Path) -> None:
        console = MockConsole()
        executor = DryRunExecutor(console)

        Repository(tmp_path, executor=executor, git="/usr/bin/git").create_tag("app-v1", SHA_A)

        assert executor.calls == [("/usr/bin/git", "-C", str(tmp_path), "tag", "app-v1", SHA_A)]
