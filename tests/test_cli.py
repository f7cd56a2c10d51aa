"""
Tests for the gitall CLI commands.
"""
import json
import os
import sys
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from gitall.cli import cli
from gitall.exit_codes import (
    ALREADY_TRACKED,
    CONFIG_ERROR,
    DATA_ERROR,
    GIT_NOT_FOUND,
    INTEGRITY_ERROR,
    NOT_A_REPO,
)
from gitall.oplog import OperationLog
from gitall.registry import RegistryStore


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def db_args(gitall_config):
    return ["--db", str(gitall_config.registry_path)]


@pytest.fixture
def git_on_path():
    with patch("gitall.infra.git_client.shutil.which", return_value="/usr/bin/git"):
        yield


@pytest.fixture
def fake_git():
    """Replace process execution; record (args, cwd) per call."""
    calls = []

    def _run(self, args, cwd, stdin=None, stdout=None, stderr=None):
        calls.append((list(args), str(cwd)))
        return 0

    with patch("gitall.infra.git_client.GitClient.run_streaming", _run):
        yield calls


class TestAdd:

    def test_add_repo(self, runner, db_args, gitall_config, make_repo):
        repo = make_repo("project")

        result = runner.invoke(cli, [*db_args, "add", str(repo)])

        assert result.exit_code == 0, result.output
        assert "Repo added" in result.output
        assert RegistryStore(gitall_config).load() == [str(repo)]

    def test_add_not_a_repo(self, runner, db_args, make_repo):
        plain = make_repo("plain", git_dir=False)

        result = runner.invoke(cli, [*db_args, "add", str(plain)])

        assert result.exit_code == NOT_A_REPO
        assert "Error:" in result.output
        assert "not a git repo" in result.output

    def test_add_duplicate(self, runner, db_args, make_repo):
        repo = make_repo("project")
        runner.invoke(cli, [*db_args, "add", str(repo)])

        result = runner.invoke(cli, [*db_args, "add", str(repo)])

        assert result.exit_code == ALREADY_TRACKED
        assert "already in registry" in result.output


    @pytest.mark.skipif(sys.platform != "linux", reason="needs a filesystem that accepts non-UTF-8 names")
    def test_add_undecodable_name(self, runner, db_args, gitall_config, tmp_path):
        raw = os.path.join(os.fsencode(tmp_path), b"bad\xffname")
        os.makedirs(os.path.join(raw, b".git"))

        result = runner.invoke(cli, [*db_args, "add", os.fsdecode(raw)])

        assert result.exit_code == DATA_ERROR
        assert result.output.startswith("Error:")
        assert len(result.output.strip().splitlines()) == 1
        assert not gitall_config.registry_path.exists()

    def test_add_path_with_newline(self, runner, db_args, gitall_config, make_repo):
        result = runner.invoke(cli, [*db_args, "add", str(make_repo("a\nb"))])

        assert result.exit_code == DATA_ERROR
        assert "line break" in result.output
        assert len(result.output.strip().splitlines()) == 1


class TestDelete:

    def test_delete_tracked(self, runner, db_args, gitall_config, make_repo):
        repo = make_repo("project")
        runner.invoke(cli, [*db_args, "add", str(repo)])

        result = runner.invoke(cli, [*db_args, "delete", str(repo)])

        assert result.exit_code == 0
        assert "Repo deleted" in result.output
        assert RegistryStore(gitall_config).load() == []

    def test_delete_untracked_succeeds(self, runner, db_args):
        result = runner.invoke(cli, [*db_args, "delete", "/not/tracked"])
        assert result.exit_code == 0
        assert "not tracked" in result.output


class TestReinit:

    def test_reinit_with_yes(self, runner, db_args, gitall_config, make_repo):
        runner.invoke(cli, [*db_args, "add", str(make_repo("a"))])
        OperationLog(gitall_config.log_path).append("x: git status")

        result = runner.invoke(cli, [*db_args, "reinit", "--yes"])

        assert result.exit_code == 0
        assert "Database reset" in result.output
        assert gitall_config.registry_path.read_bytes() == b""
        assert not gitall_config.log_path.exists()

    def test_reinit_prompt_declined(self, runner, db_args, gitall_config, make_repo):
        runner.invoke(cli, [*db_args, "add", str(make_repo("a"))])

        result = runner.invoke(cli, [*db_args, "reinit"], input="n\n")

        assert result.exit_code != 0
        assert len(RegistryStore(gitall_config).load()) == 1

    def test_reinit_prompt_accepted(self, runner, db_args, gitall_config, make_repo):
        runner.invoke(cli, [*db_args, "add", str(make_repo("a"))])

        result = runner.invoke(cli, [*db_args, "reinit"], input="y\n")

        assert result.exit_code == 0
        assert RegistryStore(gitall_config).load() == []


class TestList:

    def test_list_empty(self, runner, db_args):
        result = runner.invoke(cli, [*db_args, "list"])
        assert result.exit_code == 0
        assert result.output == ""

    def test_list_in_order(self, runner, db_args, make_repo):
        repos = [str(make_repo(name)) for name in ["b", "a"]]
        for repo in repos:
            runner.invoke(cli, [*db_args, "add", repo])

        result = runner.invoke(cli, [*db_args, "list"])

        assert result.exit_code == 0
        assert result.output.splitlines() == repos

    def test_list_json(self, runner, db_args, make_repo):
        repo = str(make_repo("a"))
        runner.invoke(cli, [*db_args, "add", repo])

        result = runner.invoke(cli, [*db_args, "list", "--json"])

        assert json.loads(result.output.strip()) == {"index": 0, "path": repo}


class TestOps:

    def test_ops_empty(self, runner, db_args):
        result = runner.invoke(cli, [*db_args, "ops"])
        assert result.exit_code == 0
        assert result.output == ""

    def test_ops_newest_first(self, runner, db_args, gitall_config):
        log = OperationLog(gitall_config.log_path)
        log.append("/a: git fetch")
        log.append("/b: git fetch")

        result = runner.invoke(cli, [*db_args, "ops"])
        assert result.output.splitlines() == ["/b: git fetch", "/a: git fetch"]

        result = runner.invoke(cli, [*db_args, "ops", "--json"])
        first = json.loads(result.output.splitlines()[0])
        assert first == {"index": 0, "entry": "/b: git fetch"}


    def test_ops_corrupt_log(self, runner, db_args, gitall_config):
        gitall_config.log_path.parent.mkdir(parents=True, exist_ok=True)
        gitall_config.log_path.write_bytes(b"\xff\xfe\n")

        result = runner.invoke(cli, [*db_args, "ops"])

        assert result.exit_code == DATA_ERROR
        assert result.output.startswith("Error: UnicodeDecodeError")


class TestVerify:

    def test_verify_ok(self, runner, db_args, make_repo):
        runner.invoke(cli, [*db_args, "add", str(make_repo("a"))])
        result = runner.invoke(cli, [*db_args, "verify"])
        assert result.exit_code == 0
        assert "digest OK (1 repositories)" in result.output

    def test_verify_tampered(self, runner, db_args, gitall_config, make_repo):
        runner.invoke(cli, [*db_args, "add", str(make_repo("a"))])
        gitall_config.registry_path.write_text("/somewhere/else\n")

        result = runner.invoke(cli, [*db_args, "verify"])

        assert result.exit_code == INTEGRITY_ERROR
        assert "digest mismatch" in result.output


class TestRun:

    def test_run_in_all_repos(self, runner, db_args, gitall_config, make_repo,
                              git_on_path, fake_git):
        repos = [str(make_repo(name)) for name in ["a", "b"]]
        for repo in repos:
            runner.invoke(cli, [*db_args, "add", repo])

        result = runner.invoke(cli, [*db_args, "run", "log", "--oneline", "-1"])

        assert result.exit_code == 0, result.output
        assert fake_git == [(["log", "--oneline", "-1"], repo) for repo in repos]
        assert f"Running in: {repos[0]}" in result.output
        assert "2 succeeded, 0 failed, 0 skipped" in result.output
        assert OperationLog(gitall_config.log_path).list()[0] == f"{repos[1]}: git log --oneline -1"

    def test_run_with_exclude(self, runner, db_args, make_repo, git_on_path, fake_git):
        a, b, c = (str(make_repo(name)) for name in ["a", "b", "c"])
        for repo in (a, b, c):
            runner.invoke(cli, [*db_args, "add", repo])

        result = runner.invoke(cli, [*db_args, "run", "--exclude", f"{a},{c}", "status"])

        assert result.exit_code == 0, result.output
        assert fake_git == [(["status"], b)]

    def test_run_options_after_subcommand_go_to_git(self, runner, db_args, make_repo,
                                                    git_on_path, fake_git):
        repo = str(make_repo("a"))
        runner.invoke(cli, [*db_args, "add", repo])

        result = runner.invoke(cli, [*db_args, "run", "status", "--exclude", "x", "-s"])

        assert result.exit_code == 0, result.output
        assert fake_git == [(["status", "--exclude", "x", "-s"], repo)]

    def test_run_tampered_registry(self, runner, db_args, gitall_config, make_repo,
                                   git_on_path, fake_git):
        runner.invoke(cli, [*db_args, "add", str(make_repo("a"))])
        with open(gitall_config.registry_path, "a") as f:
            f.write("/injected\n")

        result = runner.invoke(cli, [*db_args, "run", "status"])

        assert result.exit_code == INTEGRITY_ERROR
        assert "digest mismatch" in result.output
        assert fake_git == []

    def test_run_without_registry(self, runner, db_args, git_on_path, fake_git):
        result = runner.invoke(cli, [*db_args, "run", "status"])
        assert result.exit_code == INTEGRITY_ERROR
        assert "digest file missing" in result.output

    def test_run_without_git(self, runner, db_args, make_repo, fake_git):
        runner.invoke(cli, [*db_args, "add", str(make_repo("a"))])

        with patch("gitall.infra.git_client.shutil.which", return_value=None):
            result = runner.invoke(cli, [*db_args, "run", "status"])

        assert result.exit_code == GIT_NOT_FOUND
        assert "not installed" in result.output
        assert fake_git == []

    def test_run_requires_git_args(self, runner, db_args):
        result = runner.invoke(cli, [*db_args, "run"])
        assert result.exit_code == 2


class TestConfigCommand:

    def test_show_files(self, runner, db_args, gitall_config):
        result = runner.invoke(cli, [*db_args, "config", "show", "--files"])
        assert json.loads(result.output) == {
            "registry": str(gitall_config.registry_path),
            "digest": str(gitall_config.digest_path),
            "log": str(gitall_config.log_path),
        }

    def test_show_config(self, runner):
        result = runner.invoke(cli, ["config", "show"])
        assert json.loads(result.output)["general"]["database"] == "~/.gitall.db"

    def test_database_from_env(self, runner, tmp_path, monkeypatch, make_repo):
        db = tmp_path / "env.db"
        monkeypatch.setenv("GITALL_GENERAL_DATABASE", str(db))

        result = runner.invoke(cli, ["add", str(make_repo("a"))])

        assert result.exit_code == 0, result.output
        assert db.exists()

    def test_bad_config_file(self, runner, isolated_env):
        config_dir = isolated_env / ".gitall"
        config_dir.mkdir()
        (config_dir / "config.json").write_text("{broken")

        result = runner.invoke(cli, ["list"])

        assert result.exit_code == CONFIG_ERROR
        assert "Error loading config" in result.output

    def test_scalar_general_from_env(self, runner, monkeypatch):
        monkeypatch.setenv("GITALL_GENERAL", "oops")

        result = runner.invoke(cli, ["list"])

        assert result.exit_code == CONFIG_ERROR
        assert result.output.startswith("Error:")
