"""
Tests for the yarn invoker.
"""

import io
import os

import pytest

from buildpack.errors import CommandError, CommandExitError
from buildpack.package_managers import Yarn, temporary_env


@pytest.fixture
def node_home(monkeypatch):
    monkeypatch.setenv("NODE_HOME", "/node/home")
    monkeypatch.delenv("npm_config_nodedir", raising=False)
    return "/node/home"


@pytest.fixture
def yarn(build_dir, command_runner, log):
    return Yarn(build_dir, command_runner, log, output=io.StringIO())


class TestOnlineMode:
    def test_runs_install_then_check(self, yarn, build_dir, command_runner, node_home):
        yarn.build()

        assert command_runner.calls == [
            (
                str(build_dir),
                "yarn",
                (
                    "install",
                    "--pure-lockfile",
                    "--ignore-engines",
                    "--cache-folder",
                    str(build_dir / ".cache" / "yarn"),
                ),
            ),
            (str(build_dir), "yarn", ("check",)),
        ]

    def test_log_output(self, yarn, log_output, node_home):
        yarn.build()

        assert log_output.getvalue() == (
            "       Installing node modules (yarn.lock)\n"
            "       Running yarn in online mode\n"
            "       To run yarn in offline mode, see: https://yarnpkg.com/blog/2016/11/24/offline-mirror\n"
            "       yarn.lock and package.json match\n"
        )


class TestOfflineMode:
    @pytest.fixture(autouse=True)
    def offline_mirror(self, build_dir):
        mirror = build_dir / "npm-packages-offline-cache"
        mirror.mkdir()
        return mirror

    def test_configures_mirror_and_runs_offline(self, yarn, build_dir, command_runner, offline_mirror, node_home):
        yarn.build()

        assert command_runner.calls == [
            (str(build_dir), "yarn", ("config", "set", "yarn-offline-mirror", str(offline_mirror))),
            (
                str(build_dir),
                "yarn",
                (
                    "install",
                    "--pure-lockfile",
                    "--ignore-engines",
                    "--cache-folder",
                    str(build_dir / ".cache" / "yarn"),
                    "--offline",
                ),
            ),
            (str(build_dir), "yarn", ("check", "--offline")),
        ]

    def test_log_output(self, yarn, log_output, offline_mirror, node_home):
        yarn.build()

        output = log_output.getvalue()
        assert f"       Found yarn mirror directory {offline_mirror}\n" in output
        assert "       Running yarn in offline mode\n" in output
        assert "online mode" not in output


class TestCheck:
    def test_outdated_lockfile_warns(self, build_dir, log, log_output, node_home, make_runner):
        runner = make_runner(failures={("yarn", "check"): CommandExitError("yarn", ["check"], 1)})

        Yarn(build_dir, runner, log, output=io.StringIO()).build()

        assert log_output.getvalue().endswith("       **WARNING** yarn.lock is outdated\n")

    def test_install_failure_propagates(self, build_dir, log, node_home, make_runner):
        install = (
            "yarn",
            "install",
            "--pure-lockfile",
            "--ignore-engines",
            "--cache-folder",
            str(build_dir / ".cache" / "yarn"),
        )
        runner = make_runner(failures={install: CommandExitError("yarn", list(install[1:]), 1)})

        with pytest.raises(CommandExitError):
            Yarn(build_dir, runner, log, output=io.StringIO()).build()

        assert [call[2][0] for call in runner.calls] == ["install"]

    def test_check_start_failure_propagates(self, build_dir, log, node_home, make_runner):
        runner = make_runner(failures={("yarn", "check"): CommandError("no yarn", program="yarn")})

        with pytest.raises(CommandError):
            Yarn(build_dir, runner, log, output=io.StringIO()).build()


class TestNodeDir:
    def test_nodedir_set_during_install(self, yarn, command_runner, node_home):
        yarn.build()

        nodedirs = [env.get("npm_config_nodedir") for env in command_runner.environs]
        assert nodedirs == ["/node/home", "/node/home"]
        assert "npm_config_nodedir" not in os.environ

    def test_previous_value_restored(self, yarn, node_home, monkeypatch):
        monkeypatch.setenv("npm_config_nodedir", "/previous")

        yarn.build()

        assert os.environ["npm_config_nodedir"] == "/previous"

    def test_nodedir_from_injected_environ(self, build_dir, command_runner, log, node_home):
        yarn = Yarn(build_dir, command_runner, log, output=io.StringIO(), environ={"NODE_HOME": "/injected"})

        yarn.build()

        nodedirs = [env.get("npm_config_nodedir") for env in command_runner.environs]
        assert nodedirs == ["/injected", "/injected"]


class TestTemporaryEnv:
    def test_restores_on_error(self, monkeypatch):
        monkeypatch.delenv("BP_TEMP_TEST", raising=False)

        with pytest.raises(RuntimeError):
            with temporary_env("BP_TEMP_TEST", "1"):
                assert os.environ["BP_TEMP_TEST"] == "1"
                raise RuntimeError("boom")

        assert "BP_TEMP_TEST" not in os.environ
