# =============================================================================
# REMDOC CLI TESTS
# =============================================================================
# Commands run against an in-memory backend that honours the Backend contract.
# =============================================================================

from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from remdoc.core.backend import Backend
from remdoc.core.errors import AuthError, ProtocolError
from remdoc.domain.models import Container, DeployOptions
from remdoc.infra.config import RemdocConfig, load_config, save_config
from remdoc.main import app, get_backend

runner = CliRunner()


class FakeBackend:
    """In-memory Backend: records calls, optionally fails."""

    def __init__(self, containers=None, error=None):
        self.containers = containers or []
        self.error = error
        self.calls = []
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.closed = True

    def _record(self, *call):
        self.calls.append(call)
        if self.error:
            raise self.error

    def validate(self, timeout=None):
        self._record("validate")

    def list_containers(self, timeout=None):
        self._record("list", timeout)
        return list(self.containers)

    def deploy_container(self, opts, timeout=None):
        self._record("deploy", opts)
        return Container(id="abcdef012345", name=opts.name, image=opts.image, state="running")

    def remove_container(self, container_id, force=False, timeout=None):
        self._record("rm", container_id, force)

    def stop_container(self, container_id, timeout=None):
        self._record("stop", container_id)

    def start_container(self, container_id, timeout=None):
        self._record("start", container_id)

    def deploy_compose_stack(self, name, compose_content, timeout=None):
        self._record("compose", name, compose_content)
        return 42


@pytest.fixture
def fake():
    backend = FakeBackend()
    with patch("remdoc.main.get_backend", return_value=backend):
        yield backend


class TestFakeBackend:
    def test_fake_satisfies_contract(self):
        assert isinstance(FakeBackend(), Backend)


class TestStatus:
    """Test `remdoc status`."""

    def test_lists_containers(self, fake):
        fake.containers = [
            Container(id="abcdef012345", name="web", image="nginx", state="running", status="Up"),
            Container(id="0123456789ab", name="db", image="postgres", state="exited", status="Exited (0)"),
        ]

        result = runner.invoke(app, ["status"])

        assert result.exit_code == 0
        for text in ("CONTAINER ID", "abcdef012345", "web", "db", "postgres", "exited"):
            assert text in result.output

    def test_uses_status_budget(self, fake):
        runner.invoke(app, ["status"])
        assert fake.calls == [("list", 15.0)]

    def test_timeout_override(self, fake, monkeypatch):
        monkeypatch.setenv("REMDOC_TIMEOUT", "3")
        runner.invoke(app, ["status"])
        assert fake.calls == [("list", 3.0)]

    def test_empty(self, fake):
        result = runner.invoke(app, ["status"])
        assert result.exit_code == 0
        assert "No containers found." in result.output

    def test_backend_error_exits_non_zero(self, fake):
        fake.error = AuthError("invalid JWT token (unauthorized)")

        result = runner.invoke(app, ["status"])

        assert result.exit_code == 1
        assert "invalid JWT token" in result.output

    def test_not_logged_in(self):
        result = runner.invoke(app, ["status"])

        assert result.exit_code == 1
        assert "remdoc login" in result.output


class TestDeploy:
    """Test `remdoc deploy`."""

    def test_deploy_with_options(self, fake):
        result = runner.invoke(
            app,
            [
                "deploy", "--image", "postgres:14", "--name", "my-db",
                "-p", "5432:5432", "-e", "POSTGRES_PASSWORD=secret", "-e", "POSTGRES_DB=app",
                "--restart", "always", "--rm",
            ],
        )

        assert result.exit_code == 0, result.output
        opts = fake.calls[0][1]
        assert isinstance(opts, DeployOptions)
        assert opts.name == "my-db"
        assert [(p.host_port, p.container_port, p.protocol) for p in opts.ports] == [
            ("5432", "5432", "tcp")
        ]
        assert opts.env == {"POSTGRES_PASSWORD": "secret", "POSTGRES_DB": "app"}
        assert opts.restart == "always"
        assert opts.auto_remove is True
        assert "abcdef012345" in result.output

    def test_bad_port_never_reaches_backend(self, fake):
        result = runner.invoke(app, ["deploy", "--image", "nginx", "-p", "8080"])

        assert result.exit_code == 1
        assert "HOST:CONTAINER" in result.output
        assert fake.calls == []

    def test_bad_env_never_reaches_backend(self, fake):
        result = runner.invoke(app, ["deploy", "--image", "nginx", "-e", "NOEQUALS"])

        assert result.exit_code == 1
        assert fake.calls == []

    def test_image_required(self, fake):
        result = runner.invoke(app, ["deploy"])
        assert result.exit_code != 0
        assert fake.calls == []


class TestLifecycleCommands:
    """Test start / stop / rm."""

    def test_start(self, fake):
        result = runner.invoke(app, ["start", "web"])
        assert result.exit_code == 0
        assert fake.calls == [("start", "web")]

    def test_stop(self, fake):
        result = runner.invoke(app, ["stop", "web"])
        assert result.exit_code == 0
        assert fake.calls == [("stop", "web")]

    def test_rm_force(self, fake):
        result = runner.invoke(app, ["rm", "web", "--force"])
        assert result.exit_code == 0
        assert fake.calls == [("rm", "web", True)]

    def test_rm_running_rejected(self, fake):
        fake.error = ProtocolError(
            "Portainer API error (status 409): cannot remove a running container",
            status_code=409,
        )

        result = runner.invoke(app, ["rm", "web"])

        assert result.exit_code == 1
        assert fake.calls == [("rm", "web", False)]
        assert "409" in result.output

    @pytest.mark.parametrize("args", [["start", "web"], ["stop", "web"], ["rm", "web"], ["status"]])
    def test_backend_closed_after_command(self, fake, args):
        runner.invoke(app, args)
        assert fake.closed

    def test_backend_closed_on_error(self, fake):
        fake.error = ProtocolError("Portainer API error (status 500): boom", status_code=500)

        runner.invoke(app, ["stop", "web"])

        assert fake.closed


class TestGetBackend:
    """Test backend construction from the saved config."""

    def test_built_from_config_and_closed(self):
        save_config(RemdocConfig(portainer_url="https://p.example.com", jwt="jwt-123"))

        with patch("remdoc.main.PortainerBackend") as mock_backend_cls:
            with get_backend() as backend:
                assert backend is mock_backend_cls.return_value.__enter__.return_value

        assert mock_backend_cls.call_args.args == ("https://p.example.com", "jwt-123")
        mock_backend_cls.return_value.__exit__.assert_called_once()


class TestCompose:
    """Test `remdoc compose`."""

    def test_compose_defaults_name(self, fake, tmp_path):
        path = tmp_path / "shop.yml"
        path.write_text("services:\n  web:\n    image: nginx\n")

        result = runner.invoke(app, ["compose", "-f", str(path)])

        assert result.exit_code == 0, result.output
        assert fake.calls == [("compose", "shop", path.read_text())]
        assert "42" in result.output

    def test_compose_missing_file(self, fake, tmp_path):
        result = runner.invoke(app, ["compose", "-f", str(tmp_path / "missing.yml")])

        assert result.exit_code == 1
        assert fake.calls == []


class TestLogin:
    """Test `remdoc login`."""

    def test_login_saves_config(self):
        backend = FakeBackend()
        with patch("remdoc.main.obtain_token", return_value="jwt-123") as mock_token, patch(
            "remdoc.main.PortainerBackend"
        ) as mock_backend_cls:
            mock_backend_cls.return_value.__enter__.return_value = backend

            result = runner.invoke(
                app,
                ["login", "-u", "admin", "-p", "secret", "--url", "https://p.example.com/"],
            )

        assert result.exit_code == 0, result.output
        assert mock_token.call_args.args == ("https://p.example.com", "admin", "secret")
        assert backend.calls == [("validate",)]
        assert load_config() == RemdocConfig(portainer_url="https://p.example.com", jwt="jwt-123")

    def test_login_prompts(self):
        with patch("remdoc.main.obtain_token", return_value="jwt-123"), patch(
            "remdoc.main.PortainerBackend"
        ) as mock_backend_cls:
            mock_backend_cls.return_value.__enter__.return_value = FakeBackend()

            result = runner.invoke(
                app, ["login", "-u", "admin"], input="https://p.example.com\nsecret\n"
            )

        assert result.exit_code == 0, result.output
        assert load_config().portainer_url == "https://p.example.com"

    def test_login_rejected_keeps_old_config(self):
        save_config(RemdocConfig(portainer_url="https://old", jwt="old"))

        with patch(
            "remdoc.main.obtain_token",
            side_effect=AuthError("invalid username or password"),
        ):
            result = runner.invoke(
                app, ["login", "-u", "admin", "-p", "bad", "--url", "https://p.example.com"]
            )

        assert result.exit_code == 1
        assert "invalid username or password" in result.output
        assert load_config().jwt == "old"
