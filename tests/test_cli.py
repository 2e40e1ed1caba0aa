"""Tests for the regform CLI."""

from pathlib import Path

import pytest
import yaml
from rich.console import Console
from typer.testing import CliRunner

from regform import __version__, cli
from regform.config import Settings

runner = CliRunner()

VALID_ARGS = [
    "--username", "alice",
    "--fav-language", "rust",
    "--fav-food", "pizza",
    "--agree",
]


@pytest.fixture(autouse=True)
def plain_console(monkeypatch: pytest.MonkeyPatch) -> None:
    """Plain, wide output so assertions see unstyled, unwrapped text."""
    monkeypatch.setattr(
        cli, "console", Console(color_system=None, force_terminal=False, width=200)
    )


@pytest.fixture
def use_stub(monkeypatch: pytest.MonkeyPatch, make_client):
    """Route the CLI's client through a StubAdapter; records the settings used."""
    seen: list[Settings] = []

    def _install(adapter):
        def _create(settings: Settings):
            seen.append(settings)
            return make_client(adapter)

        monkeypatch.setattr(cli, "create_client", _create)
        return seen

    return _install


class TestVersion:
    """Tests for the --version option."""

    def test_version(self) -> None:
        result = runner.invoke(cli.app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestCheck:
    """Tests for the check command."""

    def test_valid_form(self) -> None:
        result = runner.invoke(cli.app, ["check", *VALID_ARGS])

        assert result.exit_code == 0
        assert "[ Submit ]" in result.output
        assert "(disabled)" not in result.output

    def test_short_username(self) -> None:
        args = ["check", "-u", "ab", "-l", "rust", "-f", "pizza", "--agree"]
        result = runner.invoke(cli.app, args)

        assert result.exit_code == 1
        assert "username must be at least 3 characters" in result.output
        assert "(disabled)" in result.output

    def test_empty_form_lists_every_error(self) -> None:
        result = runner.invoke(cli.app, ["check"])

        assert result.exit_code == 1
        assert "username is required" in result.output
        assert "favLanguage is required" in result.output
        assert "favFood is required" in result.output
        assert "agreement must be accepted" in result.output


class TestSubmit:
    """Tests for the submit command."""

    def test_success(self, use_stub, stub_adapter) -> None:
        adapter = stub_adapter(status_code=201, body={"message": "Success! Welcome alice"})
        use_stub(adapter)

        result = runner.invoke(cli.app, ["submit", *VALID_ARGS])

        assert result.exit_code == 0
        assert "Success! Welcome alice" in result.output
        assert adapter.last_payload()["username"] == "alice"
        # form is reset after success
        assert "Username: Type Username" in result.output

    def test_rejected(self, use_stub, stub_adapter) -> None:
        use_stub(stub_adapter(status_code=422, body={"message": "username already taken"}))

        result = runner.invoke(cli.app, ["submit", *VALID_ARGS])

        assert result.exit_code == 1
        assert "username already taken" in result.output
        assert "Username: alice" in result.output

    def test_invalid_form_not_sent(self, use_stub, stub_adapter) -> None:
        adapter = stub_adapter(body={"message": "ok"})
        use_stub(adapter)

        result = runner.invoke(cli.app, ["submit", "-u", "ab"])

        assert result.exit_code == 1
        assert "submit is disabled" in result.output
        assert adapter.requests == []

    def test_force_sends_invalid_form(self, use_stub, stub_adapter) -> None:
        adapter = stub_adapter(status_code=400, body={"message": "favLanguage is required"})
        use_stub(adapter)

        result = runner.invoke(cli.app, ["submit", "-u", "ab", "--force"])

        assert result.exit_code == 1
        assert len(adapter.requests) == 1

    def test_endpoint_option(self, use_stub, stub_adapter) -> None:
        seen = use_stub(stub_adapter(body={"message": "ok"}))

        result = runner.invoke(
            cli.app,
            ["submit", *VALID_ARGS, "--endpoint", "https://other.test/reg", "--timeout", "2"],
        )

        assert result.exit_code == 0
        assert seen[0].endpoint == "https://other.test/reg"
        assert seen[0].timeout == 2.0

    def test_bad_config_reported(self, isolated_config: Path) -> None:
        isolated_config.mkdir(parents=True)
        (isolated_config / "config.yaml").write_text("- not\n- a mapping\n")

        result = runner.invoke(cli.app, ["submit", *VALID_ARGS])

        assert result.exit_code == 1
        assert "Error:" in result.output


class TestRegister:
    """Tests for the interactive register command."""

    def test_register_success(self, use_stub, stub_adapter) -> None:
        adapter = stub_adapter(status_code=201, body={"message": "Success! Welcome alice"})
        use_stub(adapter)

        result = runner.invoke(cli.app, ["register"], input="alice\nrust\npizza\ny\ny\n")

        assert result.exit_code == 0
        assert "Success! Welcome alice" in result.output
        assert adapter.last_payload() == {
            "username": "alice",
            "favLanguage": "rust",
            "favFood": "pizza",
            "agreement": True,
        }

    def test_register_reprompts_on_error(self, use_stub, stub_adapter) -> None:
        adapter = stub_adapter(status_code=201, body={"message": "Success! Welcome alice"})
        use_stub(adapter)

        result = runner.invoke(
            cli.app, ["register"], input="ab\nalice\npython\nrust\npizza\ny\ny\n"
        )

        assert result.exit_code == 0
        assert "username must be at least 3 characters" in result.output
        assert "favLanguage must be either javascript or rust" in result.output
        assert adapter.last_payload()["favLanguage"] == "rust"

    def test_register_declined_agreement_then_edit(self, use_stub, stub_adapter) -> None:
        adapter = stub_adapter(status_code=201, body={"message": "Success! Welcome alice"})
        use_stub(adapter)

        # decline, choose to edit, keep the other answers, then accept
        result = runner.invoke(
            cli.app, ["register"], input="alice\nrust\npizza\nn\ny\n\n\n\ny\ny\n"
        )

        assert result.exit_code == 0
        assert "agreement must be accepted" in result.output
        assert adapter.last_payload() == {
            "username": "alice",
            "favLanguage": "rust",
            "favFood": "pizza",
            "agreement": True,
        }

    def test_register_declined_agreement_then_quit(self, use_stub, stub_adapter) -> None:
        adapter = stub_adapter(body={"message": "ok"})
        use_stub(adapter)

        result = runner.invoke(cli.app, ["register"], input="alice\nrust\npizza\nn\nn\n")

        assert result.exit_code == 1
        assert "agreement must be accepted" in result.output
        assert "Cancelled" in result.output
        assert adapter.requests == []

    def test_register_rejected_then_quit(self, use_stub, stub_adapter) -> None:
        use_stub(stub_adapter(status_code=409, body={"message": "username already taken"}))

        result = runner.invoke(cli.app, ["register"], input="alice\nrust\npizza\ny\ny\nn\n")

        assert result.exit_code == 1
        assert "username already taken" in result.output

    def test_register_cancelled(self, use_stub, stub_adapter) -> None:
        adapter = stub_adapter(body={"message": "ok"})
        use_stub(adapter)

        result = runner.invoke(cli.app, ["register"], input="alice\nrust\npizza\ny\nn\n")

        assert result.exit_code == 1
        assert "Cancelled" in result.output
        assert adapter.requests == []


class TestInitAndConfig:
    """Tests for the init and config commands."""

    def test_init_writes_config(self, isolated_config: Path) -> None:
        result = runner.invoke(
            cli.app, ["init", "--endpoint", "https://mine.test/reg", "--timeout", "4"]
        )

        assert result.exit_code == 0
        data = yaml.safe_load((isolated_config / "config.yaml").read_text())
        assert data == {"endpoint": "https://mine.test/reg", "timeout": 4.0}

    def test_init_refuses_overwrite(self, isolated_config: Path) -> None:
        assert runner.invoke(cli.app, ["init"]).exit_code == 0

        result = runner.invoke(cli.app, ["init"])

        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_init_force(self, isolated_config: Path) -> None:
        runner.invoke(cli.app, ["init"])
        result = runner.invoke(cli.app, ["init", "--force", "--timeout", "9"])

        assert result.exit_code == 0
        data = yaml.safe_load((isolated_config / "config.yaml").read_text())
        assert data["timeout"] == 9.0

    def test_init_rejects_bad_timeout(self, isolated_config: Path) -> None:
        result = runner.invoke(cli.app, ["init", "--timeout", "0"])

        assert result.exit_code == 1
        assert not (isolated_config / "config.yaml").exists()

    def test_config_shows_settings(self) -> None:
        runner.invoke(cli.app, ["init", "--endpoint", "https://mine.test/reg"])
        result = runner.invoke(cli.app, ["config"])

        assert result.exit_code == 0
        assert "https://mine.test/reg" in result.output
        assert "config.yaml" in result.output

    def test_bracketed_endpoint_printed_literally(self) -> None:
        endpoint = "https://mine.test/[/red]reg"
        assert runner.invoke(cli.app, ["init", "--endpoint", endpoint]).exit_code == 0

        result = runner.invoke(cli.app, ["config"])

        assert result.exit_code == 0
        assert endpoint in result.output
