"""
Tests for the Typer CLI.
"""
import pytest
from typer.testing import CliRunner

from adapters.http_client import HttpxTransport
from cli.main import app
from core.config import read_env_file
from core.domain.errors import TransportError

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("CONVERSATIONS_API_KEY", "secret-key")
    monkeypatch.setenv("CONVERSATIONS_ENVIRONMENT", "staging")


def _respond_with(monkeypatch, payload=None, error=None):
    async def send(self, request):
        if error is not None:
            raise error
        return payload

    monkeypatch.setattr(HttpxTransport, "send", send)


class TestShowRequest:
    """`--show-request` prints the request without touching the network."""

    def test_questions(self, monkeypatch):
        _respond_with(monkeypatch, error=AssertionError("network must not be used"))

        result = runner.invoke(app, ["questions", "test1", "--answered", "--include", "answers", "--show-request"])

        assert result.exit_code == 0, result.output
        assert "questions.json" in result.output
        assert "HasAnswers:eq:true" in result.output
        assert "Answers" in result.output
        assert "secret-key" not in result.output

    def test_comments_include_reviews_without_limit(self):
        result = runner.invoke(app, ["comments", "rev-1", "--show-request"])

        assert result.exit_code == 0, result.output
        assert "ReviewId:eq:rev-1" in result.output
        assert "Limit_Reviews" not in result.output


class TestCommands:
    """Commands against a patched transport."""

    def test_reviews_success(self, monkeypatch):
        _respond_with(
            monkeypatch,
            payload={
                "Results": [{"Id": "r1", "ProductId": "test1", "Rating": 5, "Title": "Great"}],
                "TotalResults": 1,
                "Limit": 10,
                "Offset": 0,
            },
        )

        result = runner.invoke(app, ["reviews", "test1", "--rating", "5"])

        assert result.exit_code == 0, result.output
        assert "Great" in result.output
        assert "total=1" in result.output

    def test_failure_exits_with_error(self, monkeypatch):
        _respond_with(monkeypatch, error=TransportError("HTTP 503", status_code=503))

        result = runner.invoke(app, ["author", "author-1"])

        assert result.exit_code == 1
        assert "Request failed" in result.output
        assert "503" in result.output

    def test_json_export(self, monkeypatch, tmp_path):
        _respond_with(monkeypatch, payload={"Results": [{"Id": "author-1", "UserNickname": "ana"}]})
        output = tmp_path / "author.json"

        result = runner.invoke(app, ["author", "author-1", "--json", str(output)])

        assert result.exit_code == 0, result.output
        assert output.exists()
        assert '"user_nickname": "ana"' in output.read_text(encoding="utf-8")


class TestDoctor:
    """Diagnostics and interactive configuration."""

    def test_run_without_key_skips_probe(self, monkeypatch):
        monkeypatch.setenv("CONVERSATIONS_API_KEY", "")

        result = runner.invoke(app, ["doctor", "run"])

        assert result.exit_code == 0, result.output
        assert "MISSING" in result.output
        assert "SKIPPED" in result.output

    def test_run_with_probe(self, monkeypatch):
        _respond_with(monkeypatch, payload={"Results": [{"Id": "test1"}], "TotalResults": 1})

        result = runner.invoke(app, ["doctor", "run"])

        assert result.exit_code == 0, result.output
        assert "API probe" in result.output
        assert "1 result(s)" in result.output

    def test_configure_writes_user_env(self, tmp_path):
        result = runner.invoke(app, ["doctor", "configure"], input="production\nnew-key\nacme\n")

        assert result.exit_code == 0, result.output
        env_file = tmp_path / "config" / "conversations-client" / ".env"
        assert read_env_file(env_file) == {
            "CONVERSATIONS_API_KEY": "new-key",
            "CONVERSATIONS_CLIENT_ID": "acme",
            "CONVERSATIONS_ENVIRONMENT": "production",
        }
