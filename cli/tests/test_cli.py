"""Tests for the inspector command line client."""

from __future__ import annotations

import json

import httpx
import pytest

from inspector_cli import main as cli
from inspector_cli.client import ApiClient, ApiError


def run(monkeypatch, *argv):
    monkeypatch.setattr("sys.argv", ["inspector", *argv])
    with pytest.raises(SystemExit) as exc:
        cli.main()
    return exc.value.code


@pytest.fixture
def jsx_file(tmp_path):
    path = tmp_path / "card.jsx"
    path.write_text("<div><p>A</p><p>B</p></div>")
    return path


@pytest.fixture
def edits_file(tmp_path):
    path = tmp_path / "edits.json"
    path.write_text(json.dumps({"//div/p[2]": {"style": {"color": "red"}, "textContent": "Z"}}))
    return path


class TestParseArgs:
    def test_patch(self):
        args = cli.parse_args(["patch", "a.jsx", "--edits", "e.json", "-o", "out.jsx", "--fallback"])
        assert args["command"] == "patch"
        assert args["target"] == "a.jsx"
        assert args["edits"] == "e.json"
        assert args["output"] == "out.jsx"
        assert args["fallback"] is True

    def test_list_paging(self):
        args = cli.parse_args(["list", "--page", "2", "--limit", "5", "--api-url", "http://x"])
        assert (args["page"], args["limit"], args["api_url"]) == (2, 5, "http://x")

    def test_unknown_command(self):
        with pytest.raises(SystemExit):
            cli.parse_args(["frobnicate"])

    def test_missing_value(self):
        with pytest.raises(SystemExit):
            cli.parse_args(["patch", "a.jsx", "--edits"])

    def test_bad_number(self):
        with pytest.raises(SystemExit):
            cli.parse_args(["list", "--limit", "0"])


class TestResolveApiUrl:
    def test_flag_wins(self, monkeypatch):
        monkeypatch.setenv("INSPECTOR_API_URL", "http://env:1")
        assert cli.resolve_api_url("http://flag:2/") == "http://flag:2"

    def test_env_then_default(self, monkeypatch):
        monkeypatch.setenv("INSPECTOR_API_URL", "http://env:1")
        assert cli.resolve_api_url(None) == "http://env:1"
        monkeypatch.delenv("INSPECTOR_API_URL")
        assert cli.resolve_api_url(None) == cli.DEFAULT_API_URL


class TestLocalCommands:
    def test_patch_to_file(self, monkeypatch, jsx_file, edits_file, tmp_path):
        out = tmp_path / "out.jsx"
        assert run(monkeypatch, "patch", str(jsx_file), "--edits", str(edits_file), "-o", str(out)) == 0
        assert out.read_text() == "<div><p>A</p><p style={{color: 'red'}}>Z</p></div>"

    def test_patch_to_stdout(self, monkeypatch, capsys, jsx_file, edits_file):
        assert run(monkeypatch, "patch", str(jsx_file), "--edits", str(edits_file)) == 0
        assert "<p style={{color: 'red'}}>Z</p>" in capsys.readouterr().out

    def test_patch_requires_edits(self, monkeypatch, jsx_file):
        assert run(monkeypatch, "patch", str(jsx_file)) == 1

    def test_analyze(self, monkeypatch, capsys, jsx_file):
        assert run(monkeypatch, "analyze", str(jsx_file)) == 0
        out = capsys.readouterr().out
        assert "//div/p[2]" in out
        assert "  //div/p  @5" in out

    def test_validate(self, monkeypatch, capsys, tmp_path, jsx_file):
        assert run(monkeypatch, "validate", str(jsx_file)) == 0
        bad = tmp_path / "bad.jsx"
        bad.write_text("<div><")
        assert run(monkeypatch, "validate", str(bad)) == 1
        assert "Mismatched JSX tags" in capsys.readouterr().out

    def test_compile(self, monkeypatch, capsys, jsx_file):
        assert run(monkeypatch, "compile", str(jsx_file)) == 0
        assert "OK: Component (wrapped bare JSX)" in capsys.readouterr().out

    def test_missing_file(self, monkeypatch, tmp_path):
        assert run(monkeypatch, "analyze", str(tmp_path / "nope.jsx")) == 1


class TestApiClient:
    def test_save_component(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(201, json={"id": "abc", "code": "<p/>", "url": "u", "shareUrl": "s"})

        client = ApiClient("http://api.test/", transport=httpx.MockTransport(handler))
        data = client.save_component("<p/>", {"//p": {"textContent": "x"}}, title="T")
        client.close()

        assert data["shareUrl"] == "s"
        assert seen["path"] == "/api/components/save"
        assert seen["body"] == {"code": "<p/>", "properties": {"//p": {"textContent": "x"}}, "title": "T"}

    def test_error_message_from_body(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, json={"success": False, "error": "Component not found"})

        client = ApiClient("http://api.test", transport=httpx.MockTransport(handler))
        with pytest.raises(ApiError) as exc:
            client.load_component("123")
        client.close()

        assert exc.value.status_code == 404
        assert "Component not found" in str(exc.value)

    def test_list_params(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.params["page"] == "2"
            assert request.url.params["limit"] == "5"
            return httpx.Response(200, json={"items": [], "pagination": {"page": 2, "limit": 5, "total": 0, "pages": 0}})

        client = ApiClient("http://api.test", transport=httpx.MockTransport(handler))
        assert client.list_components(page=2, limit=5)["items"] == []
        client.close()
