"""Tests for CLI dispatch.

These tests drive dispatch() with a stubbed fetcher or client and check
stdout/stderr and exit codes.
"""

import json

import pytest

from pandadoc_cli.pandadoc_client import FetchResponse, PandaDocClient, PandaDocConnectionError
from pandadoc_cli.runner.args import ParsedCommand, parse_args
from pandadoc_cli.runner.main import COMMANDS, dispatch, main, safe_filename

from fixtures import CountingClient, StubFetcher, json_response


def run(argv, client, config):
    return dispatch(parse_args(argv), client=client, config=config)


class TestHelpAndUsage:
    """Paths that never reach the network."""

    @pytest.mark.parametrize("argv", [[], ["help"], ["list", "--help"], ["-h"]])
    def test_help_exits_zero(self, argv, capsys, config):
        client = CountingClient()

        assert run(argv, client, config) == 0

        assert "USAGE:" in capsys.readouterr().out
        assert client.calls == 0

    def test_all_commands_registered(self):
        assert set(COMMANDS) == {
            "list",
            "get",
            "details",
            "download",
            "templates",
            "folders",
            "me",
            "audit",
            "fields",
            "send",
        }

    def test_unknown_command(self, capsys, config):
        client = CountingClient()

        assert run(["frobnicate"], client, config) == 1

        err = capsys.readouterr().err
        assert "Unknown command 'frobnicate'" in err
        assert "pandadoc help" in err
        assert client.calls == 0

    @pytest.mark.parametrize("command", ["get", "details", "download", "audit", "fields", "send"])
    def test_document_id_required(self, command, capsys, config):
        client = CountingClient()

        assert dispatch(ParsedCommand(command=command), client=client, config=config) == 1

        err = capsys.readouterr().err
        assert "Document ID required" in err
        assert f"Usage: pandadoc {command} <documentId>" in err
        assert client.calls == 0

    def test_document_id_checked_before_credentials(self, capsys, monkeypatch, tmp_path):
        """Missing ID is reported even when no token is configured."""
        monkeypatch.delenv("PANDADOC_API_KEY", raising=False)

        assert main(["get", "--config", str(tmp_path / "none.yaml")]) == 1

        assert "Document ID required" in capsys.readouterr().err


class TestOutputModes:
    """JSON passthrough vs summary text."""

    def test_get_json(self, capsys, config, sample_document):
        fetcher = StubFetcher([json_response(sample_document)])

        assert run(["get", "abc"], PandaDocClient(fetcher), config) == 0

        assert json.loads(capsys.readouterr().out) == sample_document

    def test_get_summary(self, capsys, config, sample_document):
        fetcher = StubFetcher([json_response(sample_document)])

        assert run(["get", "abc", "--summary"], PandaDocClient(fetcher), config) == 0

        out = capsys.readouterr().out
        assert out.startswith("Sample Contract\n")
        assert "  Status: Sent" in out

    def test_list_translates_options(self, capsys, config):
        fetcher = StubFetcher([json_response({"results": []})])

        argv = ["list", "-s", "completed", "--folder", "f1", "--order", "name", "--summary"]
        assert run(argv, PandaDocClient(fetcher), config) == 0

        assert fetcher.calls[0]["url"].endswith(
            "/documents?status=document.completed&folder_uuid=f1&order_by=name"
        )
        assert "Found 0 document(s)" in capsys.readouterr().out

    def test_templates_and_folders(self, capsys, config):
        fetcher = StubFetcher(
            [json_response({"results": []}), json_response({"results": []})]
        )
        client = PandaDocClient(fetcher)

        assert run(["templates", "-q", "nda", "--deleted"], client, config) == 0
        assert run(["folders", "--parent", "p1"], client, config) == 0

        assert fetcher.calls[0]["url"].endswith("/templates?q=nda&deleted=true")
        assert fetcher.calls[1]["url"].endswith("/documents/folders?parent_uuid=p1")

    def test_me_audit_fields(self, capsys, config):
        fetcher = StubFetcher(
            [
                json_response({"first_name": "Ada", "last_name": "L", "email": "a@x.com", "id": "m1"}),
                json_response({"results": [{"action": "created"}]}),
                json_response({"fields": [{"name": "Name"}]}),
            ]
        )
        client = PandaDocClient(fetcher)

        assert run(["me", "--summary"], client, config) == 0
        assert run(["audit", "abc", "--summary"], client, config) == 0
        assert run(["fields", "abc", "--summary"], client, config) == 0

        out = capsys.readouterr().out
        assert "Ada L" in out
        assert "Audit Trail (1 events)" in out
        assert "Name: (empty)" in out
        assert "/public/v2/documents/abc/audit-trail" in fetcher.calls[1]["url"]

    def test_send_forwards_whitelist_only(self, capsys, config):
        fetcher = StubFetcher([json_response({"status": "document.sent"})])

        argv = ["send", "abc", "-m", "Please sign", "--silent", "--cc", "x@y.com", "--summary"]
        assert run(argv, PandaDocClient(fetcher), config) == 0

        assert json.loads(fetcher.calls[0]["body"]) == {"message": "Please sign", "silent": True}
        assert "Document sent successfully!" in capsys.readouterr().out


class TestDownload:
    """Output path resolution and download variants."""

    def test_explicit_output(self, capsys, config, tmp_path):
        target = tmp_path / "nested" / "dir" / "out.pdf"
        fetcher = StubFetcher([FetchResponse(status_code=200, content=b"%PDF-bytes")])

        assert run(["download", "abc", "-o", str(target)], PandaDocClient(fetcher), config) == 0

        assert target.read_bytes() == b"%PDF-bytes"
        assert len(fetcher.calls) == 1
        assert f"Downloaded to: {target}" in capsys.readouterr().out

    def test_default_output_from_document_name(self, capsys, config):
        fetcher = StubFetcher(
            [
                json_response({"id": "abc", "name": "Q3 Contract / ACME, Inc."}),
                FetchResponse(status_code=200, content=b"%PDF"),
            ]
        )

        assert run(["download", "abc"], PandaDocClient(fetcher), config) == 0

        expected = config.download_dir / "Q3_Contract___ACME__Inc_.pdf"
        assert expected.read_bytes() == b"%PDF"
        assert fetcher.calls[1]["url"].endswith("/documents/abc/download")

    def test_protected_variant(self, config, tmp_path):
        fetcher = StubFetcher([FetchResponse(status_code=200, content=b"%PDF")])

        argv = ["download", "abc", "--protected", "--output", str(tmp_path / "c.pdf")]
        assert run(argv, PandaDocClient(fetcher), config) == 0

        assert fetcher.calls[0]["url"].endswith("/documents/abc/download-protected")

    def test_watermark_forwarded(self, config, tmp_path):
        fetcher = StubFetcher([FetchResponse(status_code=200, content=b"%PDF")])

        argv = ["download", "abc", "-o", str(tmp_path / "w.pdf"), "--watermark"]
        assert run(argv, PandaDocClient(fetcher), config) == 0

        assert fetcher.calls[0]["url"].endswith("/documents/abc/download?watermark=true")

    def test_failed_download_writes_nothing(self, capsys, config, tmp_path):
        target = tmp_path / "fail.pdf"
        fetcher = StubFetcher([json_response({"detail": "Document not completed"}, status=409)])

        assert run(["download", "abc", "-o", str(target)], PandaDocClient(fetcher), config) == 1

        assert not target.exists()
        assert "Document not completed" in capsys.readouterr().err

    def test_safe_filename(self):
        assert safe_filename("a b/c-d_e.pdf") == "a_b_c-d_e_pdf"


class TestErrorHandling:
    """Every failure exits 1 and prints only the error."""

    def test_upstream_error_json(self, capsys, config):
        fetcher = StubFetcher([json_response({"detail": "Not found"}, status=404)])

        assert run(["get", "abc"], PandaDocClient(fetcher), config) == 1

        captured = capsys.readouterr()
        assert captured.out == ""
        assert json.loads(captured.err) == {
            "error": "Not found",
            "status": 404,
            "data": {"detail": "Not found"},
        }

    def test_upstream_error_summary(self, capsys, config):
        fetcher = StubFetcher([json_response({"detail": "Not found"}, status=404)])

        assert run(["get", "abc", "--summary"], PandaDocClient(fetcher), config) == 1

        assert "PandaDoc Error: Not found" in capsys.readouterr().err

    def test_transport_error(self, capsys, config):
        class FailingFetcher(StubFetcher):
            def fetch(self, *args, **kwargs):
                raise PandaDocConnectionError("Request to api.pandadoc.com timed out")

        assert run(["me"], PandaDocClient(FailingFetcher()), config) == 1

        assert json.loads(capsys.readouterr().err) == {
            "error": "Request to api.pandadoc.com timed out"
        }

    def test_missing_token_prints_remediation(self, capsys, monkeypatch, tmp_path):
        monkeypatch.delenv("PANDADOC_API_KEY", raising=False)

        assert main(["me", "--config", str(tmp_path / "none.yaml")]) == 1

        err = capsys.readouterr().err
        assert "PANDADOC_API_KEY=your-api-key" in err
        assert "PandaDoc token not configured" in err

    def test_bad_config_file(self, capsys, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("api:\n  timeout_seconds: -1\n")

        assert main(["me", "--config", str(path)]) == 1

        assert "Failed to load config" in capsys.readouterr().err

    def test_default_config_used_when_client_injected(self, capsys, monkeypatch, tmp_path):
        monkeypatch.setenv("PANDADOC_CONFIG", str(tmp_path / "missing.yaml"))
        fetcher = StubFetcher([json_response({"id": "m1"})])

        assert dispatch(parse_args(["me"]), client=PandaDocClient(fetcher)) == 0

        assert json.loads(capsys.readouterr().out) == {"id": "m1"}
