"""
CLI main entry point.
"""

import json
import logging
import os
import re
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

from ..config import Config, load_config, resolve_config_path
from ..formatters import (
    format_audit_trail,
    format_document,
    format_document_details,
    format_document_list,
    format_fields,
    format_folder_list,
    format_member,
    format_send_result,
    format_template_list,
)
from ..pandadoc_client import PandaDocClient, PandaDocConfigError, PandaDocError
from .args import ParsedCommand, parse_args
from .options import (
    FOLDER_OPTIONS,
    LIST_OPTIONS,
    SEND_OPTIONS,
    TEMPLATE_OPTIONS,
    collect_params,
)

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_RE = re.compile(r"[^a-zA-Z0-9\-_]")

HELP_TEXT = """
PandaDoc CLI

USAGE:
  pandadoc <command> [options]

COMMANDS:
  list [options]              List documents with optional filters
  get <documentId>            Get document status
  details <documentId>        Get detailed document info (recipients, fields)
  download <documentId>       Download document as PDF
  templates [options]         List templates
  folders [options]           List document folders
  me                          Get current user info
  audit <documentId>          Get document audit trail
  fields <documentId>         List document fields
  send <documentId>           Send document for signing

LIST OPTIONS:
  -q, --query <query>         Search query
  -s, --status <status>       Filter by status (draft, sent, completed, viewed, etc.)
  --status-ne <status>        Exclude documents with this status
  -t, --tag <tag>             Filter by tag
  --template <templateId>     Filter by template ID
  --folder <folderUuid>       Filter by folder UUID
  --contact <contactId>       Filter by contact ID
  -n, --count <count>         Number of results (max 100, default 50)
  -p, --page <page>           Page number (default 1)
  --order <field>             Sort by field (name, date_created, date_modified, date_completed)
  --deleted                   Include deleted documents
  --created-from <date>       Created after (YYYY-MM-DD)
  --created-to <date>         Created before (YYYY-MM-DD)
  --modified-from <date>      Modified after (YYYY-MM-DD)
  --modified-to <date>        Modified before (YYYY-MM-DD)
  --completed-from <date>     Completed after (YYYY-MM-DD)
  --completed-to <date>       Completed before (YYYY-MM-DD)

FOLDER OPTIONS:
  --parent <folderUuid>       List folders inside this folder

DOWNLOAD OPTIONS:
  -o, --output <file>         Output file path (default: tmp/<doc-name>.pdf)
  --watermark                 Include watermark for drafts
  --separate-files            Download attachments as separate files
  --protected                 Download completed document with certificate

SEND OPTIONS:
  -m, --message <message>     Custom message for recipients
  --subject <subject>         Custom email subject
  --silent                    Don't send email notifications

OUTPUT OPTIONS:
  --json                      Output raw JSON (default)
  --summary                   Output human-readable summary

GLOBAL OPTIONS:
  --config <path>             Config file (default: ~/.config/pandadoc/config.yaml)
  --verbose                   Enable debug logging on stderr

EXAMPLES:
  pandadoc list --summary
  pandadoc list --status sent --count 20 --summary
  pandadoc get abc123 --summary
  pandadoc details abc123 --summary
  pandadoc download abc123 -o tmp/contract.pdf
  pandadoc templates --summary
  pandadoc me --summary
  pandadoc send abc123 --message "Please sign"

TOKEN SETUP:
  Set environment variable:
    PANDADOC_API_KEY=your-api-key

  Get your API key from: https://app.pandadoc.com/a/#/settings/integrations/api
"""

# Commands that take a document ID, with their usage line.
DOCUMENT_ID_USAGE = {
    "get": "pandadoc get <documentId>",
    "details": "pandadoc details <documentId>",
    "download": "pandadoc download <documentId> [-o output.pdf]",
    "audit": "pandadoc audit <documentId>",
    "fields": "pandadoc fields <documentId>",
    "send": 'pandadoc send <documentId> [--message "..."] [--subject "..."]',
}


def setup_logging(verbose: bool = False) -> None:
    """Configure logging. Logs go to stderr so stdout stays parseable."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def print_help() -> None:
    print(HELP_TEXT)


def safe_filename(name: str) -> str:
    """Replace everything except letters, digits, "-" and "_" with "_"."""
    return _UNSAFE_FILENAME_RE.sub("_", name)


def _emit(parsed: ParsedCommand, result: Any, summary: Callable[[Any], str]) -> int:
    if parsed.flag("summary"):
        print(summary(result))
    else:
        print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


def cmd_list(client: PandaDocClient, parsed: ParsedCommand, config: Config) -> int:
    """List documents."""
    params = collect_params(parsed, LIST_OPTIONS)
    result = client.list_documents(params)
    return _emit(parsed, result, format_document_list)


def cmd_get(client: PandaDocClient, parsed: ParsedCommand, config: Config) -> int:
    result = client.get_document(parsed.first_positional())
    return _emit(parsed, result, format_document)


def cmd_details(client: PandaDocClient, parsed: ParsedCommand, config: Config) -> int:
    result = client.get_document_details(parsed.first_positional())
    return _emit(parsed, result, format_document_details)


def cmd_download(client: PandaDocClient, parsed: ParsedCommand, config: Config) -> int:
    """Download a document PDF.

    Without -o the file is named after the document and written to the
    configured download directory.
    """
    document_id = parsed.first_positional()

    output = parsed.value("o", "output")
    if output:
        output_path = Path(output)
    else:
        info = client.get_document(document_id)
        name = info.get("name") or document_id
        output_path = config.download_dir / f"{safe_filename(name)}.pdf"

    output_path.parent.mkdir(parents=True, exist_ok=True)

    if parsed.flag("protected"):
        content = client.download_protected_document(document_id)
    else:
        content = client.download_document(
            document_id,
            watermark=parsed.options.get("watermark"),
            separate_files=parsed.flag("separate-files"),
        )

    output_path.write_bytes(content)
    logger.debug(f"Wrote {len(content)} bytes to {output_path}")
    print(f"Downloaded to: {output_path}")
    return 0


def cmd_templates(client: PandaDocClient, parsed: ParsedCommand, config: Config) -> int:
    params = collect_params(parsed, TEMPLATE_OPTIONS)
    result = client.list_templates(params)
    return _emit(parsed, result, format_template_list)


def cmd_folders(client: PandaDocClient, parsed: ParsedCommand, config: Config) -> int:
    params = collect_params(parsed, FOLDER_OPTIONS)
    result = client.list_document_folders(params)
    return _emit(parsed, result, format_folder_list)


def cmd_me(client: PandaDocClient, parsed: ParsedCommand, config: Config) -> int:
    result = client.get_current_member()
    return _emit(parsed, result, format_member)


def cmd_audit(client: PandaDocClient, parsed: ParsedCommand, config: Config) -> int:
    result = client.get_document_audit_trail(parsed.first_positional())
    return _emit(parsed, result, format_audit_trail)


def cmd_fields(client: PandaDocClient, parsed: ParsedCommand, config: Config) -> int:
    result = client.list_document_fields(parsed.first_positional())
    return _emit(parsed, result, format_fields)


def cmd_send(client: PandaDocClient, parsed: ParsedCommand, config: Config) -> int:
    """Send a document; only message, subject and silent are forwarded."""
    document_id = parsed.first_positional()
    options = collect_params(parsed, SEND_OPTIONS)
    result = client.send_document(document_id, options)
    return _emit(parsed, result, lambda r: format_send_result(document_id, r))


COMMANDS: dict[str, Callable[[PandaDocClient, ParsedCommand, Config], int]] = {
    "list": cmd_list,
    "get": cmd_get,
    "details": cmd_details,
    "download": cmd_download,
    "templates": cmd_templates,
    "folders": cmd_folders,
    "me": cmd_me,
    "audit": cmd_audit,
    "fields": cmd_fields,
    "send": cmd_send,
}


def report_error(error: Exception, parsed: ParsedCommand) -> int:
    """Print an error in the requested output mode. Always returns 1."""
    if isinstance(error, PandaDocConfigError) and error.remediation:
        print(error.remediation, file=sys.stderr)
        print("", file=sys.stderr)

    message = error.message if isinstance(error, PandaDocError) else str(error)
    logger.debug("Command failed", exc_info=error)

    if parsed.flag("summary"):
        print(f"PandaDoc Error: {message}", file=sys.stderr)
    else:
        payload: dict[str, Any] = {"error": message}
        if isinstance(error, PandaDocError):
            if error.status_code is not None:
                payload["status"] = error.status_code
            if error.data is not None:
                payload["data"] = error.data
        print(json.dumps(payload, indent=2, ensure_ascii=False), file=sys.stderr)
    return 1


def dispatch(
    parsed: ParsedCommand,
    client: PandaDocClient | None = None,
    config: Config | None = None,
) -> int:
    """
    Run one parsed command.

    Args:
        parsed: Tokenized argv
        client: Client to use; built from config when omitted
        config: Configuration; loaded from --config / default path when omitted

    Returns:
        Process exit code
    """
    command = parsed.command
    if not command or command == "help" or parsed.has("help", "h"):
        print_help()
        return 0

    handler = COMMANDS.get(command)
    if handler is None:
        print(f"Error: Unknown command '{command}'", file=sys.stderr)
        print("\nRun: pandadoc help", file=sys.stderr)
        return 1

    if command in DOCUMENT_ID_USAGE and not parsed.first_positional():
        print("Error: Document ID required", file=sys.stderr)
        print(f"Usage: {DOCUMENT_ID_USAGE[command]}", file=sys.stderr)
        return 1

    if config is None:
        try:
            config = load_config(resolve_config_path(parsed.value("config")))
        except Exception as e:
            print(f"Failed to load config: {e}", file=sys.stderr)
            return 1

    try:
        if client is None:
            client = PandaDocClient.from_config(config)
        return handler(client, parsed, config)
    except Exception as e:
        return report_error(e, parsed)


def main(args: list[str] | None = None) -> int:
    """Main entry point."""
    parsed = parse_args(sys.argv[1:] if args is None else list(args))

    setup_logging(parsed.flag("verbose") or bool(os.environ.get("DEBUG")))

    return dispatch(parsed)


if __name__ == "__main__":
    sys.exit(main())
