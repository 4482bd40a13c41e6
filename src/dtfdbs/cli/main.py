# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""DTF DBS command line client."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from ..config import ClientConfig, Environment, HttpSettings, load_http_settings
from ..errors import DtfDbsError
from ..http import create_default_http_client
from ..log import setup_logging
from ..runtime import DtfDbsClient


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dtfdbs",
        description="DTF DBS file service client. Credentials default to DTFDBS_* environment variables.",
    )
    parser.add_argument("--env", choices=[e.value for e in Environment], help="Target environment (DTFDBS_ENVIRONMENT)")
    parser.add_argument("--dealer-id", help="Dealer identifier (DTFDBS_DEALER_ID)")
    parser.add_argument("--client-id", help="OAuth client id (DTFDBS_CLIENT_ID)")
    parser.add_argument("--client-secret", help="OAuth client secret (DTFDBS_CLIENT_SECRET)")
    parser.add_argument("--scope", help="Requested OAuth scope (DTFDBS_AUTH_SCOPE)")
    parser.add_argument(
        "--ignore-ssl-errors",
        action="store_true",
        help="Skip TLS verification",
    )
    parser.add_argument("--log-level", help="Logging level, e.g. DEBUG (DTFDBS_LOG_LEVEL)")

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("token", help="Obtain and print a new access token")
    commands.add_parser("list", help="List dealer files")

    upload = commands.add_parser("upload", help="Upload a file")
    upload.add_argument("path", help="Local file to upload")
    upload.add_argument("--name", help="Remote file name (defaults to the local name)")
    upload.add_argument("--overwrite", action="store_true", help="Replace an existing remote file")

    download = commands.add_parser("download", help="Download a file")
    download.add_argument("name", help="Remote file name")
    download.add_argument("-o", "--output", help="Destination path (defaults to the remote name)")

    details = commands.add_parser("details", help="Show file details")
    details.add_argument("name", help="Remote file name")
    return parser


def _print_json(data: Any) -> None:
    json.dump(data, sys.stdout, indent=2, sort_keys=True)
    sys.stdout.write("\n")


def _run(client: DtfDbsClient, args: argparse.Namespace) -> int:
    if args.command == "token":
        print(client.obtain_access_token())
    elif args.command == "list":
        _print_json(client.list_files())
    elif args.command == "upload":
        uploaded = client.upload_file(args.path, file_name=args.name, overwrite=args.overwrite)
        _print_json({"uploaded": uploaded})
        return 0 if uploaded else 1
    elif args.command == "download":
        content = client.download_file(args.name)
        destination = Path(args.output or Path(args.name).name)
        destination.write_bytes(content)
        _print_json({"path": str(destination), "bytes": len(content)})
    elif args.command == "details":
        _print_json(client.get_file_details(args.name))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    try:
        config = ClientConfig.from_env(
            client_id=args.client_id,
            client_secret=args.client_secret,
            dealer_id=args.dealer_id,
            environment=args.env,
            auth_scope=args.scope,
        )
    except ValueError as exc:
        parser.error(str(exc))

    settings: HttpSettings = load_http_settings()
    if args.ignore_ssl_errors:
        settings.verify_ssl = False

    http_client = create_default_http_client(settings)

    with DtfDbsClient(config, http_client=http_client, http_settings=settings) as client:
        try:
            return _run(client, args)
        except DtfDbsError as exc:
            print(f"error ({exc.kind.value}): {exc.message}", file=sys.stderr)
            if exc.description:
                print(f"  {exc.description}", file=sys.stderr)
            return 1
        except ValueError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 2


if __name__ == "__main__":
    raise SystemExit(main())
