# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Nylas client CLI: issue one authenticated request against the REST service."""

from __future__ import annotations

import argparse
import json
import os
import sys
from typing import Any

from ..config import ClientSettings, load_client_settings
from ..errors import DecodingError, EncodingError, RequestFailedError, TransportError
from ..http import RAW_TEXT, create_default_transport
from ..log import setup_logging
from ..runtime import NylasClient

CLI_TEXT_TRUNCATION_BYTES = 4096
DOWNLOAD_CHUNK_SIZE = 64 * 1024

EXIT_OK = 0
EXIT_REQUEST_FAILED = 1
EXIT_TRANSPORT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="nylas-client", description="Issue a single request against the Nylas API")
    parser.add_argument("--base-url", help="Override the API base URL (default: NYLAS_BASE_URL or https://api.nylas.com)")
    parser.add_argument(
        "--credential",
        default=os.getenv("NYLAS_CREDENTIAL"),
        help="Access token or client secret sent as the Basic auth username (default: NYLAS_CREDENTIAL)",
    )
    parser.add_argument("--timeout", type=float, help="Connect/read/write timeout in seconds")
    parser.add_argument("--log-level", help="Logging level (default: NYLAS_LOG_LEVEL or WARNING)")

    commands = parser.add_subparsers(dest="command", required=True)
    for name in ("get", "delete"):
        sub = commands.add_parser(name, help=f"{name.upper()} a path and print the response")
        sub.add_argument("path", help="Path relative to the base URL, e.g. /account")
        sub.add_argument("--json", action="store_true", help="Parse and pretty-print the response as JSON")
    for name in ("post", "put"):
        sub = commands.add_parser(name, help=f"{name.upper()} JSON parameters to a path")
        sub.add_argument("path", help="Path relative to the base URL")
        sub.add_argument(
            "--param",
            "-p",
            action="append",
            default=[],
            metavar="KEY=VALUE",
            help="Body parameter; VALUE is parsed as JSON when possible (repeatable)",
        )
        sub.add_argument("--json", action="store_true", help="Parse and pretty-print the response as JSON")
    download = commands.add_parser("download", help="Stream a GET response body to a file")
    download.add_argument("path", help="Path relative to the base URL")
    download.add_argument("--output", "-o", required=True, help="Destination file")
    return parser


def parse_params(pairs: list[str]) -> dict[str, Any] | None:
    if not pairs:
        return None
    params: dict[str, Any] = {}
    for pair in pairs:
        key, sep, raw = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"Expected KEY=VALUE, got {pair!r}")
        try:
            params[key] = json.loads(raw)
        except ValueError:
            params[key] = raw
    return params


def _truncate_text_bytes(text: str, max_bytes: int) -> str:
    raw = text.encode("utf-8")
    if len(raw) <= max_bytes:
        return text
    suffix = "...[truncated]"
    keep = max_bytes - len(suffix.encode("utf-8"))
    if keep <= 0:
        return suffix[:max_bytes]
    return raw[:keep].decode("utf-8", errors="ignore") + suffix


def _print_result(result: Any, as_json: bool) -> None:
    if result is None:
        return
    if as_json:
        json.dump(result, sys.stdout, indent=2, sort_keys=True)
        sys.stdout.write("\n")
    else:
        print(result)


def _run(client: NylasClient, args: argparse.Namespace) -> None:
    credential = args.credential
    if args.command == "download":
        written = 0
        with client.download(credential, args.path) as handle, open(args.output, "wb") as out:
            for chunk in handle.iter_bytes(DOWNLOAD_CHUNK_SIZE):
                out.write(chunk)
                written += len(chunk)
        print(f"Saved {written} bytes to {args.output}", file=sys.stderr)
        return

    result_type: Any = Any if args.json else RAW_TEXT
    if args.command == "get":
        result = client.get(credential, args.path, result_type)
    elif args.command == "delete":
        result = client.delete(credential, args.path, result_type)
    elif args.command == "post":
        result = client.post(credential, args.path, parse_params(args.param), result_type)
    else:
        result = client.put(credential, args.path, parse_params(args.param), result_type)
    _print_result(result, args.json)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    settings: ClientSettings = load_client_settings()
    if args.base_url:
        settings.base_url = args.base_url
    if args.timeout is not None:
        settings.connect_timeout = settings.read_timeout = settings.write_timeout = args.timeout

    try:
        with NylasClient(create_default_transport(settings)) as client:
            _run(client, args)
    except RequestFailedError as exc:
        print(f"Request failed with status {exc.status_code}", file=sys.stderr)
        if exc.body_text:
            print(_truncate_text_bytes(exc.body_text, CLI_TEXT_TRUNCATION_BYTES), file=sys.stderr)
        return EXIT_REQUEST_FAILED
    except (EncodingError, DecodingError, ValueError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_REQUEST_FAILED
    except TransportError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_TRANSPORT_ERROR

    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
