"""Command-line front end.

Usage:
    cv-tailor structure resume.txt > resume.json
    cv-tailor extract-job --url https://example.com/jobs/42 > job.json
    cv-tailor optimize resume.json job.json > result.json

Results are printed to stdout as JSON. Streamed agent output and install
progress go to stderr.
"""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import json
import logging
import sys
from pathlib import Path
from typing import Any

from cvtailor.commands.handlers import AiCommandHandler
from cvtailor.config import TailorConfig, load_env
from cvtailor.extract import JsonExtractionError
from cvtailor.models import StreamChunk
from cvtailor.runners.errors import CliError
from cvtailor.runners.registry import ENGINES, provider_from_config
from cvtailor.scrape import JobFetchError

log = logging.getLogger("cv-tailor")


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="cv-tailor",
        description="Tailor a résumé to a job posting with a CLI AI agent",
    )
    parser.add_argument(
        "--provider",
        choices=ENGINES,
        default=None,
        help="agent backend (default: TAILOR_PROVIDER or codex)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    structure = sub.add_parser("structure", help="structure raw résumé text")
    structure.add_argument("resume", help="résumé text file ('-' for stdin)")

    job = sub.add_parser("extract-job", help="extract job requirements")
    source = job.add_mutually_exclusive_group(required=True)
    source.add_argument("description", nargs="?", help="job description file ('-' for stdin)")
    source.add_argument("--url", help="fetch the job posting from a URL")

    optimize = sub.add_parser("optimize", help="optimize a structured résumé for a job")
    optimize.add_argument("resume", help="structured résumé JSON file")
    optimize.add_argument("job", help="job requirements JSON file")

    sub.add_parser("test", help="check that the agent responds")
    sub.add_parser("install", help="install the Codex CLI with npm")
    sub.add_parser("login", help="log in to the Codex CLI")
    sub.add_parser("auth-status", help="check Codex CLI login status")

    scrape = sub.add_parser("scrape", help="print the text of a job posting URL")
    scrape.add_argument("url")

    return parser.parse_args(argv)


def _read_text(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def _read_json(path: str) -> Any:
    return json.loads(_read_text(path))


def _print_json(value: Any) -> None:
    print(json.dumps(value, indent=2, ensure_ascii=False))


def _stream_to_stderr(chunk: StreamChunk) -> None:
    if chunk.kind == "content" and chunk.payload:
        sys.stderr.write(chunk.payload)
    elif chunk.kind == "done":
        sys.stderr.write("\n")
    sys.stderr.flush()


async def _run(args: argparse.Namespace, config: TailorConfig) -> int:
    handler = AiCommandHandler(provider_from_config(config), cli_command=config.codex_command)

    if args.command == "structure":
        _print_json(await handler.structure_resume(_read_text(args.resume)))
    elif args.command == "extract-job":
        if args.url:
            description = await handler.scrape_job_url(args.url)
        else:
            description = _read_text(args.description)
        _print_json(await handler.extract_job(description))
    elif args.command == "optimize":
        resume = _read_json(args.resume)
        job = _read_json(args.job)
        _print_json(await handler.optimize(resume, job, _stream_to_stderr))
    elif args.command == "test":
        ok = await handler.test_connection()
        print("ok" if ok else "unreachable")
        return 0 if ok else 1
    elif args.command == "install":
        result = await handler.install_cli(lambda text: sys.stderr.write(text))
        print(result.message)
        return 0 if result.success else 1
    elif args.command == "login":
        result = await handler.login()
        print(result.message)
        return 0 if result.success else 1
    elif args.command == "auth-status":
        status = await handler.check_auth()
        print("authenticated" if status["authenticated"] else "not authenticated")
        return 0 if status["authenticated"] else 1
    elif args.command == "scrape":
        print(await handler.scrape_job_url(args.url))
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    load_env()

    try:
        config = TailorConfig.from_env()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    if args.provider:
        config = dataclasses.replace(config, provider=args.provider)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        return asyncio.run(_run(args, config))
    except (CliError, JsonExtractionError, JobFetchError) as e:
        log.debug("command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (OSError, json.JSONDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
