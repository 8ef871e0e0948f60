"""CLI check: is the live banking backend reachable from here?"""

from __future__ import annotations

import argparse
import asyncio
import json
from collections.abc import Sequence

from bankdash.core.preflight import run_backend_status


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Probe the configured banking backend and report the gateway mode.",
    )
    parser.add_argument(
        "--force-mock",
        action="store_true",
        help="Start the gateway pinned to mock data (the probe still runs).",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print report as JSON instead of human-readable text.",
    )
    return parser


def _render_text_report(report: dict) -> str:
    lines = []
    status = "REACHABLE" if report["ok"] else "UNAVAILABLE"
    lines.append(f"Backend {status} ({report['backend']}, timestamp={report['timestamp_utc']})")
    for check in report["checks"]:
        icon = "OK" if check["ok"] else "FAIL"
        lines.append(f"[{icon}] {check['name']}: {check['detail']}")
    if report["mode"]:
        mode = report["mode"]
        lines.append(f"Mode: {mode['mode']} (data source: {mode['label']})")
    return "\n".join(lines)


async def _run(args: argparse.Namespace) -> int:
    report = await run_backend_status(force_mock=args.force_mock)
    payload = report.as_dict()
    if args.json:
        print(json.dumps(payload, indent=2))
    else:
        print(_render_text_report(payload))
    return 0 if report.ok else 1


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    return asyncio.run(_run(args))


if __name__ == "__main__":
    raise SystemExit(main())
