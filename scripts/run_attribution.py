"""CLI to attribute tracked time to devlogs and releases.

Usage:
    python scripts/run_attribution.py --identity U0DEMO42 --app Sprout
    python scripts/run_attribution.py --identity U0DEMO42          # every member app
    python scripts/run_attribution.py --identity U0DEMO42 --json
"""

import argparse
import asyncio
import json
import logging
import os
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))


def print_report(result) -> None:
    from timeledger.pipeline.gate import compute_logging_gate
    from timeledger.pipeline.timeline import build_timeline

    print(f"\n{'='*60}")
    print(f"{result.app_name} | projects: {', '.join(result.project_names) or '(none)'}")
    print(f"{'='*60}")
    print(
        f"  {result.span_count} span(s) | {result.devlog_count} devlog(s) "
        f"| {result.ship_count} release(s)"
    )

    for entry in build_timeline(result.attribution):
        when = entry.occurred_at.strftime("%Y-%m-%d %H:%M") if entry.occurred_at else "now"
        print(
            f"  {when:16s} | {entry.label:12s} "
            f"| +{entry.hours_since_previous:.1f}h | {entry.cumulative_hours:.1f}h total"
        )

    hours, status = compute_logging_gate(result.unlogged_seconds)
    print(f"\n  Unlogged: {hours:.2f}h | Logging session: {status.value}")


async def main(args: argparse.Namespace) -> int:
    from timeledger.errors import IdentityNotFound
    from timeledger.service import AttributionService

    service = AttributionService()
    try:
        if args.app:
            results = {args.app: await service.compute_attribution(args.identity, args.app)}
        else:
            results = await service.compute_attribution_for_all_apps(args.identity)
    except IdentityNotFound as exc:
        print(f"Not found: {exc}")
        return 1

    if args.json:
        payload = results[args.app].to_dict() if args.app else {
            "apps": {name: result.to_dict() for name, result in results.items()}
        }
        print(json.dumps(payload, indent=2))
        return 0

    if not results:
        print(f"{args.identity} is not a member of any app.")
    for result in results.values():
        print_report(result)
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Attribute Hackatime spans to checkpoints")
    parser.add_argument("--identity", required=True, help="Contributor identity (Slack ID)")
    parser.add_argument("--app", default=None, help="App name (omit for every member app)")
    parser.add_argument("--json", action="store_true", help="Print the legacy JSON shape")
    parser.add_argument(
        "--local",
        action="store_true",
        help="Use local SQLite DB for offline development",
    )
    parser.add_argument(
        "--sqlite-path",
        default="timeledger_local.db",
        help="SQLite file path used with --local (default: timeledger_local.db)",
    )
    args = parser.parse_args()

    if args.local:
        db_path = Path(args.sqlite_path).resolve()
        os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{db_path.as_posix()}"

    from timeledger.config import settings

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    raise SystemExit(asyncio.run(main(args)))
