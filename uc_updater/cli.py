#!/usr/bin/env python3
"""
Simple CLI for common tasks:
- check      : check the running browser and alert in it (same as clicking the extension icon)
- latest     : print the latest release for the target platform, no browser needed
- run-agent  : start the FastAPI agent (checks once on startup)
"""
import argparse
import asyncio
import sys
from typing import Optional

from .config import load_config
from .devtools import DevToolsHost
from .errors import UpdateCheckError
from .feed import select_release
from .updater import fetch_release_feed, on_user_action
from .version import extract_version, is_up_to_date


async def do_check(cfg: dict) -> int:
    host = DevToolsHost(cfg["devtools_url"])
    up_to_date = await on_user_action(
        host,
        feed_url=cfg["feed_url"],
        platform_marker=cfg["platform_marker"],
        fetch_timeout=cfg["fetch_timeout"],
    )
    if up_to_date:
        print("Browser is up to date.")
        return 0
    print("Update available. Opened download page in the browser.")
    return 1


async def do_latest(cfg: dict, local_version: Optional[str] = None) -> int:
    document = await fetch_release_feed(cfg["feed_url"], timeout=cfg["fetch_timeout"])
    entry = select_release(document, cfg["platform_marker"])
    latest = extract_version(entry.title)
    print("Latest release:", latest)
    print("Download:", entry.link)
    if local_version is None:
        return 0
    if is_up_to_date(local_version, latest):
        print("Up to date.")
        return 0
    print(f"Outdated: {local_version}")
    return 1


def main(argv=None):
    p = argparse.ArgumentParser(prog="uc-updater")
    p.add_argument("--devtools-url", help="DevTools endpoint of the running browser (check, run-agent)", default=None)
    p.add_argument("--feed-url", help="release feed URL (check, latest, run-agent)", default=None)
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("check", help="Check the running browser and show the result in it")

    clatest = sub.add_parser("latest", help="Print the latest release for the target platform")
    clatest.add_argument("--compare", metavar="VERSION", help="local version to compare against", default=None)

    sub.add_parser("run-agent", help="Run the FastAPI agent (foreground)")

    args = p.parse_args(argv)

    cfg = load_config()
    if args.devtools_url:
        cfg["devtools_url"] = args.devtools_url
    if args.feed_url:
        cfg["feed_url"] = args.feed_url

    if args.cmd == "run-agent":
        from .agent import run_api
        run_api(cfg)
        return 0

    try:
        if args.cmd == "check":
            return asyncio.run(do_check(cfg))
        if args.cmd == "latest":
            return asyncio.run(do_latest(cfg, args.compare))
    except UpdateCheckError as e:
        print("Update check failed:", e, file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
