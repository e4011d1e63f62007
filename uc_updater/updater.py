import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

import aiohttp

from .config import FEED_URL, PLATFORM_MARKER
from .errors import TransportError
from .feed import select_release
from .notifications import notify_outdated, notify_up_to_date
from .version import extract_version, is_up_to_date

LOG = logging.getLogger("uc-updater")


@dataclass(frozen=True)
class CheckResult:
    up_to_date: bool
    local_version: str
    latest_version: Optional[str] = None
    download_url: Optional[str] = None


async def fetch_release_feed(url: str = FEED_URL, timeout: Optional[float] = 30.0) -> str:
    client_timeout = aiohttp.ClientTimeout(total=timeout)
    try:
        async with aiohttp.ClientSession(timeout=client_timeout) as session:
            async with session.get(url) as resp:
                resp.raise_for_status()
                return await resp.text()
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        raise TransportError(f"fetching release feed {url} failed: {e}") from e


def evaluate_release(document: str, local_version: str, platform_marker: str = PLATFORM_MARKER) -> CheckResult:
    entry = select_release(document, platform_marker)
    latest = extract_version(entry.title)
    if is_up_to_date(local_version, latest):
        return CheckResult(up_to_date=True, local_version=local_version)
    return CheckResult(
        up_to_date=False,
        local_version=local_version,
        latest_version=latest,
        download_url=entry.link,
    )


async def check_for_updates(host, feed_url: str = FEED_URL, platform_marker: str = PLATFORM_MARKER,
                            fetch_timeout: Optional[float] = 30.0) -> bool:
    """
    Compare the running browser against the release feed.
    Returns True when up to date. When outdated, opens the download page with an
    alert and returns False. Fetch and parse failures propagate to the caller.
    """
    document, local_version = await asyncio.gather(
        fetch_release_feed(feed_url, timeout=fetch_timeout),
        host.browser_version(),
    )
    result = evaluate_release(document, local_version, platform_marker)
    if result.up_to_date:
        LOG.info("Browser %s is up to date", local_version)
        return True

    LOG.info("Update available: %s -> %s (%s)", local_version, result.latest_version, result.download_url)
    await notify_outdated(host, local_version, result.latest_version, result.download_url)
    return False


async def on_startup(host, **kwargs) -> bool:
    return await check_for_updates(host, **kwargs)


async def on_user_action(host, **kwargs) -> bool:
    # version is looked up here too so the up-to-date alert can show it
    current_version = await host.browser_version()
    up_to_date = await check_for_updates(host, **kwargs)
    if up_to_date:
        await notify_up_to_date(host, current_version)
    return up_to_date
