"""
Browser host backed by the Chrome DevTools endpoint.

The browser must be started with --remote-debugging-port (default 9222).
Version lookup uses /json/version, tabs are opened with /json/new and alerts
are shown by evaluating a script over the page's debugger WebSocket.
"""
import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Optional, Protocol
from urllib.parse import quote

import aiohttp

from .errors import NotificationError, TransportError

LOG = logging.getLogger("uc-updater-devtools")


@dataclass(frozen=True)
class PageHandle:
    id: str
    url: str = ""
    ws_url: Optional[str] = None


class BrowserHost(Protocol):
    async def browser_version(self) -> str: ...

    async def open_page(self, url: str) -> PageHandle: ...

    async def active_page(self) -> PageHandle: ...

    async def show_alert(self, page: PageHandle, message: str) -> None: ...


def _page_from_target(target: dict) -> PageHandle:
    return PageHandle(
        id=target["id"],
        url=target.get("url", ""),
        ws_url=target.get("webSocketDebuggerUrl"),
    )


def alert_expression(message: str) -> str:
    # setTimeout so Runtime.evaluate returns before the dialog is dismissed
    return f"setTimeout(function (msg) {{ alert(msg); }}, 0, {json.dumps(message)})"


class DevToolsHost:
    def __init__(self, endpoint: str = "http://127.0.0.1:9222", timeout: float = 10.0):
        self.endpoint = endpoint.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=timeout)

    async def _request_json(self, method: str, path: str):
        async with aiohttp.ClientSession(timeout=self.timeout) as session:
            async with session.request(method, self.endpoint + path) as resp:
                resp.raise_for_status()
                return await resp.json(content_type=None)

    async def browser_version(self) -> str:
        try:
            info = await self._request_json("GET", "/json/version")
            product = info["Browser"]
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError, KeyError, TypeError) as e:
            raise TransportError(f"browser version lookup failed: {e}") from e
        # "Chrome/119.0.6045.123" -> "119.0.6045.123"
        return product.split("/", 1)[-1]

    async def open_page(self, url: str) -> PageHandle:
        try:
            target = await self._request_json("PUT", "/json/new?" + quote(url, safe=""))
            page = _page_from_target(target)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError, KeyError, TypeError) as e:
            raise NotificationError(f"could not open {url}: {e}") from e
        LOG.info("Opened page %s at %s", page.id, url)
        return page

    async def active_page(self) -> PageHandle:
        try:
            targets = await self._request_json("GET", "/json/list")
            # DevTools lists the most recently focused page first
            for target in targets:
                if target.get("type") == "page":
                    return _page_from_target(target)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError, KeyError, TypeError, AttributeError) as e:
            raise NotificationError(f"could not list pages: {e}") from e
        raise NotificationError("no open page to show the alert in")

    async def show_alert(self, page: PageHandle, message: str) -> None:
        if not page.ws_url:
            raise NotificationError(f"page {page.id} ({page.url}) cannot be scripted")
        request = {
            "id": 1,
            "method": "Runtime.evaluate",
            "params": {"expression": alert_expression(message)},
        }
        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.ws_connect(page.ws_url) as ws:
                    await ws.send_json(request)
                    reply = await self._wait_reply(ws, request["id"])
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise NotificationError(f"script injection into page {page.id} failed: {e}") from e

        if "error" in reply:
            raise NotificationError(f"script injection into page {page.id} refused: {reply['error']}")
        details = reply.get("result", {}).get("exceptionDetails")
        if details:
            raise NotificationError(f"alert script raised in page {page.id}: {details.get('text', details)}")

    @staticmethod
    async def _wait_reply(ws, request_id: int) -> dict:
        async for msg in ws:
            if msg.type == aiohttp.WSMsgType.TEXT:
                data = json.loads(msg.data)
                if data.get("id") == request_id:
                    return data
            elif msg.type in (aiohttp.WSMsgType.CLOSED, aiohttp.WSMsgType.ERROR):
                break
        raise NotificationError("DevTools connection closed before replying")
