import asyncio
import logging

from fastapi import FastAPI, HTTPException

from .config import load_config
from .devtools import DevToolsHost
from .errors import FeedFormatError, TransportError
from .updater import on_startup, on_user_action

LOG = logging.getLogger("uc-updater-agent")
logging.basicConfig(level=logging.INFO)

CONFIG = load_config()

APP = FastAPI()

# keeps scheduled startup checks referenced until they finish
BACKGROUND_TASKS = set()


def get_host():
    return DevToolsHost(CONFIG["devtools_url"])


def check_options() -> dict:
    return {
        "feed_url": CONFIG["feed_url"],
        "platform_marker": CONFIG["platform_marker"],
        "fetch_timeout": CONFIG["fetch_timeout"],
    }


def _log_task_failure(task: asyncio.Task):
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        LOG.error("Startup update check failed: %s", exc, exc_info=exc)


@APP.on_event("startup")
async def startup_event():
    task = asyncio.create_task(on_startup(get_host(), **check_options()))
    BACKGROUND_TASKS.add(task)
    task.add_done_callback(BACKGROUND_TASKS.discard)
    task.add_done_callback(_log_task_failure)


@APP.get("/status")
async def api_status():
    return {"devtools_url": CONFIG["devtools_url"], **check_options()}


@APP.post("/update/check")
async def api_update_check():
    try:
        up_to_date = await on_user_action(get_host(), **check_options())
    except TransportError as e:
        LOG.exception("update check failed: %s", e)
        raise HTTPException(status_code=502, detail="update check failed: browser or feed unreachable")
    except FeedFormatError as e:
        LOG.exception("update check failed: %s", e)
        raise HTTPException(status_code=500, detail="update check failed: unexpected release feed")
    return {"ok": True, "up_to_date": up_to_date}


def run_api(overrides=None):
    import uvicorn
    # uvicorn imports this same module, so the served APP sees these values
    if overrides:
        CONFIG.update(overrides)
    agent_cfg = CONFIG["agent"]
    uvicorn.run("uc_updater.agent:APP", host=agent_cfg["host"], port=agent_cfg["port"], reload=False)


if __name__ == "__main__":
    run_api()
