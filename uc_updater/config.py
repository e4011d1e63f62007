import copy
import os
from typing import Dict

FEED_URL = "https://ungoogled-software.github.io/ungoogled-chromium-binaries/feed.xml"
PLATFORM_MARKER = "/windows/64bit/"

# Edit per machine; environment variables below take precedence
CONFIG = {
    "feed_url": FEED_URL,
    "platform_marker": PLATFORM_MARKER,
    # seconds, applies to the feed request only
    "fetch_timeout": 30.0,
    # browser started with --remote-debugging-port=9222
    "devtools_url": "http://127.0.0.1:9222",
    "agent": {
        "host": "127.0.0.1",
        "port": 8000,
    },
}

ENV_OVERRIDES = {
    "UC_FEED_URL": ("feed_url", str),
    "UC_PLATFORM_MARKER": ("platform_marker", str),
    "UC_FETCH_TIMEOUT": ("fetch_timeout", float),
    "UC_DEVTOOLS_URL": ("devtools_url", str),
}


def load_config(environ=None) -> Dict:
    """Return a copy of CONFIG with UC_* environment overrides applied."""
    env = os.environ if environ is None else environ
    cfg = copy.deepcopy(CONFIG)
    for var, (key, conv) in ENV_OVERRIDES.items():
        value = env.get(var)
        if value:
            try:
                cfg[key] = conv(value)
            except ValueError as e:
                raise ValueError(f"invalid value for {var}: {value!r}") from e
    return cfg
