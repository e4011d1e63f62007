import re

DOTTED_QUAD_RE = re.compile(r"[0-9]+\.[0-9]+\.[0-9]+\.[0-9]+")


def extract_version(title: str) -> str:
    """
    Return the first dotted-quad version found in `title`, verbatim.
    Falls back to the trimmed title when there is none.
    """
    m = DOTTED_QUAD_RE.search(title)
    if m:
        return m.group(0)
    return title.strip()


def is_up_to_date(local: str, latest: str) -> bool:
    # exact match only, "119.0.06045.123" != "119.0.6045.123"
    return local == latest
