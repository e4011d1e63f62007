"""
Release feed parsing.

The feed is parsed once into a list of entries (Atom <entry> or RSS <item>),
which are then filtered by platform marker. Tags are matched by local name
so namespaced and plain feeds both work.
"""
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Iterator, List, Optional

from .errors import FeedFormatError

ENTRY_TAGS = ("entry", "item")


@dataclass(frozen=True)
class ReleaseEntry:
    title: str
    link: str


@dataclass(frozen=True)
class FeedEntry:
    """One entry of the feed as parsed, before any field is required."""
    element: ET.Element

    def values(self) -> Iterator[str]:
        yield "".join(self.element.itertext())
        for el in self.element.iter():
            yield from el.attrib.values()

    def contains(self, marker: str) -> bool:
        return any(marker in v for v in self.values())

    def title(self) -> Optional[str]:
        for el in self.element.iter():
            if _local_name(el.tag) == "title":
                return "".join(el.itertext()).strip()
        return None

    def link(self) -> Optional[str]:
        for el in self.element.iter():
            href = el.get("href")
            if href is not None:
                return href
        return None


def _local_name(tag) -> str:
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def parse_entries(document: str) -> List[FeedEntry]:
    try:
        root = ET.fromstring(document)
    except ET.ParseError as e:
        raise FeedFormatError(f"release feed is not well-formed XML: {e}") from e
    return [FeedEntry(el) for el in root.iter() if _local_name(el.tag) in ENTRY_TAGS]


def select_release(document: str, platform_marker: str) -> ReleaseEntry:
    """
    Return title and download link of the first entry mentioning `platform_marker`.
    Raises FeedFormatError when no entry matches or the match lacks a title or link.
    """
    entry = next((e for e in parse_entries(document) if e.contains(platform_marker)), None)
    if entry is None:
        raise FeedFormatError(f"no release entry matches {platform_marker!r}")

    title = entry.title()
    if title is None:
        raise FeedFormatError("matching release entry has no title")
    link = entry.link()
    if link is None:
        raise FeedFormatError("matching release entry has no link")
    return ReleaseEntry(title=title, link=link)
