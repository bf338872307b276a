"""
Offline driver over saved HTML pages, parsed with selectolax.

Used to replay listing pages saved with `--save-html` through the same
session, extractor and pagination code that drives the live browser.
"""

from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union
from urllib.parse import urldefrag, urljoin
from selectolax.parser import HTMLParser, Node
from .driver import Driver
from .errors import NoSuchElement
from .models import LocatorSpec, LocatorStrategy


class SnapshotDriver(Driver):
    """
    Serves a fixed set of HTML documents keyed by URL.

    Clicking a link (or anything inside one) follows its `href` to another
    loaded document. Scripts never run, so `script_click` behaves like `click`.
    """

    def __init__(self, pages: Dict[str, str], start_url: Optional[str] = None):
        self.pages = {urldefrag(url)[0]: html for url, html in pages.items()}
        self.url = ""
        self.tree: Optional[HTMLParser] = None
        if start_url:
            self._load(start_url)

    @classmethod
    def from_files(cls, paths: Iterable[Union[str, Path]]) -> "SnapshotDriver":
        pages = {}
        for path in paths:
            path = Path(path).resolve()
            pages[path.as_uri()] = path.read_text(encoding="utf-8")
        return cls(pages)

    def _load(self, url: str) -> None:
        html = self.pages.get(urldefrag(url)[0])
        if html is None:
            raise ValueError(f"No snapshot loaded for {url}")
        self.url = url
        self.tree = HTMLParser(html)

    def _require_tree(self) -> HTMLParser:
        if self.tree is None:
            raise RuntimeError("No page loaded. Call navigate() first.")
        return self.tree

    @staticmethod
    def _selector(spec: LocatorSpec) -> str:
        if spec.strategy == LocatorStrategy.XPATH:
            raise ValueError(f"Snapshot pages support CSS and class locators only, got {spec}")
        return spec.selector

    async def locate(self, spec: LocatorSpec, within: Optional[Node] = None) -> Node:
        root = within if within is not None else self._require_tree()
        node = root.css_first(self._selector(spec))
        if node is None:
            raise NoSuchElement(str(spec))
        return node

    async def locate_all(self, spec: LocatorSpec, within: Optional[Node] = None) -> List[Node]:
        root = within if within is not None else self._require_tree()
        return list(root.css(self._selector(spec)))

    async def click(self, handle: Node) -> None:
        link = _enclosing_link(handle)
        if link is not None:
            href = link.attributes.get("href") or ""
            self._load(urljoin(self.url, href))

    async def script_click(self, handle: Node) -> None:
        await self.click(handle)

    async def hover(self, handle: Node) -> None:
        return None

    async def scroll_into_view(self, handle: Node) -> None:
        return None

    async def send_keys(self, handle: Node, text: str) -> None:
        current = handle.attributes.get("value") or ""
        handle.attrs["value"] = current + text

    async def clear(self, handle: Node) -> None:
        handle.attrs["value"] = ""

    async def text(self, handle: Node) -> str:
        if not _is_displayed(handle):
            return ""
        return " ".join(handle.text(separator=" ", strip=True).split())

    async def attribute(self, handle: Node, name: str) -> Optional[str]:
        return handle.attributes.get(name)

    async def is_visible(self, handle: Node) -> bool:
        return _is_displayed(handle)

    async def is_enabled(self, handle: Node) -> bool:
        return "disabled" not in handle.attributes

    async def navigate(self, url: str) -> None:
        self._load(url)

    async def current_url(self) -> str:
        return self.url

    async def execute_script(self, script: str, arg=None):
        raise NotImplementedError("Snapshot pages do not run scripts")

    async def page_source(self) -> str:
        return self._require_tree().html or ""


def _enclosing_link(node: Optional[Node]) -> Optional[Node]:
    while node is not None:
        if node.tag == "a" and "href" in node.attributes:
            return node
        node = node.parent
    return None


def _is_displayed(node: Optional[Node]) -> bool:
    """False if the node or an ancestor is hidden by attribute or inline style."""
    while node is not None and node.tag not in ("html", "-undef"):
        attrs = node.attributes
        if "hidden" in attrs:
            return False
        style = (attrs.get("style") or "").replace(" ", "").lower()
        if "display:none" in style or "visibility:hidden" in style:
            return False
        node = node.parent
    return True
