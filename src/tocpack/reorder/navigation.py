"""Parse toc.ncx into a navigation tree and flatten it into reading order."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass, field
from xml.etree import ElementTree as ET

from slugify import slugify

from tocpack.config import CONTENT_SUFFIX, ORDINAL_TOKEN, TITLE_SEPARATOR_REPLACEMENT
from tocpack.errors import NavigationDocumentError
from tocpack.utils.logging import get_logger

logger = get_logger()


@dataclass
class NavNode:
    """One navPoint: sanitized title, fragment-free src and child navPoints."""

    title: str
    content_src: str
    children: list[NavNode] = field(default_factory=list)


@dataclass(frozen=True)
class VisitRecord:
    """A distinct content file in reading order and its destination template."""

    src: str
    dest_template: str

    def dest_path(self, ordinal: str) -> str:
        """Substitute `ordinal` for the placeholder token."""
        return self.dest_template.replace(ORDINAL_TOKEN, ordinal, 1)


def _get_namespace(tag: str) -> str:
    """Return the XML namespace from a tag name, if present."""
    if tag.startswith("{") and "}" in tag:
        return tag.split("}")[0].strip("{")
    return ""


def sanitize_title(title: str, slugify_titles: bool = False) -> str:
    """Make a TOC title safe to embed as a single path segment."""
    if slugify_titles:
        return slugify(title, separator="_")
    return title.replace("/", TITLE_SEPARATOR_REPLACEMENT)


def strip_fragment(src: str) -> str:
    """Drop everything from the first `#`."""
    return src.split("#", 1)[0]


def parse_nav_tree(toc_bytes: bytes, slugify_titles: bool = False) -> list[NavNode]:
    """Parse the navMap of a toc.ncx document.

    Works with and without the NCX namespace. A navPoint without a content
    src gets an empty `content_src`; a missing label gives an empty title.

    Raises:
        NavigationDocumentError: The document is not well-formed XML or uses an
            encoding the parser does not support.
    """
    try:
        root = ET.fromstring(toc_bytes)
    except (ET.ParseError, ValueError) as exc:
        raise NavigationDocumentError(f"parse toc.ncx error, because {exc}") from exc

    ns = _get_namespace(root.tag)

    def q(tag: str) -> str:
        return f"{{{ns}}}{tag}" if ns else tag

    nav_map = root.find(q("navMap"))
    if nav_map is None:
        logger.trace("No navMap found in toc.ncx")
        return []

    def build(element: ET.Element) -> NavNode:
        label_node = element.find(f"{q('navLabel')}/{q('text')}")
        title = (label_node.text or "").strip() if label_node is not None else ""
        content_node = element.find(q("content"))
        src = content_node.get("src", "") if content_node is not None else ""
        return NavNode(
            title=sanitize_title(title, slugify_titles),
            content_src=strip_fragment(src),
            children=[build(child) for child in element.findall(q("navPoint"))],
        )

    return [build(nav_point) for nav_point in nav_map.findall(q("navPoint"))]


def dest_template_for(src: str, title: str) -> str:
    """Build `<dir of src>/{ordinal}-<title>.html`."""
    directory = posixpath.dirname(src) or "."
    return f"{directory}/{ORDINAL_TOKEN}-{title}{CONTENT_SUFFIX}"


def flatten(nodes: list[NavNode], toc_prefix: str) -> list[VisitRecord]:
    """Flatten the tree depth-first into VisitRecords, first occurrence wins.

    Children of a node whose src was already seen are still visited.
    """
    records: list[VisitRecord] = []
    _visit(nodes, toc_prefix, records, set())
    return records


def _visit(
    nodes: list[NavNode],
    toc_prefix: str,
    records: list[VisitRecord],
    seen: set[str],
) -> None:
    for node in nodes:
        if node.content_src:
            src = toc_prefix + node.content_src
            if src not in seen:
                seen.add(src)
                records.append(VisitRecord(src, dest_template_for(src, node.title)))
            else:
                logger.trace(f"Skipping duplicate TOC reference: {src=}")
        _visit(node.children, toc_prefix, records, seen)


def visit_order(
    toc_bytes: bytes,
    toc_prefix: str,
    slugify_titles: bool = False,
) -> list[VisitRecord]:
    """Parse toc.ncx and return its distinct content files in reading order."""
    records = flatten(parse_nav_tree(toc_bytes, slugify_titles), toc_prefix)
    logger.trace(f"Flattened TOC into {len(records)} records")
    return records
