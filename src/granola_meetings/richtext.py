"""Plain-text extraction from Granola's rich-text note trees.

Granola stores notes as ProseMirror-style trees: nodes are dicts carrying a
``type`` tag and, for containers, a ``content`` list of child nodes.  Two
strategies flatten them:

* structured notes (``documents[id].notes``) keep prose continuous, joining
  paragraphs and text runs with single spaces;
* panels (``documentPanels[id]``) are walked depth-first and every text leaf
  becomes its own paragraph.

``select_note_content`` tries each source in priority order and reports which
one produced the text.
"""

import enum
from typing import Any


class NoteSource(enum.Enum):
    """Where a document's body text came from, in priority order."""

    PLAIN = "notes_plain"
    MARKDOWN = "notes_markdown"
    STRUCTURED = "notes"
    PANELS = "documentPanels"
    NONE = "none"


def _is_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _flatten_nodes(nodes: Any) -> list[str]:
    parts: list[str] = []
    if not isinstance(nodes, list):
        return parts
    for node in nodes:
        if not isinstance(node, dict):
            continue
        children = node.get("content")
        if node.get("type") == "paragraph" and isinstance(children, list):
            parts.append(" ".join(_flatten_nodes(children)))
        elif node.get("type") == "text" and isinstance(node.get("text"), str):
            parts.append(node["text"])
        elif isinstance(children, list):
            parts.append(" ".join(_flatten_nodes(children)))
    return parts


def extract_structured_notes(notes_data: Any) -> str:
    """Extract text content from Granola's structured notes format.

    Paragraphs and text runs are joined with single spaces, so paragraph
    boundaries are not preserved.
    """
    if not isinstance(notes_data, dict):
        return ""
    return " ".join(_flatten_nodes(notes_data.get("content"))).strip()


def _collect_leaves(node: Any, out: list[str]) -> None:
    if isinstance(node, list):
        for item in node:
            _collect_leaves(item, out)
        return
    if not isinstance(node, dict):
        return
    if node.get("type") == "text" and _is_text(node.get("text")):
        out.append(node["text"].strip())
    if "content" in node:
        _collect_leaves(node["content"], out)


def extract_panel_content(panel_data: Any) -> str:
    """Extract every text leaf from a panel list or a panel-id -> panel map.

    Map entries are visited in sorted key order.  Leaves are separated by a
    blank line each.
    """
    leaves: list[str] = []
    if isinstance(panel_data, list):
        for panel in panel_data:
            _collect_leaves(panel, leaves)
    elif isinstance(panel_data, dict):
        for panel_id in sorted(panel_data):
            panel = panel_data[panel_id]
            if isinstance(panel, dict):
                _collect_leaves(panel.get("content"), leaves)
    return "\n\n".join(leaves).strip()


def select_note_content(
    document: dict[str, Any],
    panels: Any = None,
    parse_panels: bool = True,
) -> tuple[NoteSource, str]:
    """Return the first non-empty note body for *document* and its source.

    Order: ``notes_plain``, ``notes_markdown``, structured ``notes``, then
    panels (only when *parse_panels* is set).  Overview and summary lines are
    not included here.
    """
    if _is_text(document.get("notes_plain")):
        return NoteSource.PLAIN, document["notes_plain"]
    if _is_text(document.get("notes_markdown")):
        return NoteSource.MARKDOWN, document["notes_markdown"]
    if isinstance(document.get("notes"), dict):
        text = extract_structured_notes(document["notes"])
        if text:
            return NoteSource.STRUCTURED, text
    if parse_panels:
        text = extract_panel_content(panels)
        if text:
            return NoteSource.PANELS, text
    return NoteSource.NONE, ""
