"""
Inspection report layout.

`build_report()` turns an inspection (camelCase dict, as served by the API)
into pages of styled lines. It is a pure function: the same inspection always
yields the same document, and nothing here touches the database or WeasyPrint.
All wording comes from `templates/report_text.json`.

Pagination follows an A4 page measured in millimetres. A cursor advances by
the height of every emitted line; before each section the cursor is checked
against PAGE_BREAK_FRACTION of the page height, and any single line that would
cross the bottom margin starts a new page.
"""
import json
import os
import textwrap
from dataclasses import dataclass, field
from typing import List, Optional

TEMPLATE_PATH = os.path.join(os.path.dirname(os.path.dirname(__file__)), "templates", "report_text.json")

PAGE_HEIGHT_MM = 297
TOP_MARGIN_MM = 20
BOTTOM_MARGIN_MM = 20
PAGE_BREAK_FRACTION = 250 / 297

# Vertical advance (mm) after a line of each style
STYLE_HEIGHTS = {
    "blessing": 15,
    "title": 8,
    "notice": 15,
    "identity": 8,
    "heading": 8,
    "label": 6,
    "body": 6,
    "note": 6,
    "bullet": 5,
    "link": 6,
    "signature": 10,
    "closing": 6,
    "spacer": 9,
}

# Characters per line at the style's font size over the 170 mm content width
WRAP_WIDTHS = {
    "heading": 70,
    "identity": 80,
    "label": 85,
    "note": 105,
    "link": 105,
    "bullet": 90,
}
DEFAULT_WRAP_WIDTH = 95


@dataclass(frozen=True)
class Line:
    text: str
    style: str = "body"
    indent: int = 0


@dataclass
class Page:
    lines: List[Line] = field(default_factory=list)


@dataclass
class ReportDocument:
    pages: List[Page]
    template_version: int = 1

    def text(self) -> str:
        """Plain-text rendering; pages are separated by a form feed."""
        rendered = []
        for page in self.pages:
            rendered.append("\n".join("  " * line.indent + line.text for line in page.lines))
        return "\n\f\n".join(rendered)

    @property
    def lines(self) -> List[Line]:
        return [line for page in self.pages for line in page.lines]


class ReportTemplate:
    """Report wording, loaded from a versioned JSON asset."""

    def __init__(self, data: dict):
        if "version" not in data:
            raise ValueError("report template has no 'version'")
        self.data = data
        self.version = data["version"]

    @classmethod
    def load(cls, path: str = TEMPLATE_PATH) -> "ReportTemplate":
        with open(path, encoding="utf-8") as f:
            return cls(json.load(f))

    def __getitem__(self, key):
        return self.data[key]


_default_template: Optional[ReportTemplate] = None


def default_template() -> ReportTemplate:
    global _default_template
    if _default_template is None:
        _default_template = ReportTemplate.load()
    return _default_template


class _Layout:
    """Cursor-driven page filler."""

    def __init__(self):
        self.pages = [Page()]
        self.cursor = TOP_MARGIN_MM

    @property
    def bottom(self) -> float:
        return PAGE_HEIGHT_MM - BOTTOM_MARGIN_MM

    def new_page(self):
        self.pages.append(Page())
        self.cursor = TOP_MARGIN_MM

    def section(self):
        """Section boundary: blank gap, or a new page once past the break threshold."""
        if self.cursor > PAGE_HEIGHT_MM * PAGE_BREAK_FRACTION:
            self.new_page()
            return
        if self.pages[-1].lines:
            self._emit(Line("", "spacer"))

    def add(self, text, style: str = "body", indent: int = 0):
        width = WRAP_WIDTHS.get(style, DEFAULT_WRAP_WIDTH) - 2 * indent
        for chunk in _wrap(str(text), width):
            self._emit(Line(chunk, style, indent))

    def _emit(self, line: Line):
        height = STYLE_HEIGHTS.get(line.style, STYLE_HEIGHTS["body"])
        if self.cursor + height > self.bottom and self.pages[-1].lines:
            self.new_page()
            if line.style == "spacer":
                return
        self.pages[-1].lines.append(line)
        self.cursor += height


def _wrap(text: str, width: int) -> List[str]:
    chunks = []
    for paragraph in text.splitlines() or [""]:
        chunks.extend(textwrap.wrap(paragraph, width=width) or [""])
    return chunks


def _present(value) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def build_report(inspection: dict, template: Optional[ReportTemplate] = None) -> ReportDocument:
    t = template or default_template()
    layout = _Layout()

    header = t["header"]
    layout.add(header["blessing"], "blessing")
    layout.add(header["title"], "title")
    layout.add(header["notice"], "notice")

    layout.section()
    layout.add(t["identity"]["factory"].format(value=inspection.get("factoryName") or ""), "identity")
    layout.add(t["identity"]["inspector"].format(value=inspection.get("inspector") or ""), "identity")

    dates = t["dates"]
    layout.section()
    layout.add(dates["heading"], "label")
    layout.add(dates["hebrew"].format(value=inspection.get("hebrewDate") or ""))
    layout.add(dates["gregorian"].format(value=inspection.get("gregorianDate") or ""))

    address = t["address"]
    layout.section()
    layout.add(address["heading"], "label")
    layout.add(inspection.get("factoryAddress") or "")
    if _present(inspection.get("mapLink")):
        layout.add(address["mapHeading"], "label")
        layout.add(inspection["mapLink"], "link")
    layout.add(address["travelNote"])

    layout.section()
    layout.add(t["purpose"]["heading"], "label")
    layout.add(t["purpose"]["text"])

    contact = t["contact"]
    layout.section()
    layout.add(contact["heading"], "label")
    layout.add(contact["note"], "note")
    for item in contact["fields"]:
        if _present(inspection.get(item["key"])):
            layout.add(item["label"].format(value=inspection[item["key"]]))

    _background(layout, t["background"], inspection)
    _documents(layout, t["documents"], inspection.get("documents") or {})

    general = t["general"]
    layout.section()
    layout.add(general["heading"], "heading")
    for text in general["lines"]:
        layout.add(text, "note")

    category = t["category"]
    layout.section()
    layout.add(category["heading"], "heading")
    layout.add(category["note"], "note")
    paragraph = category["paragraphs"].get(inspection.get("category") or "")
    if paragraph:
        layout.add(paragraph, "note")

    special = t["specialRequirements"]
    layout.section()
    layout.add(special["heading"], "heading")
    for item in special["items"]:
        if inspection.get(item["key"]):
            layout.add(f"• {item['label']}", "bullet", indent=1)

    for narrative in t["narrativeSections"]:
        layout.section()
        layout.add(narrative["heading"], "heading")
        for text in narrative["lines"]:
            layout.add(text, "note")
        key = narrative.get("field")
        if key and _present(inspection.get(key)):
            layout.add(inspection[key], "body")

    summary = t["summary"]
    layout.section()
    layout.add(summary["heading"], "heading")
    layout.add(summary["note"], "note")
    for part in summary["parts"]:
        if _present(inspection.get(part["key"])):
            layout.add(part["label"], "label")
            layout.add(inspection[part["key"]], "body")

    layout.section()
    for text in t["signature"]:
        layout.add(text, "signature")
    layout.add(t["closing"], "closing")

    return ReportDocument(pages=layout.pages, template_version=t.version)


def _background(layout: _Layout, background: dict, inspection: dict):
    layout.section()
    layout.add(background["heading"], "heading")
    layout.add(background["note"], "note")

    if _present(inspection.get("currentProducts")):
        layout.add(background["productsQuestion"], "label")
        layout.add(inspection["currentProducts"], "note")

    layout.add(background["includesQuestion"], "label")
    for option in background["includesOptions"]:
        layout.add(f"• {option}", "bullet", indent=1)

    # 0 is a real answer; only missing values are skipped
    for item in background["numbers"]:
        if inspection.get(item["key"]) is not None:
            layout.add(item["label"].format(value=inspection[item["key"]]))

    layout.add(background["shutdownQuestion"])
    if _present(inspection.get("kashrut")):
        layout.add(background["kashrutCurrent"].format(value=inspection["kashrut"]))
    layout.add(background["kashrutPast"])


def _documents(layout: _Layout, documents_text: dict, documents: dict):
    layout.section()
    layout.add(documents_text["heading"], "heading")
    layout.add(documents_text["note"], "note")
    for item in documents_text["items"]:
        answer = documents_text["yes"] if documents.get(item["key"]) else documents_text["no"]
        layout.add(f"{item['label']} {answer}")
