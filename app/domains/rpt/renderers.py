# app/domains/rpt/renderers.py

"""
ReportDocument 를 HTML(jinja2) 또는 PDF(reportlab platypus)로 출력합니다.
페이지 구성은 문서 모델이 정하며, 여기서는 표현만 담당합니다.
"""

import base64
import binascii
import logging
from functools import partial
from io import BytesIO
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional
from xml.sax.saxutils import escape

from jinja2 import Environment, FileSystemLoader, select_autoescape
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas
from reportlab.platypus import Flowable, PageBreak, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from . import schemas as rpt_schemas

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
_html_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html", "xml"]),
)

PRIMARY = colors.HexColor("#0F172A")
MUTED = colors.HexColor("#64748B")
BORDER = colors.HexColor("#E5E7EB")
HEADER_FILL = colors.HexColor("#F1F5F9")

PAGE_WIDTH, PAGE_HEIGHT = A4
MARGIN = 15 * mm
CONTENT_WIDTH = PAGE_WIDTH - 2 * MARGIN
TABLE_COLUMNS = [0.34, 0.22, 0.16, 0.28]
TABLE_HEADERS = ["Parameter", "Value", "Unit", "Normal Range"]


# =============================================================================
# 1. HTML
# =============================================================================
def render_html(document: rpt_schemas.ReportDocument, *, print_mode: bool = False) -> str:
    """화면용 HTML. print_mode 이면 인쇄용 CSS 와 자동 인쇄 스크립트를 포함합니다."""
    template = _html_env.get_template("sample_report.html")
    return template.render(doc=document, print_mode=print_mode)


# =============================================================================
# 2. PDF
# =============================================================================
# 머리말과 서명/꼬리말 영역을 피해 본문 프레임을 잡습니다.
HEADER_SPACE = 30 * mm
SIGNATURE_SPACE = 30 * mm


class NumberedCanvas(canvas.Canvas):
    """
    모든 페이지를 모은 뒤 저장 시점에 꼬리말을 그립니다 ("Page i of N" 의 N 확정).
    """

    def __init__(self, *args, footer_cb: Optional[Callable[[canvas.Canvas, int, int], None]] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self._saved_page_states: List[Dict[str, Any]] = []
        self._footer_cb = footer_cb

    def showPage(self):
        self._saved_page_states.append(dict(self.__dict__))
        self._startPage()

    def save(self):
        total_pages = len(self._saved_page_states)
        for state in self._saved_page_states:
            self.__dict__.update(state)
            if callable(self._footer_cb):
                self._footer_cb(self, self._pageNumber, total_pages)
            canvas.Canvas.showPage(self)
        canvas.Canvas.save(self)


def _load_logo(logo: Optional[str]) -> Optional[ImageReader]:
    """data URI 또는 로컬 파일 경로의 로고를 읽습니다. 원격 URL 은 PDF 에 넣지 않습니다."""
    if not logo:
        return None
    try:
        if logo.startswith("data:"):
            _, encoded = logo.split(",", 1)
            return ImageReader(BytesIO(base64.b64decode(encoded, validate=True)))
        if logo.startswith(("http://", "https://")):
            logger.info("원격 로고는 PDF 에 포함하지 않습니다: %s", logo)
            return None
        path = Path(logo)
        if path.is_file():
            return ImageReader(str(path))
        logger.warning("로고 파일을 찾을 수 없습니다: %s", logo)
    except (ValueError, OSError, binascii.Error):
        logger.exception("로고 이미지를 읽지 못했습니다.")
    return None


def _styles():
    base = getSampleStyleSheet()
    base.add(ParagraphStyle(
        name="TestTitle",
        parent=base["Heading2"],
        fontName="Helvetica-Bold",
        fontSize=11,
        spaceBefore=2,
        spaceAfter=6,
        textColor=PRIMARY,
    ))
    base.add(ParagraphStyle(
        name="Cell",
        parent=base["BodyText"],
        fontName="Helvetica",
        fontSize=9,
        leading=11,
        textColor=PRIMARY,
    ))
    base.add(ParagraphStyle(name="CellBold", parent=base["Cell"], fontName="Helvetica-Bold"))
    base.add(ParagraphStyle(
        name="Note",
        parent=base["Cell"],
        fontName="Helvetica-Oblique",
        fontSize=8.5,
        spaceBefore=4,
    ))
    return base


def _p(text: Any, style: ParagraphStyle) -> Paragraph:
    return Paragraph(escape(str(text)), style)


def _patient_table(doc: rpt_schemas.ReportDocument, styles) -> Table:
    left = [
        ("Patient Name", doc.patient.name),
        ("Phone", doc.patient.phone),
        ("Sample Type(s)", doc.sample.sample_type),
        ("Collection Date", doc.sample.collection_date),
        ("Collection Time", doc.sample.collection_time),
    ]
    right = [
        ("Doctor", doc.patient.doctor),
        ("Gender", doc.patient.gender),
        ("Age", doc.patient.age),
        ("Priority", doc.sample.priority),
        ("Status", doc.sample.status),
    ]
    data = [
        [_p(f"{l_label}: {l_value}", styles["Cell"]), _p(f"{r_label}: {r_value}", styles["Cell"])]
        for (l_label, l_value), (r_label, r_value) in zip(left, right)
    ]
    table = Table(data, colWidths=[CONTENT_WIDTH / 2] * 2)
    table.setStyle(TableStyle([
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("LEFTPADDING", (0, 0), (-1, -1), 0),
        ("TOPPADDING", (0, 0), (-1, -1), 1.5),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 1.5),
    ]))
    return table


def _test_flowables(block: rpt_schemas.TestBlock, styles) -> List[Flowable]:
    data: List[List[Any]] = [[_p(header, styles["CellBold"]) for header in TABLE_HEADERS]]
    for row in block.rows:
        data.append([_p(text, styles["Cell"]) for text in (row.name, row.value, row.unit, row.normal_range)])

    commands = [
        ("BACKGROUND", (0, 0), (-1, 0), HEADER_FILL),
        ("LINEBELOW", (0, 0), (-1, -1), 0.5, BORDER),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("TOPPADDING", (0, 0), (-1, -1), 3),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
    ]
    if not block.rows:
        data.append([_p("No parameters available for this test.", styles["Cell"]), "", "", ""])
        commands.append(("SPAN", (0, 1), (-1, 1)))

    # 행이 한 페이지를 넘으면 다음 페이지로 이어지며 머리 행이 반복됩니다.
    table = Table(data, colWidths=[CONTENT_WIDTH * ratio for ratio in TABLE_COLUMNS], repeatRows=1)
    table.setStyle(TableStyle(commands))

    flowables: List[Flowable] = [_p(block.title, styles["TestTitle"]), table]
    if block.notes:
        flowables.append(_p(f"Notes: {block.notes}", styles["Note"]))
    return flowables


def build_story(document: rpt_schemas.ReportDocument) -> List[Flowable]:
    """문서 모델의 페이지 구성을 platypus 흐름으로 바꿉니다. 문서 페이지 사이에는 PageBreak 를 둡니다."""
    styles = _styles()
    story: List[Flowable] = []
    for page in document.pages:
        if story:
            story.append(PageBreak())
        if page.show_patient_info:
            story.append(_patient_table(document, styles))
            story.append(Spacer(1, 6 * mm))
        if page.test is not None:
            story.extend(_test_flowables(page.test, styles))
        elif page.page_number == 1:
            story.append(_p("No tests are attached to this sample.", styles["Note"]))
    return story


def _draw_header(c: canvas.Canvas, doc: rpt_schemas.ReportDocument, logo: Optional[ImageReader]) -> None:
    top = PAGE_HEIGHT - MARGIN
    x = MARGIN
    if logo is not None:
        c.drawImage(logo, x, top - 18 * mm, width=18 * mm, height=18 * mm, preserveAspectRatio=True, mask="auto")
        x += 22 * mm

    c.setFillColor(PRIMARY)
    c.setFont("Helvetica-Bold", 14)
    c.drawString(x, top - 5 * mm, doc.branding.name)
    c.setFont("Helvetica", 8.5)
    c.setFillColor(MUTED)
    c.drawString(x, top - 10 * mm, doc.branding.address)
    c.drawString(x, top - 14 * mm, f"Phone: {doc.branding.phone}")
    c.drawString(x, top - 18 * mm, f"Email: {doc.branding.email}")

    c.setFillColor(PRIMARY)
    c.drawRightString(PAGE_WIDTH - MARGIN, top - 5 * mm, f"Report Date: {doc.report_date.isoformat()}")
    c.drawRightString(PAGE_WIDTH - MARGIN, top - 10 * mm, f"Accession #: {doc.sample.accession_number}")

    c.setStrokeColor(BORDER)
    c.line(MARGIN, top - 23 * mm, PAGE_WIDTH - MARGIN, top - 23 * mm)


def _draw_signatures(c: canvas.Canvas) -> None:
    y = MARGIN + 22 * mm
    c.setFont("Helvetica", 9)
    c.setFillColor(PRIMARY)
    c.setStrokeColor(PRIMARY)
    for x, label in ((MARGIN, "Lab Technician:"), (MARGIN + CONTENT_WIDTH / 2 + 10 * mm, "Doctor:")):
        c.drawString(x, y, label)
        c.line(x, y - 8 * mm, x + 60 * mm, y - 8 * mm)


def render_pdf(document: rpt_schemas.ReportDocument) -> bytes:
    """
    문서 모델을 PDF 로 출력합니다.

    문서 페이지마다 새 PDF 페이지에서 시작하며, 긴 검사표는 다음 페이지로 이어집니다.
    꼬리말의 "Page i of N" 은 실제 PDF 페이지 수를 기준으로 합니다.
    """
    logo = _load_logo(document.branding.logo)

    def on_page(c: canvas.Canvas, _doc) -> None:
        c.saveState()
        _draw_header(c, document, logo)
        _draw_signatures(c)
        c.restoreState()

    def footer_cb(c: canvas.Canvas, page_number: int, total_pages: int) -> None:
        c.saveState()
        c.setStrokeColor(BORDER)
        c.line(MARGIN, MARGIN + 6 * mm, PAGE_WIDTH - MARGIN, MARGIN + 6 * mm)
        c.setFont("Helvetica", 7.5)
        c.setFillColor(MUTED)
        c.drawString(MARGIN, MARGIN + 2 * mm, document.footer_text)
        c.drawRightString(PAGE_WIDTH - MARGIN, MARGIN + 2 * mm, f"Page {page_number} of {total_pages}")
        c.restoreState()

    buffer = BytesIO()
    pdf = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=MARGIN,
        rightMargin=MARGIN,
        topMargin=MARGIN + HEADER_SPACE,
        bottomMargin=MARGIN + SIGNATURE_SPACE,
        title=f"Sample Report {document.sample.accession_number}",
        author=document.branding.name,
    )
    pdf.build(
        build_story(document),
        onFirstPage=on_page,
        onLaterPages=on_page,
        canvasmaker=partial(NumberedCanvas, footer_cb=footer_cb),
    )
    return buffer.getvalue()
