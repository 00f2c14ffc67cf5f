"""Printable syllabus checklist.

One section per unit, one checkbox row per topic, progress line at the top.
Same visual language as the web checklist: ticked topics are greyed out.
"""

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import cm
from reportlab.platypus import (
    SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle,
    HRFlowable, KeepTogether,
)
from reportlab.lib.enums import TA_CENTER
import io
from xml.sax.saxutils import escape as xml_escape

from syllabuscraft.models.syllabus import ChecklistProgress, Unit


# ──────────────────────────────────────────────
# Colours
# ──────────────────────────────────────────────
_PRIMARY = colors.Color(0.15, 0.32, 0.22)       # deep forest green
_MUTED = colors.Color(0.55, 0.55, 0.55)         # muted grey
_RULE = colors.Color(0.82, 0.82, 0.78)          # ruled line colour
_UNIT_BG = colors.Color(0.94, 0.94, 0.92)       # unit header bg


# ──────────────────────────────────────────────
# Unicode → latin-1 safe replacements
# ──────────────────────────────────────────────
_UNICODE_REPLACEMENTS = {
    "—": "-",   # em dash
    "–": "-",   # en dash
    "‘": "'",   # left single quote
    "’": "'",   # right single quote
    "“": '"',   # left double quote
    "”": '"',   # right double quote
    "…": "...", # ellipsis
    "•": "-",   # bullet
    "→": "->",  # right arrow
}

_BOX_EMPTY = "[  ]"
_BOX_TICKED = "[x]"

# A4 width minus 2 cm margins on each side
_CONTENT_WIDTH = A4[0] - 4.0 * cm


def _sanitize_text(text: str) -> str:
    """Replace Unicode characters that Helvetica/latin-1 cannot encode."""
    if not text:
        return ""
    for char, replacement in _UNICODE_REPLACEMENTS.items():
        text = text.replace(char, replacement)
    return text.encode("latin-1", errors="replace").decode("latin-1")


def summarize_progress(units: list[Unit]) -> ChecklistProgress:
    """Count ticked topics across all units."""
    total = sum(len(u.topics) for u in units)
    completed = sum(1 for u in units for t in u.topics if t.completed)
    percent = (completed / total) * 100 if total > 0 else 0.0
    return ChecklistProgress(
        completed_topics=completed,
        total_topics=total,
        percent_complete=percent,
    )


class ChecklistPDFService:
    """Renders extracted units as a downloadable checklist PDF."""

    def __init__(self):
        self.styles = getSampleStyleSheet()
        self._setup_custom_styles()
        self._page_count = 0

    def _setup_custom_styles(self):
        self.styles.add(ParagraphStyle(
            name='ChecklistTitle',
            fontName='Helvetica-Bold',
            fontSize=18,
            leading=22,
            spaceAfter=4,
            alignment=TA_CENTER,
            textColor=_PRIMARY,
        ))
        self.styles.add(ParagraphStyle(
            name='ProgressLine',
            fontName='Helvetica',
            fontSize=10,
            textColor=_MUTED,
            alignment=TA_CENTER,
            spaceAfter=14,
        ))
        self.styles.add(ParagraphStyle(
            name='UnitHeader',
            fontName='Helvetica-Bold',
            fontSize=11,
            leading=14,
            textColor=_PRIMARY,
        ))
        self.styles.add(ParagraphStyle(
            name='TopicText',
            fontName='Helvetica',
            fontSize=10,
            leading=13,
        ))
        self.styles.add(ParagraphStyle(
            name='TopicDone',
            fontName='Helvetica',
            fontSize=10,
            leading=13,
            textColor=_MUTED,
        ))
        self.styles.add(ParagraphStyle(
            name='EmptyUnit',
            fontName='Helvetica-Oblique',
            fontSize=9,
            leading=12,
            textColor=_MUTED,
            leftIndent=8,
        ))

    # ──────────────────────────────────────────
    # Main entry point
    # ──────────────────────────────────────────
    def generate_checklist_pdf(self, units: list[Unit], title: str = "Syllabus Checklist") -> bytes:
        """Generate the checklist PDF.

        Args:
            units: Units in source order; ticked topics render as [x]
            title: Heading printed on the first page

        Returns:
            PDF file as bytes
        """
        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            rightMargin=2.0 * cm,
            leftMargin=2.0 * cm,
            topMargin=2.0 * cm,
            bottomMargin=2.0 * cm,
            title=_sanitize_text(title),
        )
        self._page_count = 0

        progress = summarize_progress(units)
        story = [
            Paragraph(xml_escape(_sanitize_text(title)), self.styles['ChecklistTitle']),
            Paragraph(
                f"{progress.completed_topics} / {progress.total_topics} topics"
                f" - {progress.percent_complete:.0f}% complete",
                self.styles['ProgressLine'],
            ),
            HRFlowable(width="100%", thickness=0.8, color=_RULE, spaceAfter=10),
        ]
        for unit in units:
            story.append(self._build_unit(unit))
            story.append(Spacer(1, 10))

        doc.build(
            story,
            onFirstPage=self._draw_page_furniture,
            onLaterPages=self._draw_page_furniture,
        )
        buffer.seek(0)
        return buffer.getvalue()

    def _build_unit(self, unit: Unit):
        header = Table(
            [[Paragraph(xml_escape(_sanitize_text(unit.label)), self.styles['UnitHeader'])]],
            colWidths=[_CONTENT_WIDTH],
        )
        header.setStyle(TableStyle([
            ('BACKGROUND', (0, 0), (-1, -1), _UNIT_BG),
            ('LEFTPADDING', (0, 0), (-1, -1), 6),
            ('TOPPADDING', (0, 0), (-1, -1), 4),
            ('BOTTOMPADDING', (0, 0), (-1, -1), 4),
        ]))

        if not unit.topics:
            return KeepTogether([header, Paragraph("No topics listed.", self.styles['EmptyUnit'])])

        rows = []
        for topic in unit.topics:
            style = self.styles['TopicDone'] if topic.completed else self.styles['TopicText']
            box = _BOX_TICKED if topic.completed else _BOX_EMPTY
            rows.append([
                Paragraph(box, style),
                Paragraph(xml_escape(_sanitize_text(topic.name)), style),
            ])
        topics = Table(rows, colWidths=[1.0 * cm, _CONTENT_WIDTH - 1.0 * cm])
        topics.setStyle(TableStyle([
            ('VALIGN', (0, 0), (-1, -1), 'TOP'),
            ('LINEBELOW', (0, 0), (-1, -1), 0.3, _RULE),
            ('LEFTPADDING', (0, 0), (-1, -1), 4),
        ]))
        return KeepTogether([header, topics])

    # ──────────────────────────────────────────
    # Page furniture (footer)
    # ──────────────────────────────────────────
    def _draw_page_furniture(self, canvas, doc):
        canvas.saveState()
        page_width, _ = A4
        self._page_count += 1

        canvas.setFont('Helvetica', 7)
        canvas.setFillColor(_MUTED)
        canvas.drawString(2.0 * cm, 1.0 * cm, "SyllabusCraft checklist")
        canvas.drawRightString(page_width - 2.0 * cm, 1.0 * cm, f"Page {self._page_count}")
        canvas.restoreState()
