"""segmenter.py — turn extracted syllabus text into a unit → topics checklist.

Pipeline (one synchronous pass, no state kept between calls):
  1. truncate at the first "Text Book" / "Reference Books" heading
  2. find every unit header:  [Unit - IV] Title ... [6 Hours]
  3. body of a unit = text from the end of its header to the start of the
     next header (or end of text)
  4. body → join wrapped lines → split on commas → trim → drop fragments of
     2 chars or fewer → ensure a trailing period

Works on whatever the PDF text layer or OCR hands over, so every step is
tolerant: no match anywhere simply yields an empty list.
"""
import logging
import re

from syllabuscraft.models.syllabus import Topic, Unit

logger = logging.getLogger("syllabuscraft.segmenter")

# Bibliography headings; everything from the first one onward is dropped.
_BIBLIOGRAPHY_RE = re.compile(r"Text Book|Reference Books", re.IGNORECASE)

# Start of a unit header: "Unit 3", "[UNIT-IV]", "Unit – 2:". Identifiers are
# opaque strings. Digits may run straight into the title ("UNIT 1Introduction");
# a Roman identifier must end a word or be followed by a capitalised word
# ("UNIT IVGraphs"), so "Unit is" and "Unit Vectors" are not headers.
# Every optional piece begins with a literal, which keeps matching linear.
_UNIT_START_RE = re.compile(
    r"(?:\[\s*)?\bUnit\s*(?:[-–]\s*)?"
    r"(?P<identifier>\d+|[IVX]+(?:\b|(?=(?-i:[A-Z][a-z]))))"
    r"\s*(?:\]\s*)?(?:[:\-–]\s*)?",
    re.IGNORECASE,
)

# "[6 Hours]", "[ 1 Hour ]"
_HOURS_RE = re.compile(r"\[\s*(?P<hours>\d+)\s*Hours?\s*\]", re.IGNORECASE)

_LINE_BREAK_RE = re.compile(r"\r\n|[\r\n]")

# Keeps three-letter acronyms (CNF, GNF, DFA), drops stray punctuation.
_MIN_TOPIC_CHARS = 3


def truncate_at_bibliography(text: str) -> str:
    """Return text up to (not including) the first bibliography heading."""
    m = _BIBLIOGRAPHY_RE.search(text)
    if m:
        return text[:m.start()]
    return text


def normalize_topic(fragment: str) -> str:
    """Trim and make sure the topic ends with exactly the period it needs.

    Idempotent: normalize_topic(normalize_topic(x)) == normalize_topic(x).
    """
    name = fragment.strip()
    if not name.endswith("."):
        name += "."
    return name


def split_topics(body: str) -> list[Topic]:
    """Split a unit body into checklist topics, preserving source order."""
    joined = _LINE_BREAK_RE.sub(" ", body)
    topics = []
    for fragment in joined.split(","):
        fragment = fragment.strip()
        if len(fragment) < _MIN_TOPIC_CHARS:
            continue
        # fragments ending in "definition" are kept like any other
        topics.append(Topic(name=normalize_topic(fragment), completed=False))
    return topics


def _find_headers(text: str) -> list[tuple[int, int, str, str, int]]:
    """(start, end, identifier, title, hours) for every unit header, in text order.

    The title runs from the unit marker to the first hours annotation and may
    wrap across lines. The annotation has to appear before the next unit
    marker; a marker without one is ordinary body text.
    """
    starts = list(_UNIT_START_RE.finditer(text))
    headers = []
    for i, m in enumerate(starts):
        limit = starts[i + 1].start() if i + 1 < len(starts) else len(text)
        hours = _HOURS_RE.search(text, m.end(), limit)
        if hours is None:
            continue
        title = text[m.end():hours.start()].strip()
        headers.append((m.start(), hours.end(), m.group("identifier"), title, int(hours.group("hours"))))
    return headers


def segment(text: str | None) -> list[Unit]:
    """Extract units, in order of appearance, from raw syllabus text.

    Never raises for string input. An empty list means no unit header of
    the form "Unit <id> <title> [<n> Hours]" was found.
    """
    if not text:
        return []

    text = truncate_at_bibliography(text)
    headers = _find_headers(text)

    units = []
    for i, (start, end, identifier, title, hours) in enumerate(headers):
        body_end = headers[i + 1][0] if i + 1 < len(headers) else len(text)
        body = text[end:body_end]

        units.append(Unit(
            label=f"Unit {identifier}: {title} [{hours} Hours]",
            identifier=identifier,
            title=title,
            hours=hours,
            topics=split_topics(body),
        ))

    logger.debug(
        "[segmenter] %d unit(s), %d topic(s) from %d chars",
        len(units),
        sum(len(u.topics) for u in units),
        len(text),
    )
    return units
