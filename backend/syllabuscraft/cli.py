#!/usr/bin/env python3
"""
Segment a syllabus file from the command line.

Usage:
  syllabuscraft-segment syllabus.txt
  syllabuscraft-segment syllabus.pdf --pdf checklist.pdf

Prints {"syllabus": [...]} as JSON. Exit status: 0 ok, 1 rejected input,
2 no units detected.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from syllabuscraft.core.errors import InputRejected
from syllabuscraft.models.syllabus import SyllabusExtractResponse
from syllabuscraft.services.checklist_pdf import ChecklistPDFService
from syllabuscraft.services.segmenter import segment
from syllabuscraft.services.text_extraction import extract_syllabus_text


def _read_text(path: Path) -> str:
    if path.suffix.lower() == ".pdf":
        return extract_syllabus_text(path.read_bytes(), path.name, "pdf")
    return path.read_text(encoding="utf-8", errors="replace")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="syllabuscraft-segment",
        description="Extract unit → topic checklists from a syllabus text or PDF file.",
    )
    parser.add_argument("path", type=Path, help="Syllabus .txt or .pdf file")
    parser.add_argument("--pdf", type=Path, default=None, help="Also write a checklist PDF here")
    parser.add_argument("--indent", type=int, default=2, help="JSON indent (default: 2)")
    args = parser.parse_args(argv)

    try:
        text = _read_text(args.path)
    except InputRejected as e:
        print(f"[segment] {e.message}", file=sys.stderr)
        return 1

    units = segment(text)
    print(SyllabusExtractResponse(syllabus=units).model_dump_json(indent=args.indent))

    if not units:
        print("[segment] No syllabus units detected.", file=sys.stderr)
        return 2

    if args.pdf:
        args.pdf.write_bytes(ChecklistPDFService().generate_checklist_pdf(units, title=args.path.stem))
        print(f"[segment] Checklist written to {args.pdf}", file=sys.stderr)

    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
