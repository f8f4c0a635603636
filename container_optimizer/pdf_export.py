from __future__ import annotations

from typing import Optional

from container_optimizer.models import ArrangementResult, BoxSpec, ContainerSpec, CostBreakdown
from container_optimizer.reporting import build_summary_table

PAGE_SIZE = (595, 842)
LINE_HEIGHT = 14


def build_report_lines(
    box: BoxSpec,
    container: ContainerSpec,
    result: Optional[ArrangementResult],
    costs: Optional[CostBreakdown] = None,
) -> list[str]:
    lines = ["Container Loading Report", "---"]
    table = build_summary_table(box, container, result, costs)
    for _, row in table.iterrows():
        lines.append(f"{row['parameter']}: {row['value']}")
    if result is not None and result.is_below_capacity:
        lines.append("---")
        lines.append(
            f"Note: {result.total_boxes} of {result.max_capacity} possible boxes requested; "
            "the container is not full."
        )
    return lines


def _pdf_string(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")
    # the base-14 Helvetica font has no glyph for the multiplication sign
    escaped = escaped.replace("×", "x")
    return f"({escaped or ' '})"


def _content_stream(lines: list[str]) -> bytes:
    ops = ["BT", "/F1 11 Tf", f"40 {PAGE_SIZE[1] - 42} Td", f"{LINE_HEIGHT} TL"]
    for idx, line in enumerate(lines):
        prefix = "" if idx == 0 else "T* "
        ops.append(f"{prefix}{_pdf_string(line)} Tj")
    ops.append("ET")
    return "\n".join(ops).encode("latin-1", errors="replace")


def build_text_pdf(lines: list[str]) -> bytes:
    """Single-page PDF with one text line per entry of ``lines``."""
    stream = _content_stream(lines)
    width, height = PAGE_SIZE
    bodies = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        (
            f"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 {width} {height}] "
            "/Resources << /Font << /F1 4 0 R >> >> /Contents 5 0 R >>"
        ).encode("ascii"),
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
        f"<< /Length {len(stream)} >>\nstream\n".encode("ascii") + stream + b"\nendstream",
    ]
    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(bodies, start=1):
        offsets.append(len(out))
        out += f"{number} 0 obj ".encode("ascii") + body + b" endobj\n"
    xref_start = len(out)
    out += f"xref\n0 {len(bodies) + 1}\n0000000000 65535 f \n".encode("ascii")
    for offset in offsets:
        out += f"{offset:010d} 00000 n \n".encode("ascii")
    out += (
        f"trailer << /Size {len(bodies) + 1} /Root 1 0 R >>\nstartxref\n{xref_start}\n%%EOF"
    ).encode("ascii")
    return bytes(out)
