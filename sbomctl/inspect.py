"""Summaries of CycloneDX documents for display."""

from __future__ import annotations

from collections import Counter
from pathlib import Path

from .bom import Bom

TOP_COMPONENTS = 10


def _tool_line(name: str, version: str, publisher: str) -> str:
    line = f"    - {name}"
    if version:
        line += f" (v{version})"
    if publisher:
        line += f" by {publisher}"
    return line


def format_sbom_info(bom: Bom, input_file: str | Path) -> str:
    """Describe ``bom`` as tab-separated text, one fact per line."""
    lines = [
        f"File:\t{input_file}",
        f"SBOM Format:\t{bom.bom_format}",
        f"Spec Version:\t{bom.spec_version}",
        f"Serial Number:\t{bom.serial_number}",
        f"Version:\t{bom.version}",
    ]

    metadata = bom.metadata
    if metadata is not None:
        lines += ["", "Metadata:"]
        if metadata.timestamp:
            lines.append(f"  Timestamp:\t{metadata.timestamp}")
        tools = metadata.tools
        if tools is not None:
            lines.append("  Tools:")
            lines += [_tool_line(t.name, t.version, t.vendor) for t in tools.tools or []]
            lines += [_tool_line(c.name, c.version, c.publisher) for c in tools.components or []]

    lines += ["", "Components:"]
    components = bom.components or []
    if components:
        type_count = Counter(str(c.type) for c in components)
        lines += [f"  Total Components:\t{len(components)}", "  Component Types:"]
        lines += [f"    - {kind}:\t{type_count[kind]}" for kind in sorted(type_count)]
        lines += ["", f"  Top Components (max {TOP_COMPONENTS}):", "    Name\tVersion\tType\tPURL"]
        ordered = sorted(components, key=lambda c: c.name.lower())
        lines += [f"    {c.name}\t{c.version}\t{c.type}\t{c.purl}" for c in ordered[:TOP_COMPONENTS]]
        if len(ordered) > TOP_COMPONENTS:
            lines.append(f"    ... and {len(ordered) - TOP_COMPONENTS} more components")
    else:
        lines.append("  No components found")

    lines += ["", "Dependencies:"]
    dependencies = bom.dependencies or []
    if dependencies:
        counts = [len(d.depends_on) for d in dependencies if d.depends_on]
        lines += [
            f"  Total Dependencies:\t{len(dependencies)}",
            f"  Dependencies with dependsOn:\t{len(counts)}",
            f"  Max dependsOn count:\t{max(counts, default=0)}",
        ]
    else:
        lines.append("  No dependencies found")

    return "\n".join(lines) + "\n"


def _layout(rows: list[list[str]], start: int, end: int, widths: list[int],
            padding: int, out: list[str]) -> None:
    column = len(widths)

    def emit(first: int, last: int) -> None:
        for cells in rows[first:last]:
            out.append("".join(
                cell.ljust(widths[i]) if i < len(widths) else cell
                for i, cell in enumerate(cells)
            ))

    done = current = start
    while current < end:
        if column >= len(rows[current]) - 1:
            current += 1
            continue
        emit(done, current)
        block = current
        while current < end and column < len(rows[current]) - 1:
            current += 1
        width = max(len(rows[i][column]) for i in range(block, current)) + padding
        _layout(rows, block, current, [*widths, width], padding, out)
        done = current
    emit(done, end)


def align_columns(text: str, padding: int = 2) -> str:
    """Turn tab-terminated cells into space-padded columns.

    Consecutive lines that share a column form a block whose cells are padded
    to the widest cell in it plus ``padding``; the last cell of a line is
    never padded.
    """
    rows = [line.split("\t") for line in text.split("\n")]
    out: list[str] = []
    _layout(rows, 0, len(rows), [], padding, out)
    return "\n".join(out)