"""
Coverage report rendering

Turns ``CoverageReport`` results into the plain text block printed at the end
of a pytest run and into a Markdown summary suitable for CI job summaries.
"""

from pathlib import Path
from typing import Iterable, List

from .tracker import CoverageReport

REPORT_TITLE = "OpenAPI Contract Test Coverage"


def _format_percentage(report: CoverageReport) -> str:
    value = report.percentage
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def render_console(reports: Iterable[CoverageReport]) -> str:
    """Render coverage as a plain text block"""
    reports = list(reports)
    if not reports:
        return ""

    lines: List[str] = [REPORT_TITLE, "=" * 50]

    for report in reports:
        lines.append("")
        lines.append(
            f"[{report.contract}] {report.covered_count}/{report.total} endpoints "
            f"({_format_percentage(report)}%)"
        )
        lines.append("-" * 50)

        if report.covered:
            lines.append("Covered:")
            for endpoint in report.covered:
                lines.append(f"  ✓ {endpoint}")

        if report.uncovered:
            lines.append(f"Uncovered: {len(report.uncovered)} endpoints")

    return "\n".join(lines)


def render_markdown(reports: Iterable[CoverageReport]) -> str:
    """Render coverage as Markdown with collapsible uncovered lists"""
    reports = list(reports)
    if not reports:
        return ""

    lines: List[str] = [f"## {REPORT_TITLE}", ""]

    for report in reports:
        lines.append(
            f"### {report.contract}: {report.covered_count}/{report.total} endpoints "
            f"({_format_percentage(report)}%)"
        )
        lines.append("")

        if report.covered:
            lines.append("| Status | Endpoint |")
            lines.append("|--------|----------|")
            for endpoint in report.covered:
                lines.append(f"| :white_check_mark: | `{endpoint}` |")
            lines.append("")

        if report.uncovered:
            lines.append("<details>")
            lines.append(f"<summary>{len(report.uncovered)} uncovered endpoints</summary>")
            lines.append("")
            lines.append("| Endpoint |")
            lines.append("|----------|")
            for endpoint in report.uncovered:
                lines.append(f"| `{endpoint}` |")
            lines.append("")
            lines.append("</details>")
            lines.append("")

    return "\n".join(lines)


def write_markdown(reports: Iterable[CoverageReport], output_path: str) -> Path:
    """Write the Markdown report, creating parent directories as needed"""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(render_markdown(reports))
    return path
