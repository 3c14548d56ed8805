"""
Markdown export of a processing result.
"""

import re
from pathlib import Path
from typing import Any, Dict

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def export_filename(result: Dict[str, Any]) -> str:
    """solutions-<filename>.md, with path-unsafe characters replaced."""
    name = _UNSAFE_CHARS.sub("_", result.get("filename") or "questions").strip("_")
    return f"solutions-{name or 'questions'}.md"


def render_markdown(result: Dict[str, Any]) -> str:
    """Full document: header, extracted questions, solutions."""
    lines = [f"# Solutions: {result.get('filename') or 'Questions'}", ""]
    if result.get("processedAt"):
        lines += [f"_Processed at {result['processedAt']}_", ""]
    lines += [
        "## Extracted Text",
        "",
        "```text",
        (result.get("extractedText") or "").rstrip(),
        "```",
        "",
        "## Solutions",
        "",
        (result.get("solutions") or "").rstrip(),
        "",
    ]
    return "\n".join(lines)


def export_markdown(result: Dict[str, Any], directory: Path) -> Path:
    """Write the rendered document into directory and return its path."""
    path = Path(directory) / export_filename(result)
    path.write_text(render_markdown(result), encoding="utf-8")
    return path
