"""Multi-format table exporters for decoded contributions.

Supports:

*  **text** — fixed-width table for terminals.
*  **Markdown** — pipe table, suitable for PR comments and notes.
*  **HTML** — ``<table>`` fragment with ``<code>`` cells, or a full page.
*  **JSON** — ``decode_result_v1`` document, see ``decode_result.schema.json``.

Every format has the same four columns. An empty list renders a single
"no data" row; a fatal decode error renders a single error row.
"""

from __future__ import annotations

import html as html_mod
from typing import Any, Sequence

from contribution_decoder import __version__
from contribution_decoder.model.contribution import Contribution
from contribution_decoder.utils.json_norm import stable_json_dumps

COLUMNS = (
    "Bucket (binary)",
    "Value (binary)",
    "Bucket (decimal)",
    "Value (decimal)",
)

NO_DATA_MESSAGE = "No valid contributions with non-zero value found."

SCHEMA_VERSION = "decode_result_v1"

FORMATS = ("text", "markdown", "html", "json")


def error_message(exc: BaseException | str) -> str:
    return f"Error during decoding: {exc}."


# ════════════════════════════════════════════════════════════════════
# text exporter
# ════════════════════════════════════════════════════════════════════


def _text_table(rows: list[tuple[str, ...]], banner: str | None = None) -> str:
    widths = [len(c) for c in COLUMNS]
    for row in rows:
        widths = [max(w, len(cell)) for w, cell in zip(widths, row)]

    def line(cells: Sequence[str]) -> str:
        return " | ".join(cell.ljust(w) for cell, w in zip(cells, widths)).rstrip()

    sep = "-+-".join("-" * w for w in widths)
    lines = [line(COLUMNS), sep]
    if banner is not None:
        lines.append(banner)
    lines.extend(line(row) for row in rows)
    return "\n".join(lines) + "\n"


def export_text(items: Sequence[Contribution]) -> str:
    if not items:
        return _text_table([], banner=NO_DATA_MESSAGE)
    return _text_table([c.row() for c in items])


# ════════════════════════════════════════════════════════════════════
# Markdown exporter
# ════════════════════════════════════════════════════════════════════


def _md_escape(text: str) -> str:
    return text.replace("|", "\\|")


def _md_table(body: list[str]) -> str:
    lines = [
        "| " + " | ".join(COLUMNS) + " |",
        "|" + "|".join("---" for _ in COLUMNS) + "|",
    ]
    lines.extend(body)
    return "\n".join(lines) + "\n"


def export_markdown(items: Sequence[Contribution]) -> str:
    if not items:
        return _md_table([f"| {NO_DATA_MESSAGE} |" + " |" * (len(COLUMNS) - 1)])
    return _md_table(
        ["| " + " | ".join(f"`{cell}`" for cell in c.row()) + " |" for c in items]
    )


# ════════════════════════════════════════════════════════════════════
# HTML exporter
# ════════════════════════════════════════════════════════════════════

_HTML_TEMPLATE = """\
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>Contribution Decoder</title>
<style>
  body {{ font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; margin: 2rem; color: #212529; }}
  table {{ border-collapse: collapse; width: 100%; }}
  th, td {{ text-align: left; padding: 6px 12px; border-bottom: 1px solid #dee2e6; }}
  th {{ background: #e9ecef; }}
  td code {{ word-break: break-all; }}
  .no-data-row td {{ color: #6c757d; font-style: italic; }}
</style>
</head>
<body>
{body}
</body>
</html>
"""


def _html_single_row(message: str) -> str:
    return (
        f'<tr class="no-data-row"><td colspan="{len(COLUMNS)}">'
        f"{html_mod.escape(message)}</td></tr>"
    )


def _html_table(body_rows: list[str]) -> str:
    head = "".join(f"<th>{html_mod.escape(c)}</th>" for c in COLUMNS)
    parts = [
        '<table class="decoder-output">',
        f"<thead><tr>{head}</tr></thead>",
        '<tbody id="decoder-output-body">',
        *body_rows,
        "</tbody>",
        "</table>",
    ]
    return "\n".join(parts) + "\n"


def export_html(items: Sequence[Contribution], *, full_page: bool = False) -> str:
    if not items:
        table = _html_table([_html_single_row(NO_DATA_MESSAGE)])
    else:
        rows = [
            "<tr>"
            + "".join(f"<td><code>{html_mod.escape(cell)}</code></td>" for cell in c.row())
            + "</tr>"
            for c in items
        ]
        table = _html_table(rows)
    return _HTML_TEMPLATE.format(body=table) if full_page else table


# ════════════════════════════════════════════════════════════════════
# JSON exporter
# ════════════════════════════════════════════════════════════════════


def result_dict(
    items: Sequence[Contribution],
    *,
    diagnostics: Sequence[Any] = (),
    error: BaseException | None = None,
) -> dict[str, Any]:
    """Build the ``decode_result_v1`` document."""
    d: dict[str, Any] = {
        "schema_version": SCHEMA_VERSION,
        "tool_version": __version__,
        "count": len(items),
        "contributions": [c.to_dict() for c in items],
    }
    if diagnostics:
        d["diagnostics"] = [x.to_dict() for x in diagnostics]
    if error is not None:
        d["error"] = {"type": type(error).__name__, "message": str(error)}
    return d


def export_json(items: Sequence[Contribution], **kwargs: Any) -> str:
    return stable_json_dumps(result_dict(items, **kwargs))


# ════════════════════════════════════════════════════════════════════
# Dispatchers
# ════════════════════════════════════════════════════════════════════


def _check_format(fmt: str) -> str:
    if fmt == "md":
        return "markdown"
    if fmt not in FORMATS:
        raise ValueError(
            f"Unknown export format: {fmt!r} (use {'|'.join(FORMATS)})"
        )
    return fmt


def export_contributions(
    items: Sequence[Contribution],
    fmt: str = "text",
    **kwargs: Any,
) -> str:
    """Render *items* in the specified format.

    Parameters
    ----------
    items:
        Decoded contributions, possibly empty.
    fmt:
        One of ``"text"``, ``"markdown"``, ``"html"``, ``"json"``.
    kwargs:
        ``full_page`` for html; ``diagnostics`` for json.

    Raises
    ------
    ValueError
        If *fmt* is not recognised.
    """
    fmt = _check_format(fmt)
    if fmt == "text":
        return export_text(items)
    if fmt == "markdown":
        return export_markdown(items)
    if fmt == "html":
        return export_html(items, full_page=bool(kwargs.get("full_page", False)))
    return export_json(items, diagnostics=kwargs.get("diagnostics", ()))


def export_error(exc: BaseException, fmt: str = "text") -> str:
    """Render a fatal decode error in place of the table body."""
    fmt = _check_format(fmt)
    message = error_message(exc)
    if fmt == "text":
        return _text_table([], banner=message)
    if fmt == "markdown":
        return _md_table([f"| {_md_escape(message)} |" + " |" * (len(COLUMNS) - 1)])
    if fmt == "html":
        return _html_table([_html_single_row(message)])
    return export_json([], error=exc)
