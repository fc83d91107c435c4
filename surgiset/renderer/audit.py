"""Checklist audit document renderer.

Projects ``(inventory, sets)`` into a print-ready HTML audit. Rendering is
split in two steps so the layout decisions can be tested without parsing
HTML:

1. :func:`build_audit_sections` lays out one section per non-empty set and a
    trailing "Miscellaneous Instruments" section for shelf units that no set
    references. Each physical unit is its own row; an allocation of quantity
    N yields N rows.
2. :func:`render_audit` turns the sections into an HTML page with blank
    ``dd/mm/yy`` check columns for handwritten audits.

Allocations whose instrument no longer exists are skipped. Inputs are never
mutated.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from html import escape
from pathlib import Path
from typing import Iterable, List, Optional, Set, Tuple

from surgiset.components import Instrument, InstrumentSet

logger = logging.getLogger(__name__)

AUDIT_FILENAME_PREFIX = "SurgSet_Audit_"
MISC_SECTION_TITLE = "Miscellaneous Instruments"
CHECK_COLUMNS = 5

_STYLE = """
@page { size: auto; margin: 15mm; }
body { font-family: -apple-system, "Segoe UI", Roboto, Helvetica, Arial, sans-serif;
       margin: 0; color: #1F2937; line-height: 1.2; background: white; }
.header-section { margin-bottom: 25px; border-bottom: 2.5px solid #4a90e2; padding-bottom: 12px; }
h1 { font-size: 24px; margin: 0; color: #111827; font-weight: 800; }
.set-page { page-break-after: always; padding-top: 5px; }
.set-page:last-child { page-break-after: auto; }
table { width: 100%; border-collapse: collapse; margin-top: 15px; table-layout: fixed; }
th { background-color: #F9FAFB; text-align: left; padding: 8px; border: 1px solid #E5E7EB;
     font-size: 10px; font-weight: bold; color: #4B5563; }
td { padding: 8px 10px; border: 1px solid #E5E7EB; color: #374151; font-size: 12px; }
.inst-name { font-weight: 600; color: #111827; display: block; font-size: 13px; }
.inst-desc { font-size: 10px; color: #6B7280; display: block; margin-top: 1px; }
.checkbox-cell { width: 60px; height: 35px; }
.date-header { text-align: center; width: 60px; }
.date-header-label { font-size: 14px; font-weight: 700; white-space: nowrap; }
.digit { font-size: 9px; opacity: 0.2; }
.qty-cell { width: 35px; text-align: center; font-weight: bold; }
.wishlist { background-color: #FDF2F8; }
.wishlist-tag { font-size: 8px; background: #FCE7F3; padding: 1px 3px; border-radius: 2px;
                color: #BE185D; font-weight: bold; margin-left: 4px; }
.footer { margin-top: 40px; font-size: 9px; color: #9CA3AF; text-align: center;
          border-top: 1px solid #F3F4F6; padding-top: 12px; }
"""


@dataclass(frozen=True)
class AuditRow:
    """One physical unit on the checklist."""

    name: str
    description: str
    is_wishlist: bool = False


@dataclass(frozen=True)
class AuditSection:
    title: str
    rows: Tuple[AuditRow, ...]


def format_set_name(name: str) -> str:
    """Append " Set" unless the trimmed name already ends with "set"."""
    trimmed = name.strip()
    return trimmed if trimmed.lower().endswith("set") else f"{trimmed} Set"


def audit_filename(now: Optional[datetime] = None) -> str:
    """Return ``SurgSet_Audit_yymmddhhmmss`` for ``now`` (default: current time)."""
    now = now or datetime.now()
    return AUDIT_FILENAME_PREFIX + now.strftime("%y%m%d%H%M%S")


def _unit_rows(instrument: Instrument, quantity: int) -> List[AuditRow]:
    row = AuditRow(
        name=instrument.name,
        description=instrument.description,
        is_wishlist=instrument.is_wishlist,
    )
    return [row] * quantity


def build_audit_sections(
    inventory: Iterable[Instrument], sets: Iterable[InstrumentSet]
) -> List[AuditSection]:
    inventory = list(inventory)
    by_id = {instrument.id: instrument for instrument in inventory}
    referenced: Set[str] = set()
    sections: List[AuditSection] = []

    for instrument_set in sets:
        referenced.update(si.instrument_id for si in instrument_set.instruments)
        if not instrument_set.instruments:
            continue
        rows: List[AuditRow] = []
        for allocation in instrument_set.instruments:
            instrument = by_id.get(allocation.instrument_id)
            if instrument is None:
                logger.debug(
                    "Skipping missing instrument %s in set %s",
                    allocation.instrument_id,
                    instrument_set.id,
                )
                continue
            rows.extend(_unit_rows(instrument, allocation.quantity))
        sections.append(
            AuditSection(title=format_set_name(instrument_set.name), rows=tuple(rows))
        )

    misc = sorted(
        (i for i in inventory if i.id not in referenced and i.quantity > 0),
        key=lambda i: i.name.casefold(),
    )
    if misc:
        rows = [row for i in misc for row in _unit_rows(i, i.quantity)]
        sections.append(AuditSection(title=MISC_SECTION_TITLE, rows=tuple(rows)))
    return sections


def _date_header() -> str:
    return (
        '<th class="date-header"><div class="date-header-label">'
        '<span class="digit">dd</span>/<span class="digit">mm</span>/'
        '<span class="digit">yy</span></div></th>'
    )


def _render_row(row: AuditRow) -> str:
    tag = '<span class="wishlist-tag">WISHLIST</span>' if row.is_wishlist else ""
    css = "wishlist" if row.is_wishlist else ""
    checks = '<td class="checkbox-cell"></td>' * CHECK_COLUMNS
    return (
        f'<tr class="{css}"><td>'
        f'<span class="inst-name">{escape(row.name)}{tag}</span>'
        f'<span class="inst-desc">{escape(row.description)}</span>'
        f'</td><td class="qty-cell">1</td>{checks}</tr>'
    )


def _render_section(section: AuditSection) -> str:
    headers = _date_header() * CHECK_COLUMNS
    body = "".join(_render_row(row) for row in section.rows)
    return (
        '<div class="set-page">'
        f'<div class="header-section"><h1>{escape(section.title)}</h1></div>'
        "<table><thead><tr>"
        '<th style="width: 45%;">Instrument</th>'
        f'<th class="qty-cell" style="width: 8%;">Qty</th>{headers}'
        f"</tr></thead><tbody>{body}</tbody></table></div>"
    )


def render_audit(
    inventory: Iterable[Instrument],
    sets: Iterable[InstrumentSet],
    now: Optional[datetime] = None,
    app_name: str = "SurgiSet Portfolio",
) -> str:
    """Render the audit document as a standalone HTML page."""
    now = now or datetime.now()
    sections = build_audit_sections(inventory, sets)
    body = "".join(_render_section(section) for section in sections)
    return (
        "<!DOCTYPE html>\n<html>\n<head>\n"
        '<meta charset="utf-8">\n'
        f"<title>{audit_filename(now)}</title>\n"
        f"<style>{_STYLE}</style>\n</head>\n<body>\n{body}"
        f'<div class="footer">Generated by {escape(app_name)} &bull; Audit Report '
        f"&bull; {now.strftime('%d/%m/%Y')}</div>\n</body>\n</html>\n"
    )


def export_audit(
    inventory: Iterable[Instrument],
    sets: Iterable[InstrumentSet],
    directory: Path,
    now: Optional[datetime] = None,
) -> Path:
    """Write the audit to ``directory/<audit_filename>.html`` and return the path.

    Raises:
        OSError: If the directory cannot be created or the file written.
    """
    now = now or datetime.now()
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{audit_filename(now)}.html"
    path.write_text(render_audit(inventory, sets, now=now), encoding="utf-8")
    logger.info("Generated audit %s", path)
    return path
