from datetime import datetime
from pathlib import Path

from surgiset.renderer.audit import (
    MISC_SECTION_TITLE,
    audit_filename,
    build_audit_sections,
    export_audit,
    format_set_name,
    render_audit,
)
from tests.test_utils import make_allocated_state, make_instrument, make_set, make_state

NOW = datetime(2026, 10, 19, 8, 5, 9)


def test_format_set_name() -> None:
    assert format_set_name("Basic Suturing") == "Basic Suturing Set"
    assert format_set_name("  Ortho set ") == "Ortho set"
    assert format_set_name("Rhinoplasty SET") == "Rhinoplasty SET"
    assert format_set_name("Rhinoplasty Set 1") == "Rhinoplasty Set 1 Set"


def test_audit_filename() -> None:
    assert audit_filename(NOW) == "SurgSet_Audit_261019080509"


def test_sections_have_one_row_per_unit() -> None:
    state, _ = make_allocated_state()
    sections = build_audit_sections(state.inventory, state.sets)
    assert [s.title for s in sections] == [
        "Rhinoplasty Set",
        "Basic Suturing Set",
        MISC_SECTION_TITLE,
    ]
    assert [r.name for r in sections[0].rows] == [
        "Scalpel Handle No. 3",
        "Scalpel Handle No. 3",
        "Adson Forceps",
    ]
    assert len(sections[1].rows) == 1
    assert [r.name for r in sections[2].rows] == ["Senn Retractor"]


def test_empty_sets_are_skipped() -> None:
    state = make_state(
        instruments=[make_instrument("a", "Kelly", quantity=0)],
        sets=[make_set("s1", "Empty"), make_set("s2", "Full", [("a", 1)])],
    )
    sections = build_audit_sections(state.inventory, state.sets)
    assert [s.title for s in sections] == ["Full Set"]


def test_miscellaneous_lists_unreferenced_shelf_units_by_name() -> None:
    state = make_state(
        instruments=[
            make_instrument("z", "Senn Retractor", quantity=1),
            make_instrument("a", "adson forceps", quantity=1),
            make_instrument("in-set", "Kelly", quantity=1),
            make_instrument("empty", "Mayo Scissors", quantity=0),
        ],
        sets=[make_set("s1", "Rhino", [("in-set", 1)])],
    )
    sections = build_audit_sections(state.inventory, state.sets)
    misc = sections[-1]
    assert misc.title == MISC_SECTION_TITLE
    assert [r.name for r in misc.rows] == ["adson forceps", "Senn Retractor"]


def test_dangling_allocations_are_skipped() -> None:
    state = make_state(
        instruments=[make_instrument("a", "Kelly", quantity=0)],
        sets=[make_set("s1", "Rhino", [("gone", 2), ("a", 1)])],
    )
    sections = build_audit_sections(state.inventory, state.sets)
    assert [r.name for r in sections[0].rows] == ["Kelly"]


def test_render_audit_html() -> None:
    state = make_state(
        instruments=[
            make_instrument("a", "<Kelly>", quantity=0, is_wishlist=True),
            make_instrument("b", "Senn", quantity=1, description="Retractors"),
        ],
        sets=[make_set("s1", "Rhino & Sinus", [("a", 3)])],
    )
    before = state
    html = render_audit(state.inventory, state.sets, now=NOW)
    assert "<title>SurgSet_Audit_261019080509</title>" in html
    assert "Rhino &amp; Sinus Set" in html
    assert "&lt;Kelly&gt;" in html
    assert html.count("WISHLIST") == 3
    assert html.count('<td class="qty-cell">1</td>') == 4
    assert html.count('<td class="checkbox-cell"></td>') == 4 * 5
    assert MISC_SECTION_TITLE in html
    assert "19/10/2026" in html
    assert state == before


def test_export_audit_writes_file(tmp_path: Path) -> None:
    state, _ = make_allocated_state()
    path = export_audit(state.inventory, state.sets, tmp_path / "exports", now=NOW)
    assert path == tmp_path / "exports" / "SurgSet_Audit_261019080509.html"
    assert "Rhinoplasty Set" in path.read_text(encoding="utf-8")
