"""Rendering subpackage.

Turns immutable inventory snapshots into print-ready documents. The audit
renderer is a pure projection: it reads ``(inventory, sets)`` and never
touches the store.

See :mod:`surgiset.renderer.audit` for the checklist layout.
"""

from .audit import (
    AuditRow,
    AuditSection,
    audit_filename,
    build_audit_sections,
    export_audit,
    format_set_name,
    render_audit,
)

__all__ = [
    "AuditRow",
    "AuditSection",
    "audit_filename",
    "build_audit_sections",
    "export_audit",
    "format_set_name",
    "render_audit",
]
