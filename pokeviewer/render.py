"""Plain-text rendering of the catalog grid and the detail panel."""

from __future__ import annotations

from typing import List

from .catalog import CatalogState
from .models import SelectionState, SelectionStatus
from .naming import dex_number, slug_titlecase

LOADING_TEXT = "Loading..."
NO_EVOLUTION_TEXT = "No evolution data available."
EVOLUTION_PENDING_TEXT = "Loading evolutions..."


def render_catalog(state: CatalogState, columns: int = 4) -> str:
    if state.loading:
        return LOADING_TEXT
    if state.error:
        return state.error

    cells = [
        f"{dex_number(e.id)} {slug_titlecase(e.name):<12s}" for e in state.entities
    ]
    rows = [
        "  ".join(cells[i : i + columns]).rstrip()
        for i in range(0, len(cells), columns)
    ]
    return "\n".join(rows)


def render_detail(state: SelectionState) -> str:
    entity = state.entity
    if state.status is SelectionStatus.NONE or entity is None:
        return ""

    lines: List[str] = [
        f"{slug_titlecase(entity.name)} {dex_number(entity.id)}",
    ]
    if entity.image:
        lines.append(f"Image: {entity.image}")
    lines.append("Type(s): " + ", ".join(entity.types))
    lines.append("")
    lines.append("Stats")
    width = max((len(name) for name, _ in entity.stats), default=0)
    for name, value in entity.stats:
        lines.append(f"  {name:<{width}s}  {value:>3d}")
    lines.append("")
    lines.append("Evolutions")
    if state.status is SelectionStatus.PENDING:
        lines.append(f"  {EVOLUTION_PENDING_TEXT}")
    elif not state.evolution:
        lines.append(f"  {NO_EVOLUTION_TEXT}")
    else:
        lines.append(
            "  " + " -> ".join(slug_titlecase(s.name) for s in state.evolution)
        )
        for stage in state.evolution:
            lines.append(f"  {slug_titlecase(stage.name)}: {stage.image_ref}")
    return "\n".join(lines)
