"""
Module: composer.surfaces

Purpose:
    Contracts of the collaborators around the engine, plus the element id
    convention shared with render surfaces.

Key Classes:
    - DataSource: Delivers the Catalog
    - RenderSurface: Displays pools, marks, counts and the info panel
    - SaveSurface: Receives the Chosen id sequence

Key Functions:
    - element_id(): ``"<kind>-<id>"`` identifier for a rendered item
    - parse_element_id(): Inverse of element_id

Dependencies:
    - typing (std)

Used By:
    - composer.controller
    - composer.loading.loader: JsonDataSource
    - composer.output: JsonPlanWriter, PdfQuestionSheet
    - gui.widgets.composer_panel: RenderSurface implementation
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Iterable, Optional, Protocol, Sequence, Tuple, runtime_checkable

if TYPE_CHECKING:
    from exam_assembler.core.models import Catalog, Item

    from .info import InfoRequest
    from .pool_name import PoolName


INFO_PANEL_ID = "info-panel"


def element_id(kind: str, item_id: int) -> str:
    """
    Stable identifier of a rendered item.

    Example:
        >>> element_id("question", 12)
        'question-12'
    """
    return f"{kind}-{item_id}"


def parse_element_id(value: Optional[str]) -> Optional[Tuple[str, int]]:
    """
    Split ``"<kind>-<id>"`` into (kind, id).

    Returns None for anything that is not an item element id, including
    the info panel id.
    """
    if not value or "-" not in value:
        return None
    kind, _, raw_id = value.rpartition("-")
    if not kind or not raw_id.isdigit():
        return None
    return kind, int(raw_id)


@runtime_checkable
class DataSource(Protocol):
    """Provides the items and reference data, loaded once."""

    def load(self) -> "Catalog":
        ...


@runtime_checkable
class RenderSurface(Protocol):
    """
    Displays the composer state.

    Gestures travel the other way: the surface calls the controller's
    ``click``, ``outside_click``, ``transfer_*`` and ``drag_*`` methods.
    All visual drag feedback is the surface's own business.
    """

    def show_available(self, items: Sequence["Item"]) -> None:
        ...

    def show_chosen(self, items: Sequence["Item"]) -> None:
        ...

    def show_marks(self, pool: "PoolName", item_ids: Iterable[int]) -> None:
        ...

    def show_counts(self, counts: Dict[int, int], total: int) -> None:
        ...

    def show_info(self, request: "InfoRequest") -> None:
        ...

    def hide_info(self) -> None:
        ...


@runtime_checkable
class SaveSurface(Protocol):
    """Receives the Chosen pool's item ids, in test order."""

    def save(self, chosen_ids: Sequence[int]) -> None:
        ...
