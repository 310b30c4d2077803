"""Terminal geometry handling for the two panes.

Screen layout is two boxed panes side by side above a fixed-height command
box. Each pane loses two rows to its border, which leaves the number of
listing rows it can show.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .controller import DualPaneController

logger = logging.getLogger(__name__)

MIN_COLUMNS = 60
MIN_ROWS = 10
COMMAND_BOX_ROWS = 3
BORDER_ROWS = 2


@dataclass(frozen=True)
class Layout:
    """Cell geometry derived from one terminal size."""

    columns: int
    rows: int

    @property
    def left_width(self) -> int:
        return self.columns // 2

    @property
    def right_width(self) -> int:
        return self.columns - self.left_width

    @property
    def pane_height(self) -> int:
        return max(0, self.rows - COMMAND_BOX_ROWS)

    @property
    def list_rows(self) -> int:
        return max(1, self.pane_height - BORDER_ROWS)

    def is_usable(self, min_columns: int = MIN_COLUMNS, min_rows: int = MIN_ROWS) -> bool:
        return self.columns >= min_columns and self.rows >= min_rows


class ResizeCoordinator:
    """Apply geometry changes to both panels, or block while too small.

    While blocked no panel is touched. Every usable geometry (including the
    first one and the recovery from blocked) re-scans both panels and then
    re-applies the viewport row count, since directory contents may have
    changed in the meantime.
    """

    def __init__(
        self,
        controller: DualPaneController,
        *,
        min_columns: int = MIN_COLUMNS,
        min_rows: int = MIN_ROWS,
    ) -> None:
        self.controller = controller
        self.min_columns = min_columns
        self.min_rows = min_rows
        self.layout: Layout | None = None
        self.too_small = False

    def on_geometry_change(self, columns: int, rows: int) -> None:
        layout = Layout(columns=columns, rows=rows)
        self.layout = layout
        if not layout.is_usable(self.min_columns, self.min_rows):
            if not self.too_small:
                logger.debug("terminal too small: %sx%s", columns, rows)
            self.too_small = True
            return
        self.too_small = False
        self.controller.refresh_all()
        for panel in self.controller.panels:
            panel.resize_viewport(layout.list_rows)
