"""
Grid mathematics for the square card board.

Hit-test taps against cells and size cells to fit a container. Cells
are laid out row-major from the top-left margin. No UI framework
dependencies.
"""
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(slots=True)
class GridDimensions:
    """Grid layout dimensions and spacing."""
    columns: int = 4
    rows: int = 4
    cell_width: int = 100
    cell_height: int = 100
    margin: int = 8
    spacing: int = 10

    @property
    def grid_width(self) -> int:
        """Total width required for the grid."""
        return (self.margin * 2) + (self.columns * self.cell_width) + ((self.columns - 1) * self.spacing)

    @property
    def grid_height(self) -> int:
        """Total height required for the grid."""
        return (self.margin * 2) + (self.rows * self.cell_height) + ((self.rows - 1) * self.spacing)


class GridLayout:
    """
    Manages grid layout calculations for the card board.

    Maps board coordinates to deck indices in row-major order.
    """

    def __init__(self, dimensions: GridDimensions) -> None:
        self.dimensions = dimensions

    def find_item_at_position(self, x: int, y: int) -> Optional[int]:
        """
        Find card index at given pixel coordinates.

        Args:
            x: X coordinate (pixel)
            y: Y coordinate (pixel)

        Returns:
            Card index if a cell is hit, None for margins and gutters
        """
        grid_x = x - self.dimensions.margin
        grid_y = y - self.dimensions.margin

        if grid_x < 0 or grid_y < 0:
            return None

        cell_total_width = self.dimensions.cell_width + self.dimensions.spacing
        cell_total_height = self.dimensions.cell_height + self.dimensions.spacing

        column = int(grid_x // cell_total_width)
        row = int(grid_y // cell_total_height)

        if column >= self.dimensions.columns or row >= self.dimensions.rows:
            return None

        # Spacing between cells is not part of any card
        if (grid_x % cell_total_width >= self.dimensions.cell_width or
                grid_y % cell_total_height >= self.dimensions.cell_height):
            return None

        return row * self.dimensions.columns + column

    def update_dimensions(self, new_dimensions: GridDimensions) -> None:
        self.dimensions = new_dimensions

    def get_optimal_cell_size(self, container_width: int, container_height: int) -> Tuple[int, int]:
        """
        Calculate the largest square cell that fits the container.

        Args:
            container_width: Available container width
            container_height: Available container height

        Returns:
            Tuple of (cell_width, cell_height)
        """
        spacing_width = (self.dimensions.columns - 1) * self.dimensions.spacing
        spacing_height = (self.dimensions.rows - 1) * self.dimensions.spacing

        available_width = container_width - (2 * self.dimensions.margin) - spacing_width
        available_height = container_height - (2 * self.dimensions.margin) - spacing_height

        side = min(available_width // self.dimensions.columns,
                   available_height // self.dimensions.rows)
        return (max(1, side), max(1, side))
