"""
Plain-text tables for script output.

Used by scripts/match_skills.py to print stack scores and correlation
breakdowns.
"""

from typing import Any, List, Sequence


class Column:
    """Column definition for table formatting."""

    def __init__(self, name: str, width: int, align: str = "<"):
        """
        Args:
            name: Column header name
            width: Column width in characters
            align: Alignment ('<' left, '>' right, '^' center)
        """
        self.name = name
        self.width = width
        self.align = align

    def format_header(self) -> str:
        return f"{self.name:{self.align}{self.width}}"

    def format_value(self, value: Any) -> str:
        text = str(value)
        if len(text) > self.width:
            text = text[: self.width - 3] + "..."
        return f"{text:{self.align}{self.width}}"


class TableFormatter:
    """Builder for aligned text tables. Every add_* method returns self for chaining."""

    def __init__(self, columns: List[Column], total_width: int = 80):
        self.columns = columns
        self.total_width = total_width
        self.lines: List[str] = []

    def add_section_header(self, title: str) -> "TableFormatter":
        self.lines.append("=" * self.total_width)
        self.lines.append(title)
        self.lines.append("=" * self.total_width)
        return self

    def add_table_header(self) -> "TableFormatter":
        self.lines.append(" ".join(col.format_header() for col in self.columns))
        return self

    def add_separator(self, char: str = "-") -> "TableFormatter":
        self.lines.append(char * self.total_width)
        return self

    def add_row(self, values: Sequence[Any]) -> "TableFormatter":
        """
        Add data row with column values.

        Raises:
            ValueError: If number of values doesn't match columns
        """
        if len(values) != len(self.columns):
            raise ValueError(f"Expected {len(self.columns)} values, got {len(values)}")

        self.lines.append(" ".join(col.format_value(v) for col, v in zip(self.columns, values)))
        return self

    def add_summary(self, text: str) -> "TableFormatter":
        self.lines.append(f"\n{text}")
        return self

    def render(self) -> str:
        return "\n".join(self.lines)


def format_ratio(value: float, decimal_places: int = 1) -> str:
    """
    Format a [0, 1] ratio as a percentage string.

    Args:
        value: Ratio (e.g., a correlation score)
        decimal_places: Number of decimal places

    Returns:
        Formatted percentage string (e.g., "75.0%")
    """
    return f"{value * 100:.{decimal_places}f}%"
