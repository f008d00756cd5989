from dataclasses import dataclass, field

@dataclass(frozen=True)
class DetailRange():
    """
    Rows to fold under a parent row, 0-based and end exclusive like the
    startIndex/endIndex of a DimensionRange.
    """
    startIndex: int = field(default=0)
    endIndex: int = field(default=0)

    def __len__(self) -> int:
        return self.endIndex - self.startIndex

def plan_detail_range(present_row: int, last_row: int,
                      index_offset: int = 0) -> DetailRange|None:
    """
    Work out the detail rows sitting under a parent (present) row.

    present_row:  1-based row of the parent/representative line.
    last_row:     1-based row of the last detail line.
    index_offset: Shift applied to both, for tables that do not start at row 1.

    return: The range to group, or None when there is nothing between the
            parent and the last row, in which case no request should be sent.
    """
    start_row = present_row + index_offset + 1
    end_row = last_row + index_offset
    if end_row < start_row:
        return None
    return DetailRange(startIndex=start_row - 1, endIndex=end_row)
