"""
Classes to facilitate working with Google Sheets
"""
from .a1 import CellRef, index_to_letters, letters_to_index, parse_ref, parse_range, qualify_range
from .values import CellValue, Scalar, Sequence, to_cell_value, normalize
from .groups import DetailRange, plan_detail_range
from .resources import GridRange, DimensionRange, Color, ValueRange
from .sheet import GoogleSheet
