import logging

logger = logging.getLogger(__name__)


def sort_by_column(table, column_index, reverse=False):
    """Reorder the data lines of ``table`` by the original values of a column.

    Only the data region moves; the header and anything after the table keep
    their place. Nothing is re-measured, since reordering rows leaves every
    column's width unchanged. Returns False, without touching the table, when
    ``column_index`` does not name a column.
    """
    if column_index is None or not 0 <= column_index < len(table.columns):
        logger.debug(f'No sortable column at {column_index!r}')
        return False
    region = table.data_range()
    lines = table.lines[region.start:region.stop]
    lines.sort(key=lambda line: str(line.row[column_index]))
    if reverse:
        # Reversed after sorting, so equal keys flip as a block.
        lines.reverse()
    table.lines[region.start:region.stop] = lines
    logger.debug(f'Sorted {len(lines)} rows by column {column_index}'
                 f'{" (reversed)" if reverse else ""}')
    return True


def sort_at(table, offset, reverse=False):
    """Sort by the column whose header covers character ``offset``."""
    return sort_by_column(table, table.column_at(offset), reverse)
