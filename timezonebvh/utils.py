from time import time
from typing import Callable, List


# DECORATORS


def time_execution(func: Callable) -> Callable:
    """decorator showing the execution time of a function"""

    def wrap_func(*args, **kwargs):
        t1 = time()
        result = func(*args, **kwargs)
        t2 = time()
        print(f"\nfunction {func.__name__}(...) executed in {(t2 - t1):.1f}s")
        return result

    return wrap_func


def percent(numerator, denominator):
    if denominator == 0:
        return 0.0
    return round((numerator / denominator) * 100, 2)


def rst_title(title: str, level: int = 0) -> str:
    """Return a title in restructured text format"""
    separators = ["=", "-", "~", "^", "`"]
    level = min(level, len(separators) - 1)
    sep = separators[level]
    return f"\n\n{title}\n{sep * len(title)}\n"


def print_rst_table(headers: List[str], rows: List[List[str]]):
    """
    Print a table in restructured text (.rst) format using list-table directive

    :param headers: List of column headers
    :param rows: List of rows, each row is a list of values
    """
    col_count = len(headers)
    default_width = 100 // col_count
    widths = [default_width] * col_count

    print("\n.. list-table::")
    print("   :header-rows: 1")
    print(f"   :widths: {' '.join(str(w) for w in widths)}")
    print("")

    print("   * - " + "\n     - ".join(str(h) for h in headers))

    for row in rows:
        str_cells = [str(cell) for cell in row]
        print("   * - " + "\n     - ".join(str_cells))

    print("")
