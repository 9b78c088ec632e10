from datetime import date
from pathlib import Path

import pytest

from scenario_data_lib.core.utils import cell_to_str, resolve_data_file


def test_resolve_data_file():
    assert resolve_data_file("resources/data/in", "orders", ".csv") == Path("resources/data/in/orders.csv")
    assert resolve_data_file(Path("/tmp/in"), "orders", ".sql") == Path("/tmp/in/orders.sql")


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, ""),
        ("", ""),
        ("shipped", "shipped"),
        (101, "101"),
        (101.0, "101"),
        (49.99, "49.99"),
        (True, "True"),
        (date(2024, 1, 31), "2024-01-31"),
    ],
)
def test_cell_to_str(value, expected):
    assert cell_to_str(value) == expected
