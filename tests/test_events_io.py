import datetime as dt
from pathlib import Path

import pytest

from cashcast_core.domain.models import CashEvent
from cashcast_core.io.events import CashEventDecodeError, CsvFileNotFoundError, load_cash_events

FIXTURE = Path(__file__).parent / "data" / "cash_events.csv"


def _write(tmp_path: Path, body: str) -> Path:
    path = tmp_path / "events.csv"
    path.write_text(body)
    return path


def test_load_fixture_trims_and_parses():
    events = load_cash_events(FIXTURE)
    assert events == [
        CashEvent(id="salary-jan", label="Salary", value=3200.0, date=dt.date(2030, 1, 31)),
        CashEvent(id="rent-feb", label="Rent", value=-1400.5, date=dt.date(2030, 2, 1)),
        CashEvent(id="groceries-feb", label="Groceries", value=-275.0, date=dt.date(2030, 2, 3)),
    ]


def test_missing_file_raises(tmp_path: Path):
    with pytest.raises(CsvFileNotFoundError):
        load_cash_events(tmp_path / "nope.csv")


def test_missing_columns_are_reported(tmp_path: Path):
    path = _write(tmp_path, "ID,label,value\na,A,1\n")
    with pytest.raises(CashEventDecodeError, match="date"):
        load_cash_events(path)


@pytest.mark.parametrize(
    "row",
    [
        " ,Label,10,2030-01-01",
        "a,  ,10,2030-01-01",
        "a,Label,ten,2030-01-01",
        "a,Label,10,not-a-date",
        "a,Label,10,",
    ],
)
def test_bad_rows_are_rejected(tmp_path: Path, row: str):
    path = _write(tmp_path, "ID,label,value,date\n" + row + "\n")
    with pytest.raises(CashEventDecodeError) as info:
        load_cash_events(path)
    assert info.value.data is not None


def test_header_only_gives_no_events(tmp_path: Path):
    assert load_cash_events(_write(tmp_path, "ID,label,value,date\n")) == []
