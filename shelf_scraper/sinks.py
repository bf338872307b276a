import csv
from pathlib import Path
from typing import List, Sequence, Union


class CsvSink:
    """Flat-file output: one header row, then one row per product."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._file = open(self.path, "w", newline="", encoding="utf-8")
        self._writer = csv.writer(self._file, quoting=csv.QUOTE_ALL)
        self.rows_written = 0

    def write_header(self, fields: Sequence[str]) -> None:
        self._writer.writerow(list(fields))

    def write_row(self, fields: Sequence[str]) -> None:
        self._writer.writerow(list(fields))
        self.rows_written += 1

    def close(self) -> None:
        if not self._file.closed:
            self._file.close()

    @property
    def closed(self) -> bool:
        return self._file.closed

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def read_rows(path: Union[str, Path]) -> List[List[str]]:
    """Read an exported file back, header included."""
    with open(path, newline="", encoding="utf-8") as f:
        return [row for row in csv.reader(f)]
