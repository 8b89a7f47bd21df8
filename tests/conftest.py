import csv
from pathlib import Path

import pytest

from ods_practices.common.constants import ODS_PRACTICE_HEADER

DIRECTORY_HEADER = ["OrganisationCode", "OrganisationName", "Latitude", "Longitude"]


def registry_row(
    code: str,
    *,
    name: str = "TEST PRACTICE",
    status_code: str = "A",
    prescribing_setting: str = "4",
    address_lines: tuple[str, ...] = ("1 HIGH STREET", "", "", "", ""),
    postcode: str = "AB1 2CD",
    telephone: str = "01234 567890",
) -> list[str]:
    values = {field: "" for field in ODS_PRACTICE_HEADER}
    values.update(
        {
            "organisation_code": code,
            "name": name,
            "postcode": postcode,
            "status_code": status_code,
            "prescribing_setting": prescribing_setting,
            "contact_telephone_number": telephone,
        }
    )
    for idx, line in enumerate(address_lines, start=1):
        values[f"address_line_{idx}"] = line
    return [values[field] for field in ODS_PRACTICE_HEADER]


@pytest.fixture
def make_registry_row():
    return registry_row


@pytest.fixture
def write_registry(tmp_path: Path):
    def _write(filename: str, rows: list[list[str]]) -> Path:
        path = tmp_path / filename
        with path.open("w", encoding="utf-8", newline="") as f:
            csv.writer(f).writerows(rows)
        return path

    return _write


@pytest.fixture
def write_directory(tmp_path: Path):
    def _write(filename: str, rows: list[list[str]], header: list[str] | None = None) -> Path:
        path = tmp_path / filename
        lines = ["¬".join(header or DIRECTORY_HEADER)] + ["¬".join(row) for row in rows]
        path.write_bytes(("\r\n".join(lines) + "\r\n").encode("iso-8859-1"))
        return path

    return _write
