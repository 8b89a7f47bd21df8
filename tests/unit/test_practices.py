import pytest

from ods_practices.common.config_loader import FilterRules
from ods_practices.common.models import DirectoryRecord, JoinedOrganisation, RegistryRecord
from ods_practices.pipeline.practices import (
    REJECT_INACTIVE,
    REJECT_INCOMPLETE,
    REJECT_NOT_GP,
    Practice,
    select_practices,
)


def _joined(make_registry_row, code: str, directory: dict | None = None, **row_kwargs) -> JoinedOrganisation:
    return JoinedOrganisation(
        organisation_code=code,
        registry=RegistryRecord.from_row(make_registry_row(code, **row_kwargs)),
        directory=DirectoryRecord(directory) if directory is not None else None,
    )


@pytest.mark.parametrize(
    ("status_code", "prescribing_setting", "expected"),
    [
        ("A", "4", None),
        ("C", "4", REJECT_INACTIVE),
        ("C", "1", REJECT_INACTIVE),
        ("A", "1", REJECT_NOT_GP),
    ],
)
def test_rejection_reason_checks_status_then_setting(make_registry_row, status_code, prescribing_setting, expected):
    practice = Practice(
        _joined(make_registry_row, "A001", status_code=status_code, prescribing_setting=prescribing_setting)
    )
    assert practice.rejection_reason() == expected


def test_directory_only_organisation_is_incomplete():
    practice = Practice(JoinedOrganisation("B001", directory=DirectoryRecord({"OrganisationCode": "B001"})))
    assert not practice.is_complete()
    assert practice.rejection_reason() == REJECT_INCOMPLETE


def test_to_dict_joined_shape_with_coordinates(make_registry_row):
    practice = Practice(
        _joined(
            make_registry_row,
            "A001",
            directory={"OrganisationCode": "A001", "Latitude": "51.5", "Longitude": "-0.12"},
            name="LONDON MEDICAL PRACTICE",
            address_lines=("123 HIGH ST", "", "", "", ""),
            postcode="AB1 2CD",
            telephone="020 7946 0000",
        )
    )

    payload = practice.to_dict()

    assert list(payload) == ["organisation_code", "name", "location", "contact_telephone_number"]
    assert payload == {
        "organisation_code": "A001",
        "name": "London Medical Practice",
        "location": {"address": "123 High St, Ab1 2Cd", "latitude": "51.5", "longitude": "-0.12"},
        "contact_telephone_number": "020 7946 0000",
    }


def test_to_dict_omits_missing_or_blank_coordinates(make_registry_row):
    no_directory = Practice(_joined(make_registry_row, "A001"))
    blank_latitude = Practice(
        _joined(make_registry_row, "A002", directory={"OrganisationCode": "A002", "Latitude": "", "Longitude": "1.0"})
    )

    assert list(no_directory.to_dict()["location"]) == ["address"]
    assert blank_latitude.to_dict()["location"] == {"address": "1 High Street, Ab1 2Cd", "longitude": "1.0"}


def test_to_dict_registry_only_shape(make_registry_row):
    payload = Practice(_joined(make_registry_row, "A001", telephone="")).to_dict(include_location=False)

    assert list(payload) == ["organisation_code", "name", "address", "contact_telephone_number"]
    assert payload["contact_telephone_number"] == ""


def test_select_practices_filters_sorts_and_counts(make_registry_row):
    organisations = [
        _joined(make_registry_row, "C003"),
        _joined(make_registry_row, "A001"),
        _joined(make_registry_row, "B002", status_code="C"),
        _joined(make_registry_row, "B001", prescribing_setting="0"),
        JoinedOrganisation("Z999", directory=DirectoryRecord({"OrganisationCode": "Z999"})),
    ]

    kept, rejected = select_practices(organisations)

    assert [practice.organisation_code for practice in kept] == ["A001", "C003"]
    assert rejected == {REJECT_INACTIVE: 1, REJECT_NOT_GP: 1, REJECT_INCOMPLETE: 1}


def test_select_practices_honours_custom_rules(make_registry_row):
    rules = FilterRules(active_status_code="A", gp_prescribing_setting="1")
    kept, _ = select_practices([_joined(make_registry_row, "A001", prescribing_setting="1")], rules)
    assert [practice.organisation_code for practice in kept] == ["A001"]
