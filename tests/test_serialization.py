"""Tests for the document wire schema mapping."""

import json
import logging
from datetime import date

import pytest

from crpt_client.services.serialization import _wire_value, document_to_payload, serialize_document
from fakes import make_document, make_product

UNCONDITIONAL_KEYS = {
    "doc_id",
    "doc_status",
    "doc_type",
    "owner_inn",
    "participant_inn",
    "producer_inn",
    "production_type",
    "reg_date",
    "reg_number",
}


def test_unconditional_top_level_fields_are_present() -> None:
    payload = document_to_payload(make_document())

    assert UNCONDITIONAL_KEYS <= payload.keys()
    assert payload["doc_id"] == "doc-1"
    assert payload["reg_date"] == "2024-01-20"
    assert payload["production_date"] == "2024-01-15"


def test_description_omitted_when_null() -> None:
    payload = document_to_payload(make_document(description=None))

    assert "description" not in payload


def test_description_emits_participant_inn_object() -> None:
    payload = document_to_payload(make_document(description="x"))

    assert payload["description"] == {"participantInn": "7700000002"}


def test_import_request_only_when_set() -> None:
    assert "importRequest" not in document_to_payload(make_document())

    payload = document_to_payload(make_document(import_request=False))
    assert payload["importRequest"] is False


@pytest.mark.parametrize(
    ("fields", "expected"),
    [
        (
            {
                "certificate_document": "CONFORMITY_CERTIFICATE",
                "certificate_document_date": date(2023, 5, 1),
                "certificate_document_number": "RU-1",
            },
            {"certificate_document": "CONFORMITY_CERTIFICATE"},
        ),
        (
            {"certificate_document_date": date(2023, 5, 1), "certificate_document_number": "RU-1"},
            {"certificate_document_date": "2023-05-01"},
        ),
        ({"certificate_document_number": "RU-1"}, {"certificate_document_number": "RU-1"}),
        ({}, {}),
    ],
)
def test_only_highest_priority_certificate_field_is_sent(fields: dict, expected: dict) -> None:
    document = make_document(products=(make_product(**fields),))

    product = document_to_payload(document)["products"][0]
    sent = {k: v for k, v in product.items() if k.startswith("certificate_")}

    assert sent == expected


def test_dropped_certificate_fields_are_logged(caplog: pytest.LogCaptureFixture) -> None:
    document = make_document(
        products=(make_product(certificate_document="DECLARATION", certificate_document_number="RU-1"),)
    )

    with caplog.at_level(logging.WARNING, logger="crpt_client.services.serialization"):
        document_to_payload(document)

    records = [r for r in caplog.records if r.getMessage() == "serialization.certificate_fields_dropped"]
    assert len(records) == 1
    assert records[0].dropped == ["certificate_document_number"]


def test_product_parties_come_from_document() -> None:
    document = make_document(
        products=(make_product(owner_inn="1111111111", producer_inn="2222222222"),)
    )

    product = document_to_payload(document)["products"][0]

    assert product["owner_inn"] == "7700000001"
    assert product["producer_inn"] == "7700000003"


def test_product_production_date_defaults_to_document() -> None:
    product = document_to_payload(make_document())["products"][0]

    assert product["production_date"] == "2024-01-15"


def test_product_production_date_overrides_when_different() -> None:
    document = make_document(products=(make_product(production_date=date(2023, 12, 31)),))

    product = document_to_payload(document)["products"][0]

    assert product["production_date"] == "2023-12-31"


def test_uit_or_uitu_code_is_emitted() -> None:
    document = make_document(
        products=(
            make_product(),
            make_product(uit_code=None, uitu_code="UITU-1"),
        )
    )

    first, second = document_to_payload(document)["products"]

    assert "uit_code" in first and "uitu_code" not in first
    assert second["uitu_code"] == "UITU-1" and "uit_code" not in second
    assert second["tnved_code"] == "6401100000"


def test_products_keep_their_order() -> None:
    document = make_document(
        products=tuple(make_product(uit_code=f"UIT-{i}") for i in range(3))
    )

    codes = [p["uit_code"] for p in document_to_payload(document)["products"]]

    assert codes == ["UIT-0", "UIT-1", "UIT-2"]


def test_serialize_document_produces_json_text() -> None:
    text = serialize_document(make_document(description="x", import_request=True))

    decoded = json.loads(text)
    assert decoded["description"] == {"participantInn": "7700000002"}
    assert decoded["importRequest"] is True


def test_only_dates_are_converted_to_iso_strings() -> None:
    class Versioned:
        def isoformat(self) -> str:
            return "not-a-date"

    marker = Versioned()

    assert _wire_value(date(2024, 2, 29)) == "2024-02-29"
    assert _wire_value(marker) is marker
    assert _wire_value("RU-1") == "RU-1"
