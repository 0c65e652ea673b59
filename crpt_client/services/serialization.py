"""Mapping of ``Document`` onto the remote service's JSON schema.

Key names are the literal wire contract (snake_case, plus the camelCase
``importRequest``/``participantInn``) and must not change.
"""

from __future__ import annotations

import json
import logging
from datetime import date
from typing import Any

from crpt_client.schemas.document import Document, Product

logger = logging.getLogger(__name__)

# First non-null field wins; the rest are not sent.
CERTIFICATE_FIELDS = (
    "certificate_document",
    "certificate_document_date",
    "certificate_document_number",
)


def _wire_value(value: Any) -> Any:
    if isinstance(value, date):
        return value.isoformat()
    return value


def _certificate_entry(product: Product, index: int) -> dict[str, Any]:
    present = [name for name in CERTIFICATE_FIELDS if getattr(product, name) is not None]
    if not present:
        return {}

    chosen, *dropped = present
    if dropped:
        logger.warning(
            "serialization.certificate_fields_dropped",
            extra={"product_index": index, "sent": chosen, "dropped": dropped},
        )
    return {chosen: _wire_value(getattr(product, chosen))}


def product_to_payload(document: Document, product: Product, index: int = 0) -> dict[str, Any]:
    """Build the wire object for one product of ``document``.

    Assumes the product was validated (exactly one uit code set).
    """
    production_date = document.production_date
    if product.production_date is not None and product.production_date != production_date:
        production_date = product.production_date

    entry = _certificate_entry(product, index)
    entry.update(
        {
            "owner_inn": document.owner_inn,
            "producer_inn": document.producer_inn,
            "production_date": _wire_value(production_date),
            "tnved_code": product.tnved_code,
        }
    )
    if product.uit_code is not None:
        entry["uit_code"] = product.uit_code
    else:
        entry["uitu_code"] = product.uitu_code
    return entry


def document_to_payload(document: Document) -> dict[str, Any]:
    """Build the wire object for ``document``.

    ``description`` becomes ``{"participantInn": ...}`` and, like
    ``importRequest``, is only present when set on the document.
    """
    payload: dict[str, Any] = {}

    if document.description is not None:
        payload["description"] = {"participantInn": document.participant_inn}

    payload.update(
        {
            "doc_id": document.doc_id,
            "doc_status": document.doc_status,
            "doc_type": document.doc_type,
        }
    )

    if document.import_request is not None:
        payload["importRequest"] = document.import_request

    payload.update(
        {
            "owner_inn": document.owner_inn,
            "participant_inn": document.participant_inn,
            "producer_inn": document.producer_inn,
            "production_date": _wire_value(document.production_date),
            "production_type": document.production_type,
            "products": [
                product_to_payload(document, product, index)
                for index, product in enumerate(document.products)
            ],
            "reg_date": _wire_value(document.reg_date),
            "reg_number": document.reg_number,
        }
    )
    return payload


def serialize_document(document: Document) -> str:
    """Serialize ``document`` to the JSON text sent on the wire."""
    return json.dumps(document_to_payload(document), ensure_ascii=False)
