"""Pydantic models for documents submitted to the remote service."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field


class Product(BaseModel):
    """A single product line of a document.

    Exactly one of ``uit_code``/``uitu_code`` must be set for the product to
    be accepted; this is checked at submission time, not on construction.
    """

    model_config = ConfigDict(frozen=True)

    certificate_document: str | None = Field(
        None,
        description="Type of the conformity certificate document.",
    )
    certificate_document_date: date | None = Field(
        None,
        description="Issue date of the conformity certificate.",
    )
    certificate_document_number: str | None = Field(
        None,
        description="Number of the conformity certificate.",
    )
    owner_inn: str | None = Field(
        None,
        description="Owner taxpayer id. The wire format always uses the document's value.",
    )
    producer_inn: str | None = Field(
        None,
        description="Producer taxpayer id. The wire format always uses the document's value.",
    )
    production_date: date | None = Field(
        None,
        description="Production date; falls back to the document's when unset.",
    )
    tnved_code: str = Field(
        ...,
        description="Commodity nomenclature (TN VED) code.",
    )
    uit_code: str | None = Field(
        None,
        description="Unique identification code of a single item.",
    )
    uitu_code: str | None = Field(
        None,
        description="Unique identification code of a transport package.",
    )


class Document(BaseModel):
    """An immutable business document with its ordered product lines."""

    model_config = ConfigDict(frozen=True)

    doc_id: str
    doc_status: str
    doc_type: str
    owner_inn: str
    participant_inn: str
    producer_inn: str
    production_date: date
    production_type: str
    reg_date: date
    reg_number: str
    description: str | None = None
    import_request: bool | None = None
    products: tuple[Product, ...] = ()
