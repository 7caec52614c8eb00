"""
Ingestion trigger payload.

Dependencies: pydantic
System role: Input contract for DocumentPipeline.index()
"""

from pydantic import BaseModel, ConfigDict, Field

from .document import SourceType


class IngestionRequest(BaseModel):
    """Raw document handed to the pipeline by an external collaborator."""

    document_id: str | None = Field(
        default=None,
        max_length=64,
        description="Caller-supplied ID; a UUID4 string is generated when omitted",
    )
    title: str = Field(min_length=1, max_length=500)
    raw_text: str | bytes = Field(description="Extracted document text (bytes are decoded as UTF-8)")
    source_type: SourceType = Field(default=SourceType.PLAIN_TEXT)
    source_url: str | None = Field(default=None, max_length=2048)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Shipping policy",
                "raw_text": "Orders ship within two business days.",
                "source_type": "plain_text",
            }
        }
    )
