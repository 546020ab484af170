"""Supported language model (``GET /v2/languages``)."""

from pydantic import BaseModel, ConfigDict, Field


class Language(BaseModel):
    """Language supported by the server."""

    name: str = Field(..., description='Language name, e.g. "Ukrainian"')
    code: str = Field(..., description='Short code, e.g. "uk"')
    long_code: str = Field(..., alias="longCode", description='Long code, e.g. "uk-UA"')

    model_config = ConfigDict(frozen=True, populate_by_name=True)
