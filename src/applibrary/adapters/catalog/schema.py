"""Pydantic models describing catalog documents."""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class CatalogBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


class ItemPayload(CatalogBaseModel):
    identifier: str = Field(validation_alias=AliasChoices("identifier", "packageName", "id"))
    label: str
    publisher: str = Field(validation_alias=AliasChoices("publisher", "company"))
    icon: str = ""

    @field_validator("identifier", "label", "publisher", mode="before")
    @classmethod
    def _strip(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("identifier")
    @classmethod
    def _require_identifier(cls, value: str) -> str:
        if not value:
            raise ValueError("identifier must not be blank")
        return value


class CatalogPayload(CatalogBaseModel):
    items: list[ItemPayload]
