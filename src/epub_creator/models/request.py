"""Build request models."""

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from epub_creator.errors import ConfigurationError
from epub_creator.models.markup import check_xml_text


class TocItem(BaseModel):
    """Single entry of the navigation forest."""

    model_config = ConfigDict(extra="forbid")

    label: str = Field(min_length=1)
    href: str = Field(min_length=1)
    children: list["TocItem"] = Field(default_factory=list)

    @field_validator("label", "href")
    @classmethod
    def _xml_text(cls, value: str) -> str:
        return check_xml_text(value)


class SimpleMetadata(BaseModel):
    """Shorthand bibliographic fields."""

    model_config = ConfigDict(extra="forbid")

    title: str | None = None
    author: str | None = None
    language: str | None = None
    description: str | None = None
    isbn: str | None = None
    tags: list[str] = Field(default_factory=list)

    @field_validator("title", "author", "language", "description", "isbn")
    @classmethod
    def _xml_text(cls, value: str | None) -> str | None:
        return value if value is None else check_xml_text(value)

    @field_validator("tags")
    @classmethod
    def _xml_tags(cls, value: list[str]) -> list[str]:
        return [check_xml_text(tag) for tag in value]


class BuildRequest(BaseModel):
    """Everything needed to assemble one EPUB."""

    model_config = ConfigDict(extra="forbid")

    content_dir: Path
    spine: list[str]
    toc: list[TocItem]
    cover: str | None = None
    simple_metadata: SimpleMetadata = Field(default_factory=SimpleMetadata)
    # Nested-list markup, validated by the metadata merger
    metadata: list[Any] = Field(default_factory=list)

    @field_validator("spine")
    @classmethod
    def _unique_spine(cls, value: list[str]) -> list[str]:
        seen: set[str] = set()
        for name in value:
            check_xml_text(name)
            if name in seen:
                raise ValueError(f"duplicate spine entry {name!r}")
            seen.add(name)
        return value

    @field_validator("cover")
    @classmethod
    def _xml_cover(cls, value: str | None) -> str | None:
        return value if value is None else check_xml_text(value)

    @classmethod
    def from_data(cls, data: Any) -> "BuildRequest":
        """Validate raw data, raising ConfigurationError on failure."""
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            error = e.errors()[0]
            location = ".".join(str(part) for part in error["loc"]) or None
            raise ConfigurationError(error["msg"], field=location) from e

    @classmethod
    def from_file(cls, path: Path) -> "BuildRequest":
        """Load a JSON build request.

        A relative content_dir is resolved against the config file's directory.
        """
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except OSError as e:
            raise ConfigurationError(f"cannot read config file: {e}") from e
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"invalid JSON: {e}", field=str(path)) from e

        request = cls.from_data(data)
        if not request.content_dir.is_absolute():
            request.content_dir = path.parent / request.content_dir
        return request

    def check_content_dir(self) -> None:
        """Fail unless content_dir is an existing directory."""
        if not self.content_dir.is_dir():
            raise ConfigurationError(
                f"{self.content_dir} is not a directory", field="content_dir"
            )
