import re
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from content_source.models import ContentType


class UrlRuleConfig(BaseModel):
    pattern: str = Field(min_length=1)
    content_type: ContentType

    @field_validator("pattern")
    @classmethod
    def validate_pattern(cls, v: str) -> str:
        try:
            compiled = re.compile(v)
        except re.error as e:
            raise ValueError(f"invalid regular expression {v!r}: {e}") from e
        if "id" not in compiled.groupindex:
            raise ValueError(f"pattern {v!r} needs a named group 'id', e.g. (?P<id>\\d+)")
        return v


class SourceConfig(BaseModel):
    id: str = Field(min_length=1)
    base_urls: list[str] = Field(default_factory=list)
    rules: list[UrlRuleConfig] = Field(default_factory=list)
    entity_types: dict[ContentType, str | None] = Field(default_factory=dict)
    capabilities: dict[ContentType, dict[str, str | None]] = Field(default_factory=dict)


class ContentSourcesConfig(BaseModel):
    home_url: str = "http://localhost"
    default_source: str | None = None
    sources: list[SourceConfig] = Field(default_factory=list)
    log_level: Literal["debug", "info", "warn", "error"] = "info"

    @model_validator(mode="after")
    def check_source_ids(self) -> "ContentSourcesConfig":
        ids = [s.id for s in self.sources]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise ValueError(f"duplicate source ids: {duplicates}")
        if self.default_source is not None and self.default_source not in ids:
            raise ValueError(f"default_source {self.default_source!r} is not one of the configured sources {ids}")
        return self

    def get_source(self, source_id: str) -> SourceConfig | None:
        for source in self.sources:
            if source.id == source_id:
                return source
        return None
