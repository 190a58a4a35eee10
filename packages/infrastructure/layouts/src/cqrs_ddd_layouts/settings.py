"""TemplateSettings - immutable loader configuration."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

LAYOUT_MARKER = "<!--tplusContent-->"


class TemplateSettings(BaseModel):
    """Loader and engine configuration.

    Instances are frozen. Setters on :class:`~cqrs_ddd_layouts.engine.LayoutEngine`
    publish a modified copy; the copy is picked up by the next load.
    """

    model_config = ConfigDict(frozen=True)

    extension: str = Field(..., description="Exact file suffix to load, e.g. '.html'")
    left_delim: str = "{{"
    right_delim: str = "}}"
    reload: bool = Field(default=False, description="Reload every file before each render")
    debug: bool = Field(default=False, description="Log every registered template")
    autoescape: bool = True
    strict_undefined: bool = False
    encoding: str = "utf-8"
    marker: str = LAYOUT_MARKER

    @field_validator("extension")
    @classmethod
    def _check_extension(cls, value: str) -> str:
        if not value.startswith(".") or len(value) < 2:
            raise ValueError(f"extension must look like '.html', got {value!r}")
        if "/" in value or "\\" in value:
            raise ValueError("extension must not contain path separators")
        if value.count(".") > 1:
            raise ValueError(
                f"extension must have a single dot, got {value!r}; only the last suffix is matched"
            )
        return value

    @field_validator("left_delim", "right_delim", "marker", "encoding")
    @classmethod
    def _check_not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("must not be empty")
        return value

    @model_validator(mode="after")
    def _check_delims(self) -> TemplateSettings:
        if self.left_delim == self.right_delim:
            raise ValueError("left and right delimiters must differ")
        return self
