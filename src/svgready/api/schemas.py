from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ..models import ConversionOptions, ConversionResult


class ConvertRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    svg: str = ""
    strip_wh: bool = Field(False, alias="stripWh")
    strip_class: bool = Field(False, alias="stripClass")
    show_base64: bool = Field(False, alias="showBase64")
    debug: bool = False

    def to_options(self, *, debug_default: bool = False) -> ConversionOptions:
        return ConversionOptions(
            strip_root_width_height=self.strip_wh,
            strip_root_class=self.strip_class,
            emit_base64=self.show_base64,
            debug=self.debug or debug_default,
        )


class ConvertResults(BaseModel):
    normalized: str
    data_uri_css: str
    bg_snippet: str
    mask_snippet: str
    data_uri_b64: str = ""
    show_base64: bool = False
    preview: str
    size_before: int
    size_after: int
    savings_percent: int
    warnings: list[str] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: ConversionResult, *, show_base64: bool) -> ConvertResults:
        return cls(
            normalized=result.normalized,
            data_uri_css=result.data_uri,
            bg_snippet=result.background_css,
            mask_snippet=result.mask_css,
            data_uri_b64=result.base64_uri or "",
            show_base64=show_base64,
            preview=result.preview,
            size_before=result.size_before,
            size_after=result.size_after,
            savings_percent=result.savings_percent,
            warnings=list(result.warnings),
        )


class ConvertResponse(BaseModel):
    results: ConvertResults


__all__ = ["ConvertRequest", "ConvertResponse", "ConvertResults"]
