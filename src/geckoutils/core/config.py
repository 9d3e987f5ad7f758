from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FigureSaveConfig(BaseModel):
    """Session-wide fallbacks for figure saving.

    Explicit arguments to :class:`~geckoutils.visualization.writer.FigureWriter`
    always win over these values.
    """

    model_config = ConfigDict(coerce_numbers_to_str=True)

    save_dir: str = "./"
    file_type: str = "png"
    timestamp_format: str = "%y%m%d"
    latest_subdir: str = "latest"
    archive_subdir: str = "archive"
    dpi: int = Field(default=300, ge=1)
    units: str = "in"

    @field_validator("file_type")
    @classmethod
    def _normalise_file_type(cls, v: str) -> str:
        return v.strip().lstrip(".").lower()


class ThemeConfig(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    font_family: str = "Noto Sans"
    title_size: float = Field(default=20.0, gt=0)
    subtitle_size: float = Field(default=14.0, gt=0)
    caption_size: float = Field(default=9.0, gt=0)
    axis_title_size: float = Field(default=12.0, gt=0)
    axis_text_size: float = Field(default=11.0, gt=0)
