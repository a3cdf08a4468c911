"""Pydantic models for layout configuration files.

A configuration file holds one sheet section with the material, packing
and laser settings shared by every part, and a list of case jobs. Field
defaults match the domain defaults so a minimal file only needs the case
ids and book dimensions.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0"})


class SheetConfigSchema(BaseModel):
    """Sheet, packing and material settings.

    Attributes:
        width: Sheet width in inches
        height: Sheet height in inches
        margin: Unusable border on every side
        gap: Minimum gap between parts
        allow_rotation: Whether parts may be rotated by 90 degrees
        kerf: Laser kerf width
        thickness: Material thickness
    """

    model_config = ConfigDict(extra="forbid")

    width: float = Field(default=19.5, gt=0, description="Sheet width")
    height: float = Field(default=11.5, gt=0, description="Sheet height")
    margin: float = Field(default=0.25, ge=0, description="Border kept clear of parts")
    gap: float = Field(default=0.08, ge=0, description="Minimum gap between parts")
    allow_rotation: bool = True
    kerf: float = Field(default=0.008, ge=0, le=0.1, description="Laser kerf width")
    thickness: float = Field(default=0.118, gt=0, le=1.0, description="Material thickness")

    @model_validator(mode="after")
    def validate_usable_area(self) -> "SheetConfigSchema":
        """Margins must leave room for parts."""
        if self.width <= 2 * self.margin or self.height <= 2 * self.margin:
            raise ValueError("margin leaves no usable sheet area")
        return self


class CaseConfigSchema(BaseModel):
    """One book case job."""

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1, description="Unique job identifier")
    name: str = Field(default="", description="Label text, defaults to the id")
    height_ext: float = Field(default=10.0, gt=0)
    width_ext: float = Field(default=9.0, gt=0)
    depth_ext: float = Field(default=1.5, gt=0)
    clear_side: float = Field(default=0.06, ge=0)
    clear_depth: float = Field(default=0.06, ge=0)
    h_visible: float = Field(default=0.3, ge=0)
    raise_gap: float = Field(default=0.15, ge=0)
    tab_w_rule: float = Field(default=0.5, gt=0, description="Nominal finger width")
    joint_clear: float = Field(default=0.004, ge=0)
    symmetric_ends: bool = True
    tape_reserved_strip: float = Field(default=0.35, ge=0)
    tape_guide: bool = True
    mag_count: Literal[0, 2, 4] = 2
    mag_diam: float = Field(default=0.157, gt=0)
    mag_clear: float = Field(default=0.008, ge=0)
    mag_edge_offset: float = Field(default=0.5, ge=0)

    @model_validator(mode="after")
    def validate_inner_space(self) -> "CaseConfigSchema":
        """Clearances must leave internal width and depth."""
        if self.width_ext <= 2 * self.clear_side:
            raise ValueError("clear_side leaves no internal width")
        if self.depth_ext <= 2 * self.clear_depth:
            raise ValueError("clear_depth leaves no internal depth")
        return self


class LayoutConfiguration(BaseModel):
    """Root configuration model.

    Example:
        >>> config = LayoutConfiguration(
        ...     schema_version="1.0",
        ...     cases=[CaseConfigSchema(id="hobbit")],
        ... )
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(..., pattern=r"^\d+\.\d+$")
    sheet: SheetConfigSchema = Field(default_factory=SheetConfigSchema)
    cases: list[CaseConfigSchema] = Field(..., min_length=1)

    @field_validator("schema_version")
    @classmethod
    def validate_supported_version(cls, v: str) -> str:
        """Accept supported versions and newer minor versions of them."""
        if v in SUPPORTED_VERSIONS:
            return v
        major_version = int(v.split(".")[0])
        if major_version in {int(sv.split(".")[0]) for sv in SUPPORTED_VERSIONS}:
            return v
        raise ValueError(
            f"Unsupported schema version '{v}'. "
            f"Supported versions: {sorted(SUPPORTED_VERSIONS)}"
        )

    @field_validator("cases")
    @classmethod
    def validate_unique_ids(cls, v: list[CaseConfigSchema]) -> list[CaseConfigSchema]:
        seen: set[str] = set()
        for case in v:
            if case.id in seen:
                raise ValueError(f"Duplicate case id '{case.id}'")
            seen.add(case.id)
        return v
