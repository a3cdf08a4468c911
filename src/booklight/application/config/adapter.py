"""Conversion of validated configuration models into domain value objects."""

from __future__ import annotations

from booklight.domain import CaseSpec, SheetGlobals

from .loader import ConfigError, ConfigIssue, issue_path
from .schema import CaseConfigSchema, LayoutConfiguration, SheetConfigSchema


def config_to_globals(sheet: SheetConfigSchema) -> SheetGlobals:
    """Convert the sheet section to SheetGlobals.

    Raises:
        ConfigError: If the domain rejects the combined values.
    """
    try:
        return SheetGlobals(
            sheet_w=sheet.width,
            sheet_h=sheet.height,
            margin=sheet.margin,
            part_gap=sheet.gap,
            allow_rotation=sheet.allow_rotation,
            kerf=sheet.kerf,
            t=sheet.thickness,
        )
    except ValueError as e:
        raise ConfigError.invalid([ConfigIssue("sheet", str(e))]) from e


def config_to_case(case: CaseConfigSchema) -> CaseSpec:
    """Convert one case model to a CaseSpec; the name defaults to the id."""
    return CaseSpec(
        id=case.id,
        name=case.name or case.id,
        height_ext=case.height_ext,
        width_ext=case.width_ext,
        depth_ext=case.depth_ext,
        clear_side=case.clear_side,
        clear_depth=case.clear_depth,
        h_visible=case.h_visible,
        raise_gap=case.raise_gap,
        tab_w_rule=case.tab_w_rule,
        joint_clear=case.joint_clear,
        symmetric_ends=case.symmetric_ends,
        tape_reserved_strip=case.tape_reserved_strip,
        tape_guide=case.tape_guide,
        mag_count=case.mag_count,
        mag_diam=case.mag_diam,
        mag_clear=case.mag_clear,
        mag_edge_offset=case.mag_edge_offset,
    )


def config_to_cases(config: LayoutConfiguration) -> list[CaseSpec]:
    """Convert every case job of a configuration.

    Raises:
        ConfigError: If the domain rejects a case.
    """
    cases: list[CaseSpec] = []
    for index, case in enumerate(config.cases):
        try:
            cases.append(config_to_case(case))
        except ValueError as e:
            raise ConfigError.invalid([ConfigIssue(issue_path("cases", index), str(e))]) from e
    return cases
