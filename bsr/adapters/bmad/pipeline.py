"""
BMAD -> BSR pipeline: parse, transform, save.

Each stage runs only when the previous one succeeded; errors and warnings
are accumulated up the chain.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from bsr.lib.errors import Issue, IssueCollector
from bsr.adapters.bmad.models import ParseResult
from bsr.adapters.bmad.parser import parse_bmad_directory, parse_bmad_file
from bsr.adapters.bmad.transformer import (
    TransformOptions,
    TransformResult,
    transform_and_save,
    transform_to_bsr,
)
from bsr.adapters.speckit.models import BSRIdea

logger = logging.getLogger(__name__)


@dataclass
class ConversionResult(IssueCollector):
    success: bool = False
    idea: Optional[BSRIdea] = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    issues: list[Issue] = field(default_factory=list)


def bmad_to_bsr(
    bmad_path,
    options: TransformOptions | None = None,
) -> tuple[ParseResult, Optional[TransformResult]]:
    """Parse a BMAD directory and transform it. Transform is skipped if parsing failed."""
    parse_result = parse_bmad_directory(bmad_path)
    if not parse_result.success or parse_result.project is None:
        return parse_result, None
    return parse_result, transform_to_bsr(parse_result.project, options)


def bmad_file_to_bsr(
    file_path,
    options: TransformOptions | None = None,
) -> tuple[ParseResult, Optional[TransformResult]]:
    """Parse a single BMAD file and transform it."""
    parse_result = parse_bmad_file(file_path)
    if not parse_result.success or parse_result.project is None:
        return parse_result, None
    return parse_result, transform_to_bsr(parse_result.project, options)


def convert_bmad_to_bsr(
    bmad_path,
    output_path,
    options: TransformOptions | None = None,
) -> ConversionResult:
    """Full pipeline: parse directory, transform, write idea YAML."""
    result = ConversionResult()
    parse_result, transform_result = bmad_to_bsr(bmad_path, options)
    result.extend_from(parse_result)

    if transform_result is None:
        logger.warning(f"Parsing {bmad_path} failed, nothing converted")
        return result

    result.extend_from(transform_result)
    if not transform_result.success or transform_result.idea is None:
        return result

    save_result = transform_and_save(parse_result.project, output_path, options)
    result.errors.extend(save_result.errors)
    result.issues.extend(save_result.issues)

    result.success = save_result.success
    result.idea = transform_result.idea
    return result
