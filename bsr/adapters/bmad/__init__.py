"""
BMAD adapter for BSR.

Parses BMAD planning output (project, features, personas, epics, stories)
and transforms it into a BSR idea document.
"""

from bsr.adapters.bmad.models import (
    BMADProject,
    Epic,
    Feature,
    ParseResult,
    Persona,
    UserStory,
)
from bsr.adapters.bmad.parser import parse_bmad_directory, parse_bmad_file
from bsr.adapters.bmad.transformer import (
    TransformOptions,
    TransformResult,
    infer_architecture,
    normalize_priority,
    transform_and_save,
    transform_to_bsr,
)
from bsr.adapters.bmad.pipeline import (
    ConversionResult,
    bmad_file_to_bsr,
    bmad_to_bsr,
    convert_bmad_to_bsr,
)

__all__ = [
    "BMADProject",
    "Epic",
    "Feature",
    "ParseResult",
    "Persona",
    "UserStory",
    "parse_bmad_directory",
    "parse_bmad_file",
    "TransformOptions",
    "TransformResult",
    "infer_architecture",
    "normalize_priority",
    "transform_and_save",
    "transform_to_bsr",
    "ConversionResult",
    "bmad_file_to_bsr",
    "bmad_to_bsr",
    "convert_bmad_to_bsr",
]
