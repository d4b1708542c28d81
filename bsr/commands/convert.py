"""
bsr convert - Turn BMAD planning output into docs/idea.yaml.
"""

from pathlib import Path

from bsr.adapters.bmad import (
    TransformOptions,
    bmad_file_to_bsr,
    convert_bmad_to_bsr,
    transform_and_save,
)

DEFAULT_OUTPUT = "docs/idea.yaml"


def cmd_convert(args, root: Path) -> int:
    """Convert a BMAD directory (or single project file) to a BSR idea."""
    source = root / args.source
    output_path = root / (args.output or DEFAULT_OUTPUT)
    options = TransformOptions(
        version=args.idea_version or "0.1.0",
        include_personas=args.personas,
    )

    print(f"Converting BMAD output: {args.source}")
    print("=" * 60)
    print()

    if source.is_file():
        success, idea, errors, warnings = _convert_file(source, output_path, options)
    else:
        result = convert_bmad_to_bsr(source, output_path, options)
        success, idea, errors, warnings = result.success, result.idea, result.errors, result.warnings

    for warning in warnings:
        print(f"WARNING: {warning}")

    if not success:
        for error in errors:
            print(f"ERROR: {error}")
        return 1

    print(f"Project:    {idea.name}")
    print(f"Version:    {idea.version}")
    print(f"Features:   {len(idea.features)}")
    print(f"Milestones: {len(idea.milestones or [])}")
    if idea.personas is not None:
        print(f"Personas:   {len(idea.personas)}")
    if idea.architecture is not None and idea.architecture.type:
        print(f"Architecture: {idea.architecture.type}")
    print()
    print(f"Saved: {output_path}")
    print()
    print(f"Next: bsr check {args.output or DEFAULT_OUTPUT}")

    return 0


def _convert_file(source: Path, output_path: Path, options: TransformOptions):
    parse_result, transform_result = bmad_file_to_bsr(source, options)
    errors = list(parse_result.errors)
    warnings = list(parse_result.warnings)

    if transform_result is None or not transform_result.success:
        if transform_result is not None:
            errors.extend(transform_result.errors)
        return False, None, errors, warnings

    save_result = transform_and_save(parse_result.project, output_path, options)
    errors.extend(save_result.errors)
    return save_result.success, save_result.idea, errors, warnings
