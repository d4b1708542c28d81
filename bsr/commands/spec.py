"""
bsr spec - Generate a specification from an idea document.
"""

from pathlib import Path

from bsr.adapters.speckit import GeneratorOptions, idea_to_spec, validate_spec
from bsr.commands.check import build_validation_options, print_validation

DEFAULT_OUTPUTS = {
    "markdown": "specs/spec.md",
    "yaml": "specs/spec.yaml",
}


def cmd_spec(args, root: Path) -> int:
    """Validate idea.yaml and render it as a spec."""
    output = args.output or DEFAULT_OUTPUTS[args.format]
    options = GeneratorOptions(
        format=args.format,
        include_task_breakdown=args.tasks,
        include_acceptance_criteria=args.acceptance,
        output_path=output,
    )

    print(f"Generating spec from: {args.idea}")
    print("=" * 60)
    print()

    result = idea_to_spec(root / args.idea, root / output, options, build_validation_options(args))

    if not result.validation.valid:
        print_validation(result.validation)
        print("Fix the errors above, then re-run 'bsr spec'.")
        return 1

    generation = result.generation
    if generation is None or not generation.success:
        for error in (generation.errors if generation else []):
            print(f"ERROR: {error}")
        return 1

    print(f"Idea completeness: {result.validation.score}/100")
    if args.format == "markdown":
        spec_check = validate_spec(generation.content)
        print(f"Spec completeness: {spec_check.score}/100")
        for warning in spec_check.warnings:
            print(f"  ! {warning.message}")
    print()
    print(f"Saved: {output}")

    return 0
