"""
bsr check - Validate an idea document and show its completeness score.
"""

from pathlib import Path

from bsr.adapters.speckit import ValidationOptions, check_idea


def build_validation_options(args) -> ValidationOptions:
    return ValidationOptions(
        strict=getattr(args, "strict", False),
        require_personas=getattr(args, "require_personas", False),
        require_milestones=getattr(args, "require_milestones", False),
        require_architecture=getattr(args, "require_architecture", False),
        min_features=getattr(args, "min_features", 1),
        min_goals=getattr(args, "min_goals", 1),
    )


def print_validation(result) -> None:
    """Print errors and warnings of a ValidationResult."""
    if result.errors:
        print("Errors")
        print("-" * 40)
        for issue in result.errors:
            print(f"  x {issue.field}: {issue.message}")
        print()

    if result.warnings:
        print("Warnings")
        print("-" * 40)
        for issue in result.warnings:
            print(f"  ! {issue.field}: {issue.message}")
            if issue.suggestion:
                print(f"      -> {issue.suggestion}")
        print()


def cmd_check(args, root: Path) -> int:
    """Validate an idea file."""
    result = check_idea(root / args.idea, build_validation_options(args))

    print(f"Validating: {args.idea}")
    print("=" * 60)
    print()
    print_validation(result)

    status = "VALID" if result.valid else "INVALID"
    print(f"Result:       {status}")
    print(f"Completeness: {result.score}/100")

    return 0 if result.valid else 1
