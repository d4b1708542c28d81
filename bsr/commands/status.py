"""
bsr status - Show current BSR project status.
"""

import json
from pathlib import Path

from bsr.lib.config import BSRConfig, read_progress


def cmd_status(args, root: Path, config: BSRConfig) -> int:
    """Show project, LLM target and workflow phase."""
    progress = read_progress(root / config.progress_file)

    status = {
        "project": config.project_name,
        "type": config.project_type,
        "llm": config.llm_target,
        "phase": progress.phase,
        "status": progress.status,
        "created": config.created,
    }

    if args.json:
        print(json.dumps(status, indent=2))
        return 0

    print("BSR Project Status")
    print("=" * 60)
    print()
    print(f"Project:  {status['project']}")
    print(f"Type:     {status['type']}")
    print(f"LLM:      {status['llm']}")
    print(f"Phase:    {status['phase']}")
    print(f"Status:   {status['status']}")
    if status["created"]:
        print(f"Created:  {status['created']}")

    idea_path = root / "docs" / "idea.yaml"
    print()
    print(f"Idea:     {'docs/idea.yaml' if idea_path.exists() else 'not created (run bsr convert)'}")

    return 0
