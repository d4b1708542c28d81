"""
bsr config - View BSR configuration.
"""

from pathlib import Path

import yaml

from bsr.lib.config import ConfigError, get_config_path, get_config_value, read_config_data


def cmd_config(args, root: Path) -> int:
    """Print .bsr/config.yaml, or one value with --get key.path."""
    try:
        data = read_config_data(root)
    except ConfigError as e:
        print(f"ERROR: {e}")
        return 1

    if args.get:
        value = get_config_value(data, args.get)
        if value is None:
            print("Not found")
        elif isinstance(value, (dict, list)):
            print(yaml.safe_dump(value, sort_keys=False).rstrip())
        else:
            print(value)
        return 0

    print("BSR Configuration:")
    print()
    print(get_config_path(root).read_text().rstrip())
    return 0
