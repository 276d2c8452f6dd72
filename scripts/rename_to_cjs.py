"""
Post-build step: rename compiled .js scripts to .cjs

Missing files are reported and skipped; the exit status is always 0.
Only the build settings are read, so a broken network config or
deployment record never blocks the rename.
"""

import sys

from utils.artifact_renamer import rename_build_artifacts
from utils.config import load_build_settings
from utils.log_config import configure_logging


def main() -> int:
    settings = load_build_settings()
    configure_logging(settings.log_level, settings.log_file)

    rename_build_artifacts(settings)
    return 0


if __name__ == "__main__":
    sys.exit(main())
