"""
Build Artifact Renamer
Renames compiled .js scripts to .cjs after the TypeScript build
"""

from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple
from loguru import logger

from .build_manifest import SOURCE_EXTENSION, TARGET_EXTENSION, get_artifact_names


class ArtifactRenamer:
    """
    Looks for each expected build output in two candidate directories
    and renames it in place to the target extension.

    Candidate order:
    - <base>/scripts/<name>
    - <base>/<name>
    """

    def __init__(
        self,
        base_dir: Path,
        filenames: Sequence[str],
        source_ext: str = SOURCE_EXTENSION,
        target_ext: str = TARGET_EXTENSION
    ):
        """
        Initialize renamer

        Args:
            base_dir: Build output directory
            filenames: Expected filenames, processed in order
            source_ext: Extension emitted by the build tool
            target_ext: Extension required by the module loader
        """
        for name in filenames:
            if not name.endswith(source_ext) or name == source_ext:
                raise ValueError(f"Artifact name must end with {source_ext}: {name!r}")

        self.base_dir = Path(base_dir)
        self.filenames = list(filenames)
        self.source_ext = source_ext
        self.target_ext = target_ext

    def candidate_paths(self, name: str) -> List[Path]:
        """Candidate locations for a filename, highest priority first"""
        return [
            self.base_dir / 'scripts' / name,
            self.base_dir / name
        ]

    def target_name(self, name: str) -> str:
        """Swap the trailing source extension for the target one"""
        return name[:-len(self.source_ext)] + self.target_ext

    def find(self, name: str) -> Optional[Path]:
        """Return the first candidate path that exists, or None"""
        for path in self.candidate_paths(name):
            if path.exists():
                return path
        return None

    def rename_one(self, name: str) -> Optional[Tuple[Path, Path]]:
        """
        Rename a single artifact

        Args:
            name: Expected filename

        Returns:
            (source, destination), or None when the file is in neither location
        """
        source = self.find(name)

        if source is None:
            logger.warning(f"File not found: {name} (tried both locations)")
            return None

        new_name = self.target_name(name)
        destination = source.with_name(new_name)

        # OS errors propagate
        source.rename(destination)
        logger.info(f"Renamed {name} to {new_name}")

        return source, destination

    def run(self) -> Dict[str, list]:
        """
        Process every expected filename

        Returns:
            {'renamed': [(source, destination), ...], 'missing': [name, ...]}
        """
        report = {
            'renamed': [],
            'missing': []
        }

        for name in self.filenames:
            result = self.rename_one(name)

            if result is None:
                report['missing'].append(name)
            else:
                report['renamed'].append(result)

        return report


def rename_build_artifacts(settings) -> Dict[str, list]:
    """
    Run the renamer with the base directory and artifact set from settings

    Args:
        settings: Settings or BuildSettings instance

    Returns:
        Rename report
    """
    renamer = ArtifactRenamer(
        settings.rename_base_dir,
        get_artifact_names(settings.rename_artifact_set)
    )
    return renamer.run()
