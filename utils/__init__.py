"""
Utilities Package
Configuration, logging, address bookkeeping and the post-build renamer
"""

from .config import (
    BuildSettings,
    NetworkConfig,
    Settings,
    load_build_settings,
    load_settings,
    mask_secret
)
from .log_config import configure_logging
from .address_book import AddressBook
from .artifact_renamer import ArtifactRenamer, rename_build_artifacts
from .build_manifest import get_artifact_names

__all__ = [
    'Settings',
    'NetworkConfig',
    'load_settings',
    'BuildSettings',
    'load_build_settings',
    'mask_secret',
    'configure_logging',
    'AddressBook',
    'ArtifactRenamer',
    'rename_build_artifacts',
    'get_artifact_names'
]
