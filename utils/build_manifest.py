"""
Build Manifest
Compiled operator scripts expected in the build output
"""

from typing import Dict, List

SOURCE_EXTENSION = '.js'
TARGET_EXTENSION = '.cjs'

# First build only emitted the deploy and setup scripts
LEGACY_ARTIFACTS = [
    'deploy.js',
    'setup.js'
]

FULL_ARTIFACTS = [
    'deploy.js',
    'deploy-shop.js',
    'setup.js',
    'test-token-balance.js',
    'check-balance.js',
    'test-transfer.js',
    'distribute-tokens.js',
    'deploy-token-only.js',
    'deploy-achievements.js',
    'deploy-staking.js',
    'deploy-subscription.js',
    'check-shop-balance.js',
    'fund-token-shop.js',
    'check-wallet-balance.js',
    'transfer-token-ownership.js',
    'withdraw-from-shop.js',
    'test-token-purchase.js',
    'debug-calculation.js',
    'debug-token-interaction.js',
    'check-current-price.js',
    'test-quote-function.js',
    'check-eth-flow.js',
    'debug-transfer-issue.js',
    'detailed-purchase-test.js',
    'debug-contract-calculation.js',
    'test-staking.js',
    'test-staking-flow.js'
]

ARTIFACT_SETS: Dict[str, List[str]] = {
    'legacy': LEGACY_ARTIFACTS,
    'full': FULL_ARTIFACTS
}

DEFAULT_ARTIFACT_SET = 'full'


def get_artifact_names(artifact_set: str = DEFAULT_ARTIFACT_SET) -> List[str]:
    """
    Get the expected build output filenames for a named set

    Args:
        artifact_set: 'full' or 'legacy'

    Returns:
        Copy of the ordered filename list
    """
    try:
        return list(ARTIFACT_SETS[artifact_set])
    except KeyError:
        raise ValueError(
            f"Unknown artifact set: {artifact_set} "
            f"(expected one of: {', '.join(ARTIFACT_SETS)})"
        ) from None
