"""
Provider connection for the configured network
"""

from web3 import Web3
from loguru import logger


def connect(settings) -> Web3:
    """
    Open an HTTP provider for the active network

    Args:
        settings: Settings instance

    Returns:
        Connected Web3 instance
    """
    network = settings.network
    w3 = Web3(Web3.HTTPProvider(network.rpc_url))

    if not w3.is_connected():
        raise ConnectionError(f"Failed to connect to {network.name} at {network.rpc_url}")

    chain_id = w3.eth.chain_id
    if chain_id != network.chain_id:
        logger.warning(
            f"RPC reports chain id {chain_id}, expected {network.chain_id} for {network.key}"
        )

    logger.info(f"Connected to {network.name} (Chain ID: {chain_id})")
    return w3
