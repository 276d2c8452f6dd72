"""
Smart Contract Deployment Script
Deploys the Study contract suite and records the addresses
"""

import sys
from typing import List, Optional
from loguru import logger

from blockchain.deployer import ContractDeployer
from blockchain.provider import connect
from blockchain.wallet_manager import WalletManager
from utils.address_book import AddressBook
from utils.config import load_settings
from utils.log_config import configure_logging


def confirm(prompt: str, argv: List[str]) -> bool:
    """Ask before spending gas unless --yes was passed"""
    if '--yes' in argv:
        return True
    return input(f"\n{prompt} (yes/no): ").strip().lower() == 'yes'


def main(argv: Optional[List[str]] = None) -> int:
    settings = load_settings()
    configure_logging(settings.log_level, settings.log_file)

    argv = list(sys.argv[1:] if argv is None else argv)

    try:
        w3 = connect(settings)
        wallet = WalletManager.from_settings(settings)
        address_book = AddressBook(settings)
        deployer = ContractDeployer(w3, wallet, settings, address_book)

        deployer.check_deployer_balance()

        if not confirm(f"Deploy the contract suite to {settings.network.name}?", argv):
            logger.info("Deployment cancelled")
            return 0

        deployed = deployer.deploy_suite()
        address_book.update_env_file(deployed)
    except Exception as e:
        logger.error(f"❌ Deployment failed: {e}")
        return 1

    network = settings.network
    logger.info("📋 Deployment Summary:")
    logger.info("=" * 22)
    logger.info(f"Network: {network.key}")
    logger.info(f"Chain ID: {network.chain_id}")
    logger.info(f"Deployer: {wallet.address}")
    if network.block_explorer:
        logger.info(f"Block Explorer: {network.block_explorer}")
    for name, address in deployed.items():
        logger.info(f"{name}: {address}")

    logger.success("🎉 Deployment completed successfully!")
    logger.info("Next steps:")
    logger.info("1. Verify contracts on the block explorer")
    logger.info("2. Fund the token shop: python -m scripts.fund_token_shop")
    logger.info("3. Run post-deploy setup: python -m scripts.setup")
    logger.info("4. Set up initial token distribution: python -m scripts.distribute_tokens")
    return 0


if __name__ == "__main__":
    sys.exit(main())
