"""
Deploy StudyTokenShop against the configured StudyToken
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


def main(argv: Optional[List[str]] = None) -> int:
    settings = load_settings()
    configure_logging(settings.log_level, settings.log_file)

    argv = list(sys.argv[1:] if argv is None else argv)
    token_address = argv[0] if argv else None

    logger.info("🚀 Deploying StudyTokenShop...")

    try:
        w3 = connect(settings)
        wallet = WalletManager.from_settings(settings)
        address_book = AddressBook(settings)
        deployer = ContractDeployer(w3, wallet, settings, address_book)

        result = deployer.deploy_shop(token_address)
        address_book.update_env_file({'StudyTokenShop': result['address']})
    except Exception as e:
        logger.error(f"❌ Deployment failed: {e}")
        return 1

    logger.info(f"Shop Contract: {result['address']}")
    logger.info(f"Token Contract: {token_address or settings.contract_address('StudyToken')}")
    logger.info(f"Gas Used: {result['gas_used']}")
    logger.info("Next: python -m scripts.fund_token_shop")
    return 0


if __name__ == "__main__":
    sys.exit(main())
