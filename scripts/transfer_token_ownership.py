"""
Transfer StudyToken ownership to StudyTokenShop
Usage: python -m scripts.transfer_token_ownership [<new owner address>]

The shop mints tokens on purchase, so it has to own the token.
"""

import sys
from typing import List, Optional
from loguru import logger

from blockchain.contract_manager import ContractManager
from blockchain.provider import connect
from blockchain.transaction_builder import TransactionBuilder
from blockchain.wallet_manager import WalletManager
from utils.config import load_settings
from utils.log_config import configure_logging


def main(argv: Optional[List[str]] = None) -> int:
    settings = load_settings()
    configure_logging(settings.log_level, settings.log_file)

    argv = list(sys.argv[1:] if argv is None else argv)

    logger.info("🔄 Transferring StudyToken ownership to StudyTokenShop...")

    try:
        new_owner = argv[0] if argv else settings.contract_address('StudyTokenShop')

        w3 = connect(settings)
        wallet = WalletManager.from_settings(settings)
        manager = ContractManager(w3, settings, TransactionBuilder(w3, wallet, settings))

        logger.info(f"Current owner (deployer): {wallet.address}")
        receipt = manager.transfer_ownership(new_owner)
    except Exception as e:
        logger.error(f"❌ Error transferring ownership: {e}")
        return 1

    if receipt is not None:
        logger.success("🎉 Success! StudyTokenShop can now mint tokens!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
