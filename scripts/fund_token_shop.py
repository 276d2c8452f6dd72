"""
Transfer StudyToken stock from the deployer to StudyTokenShop
Usage: python -m scripts.fund_token_shop [<amount in tokens>]
"""

import sys
from decimal import Decimal
from typing import List, Optional
from web3 import Web3
from loguru import logger

from blockchain.contract_manager import ContractManager
from blockchain.provider import connect
from blockchain.transaction_builder import TransactionBuilder
from blockchain.wallet_manager import WalletManager
from utils.config import load_settings
from utils.log_config import configure_logging

DEFAULT_FUNDING_TOKENS = Decimal('100000')


def main(argv: Optional[List[str]] = None) -> int:
    settings = load_settings()
    configure_logging(settings.log_level, settings.log_file)

    argv = list(sys.argv[1:] if argv is None else argv)
    amount_tokens = Decimal(argv[0]) if argv else DEFAULT_FUNDING_TOKENS

    logger.info("💰 Funding StudyTokenShop with STUDY tokens...")

    try:
        w3 = connect(settings)
        wallet = WalletManager.from_settings(settings)
        manager = ContractManager(w3, settings, TransactionBuilder(w3, wallet, settings))

        shop_address = settings.contract_address('StudyTokenShop')
        manager.transfer(shop_address, Web3.to_wei(amount_tokens, 'ether'))

        shop_balance = manager.balance_of(shop_address)
    except Exception as e:
        logger.error(f"❌ Error funding shop: {e}")
        return 1

    logger.info(f"📊 Shop balance after transfer: {Web3.from_wei(shop_balance, 'ether')} STUDY")
    return 0


if __name__ == "__main__":
    sys.exit(main())
