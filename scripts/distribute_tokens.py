"""
Batch StudyToken distribution
Usage: python -m scripts.distribute_tokens <amount per recipient> <address> [<address> ...]
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


def main(argv: Optional[List[str]] = None) -> int:
    settings = load_settings()
    configure_logging(settings.log_level, settings.log_file)

    argv = list(sys.argv[1:] if argv is None else argv)
    if len(argv) < 2:
        logger.error("Usage: distribute_tokens <amount per recipient> <address> [<address> ...]")
        return 1

    amount = Web3.to_wei(Decimal(argv[0]), 'ether')
    recipients = argv[1:]

    logger.info("🚀 Starting token distribution...")
    logger.info(f"   Recipients: {len(recipients)}")
    logger.info(f"   Amount per recipient: {argv[0]} STUDY")
    logger.info(f"   Total amount: {Decimal(argv[0]) * len(recipients)} STUDY")

    try:
        w3 = connect(settings)
        wallet = WalletManager.from_settings(settings)
        manager = ContractManager(w3, settings, TransactionBuilder(w3, wallet, settings))

        receipt = manager.distribute_tokens(recipients, amount)
    except Exception as e:
        logger.error(f"❌ Distribution failed: {e}")
        return 1

    for event in manager.batch_distribution_events(receipt):
        logger.info(f"📢 Event: BatchDistribution {event}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
