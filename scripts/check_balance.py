"""
StudyToken Balance Checker
Usage: python -m scripts.check_balance <address> [<address> ...]
"""

import sys
from typing import List, Optional
from loguru import logger

from blockchain.balance_checker import BalanceChecker
from blockchain.contract_manager import ContractManager
from blockchain.provider import connect
from blockchain.wallet_manager import WalletManager
from utils.config import load_settings
from utils.log_config import configure_logging


def main(argv: Optional[List[str]] = None) -> int:
    settings = load_settings()
    configure_logging(settings.log_level, settings.log_file)

    addresses = list(sys.argv[1:] if argv is None else argv)
    if not addresses:
        if not settings.private_key:
            logger.error("Pass addresses to check, or set PRIVATE_KEY to check the deployer")
            return 1
        addresses = [WalletManager(settings.private_key).address]

    try:
        w3 = connect(settings)
        checker = BalanceChecker(w3, ContractManager(w3, settings), settings)

        logger.info("🚀 STUDY Token Balance Checker")
        logger.info(f"Token Contract: {settings.contract_address('StudyToken')}")
        logger.info(f"Network: {settings.network.name}")
        logger.info(f"Addresses to check: {len(addresses)}")

        summary = checker.summarize(checker.check_addresses(addresses))
    except Exception as e:
        logger.error(f"❌ Script failed: {e}")
        return 1

    for result in summary['with_tokens']:
        logger.info(f"  {result['address']}: {result['balance']} STUDY")
    for result in summary['errors']:
        logger.warning(f"  {result['address']}: {result['error']}")

    logger.success("🎉 Balance check completed!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
