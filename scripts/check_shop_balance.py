"""
StudyTokenShop stock check
"""

import sys
from decimal import Decimal
from loguru import logger

from blockchain.balance_checker import BalanceChecker
from blockchain.contract_manager import ContractManager
from blockchain.provider import connect
from utils.config import load_settings
from utils.log_config import configure_logging

MIN_SHOP_TOKENS = Decimal('1000')


def main() -> int:
    settings = load_settings()
    configure_logging(settings.log_level, settings.log_file)

    logger.info("🔍 Checking StudyTokenShop contract balances...")

    try:
        w3 = connect(settings)
        checker = BalanceChecker(w3, ContractManager(w3, settings), settings)
        result = checker.check_shop(MIN_SHOP_TOKENS)
    except Exception as e:
        logger.error(f"❌ Error checking balances: {e}")
        return 1

    if not result['sufficient']:
        logger.info("Run: python -m scripts.fund_token_shop")

    return 0


if __name__ == "__main__":
    sys.exit(main())
