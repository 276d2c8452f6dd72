"""
Wallet balance check: native gas funds and StudyToken
Usage: python -m scripts.check_wallet_balance [<address>]
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

    args = list(sys.argv[1:] if argv is None else argv)

    try:
        address = args[0] if args else WalletManager.from_settings(settings).address
        logger.info(f"🔍 Checking wallet balance for {address}")

        w3 = connect(settings)
        checker = BalanceChecker(w3, ContractManager(w3, settings), settings)
        result = checker.check_wallet(address)
    except Exception as e:
        logger.error(f"❌ Error checking balances: {e}")
        return 1

    if not result['has_gas']:
        logger.info("Get testnet funds from: https://bridge.base.org/deposit")

    return 0


if __name__ == "__main__":
    sys.exit(main())
