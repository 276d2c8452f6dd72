"""
Post-deploy contract setup
Mints starter tokens, stakes in the short-term pool and buys a monthly
subscription for the deployer, then prints the resulting state
"""

import sys
from datetime import datetime, timezone
from decimal import Decimal
from web3 import Web3
from loguru import logger

from blockchain.contract_manager import ContractManager
from blockchain.provider import connect
from blockchain.transaction_builder import TransactionBuilder
from blockchain.wallet_manager import WalletManager
from utils.config import load_settings
from utils.log_config import configure_logging

INITIAL_MINT_TOKENS = Decimal('10000')
STAKING_ALLOWANCE_TOKENS = Decimal('1000')
STAKE_TOKENS = Decimal('100')
SUBSCRIPTION_ALLOWANCE_TOKENS = Decimal('100')
SHORT_TERM_POOL = 0

SUITE_CONTRACTS = ('StudyToken', 'StudyAchievements', 'StudyStaking', 'StudySubscription')


def setup_contracts(manager: ContractManager, deployer: str) -> dict:
    """
    Run the setup transactions and read back the deployer's state

    Args:
        manager: ContractManager with a TransactionBuilder
        deployer: Sender address

    Returns:
        Summary dict with balance, NFT count, stake and subscription
    """
    settings = manager.settings

    logger.info("📝 Setting up StudyToken...")
    manager.mint_study_reward(deployer, Web3.to_wei(INITIAL_MINT_TOKENS, 'ether'))

    logger.info("💰 Setting up StudyStaking...")
    manager.approve(
        settings.contract_address('StudyStaking'),
        Web3.to_wei(STAKING_ALLOWANCE_TOKENS, 'ether')
    )
    manager.stake(SHORT_TERM_POOL, Web3.to_wei(STAKE_TOKENS, 'ether'))

    logger.info("🎫 Setting up StudySubscription...")
    manager.approve(
        settings.contract_address('StudySubscription'),
        Web3.to_wei(SUBSCRIPTION_ALLOWANCE_TOKENS, 'ether')
    )
    manager.purchase_premium_monthly(deployer)

    return {
        'token_balance': manager.balance_of(deployer),
        'achievements': manager.achievement_count(deployer),
        'stake': manager.user_stake(deployer, SHORT_TERM_POOL),
        'subscription': manager.user_subscription(deployer)
    }


def main() -> int:
    settings = load_settings()
    configure_logging(settings.log_level, settings.log_file)

    logger.info("🔧 Setting up initial contract configurations...")

    try:
        w3 = connect(settings)
        wallet = WalletManager.from_settings(settings)
        manager = ContractManager(w3, settings, TransactionBuilder(w3, wallet, settings))

        logger.info(f"Setting up contracts with account: {wallet.address}")
        summary = setup_contracts(manager, wallet.address)
    except Exception as e:
        logger.error(f"❌ Setup failed: {e}")
        return 1

    subscription = summary['subscription']
    end_time = datetime.fromtimestamp(subscription.get('endTime', 0), tz=timezone.utc)

    logger.info("📊 Setup Summary:")
    logger.info("=" * 18)
    logger.info(f"StudyToken Balance: {Web3.from_wei(summary['token_balance'], 'ether')} STUDY")
    logger.info(f"Achievement NFTs: {summary['achievements']}")
    logger.info(f"Staked Amount: {Web3.from_wei(summary['stake'].get('amount', 0), 'ether')} STUDY")
    logger.info(f"Subscription Tier: {subscription.get('tier')}")
    logger.info(f"Subscription Active: {subscription.get('isActive')}")
    logger.info(f"Subscription Ends: {end_time.isoformat()}")

    logger.success("🎉 Setup completed successfully!")
    logger.info("Contract addresses for frontend integration:")
    for name in SUITE_CONTRACTS:
        logger.info(f"{name}: {settings.contract_address(name)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
