"""
Balance Checker
Native and StudyToken balances for wallets and the token shop
"""

from decimal import Decimal
from typing import Dict, List, Sequence
from web3 import Web3
from loguru import logger


def format_units(amount: int) -> Decimal:
    """Wei -> ether-style units"""
    return Decimal(str(Web3.from_wei(amount, 'ether')))


class BalanceChecker:
    """
    Read-only balance queries; nothing here signs
    """

    def __init__(self, w3: Web3, contract_manager, settings):
        self.w3 = w3
        self.contract_manager = contract_manager
        self.settings = settings

    def check_address(self, address: str) -> Dict:
        """
        StudyToken holdings and study rewards for one address

        Errors are returned in the result so a batch keeps going.

        Args:
            address: Holder address

        Returns:
            Result dict with 'error' set on failure
        """
        logger.info(f"🔍 Checking balance for: {address}")

        try:
            info = self.contract_manager.token_info()
            balance = self.contract_manager.balance_of(address)
            rewards = self.contract_manager.study_rewards(address)
        except Exception as e:
            logger.error(f"❌ Error checking {address}: {e}")
            return {'address': address, 'error': str(e)}

        symbol = info['symbol']
        study_rewards = format_units(rewards['rewards']) if rewards['rewards'] is not None else Decimal(0)
        last_claim = rewards['last_claim'] or 'Never'

        logger.info(f"📊 Token: {info['name']} ({symbol})")
        logger.info(f"💰 Balance: {format_units(balance)} {symbol}")
        logger.info(f"🎓 Study Rewards: {study_rewards} {symbol}")
        logger.info(f"📅 Last Claim: {last_claim}")

        return {
            'address': address,
            'balance': format_units(balance),
            'has_tokens': balance > 0,
            'study_rewards': study_rewards,
            'last_claim': last_claim
        }

    def check_addresses(self, addresses: Sequence[str]) -> List[Dict]:
        return [self.check_address(address) for address in addresses]

    @staticmethod
    def summarize(results: Sequence[Dict]) -> Dict:
        """
        Split results into holders, non-holders and errors

        Returns:
            {'with_tokens': [...], 'without_tokens': [...], 'errors': [...]}
        """
        summary = {
            'with_tokens': [r for r in results if r.get('has_tokens')],
            'without_tokens': [r for r in results if not r.get('has_tokens') and 'error' not in r],
            'errors': [r for r in results if 'error' in r]
        }

        logger.info(f"✅ Addresses with tokens: {len(summary['with_tokens'])}")
        logger.info(f"❌ Addresses without tokens: {len(summary['without_tokens'])}")
        logger.info(f"⚠️  Addresses with errors: {len(summary['errors'])}")

        return summary

    def check_wallet(self, address: str) -> Dict:
        """
        Native balance, gas sufficiency and StudyToken balance of a wallet

        Args:
            address: Wallet address

        Returns:
            Result dict
        """
        address = Web3.to_checksum_address(address)
        symbol = self.settings.network.native_symbol

        native_wei = self.w3.eth.get_balance(address)
        native = format_units(native_wei)
        has_gas = native >= self.settings.min_gas_balance_eth

        logger.info(f"💰 {symbol} Balance: {native} {symbol} ({native_wei} wei)")
        if has_gas:
            logger.success(f"✅ Sufficient {symbol} for gas fees")
        else:
            logger.warning(
                f"⚠️  Insufficient {symbol} for gas fees "
                f"(need at least {self.settings.min_gas_balance_eth} {symbol})"
            )

        token_wei = self.contract_manager.balance_of(address)
        logger.info(f"📊 Token Balance: {format_units(token_wei)} ({token_wei} wei)")

        chain_id = self.w3.eth.chain_id
        logger.info(f"🔗 Network: {self.settings.network.name} (Chain ID: {chain_id})")

        return {
            'address': address,
            'native_balance': native,
            'native_balance_wei': native_wei,
            'has_gas': has_gas,
            'token_balance': format_units(token_wei),
            'token_balance_wei': token_wei,
            'chain_id': chain_id
        }

    def check_shop(self, min_tokens: Decimal = Decimal('1000')) -> Dict:
        """
        Token stock and native balance of StudyTokenShop

        Args:
            min_tokens: Stock below this triggers a warning

        Returns:
            Result dict
        """
        shop_address = Web3.to_checksum_address(
            self.settings.contract_address('StudyTokenShop')
        )

        token_wei = self.contract_manager.balance_of(shop_address)
        tokens = format_units(token_wei)
        sufficient = tokens >= min_tokens

        logger.info(f"📊 StudyTokenShop Balance: {tokens} ({shop_address})")
        if sufficient:
            logger.success("✅ Shop has sufficient tokens for purchases.")
        else:
            logger.warning(
                f"⚠️  Shop has insufficient tokens! Required: {min_tokens}, available: {tokens}"
            )

        native = format_units(self.w3.eth.get_balance(shop_address))
        logger.info(f"💰 StudyTokenShop {self.settings.network.native_symbol} Balance: {native}")

        return {
            'address': shop_address,
            'token_balance': tokens,
            'sufficient': sufficient,
            'native_balance': native
        }
