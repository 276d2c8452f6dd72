"""
Wallet Manager
Holds the deployer account used to sign every transaction
"""

from typing import Dict, Optional
from decimal import Decimal
from web3 import Web3
from eth_account import Account
from loguru import logger

from .artifacts import ERC20_MINIMAL_ABI


class WalletManager:
    """
    Single signing wallet loaded from the configured private key
    """

    def __init__(self, private_key: str):
        """
        Initialize wallet manager

        Args:
            private_key: Hex private key (from Settings.require_private_key())
        """
        if not private_key:
            raise ValueError("PRIVATE_KEY must be set in .env")

        self.account = Account.from_key(private_key)
        self.address = self.account.address

        logger.info(f"Deployer wallet: {self.address}")

    @classmethod
    def from_settings(cls, settings) -> 'WalletManager':
        return cls(settings.require_private_key())

    def sign_transaction(self, transaction: Dict):
        """
        Sign a transaction with the deployer key

        Args:
            transaction: Transaction dict

        Returns:
            Signed transaction
        """
        try:
            return self.account.sign_transaction(transaction)
        except Exception as e:
            logger.error(f"Error signing transaction: {e}")
            raise

    def get_native_balance(self, w3: Web3, address: Optional[str] = None) -> Decimal:
        """
        Native balance in ether units

        Args:
            w3: Web3 instance
            address: Address to check (default: this wallet)

        Returns:
            Balance as Decimal
        """
        address = Web3.to_checksum_address(address or self.address)
        balance_wei = w3.eth.get_balance(address)
        return Decimal(str(w3.from_wei(balance_wei, 'ether')))

    def get_token_balance(
        self,
        w3: Web3,
        token_address: str,
        address: Optional[str] = None
    ) -> int:
        """
        ERC20 balance in raw token units

        Args:
            w3: Web3 instance
            token_address: ERC20 token address
            address: Holder (default: this wallet)

        Returns:
            Raw balance
        """
        token_contract = w3.eth.contract(
            address=Web3.to_checksum_address(token_address),
            abi=ERC20_MINIMAL_ABI
        )
        holder = Web3.to_checksum_address(address or self.address)
        return token_contract.functions.balanceOf(holder).call()
