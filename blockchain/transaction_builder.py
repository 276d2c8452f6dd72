"""
Transaction Builder
Fills in gas, nonce and chain id, then signs and sends
"""

from typing import Dict, Optional
from web3 import Web3
from loguru import logger


class TransactionBuilder:
    """
    Builds, signs and submits transactions from the deployer wallet
    """

    def __init__(self, w3: Web3, wallet_manager, settings):
        """
        Initialize Transaction Builder

        Args:
            w3: Web3 instance
            wallet_manager: Wallet used for signing
            settings: Settings (chain id, gas buffer, receipt timeout)
        """
        self.w3 = w3
        self.wallet_manager = wallet_manager
        self.settings = settings

    def tx_params(self, gas: Optional[int] = None, value: int = 0) -> Dict:
        """
        Base transaction fields for the deployer wallet

        Args:
            gas: Gas limit (omitted when None)
            value: Native value in wei

        Returns:
            Transaction dict
        """
        params = {
            'from': self.wallet_manager.address,
            'nonce': self.w3.eth.get_transaction_count(self.wallet_manager.address),
            'gasPrice': self.w3.eth.gas_price,
            'chainId': self.settings.network.chain_id,
            'value': value
        }
        if gas is not None:
            params['gas'] = gas
        return params

    def estimate_gas(self, contract_call, value: int = 0) -> int:
        """
        Estimate gas with a safety buffer

        Falls back to the configured default limit when the node
        refuses to estimate.

        Args:
            contract_call: Contract function or constructor call

        Returns:
            Gas limit
        """
        try:
            gas_estimate = contract_call.estimate_gas({
                'from': self.wallet_manager.address,
                'value': value
            })
            return int(gas_estimate * self.settings.gas_buffer)
        except Exception as e:
            logger.warning(f"Gas estimation failed: {e}, using default")
            return self.settings.default_gas_limit

    def send(self, contract_call, value: int = 0, gas: Optional[int] = None) -> Dict:
        """
        Build, sign and send a contract call, then wait for the receipt

        Args:
            contract_call: Contract function or constructor call
            value: Native value in wei
            gas: Explicit gas limit (estimated when None)

        Returns:
            Transaction receipt
        """
        if gas is None:
            gas = self.estimate_gas(contract_call, value=value)

        transaction = contract_call.build_transaction(self.tx_params(gas=gas, value=value))

        logger.debug(
            f"Gas limit: {gas}, gas price: "
            f"{self.w3.from_wei(transaction['gasPrice'], 'gwei')} gwei"
        )

        signed_tx = self.wallet_manager.sign_transaction(transaction)
        tx_hash = self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)

        logger.info(f"Transaction sent: {Web3.to_hex(tx_hash)}")
        logger.info("Waiting for confirmation...")

        receipt = self.w3.eth.wait_for_transaction_receipt(
            tx_hash,
            timeout=self.settings.receipt_timeout
        )

        if receipt['status'] != 1:
            raise RuntimeError(f"Transaction failed: {Web3.to_hex(tx_hash)}")

        logger.info(f"Gas used: {receipt['gasUsed']}")
        return receipt
