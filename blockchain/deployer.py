"""
Contract Deployer
Deploys the Study contracts from Hardhat artifacts
"""

from decimal import Decimal
from typing import Dict, List, Optional, Tuple
from web3 import Web3
from loguru import logger

from .artifacts import load_artifact
from .transaction_builder import TransactionBuilder

# Deployed in this order; constructor args are resolved at deploy time.
# 'token' means the StudyToken address from this run.
SUITE: List[Tuple[str, str]] = [
    ('StudyToken', 'none'),
    ('StudyAchievements', 'base_uri'),
    ('StudyStaking', 'token'),
    ('StudySubscription', 'token'),
    ('SessionManager', 'token')
]


class ContractDeployer:
    """
    Deploys contracts with the configured wallet and records their addresses
    """

    def __init__(self, w3: Web3, wallet_manager, settings, address_book, tx_builder=None):
        """
        Initialize deployer

        Args:
            w3: Web3 instance
            wallet_manager: Signing wallet
            settings: Settings instance
            address_book: AddressBook for the active network
            tx_builder: TransactionBuilder (created when omitted)
        """
        self.w3 = w3
        self.wallet_manager = wallet_manager
        self.settings = settings
        self.address_book = address_book
        self.tx_builder = tx_builder or TransactionBuilder(w3, wallet_manager, settings)

    def check_deployer_balance(self, min_balance_eth: Optional[Decimal] = None) -> Decimal:
        """
        Make sure the deployer can pay for gas

        Args:
            min_balance_eth: Minimum balance (default from settings)

        Returns:
            Current balance in ether
        """
        if min_balance_eth is None:
            min_balance_eth = self.settings.min_deployer_balance_eth

        balance = self.wallet_manager.get_native_balance(self.w3)
        symbol = self.settings.network.native_symbol

        logger.info(f"Account balance: {balance} {symbol}")

        if balance < min_balance_eth:
            raise ValueError(
                f"Insufficient balance for deployment "
                f"(need at least {min_balance_eth} {symbol}, have {balance})"
            )

        return balance

    def deploy(self, contract_name: str, *constructor_args) -> Dict:
        """
        Deploy one contract

        Args:
            contract_name: Artifact name
            *constructor_args: Constructor arguments

        Returns:
            {'name', 'address', 'tx_hash', 'gas_used'}
        """
        artifact = load_artifact(self.settings.artifacts_dir, contract_name)

        if not artifact['bytecode']:
            raise ValueError(f"{contract_name} artifact has no bytecode (abstract contract?)")

        logger.info(f"Deploying {contract_name}...")

        Contract = self.w3.eth.contract(abi=artifact['abi'], bytecode=artifact['bytecode'])
        receipt = self.tx_builder.send(Contract.constructor(*constructor_args))

        address = receipt['contractAddress']
        result = {
            'name': contract_name,
            'address': address,
            'tx_hash': Web3.to_hex(receipt['transactionHash']),
            'gas_used': receipt['gasUsed']
        }

        logger.success(f"✅ {contract_name} deployed to: {address}")
        return result

    def _constructor_args(self, kind: str, deployed: Dict[str, str]) -> tuple:
        if kind == 'none':
            return ()
        if kind == 'base_uri':
            return (self.settings.achievements_base_uri,)
        if kind == 'token':
            return (deployed['StudyToken'],)
        raise ValueError(f"Unknown constructor argument kind: {kind}")

    def deploy_suite(self) -> Dict[str, str]:
        """
        Deploy the full contract suite and save the deployment record

        Returns:
            {contract name: address}
        """
        logger.info(f"🚀 Starting deployment to {self.settings.network.name}...")
        logger.info(f"Deploying contracts with account: {self.wallet_manager.address}")

        self.check_deployer_balance()

        deployed: Dict[str, str] = {}
        for contract_name, kind in SUITE:
            result = self.deploy(contract_name, *self._constructor_args(kind, deployed))
            deployed[contract_name] = result['address']

        self.address_book.record(deployed, deployer=self.wallet_manager.address)
        return deployed

    def deploy_shop(self, token_address: Optional[str] = None) -> Dict:
        """
        Deploy StudyTokenShop against an existing StudyToken

        Args:
            token_address: StudyToken address (default: configured address)

        Returns:
            Deployment result dict
        """
        token_address = token_address or self.settings.contract_address('StudyToken')

        self.check_deployer_balance()

        result = self.deploy('StudyTokenShop', Web3.to_checksum_address(token_address))
        self.address_book.record(
            {'StudyTokenShop': result['address']},
            deployer=self.wallet_manager.address
        )
        return result
