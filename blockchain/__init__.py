"""
Blockchain Interaction Package
Compiled artifacts, signing, deployment and contract reads
"""

from .artifacts import load_artifact
from .wallet_manager import WalletManager
from .transaction_builder import TransactionBuilder
from .contract_manager import ContractManager
from .deployer import ContractDeployer
from .balance_checker import BalanceChecker
from .provider import connect

__all__ = [
    'load_artifact',
    'WalletManager',
    'TransactionBuilder',
    'ContractManager',
    'ContractDeployer',
    'BalanceChecker',
    'connect'
]
