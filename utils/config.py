"""
Configuration
Builds the Settings object every script receives at startup
"""

import json
import os
from decimal import Decimal
from pathlib import Path
from typing import Dict, Mapping, Optional
from dotenv import dotenv_values

BASE_DIR = Path(__file__).resolve().parent.parent
DEFAULT_CONFIG_PATH = BASE_DIR / 'config' / 'network_config.json'
DEFAULT_ENV_FILE = BASE_DIR / '.env'
DEFAULT_RENAME_BASE_DIR = BASE_DIR / 'scripts' / 'dist'


class NetworkConfig:
    """Chain connection details for one network"""

    def __init__(
        self,
        key: str,
        chain_id: int,
        name: str,
        rpc_url: str,
        block_explorer: str = '',
        native_symbol: str = 'ETH'
    ):
        self.key = key
        self.chain_id = chain_id
        self.name = name
        self.rpc_url = rpc_url
        self.block_explorer = block_explorer
        self.native_symbol = native_symbol

    def __repr__(self) -> str:
        return f"NetworkConfig({self.key!r}, chain_id={self.chain_id})"


class Settings:
    """
    Everything a script needs, resolved once.

    Secrets and the contract address table live here so nothing reads
    the process environment after startup.
    """

    def __init__(
        self,
        network: NetworkConfig,
        contract_addresses: Dict[str, str],
        private_key: Optional[str] = None,
        artifacts_dir: Path = BASE_DIR / 'artifacts',
        deployments_dir: Path = BASE_DIR / 'deployments',
        env_file: Path = DEFAULT_ENV_FILE,
        rename_base_dir: Path = DEFAULT_RENAME_BASE_DIR,
        rename_artifact_set: str = 'full',
        gas_buffer: float = 1.2,
        default_gas_limit: int = 3000000,
        receipt_timeout: int = 300,
        min_deployer_balance_eth: Decimal = Decimal('0.01'),
        min_gas_balance_eth: Decimal = Decimal('0.001'),
        achievements_base_uri: str = 'https://gateway.pinata.cloud/ipfs/',
        log_level: str = 'INFO',
        log_file: Optional[str] = None
    ):
        self.network = network
        self.contract_addresses = dict(contract_addresses)
        self.private_key = private_key
        self.artifacts_dir = Path(artifacts_dir)
        self.deployments_dir = Path(deployments_dir)
        self.env_file = Path(env_file)
        self.rename_base_dir = Path(rename_base_dir)
        self.rename_artifact_set = rename_artifact_set
        self.gas_buffer = gas_buffer
        self.default_gas_limit = default_gas_limit
        self.receipt_timeout = receipt_timeout
        self.min_deployer_balance_eth = Decimal(str(min_deployer_balance_eth))
        self.min_gas_balance_eth = Decimal(str(min_gas_balance_eth))
        self.achievements_base_uri = achievements_base_uri
        self.log_level = log_level
        self.log_file = log_file

    def require_private_key(self) -> str:
        """Return the signer key or fail with a readable message"""
        if not self.private_key:
            raise ValueError(f"PRIVATE_KEY must be set in {self.env_file}")
        return self.private_key

    def contract_address(self, name: str) -> str:
        """
        Look up a contract address for the active network

        Args:
            name: Contract name, e.g. 'StudyToken'

        Returns:
            Address string
        """
        address = self.contract_addresses.get(name)
        if not address:
            raise ValueError(
                f"No address configured for {name} on {self.network.key}"
            )
        return address


def mask_secret(value: Optional[str]) -> str:
    """Show only the first 6 and last 4 characters of a secret"""
    if not value:
        return 'NOT SET'
    if len(value) <= 12:
        return '***'
    return f"{value[:6]}...{value[-4:]}"


def _load_saved_deployment(deployments_dir: Path, network_key: str) -> Dict[str, str]:
    record_path = deployments_dir / f"{network_key}.json"
    if not record_path.exists():
        return {}

    with open(record_path, 'r') as f:
        record = json.load(f)

    return record.get('contracts', {})


class BuildSettings:
    """Settings for the post-build renamer; no network or deployment state"""

    def __init__(
        self,
        rename_base_dir: Path = DEFAULT_RENAME_BASE_DIR,
        rename_artifact_set: str = 'full',
        log_level: str = 'INFO',
        log_file: Optional[str] = None
    ):
        self.rename_base_dir = Path(rename_base_dir)
        self.rename_artifact_set = rename_artifact_set
        self.log_level = log_level
        self.log_file = log_file


def _read_env(env_file: Path, environ: Optional[Mapping[str, str]]) -> Dict[str, str]:
    env: Dict[str, str] = {}
    if env_file.exists():
        env.update({k: v for k, v in dotenv_values(env_file).items() if v is not None})
    env.update(os.environ if environ is None else environ)
    return env


def load_build_settings(
    env_file: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None
) -> BuildSettings:
    """
    Build the renamer settings from .env and the environment

    Only RENAME_BASE_DIR, RENAME_ARTIFACT_SET, LOG_LEVEL and LOG_FILE are
    read. The network config and deployment records are never opened.

    Args:
        env_file: Path to .env (default: repo root)
        environ: Environment mapping (default: os.environ)

    Returns:
        BuildSettings instance
    """
    env = _read_env(Path(env_file) if env_file else DEFAULT_ENV_FILE, environ)

    return BuildSettings(
        rename_base_dir=Path(env.get('RENAME_BASE_DIR') or DEFAULT_RENAME_BASE_DIR),
        rename_artifact_set=env.get('RENAME_ARTIFACT_SET') or 'full',
        log_level=env.get('LOG_LEVEL') or 'INFO',
        log_file=env.get('LOG_FILE') or None
    )


def load_settings(
    env_file: Optional[Path] = None,
    config_path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None
) -> Settings:
    """
    Build Settings from the JSON network config, the .env file and the environment

    Process environment wins over .env values.

    Args:
        env_file: Path to .env (default: repo root)
        config_path: Path to network_config.json
        environ: Environment mapping (default: os.environ)

    Returns:
        Settings instance
    """
    env_file = Path(env_file) if env_file else DEFAULT_ENV_FILE
    config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    env = _read_env(env_file, environ)

    with open(config_path, 'r') as f:
        config = json.load(f)

    network_key = env.get('NETWORK') or config['default_network']
    networks = config['networks']

    if network_key not in networks:
        raise ValueError(
            f"Unknown network: {network_key} "
            f"(configured: {', '.join(networks)})"
        )

    net = networks[network_key]
    network = NetworkConfig(
        key=network_key,
        chain_id=int(net['chain_id']),
        name=net.get('name', network_key),
        rpc_url=env.get('RPC_URL') or net['rpc_url'],
        block_explorer=net.get('block_explorer', ''),
        native_symbol=net.get('native_symbol', 'ETH')
    )

    deployments_dir = Path(env.get('DEPLOYMENTS_DIR') or BASE_DIR / 'deployments')

    addresses = dict(net.get('contracts', {}))
    addresses.update(_load_saved_deployment(deployments_dir, network_key))

    deployment = config.get('deployment', {})
    build = config.get('build', {})

    return Settings(
        network=network,
        contract_addresses=addresses,
        private_key=env.get('PRIVATE_KEY') or None,
        artifacts_dir=Path(env.get('ARTIFACTS_DIR') or BASE_DIR / 'artifacts'),
        deployments_dir=deployments_dir,
        env_file=env_file,
        rename_base_dir=Path(env.get('RENAME_BASE_DIR') or DEFAULT_RENAME_BASE_DIR),
        rename_artifact_set=env.get('RENAME_ARTIFACT_SET') or build.get('artifact_set', 'full'),
        gas_buffer=float(deployment.get('gas_buffer', 1.2)),
        default_gas_limit=int(deployment.get('default_gas_limit', 3000000)),
        receipt_timeout=int(deployment.get('receipt_timeout', 300)),
        min_deployer_balance_eth=Decimal(str(deployment.get('min_deployer_balance_eth', '0.01'))),
        min_gas_balance_eth=Decimal(str(deployment.get('min_gas_balance_eth', '0.001'))),
        achievements_base_uri=deployment.get(
            'achievements_base_uri', 'https://gateway.pinata.cloud/ipfs/'
        ),
        log_level=env.get('LOG_LEVEL') or 'INFO',
        log_file=env.get('LOG_FILE') or None
    )
