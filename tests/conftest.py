"""
Shared fixtures
"""

import pytest
from loguru import logger

from utils.config import NetworkConfig, Settings

# Hardhat default account #0, never holds real funds
TEST_PRIVATE_KEY = '0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80'
TEST_ADDRESS = '0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266'

TOKEN_ADDRESS = '0x93635f5b064979FA3bC18C30614c5Ff40Dda0ed6'
SHOP_ADDRESS = '0x0f3E353B65eFEe59551fEa9689B77C74C1E7423c'


@pytest.fixture
def network():
    """Local test network"""
    return NetworkConfig(
        key='localhost',
        chain_id=31337,
        name='Hardhat Local',
        rpc_url='http://127.0.0.1:8545'
    )


@pytest.fixture
def settings(tmp_path, network):
    """Settings rooted in a temp directory"""
    return Settings(
        network=network,
        contract_addresses={
            'StudyToken': TOKEN_ADDRESS,
            'StudyTokenShop': SHOP_ADDRESS
        },
        private_key=TEST_PRIVATE_KEY,
        artifacts_dir=tmp_path / 'artifacts',
        deployments_dir=tmp_path / 'deployments',
        env_file=tmp_path / '.env',
        rename_base_dir=tmp_path / 'dist'
    )


@pytest.fixture
def log_records():
    """Collect (level, message) pairs emitted through loguru"""
    records = []
    handler_id = logger.add(
        lambda message: records.append(
            (message.record['level'].name, message.record['message'])
        ),
        level='DEBUG'
    )
    yield records
    logger.remove(handler_id)
