"""
Balance and token interaction tests
"""

from decimal import Decimal
from unittest.mock import Mock

import pytest
from web3 import Web3

from blockchain.artifacts import ERC20_MINIMAL_ABI
from blockchain.balance_checker import BalanceChecker
from blockchain.contract_manager import ContractManager
from conftest import SHOP_ADDRESS, TEST_ADDRESS, TOKEN_ADDRESS

HOLDER = '0x742d35Cc6634C0532925a3b8D4C9db96C4b4d8b6'
ONE_TOKEN = 10**18


def call_returning(value):
    """Mock for contract.functions.x(...) whose .call() returns value"""
    return Mock(return_value=Mock(call=Mock(return_value=value)))


@pytest.fixture
def token_contract():
    """Mock StudyToken with rewards support"""
    token = Mock()
    token.functions.name = call_returning('StudyToken')
    token.functions.symbol = call_returning('STUDY')
    token.functions.decimals = call_returning(18)
    token.functions.balanceOf = call_returning(250 * ONE_TOKEN)
    token.functions.getUserStudyRewards = call_returning(5 * ONE_TOKEN)
    token.functions.getUserLastRewardClaim = call_returning(1700000000)
    return token


@pytest.fixture
def w3(token_contract):
    """Mock Web3 that always returns the token contract"""
    w3 = Mock()
    w3.eth.contract.return_value = token_contract
    w3.eth.get_balance.return_value = Web3.to_wei(Decimal('0.5'), 'ether')
    w3.eth.chain_id = 31337
    return w3


@pytest.fixture
def tx_builder():
    builder = Mock()
    builder.wallet_manager.address = TEST_ADDRESS
    builder.send.return_value = {'status': 1, 'gasUsed': 50000, 'logs': []}
    return builder


@pytest.fixture
def manager(w3, settings, tx_builder):
    return ContractManager(w3, settings, tx_builder)


class TestContractManager:
    """Test token reads and writes"""

    def test_falls_back_to_erc20_abi(self, manager, w3, log_records):
        manager.token()

        w3.eth.contract.assert_called_once_with(
            address=Web3.to_checksum_address(TOKEN_ADDRESS),
            abi=ERC20_MINIMAL_ABI
        )
        assert any('minimal ERC20 ABI' in message for _, message in log_records)

    def test_contract_instances_cached(self, manager, w3):
        manager.token()
        manager.token()

        assert w3.eth.contract.call_count == 1

    def test_token_info(self, manager):
        assert manager.token_info() == {'name': 'StudyToken', 'symbol': 'STUDY', 'decimals': 18}

    def test_study_rewards(self, manager):
        rewards = manager.study_rewards(HOLDER)

        assert rewards['rewards'] == 5 * ONE_TOKEN
        assert rewards['last_claim'] == '2023-11-14T22:13:20+00:00'

    def test_study_rewards_never_claimed(self, manager, token_contract):
        token_contract.functions.getUserLastRewardClaim = call_returning(0)

        assert manager.study_rewards(HOLDER)['last_claim'] == 'Never'

    def test_study_rewards_unsupported(self, manager, token_contract):
        token_contract.functions.getUserStudyRewards.side_effect = Exception('no such function')

        assert manager.study_rewards(HOLDER) == {'rewards': None, 'last_claim': None}

    def test_transfer(self, manager, token_contract, tx_builder):
        manager.transfer(SHOP_ADDRESS, 100 * ONE_TOKEN)

        token_contract.functions.transfer.assert_called_once_with(
            Web3.to_checksum_address(SHOP_ADDRESS), 100 * ONE_TOKEN
        )
        tx_builder.send.assert_called_once_with(token_contract.functions.transfer.return_value)

    def test_transfer_insufficient_balance(self, manager, tx_builder):
        with pytest.raises(ValueError, match='Insufficient token balance'):
            manager.transfer(SHOP_ADDRESS, 1000 * ONE_TOKEN)

        tx_builder.send.assert_not_called()

    def test_transfer_needs_builder(self, w3, settings):
        with pytest.raises(ValueError, match='TransactionBuilder'):
            ContractManager(w3, settings).transfer(SHOP_ADDRESS, ONE_TOKEN)

    def test_distribute_tokens(self, manager, token_contract):
        manager.distribute_tokens([HOLDER, SHOP_ADDRESS], 100 * ONE_TOKEN)

        token_contract.functions.distributeTokens.assert_called_once_with(
            [Web3.to_checksum_address(HOLDER), Web3.to_checksum_address(SHOP_ADDRESS)],
            100 * ONE_TOKEN
        )

    def test_distribute_total_checked(self, manager):
        # 3 x 100 exceeds the 250 balance
        with pytest.raises(ValueError):
            manager.distribute_tokens([HOLDER, SHOP_ADDRESS, TEST_ADDRESS], 100 * ONE_TOKEN)

    def test_distribute_custom_length_mismatch(self, manager, tx_builder):
        with pytest.raises(ValueError, match='differ in length'):
            manager.distribute_tokens_custom([HOLDER, SHOP_ADDRESS], [ONE_TOKEN])

        tx_builder.send.assert_not_called()

    def test_distribute_custom(self, manager, token_contract):
        manager.distribute_tokens_custom([HOLDER, SHOP_ADDRESS], [ONE_TOKEN, 2 * ONE_TOKEN])

        token_contract.functions.distributeTokensCustom.assert_called_once_with(
            [Web3.to_checksum_address(HOLDER), Web3.to_checksum_address(SHOP_ADDRESS)],
            [ONE_TOKEN, 2 * ONE_TOKEN]
        )


class TestBalanceChecker:
    """Test balance reports"""

    @pytest.fixture
    def checker(self, w3, manager, settings):
        return BalanceChecker(w3, manager, settings)

    def test_check_address(self, checker):
        result = checker.check_address(HOLDER)

        assert result == {
            'address': HOLDER,
            'balance': Decimal('250'),
            'has_tokens': True,
            'study_rewards': Decimal('5'),
            'last_claim': '2023-11-14T22:13:20+00:00'
        }

    def test_check_address_error_is_captured(self, checker, token_contract):
        token_contract.functions.balanceOf.side_effect = Exception('rpc down')

        result = checker.check_address(HOLDER)

        assert result == {'address': HOLDER, 'error': 'rpc down'}

    def test_summarize(self):
        results = [
            {'address': 'a', 'has_tokens': True},
            {'address': 'b', 'has_tokens': False},
            {'address': 'c', 'error': 'boom'}
        ]

        summary = BalanceChecker.summarize(results)

        assert [r['address'] for r in summary['with_tokens']] == ['a']
        assert [r['address'] for r in summary['without_tokens']] == ['b']
        assert [r['address'] for r in summary['errors']] == ['c']

    def test_check_wallet(self, checker, w3):
        result = checker.check_wallet(HOLDER)

        assert result['native_balance'] == Decimal('0.5')
        assert result['has_gas'] is True
        assert result['token_balance'] == Decimal('250')
        assert result['chain_id'] == 31337

    def test_check_wallet_low_gas(self, checker, w3, log_records):
        w3.eth.get_balance.return_value = 10**12

        result = checker.check_wallet(HOLDER)

        assert result['has_gas'] is False
        assert any(level == 'WARNING' for level, _ in log_records)

    def test_check_shop(self, checker):
        result = checker.check_shop(Decimal('100'))

        assert result['address'] == Web3.to_checksum_address(SHOP_ADDRESS)
        assert result['token_balance'] == Decimal('250')
        assert result['sufficient'] is True

    def test_check_shop_low_stock(self, checker):
        assert checker.check_shop(Decimal('1000'))['sufficient'] is False
