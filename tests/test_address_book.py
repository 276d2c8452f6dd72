"""
Address Book Tests
"""

import json

from utils.address_book import AddressBook, env_key_for
from conftest import TEST_ADDRESS

STAKING = '0x0000000000000000000000000000000000000003'
SHOP = '0x0000000000000000000000000000000000000004'


class TestAddressBook:
    """Test deployment record bookkeeping"""

    def test_load_empty(self, settings):
        record = AddressBook(settings).load()

        assert record == {'network': 'localhost', 'chainId': 31337, 'contracts': {}}

    def test_record_writes_file(self, settings):
        book = AddressBook(settings)

        path = book.record({'StudyStaking': STAKING}, deployer=TEST_ADDRESS)

        data = json.loads(path.read_text())
        assert path == settings.deployments_dir / 'localhost.json'
        assert data['contracts'] == {'StudyStaking': STAKING}
        assert data['deployer'] == TEST_ADDRESS
        assert data['chainId'] == 31337
        assert 'timestamp' in data

    def test_record_merges(self, settings):
        book = AddressBook(settings)

        book.record({'StudyStaking': STAKING})
        book.record({'StudyTokenShop': SHOP})

        assert book.load()['contracts'] == {'StudyStaking': STAKING, 'StudyTokenShop': SHOP}
        assert book.get('StudyStaking') == STAKING

    def test_record_updates_settings(self, settings):
        AddressBook(settings).record({'StudyTokenShop': SHOP})

        assert settings.contract_address('StudyTokenShop') == SHOP


class TestEnvFile:
    """Test .env address updates"""

    def test_env_key(self):
        assert env_key_for('StudyToken') == 'STUDY_TOKEN_ADDRESS'
        assert env_key_for('SessionManager') == 'SESSION_MANAGER_ADDRESS'

    def test_creates_file(self, settings):
        AddressBook(settings).update_env_file({'StudyStaking': STAKING})

        assert settings.env_file.read_text() == f"STUDY_STAKING_ADDRESS={STAKING}\n"

    def test_replaces_existing_and_keeps_other_lines(self, settings):
        settings.env_file.write_text(
            "PRIVATE_KEY=0xabc\n"
            "STUDY_STAKING_ADDRESS=0xold"
        )

        AddressBook(settings).update_env_file({'StudyStaking': STAKING, 'StudyTokenShop': SHOP})

        assert settings.env_file.read_text().splitlines() == [
            'PRIVATE_KEY=0xabc',
            f'STUDY_STAKING_ADDRESS={STAKING}',
            f'STUDY_TOKEN_SHOP_ADDRESS={SHOP}'
        ]
