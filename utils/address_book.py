"""
Address Book
Keeps deployed contract addresses in deployments/<network>.json and .env
"""

import json
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional
from loguru import logger


def env_key_for(contract_name: str) -> str:
    """StudyTokenShop -> STUDY_TOKEN_SHOP_ADDRESS"""
    snake = re.sub(r'(?<!^)(?=[A-Z])', '_', contract_name).upper()
    return f"{snake}_ADDRESS"


class AddressBook:
    """
    Deployment record for one network
    """

    def __init__(self, settings):
        """
        Initialize address book

        Args:
            settings: Settings instance
        """
        self.settings = settings
        self.network = settings.network
        self.path = Path(settings.deployments_dir) / f"{self.network.key}.json"

    def load(self) -> Dict:
        """Load the saved record, or an empty skeleton when none exists"""
        if not self.path.exists():
            return {
                'network': self.network.key,
                'chainId': self.network.chain_id,
                'contracts': {}
            }

        with open(self.path, 'r') as f:
            return json.load(f)

    def get(self, contract_name: str) -> Optional[str]:
        """Saved address for a contract, if any"""
        return self.load().get('contracts', {}).get(contract_name)

    def record(self, contracts: Dict[str, str], deployer: Optional[str] = None) -> Path:
        """
        Merge new addresses into the record and write it

        Args:
            contracts: {contract name: address}
            deployer: Deployer address

        Returns:
            Path of the written file
        """
        data = self.load()
        data['network'] = self.network.key
        data['chainId'] = self.network.chain_id
        data['timestamp'] = datetime.now(timezone.utc).isoformat()
        data['rpcUrl'] = self.network.rpc_url
        data['blockExplorer'] = self.network.block_explorer
        if deployer:
            data['deployer'] = deployer
        data.setdefault('contracts', {}).update(contracts)

        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w') as f:
            json.dump(data, f, indent=2)

        # Keep the in-memory table in step with the file
        self.settings.contract_addresses.update(contracts)

        logger.info(f"Deployment info saved to: {self.path}")
        return self.path

    def update_env_file(self, contracts: Dict[str, str]) -> None:
        """
        Write or replace <NAME>_ADDRESS lines in the .env file

        Args:
            contracts: {contract name: address}
        """
        env_path = Path(self.settings.env_file)

        lines = []
        if env_path.exists():
            with open(env_path, 'r') as f:
                lines = f.readlines()

        if lines and not lines[-1].endswith('\n'):
            lines[-1] += '\n'

        for name, address in contracts.items():
            key = env_key_for(name)
            entry = f"{key}={address}\n"

            for i, line in enumerate(lines):
                if line.startswith(f"{key}="):
                    lines[i] = entry
                    break
            else:
                lines.append(entry)

        with open(env_path, 'w') as f:
            f.writelines(lines)

        logger.success(f"Updated {env_path} with {len(contracts)} contract address(es)")
