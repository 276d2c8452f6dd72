"""
Compiled Artifacts
Reads Hardhat build output (ABI + bytecode)
"""

import json
from pathlib import Path
from typing import Dict, List

# Used when only an address is known and no artifact is on disk
ERC20_MINIMAL_ABI: List[Dict] = [
    {
        "constant": True,
        "inputs": [{"name": "_owner", "type": "address"}],
        "name": "balanceOf",
        "outputs": [{"name": "balance", "type": "uint256"}],
        "type": "function"
    },
    {
        "constant": True,
        "inputs": [],
        "name": "name",
        "outputs": [{"name": "", "type": "string"}],
        "type": "function"
    },
    {
        "constant": True,
        "inputs": [],
        "name": "symbol",
        "outputs": [{"name": "", "type": "string"}],
        "type": "function"
    },
    {
        "constant": True,
        "inputs": [],
        "name": "decimals",
        "outputs": [{"name": "", "type": "uint8"}],
        "type": "function"
    },
    {
        "constant": False,
        "inputs": [
            {"name": "_to", "type": "address"},
            {"name": "_value", "type": "uint256"}
        ],
        "name": "transfer",
        "outputs": [{"name": "", "type": "bool"}],
        "type": "function"
    }
]


def artifact_path(artifacts_dir: Path, contract_name: str) -> Path:
    """<artifacts>/contracts/<Name>.sol/<Name>.json"""
    return Path(artifacts_dir) / 'contracts' / f"{contract_name}.sol" / f"{contract_name}.json"


def load_artifact(artifacts_dir: Path, contract_name: str) -> Dict:
    """
    Load a compiled contract

    Args:
        artifacts_dir: Hardhat artifacts directory
        contract_name: Contract name, e.g. 'StudyToken'

    Returns:
        {'contractName', 'abi', 'bytecode'}; bytecode is None for interfaces
    """
    path = artifact_path(artifacts_dir, contract_name)

    if not path.exists():
        raise FileNotFoundError(
            f"Contract artifact not found: {path} (run 'npx hardhat compile' first)"
        )

    with open(path, 'r') as f:
        contract_json = json.load(f)

    bytecode = contract_json.get('bytecode')
    if bytecode in ('', '0x'):
        bytecode = None

    return {
        'contractName': contract_json.get('contractName', contract_name),
        'abi': contract_json['abi'],
        'bytecode': bytecode
    }
