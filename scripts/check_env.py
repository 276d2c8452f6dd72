"""
Environment Check Script
Verifies secrets, RPC connection, balances and deployed contracts
"""

import sys
from web3 import Web3
from loguru import logger

from blockchain.artifacts import artifact_path
from blockchain.wallet_manager import WalletManager
from utils.config import load_settings, mask_secret
from utils.log_config import configure_logging


def check_private_key(settings):
    """Check that the signer key is present and looks like a key"""
    logger.info("Checking environment variables...")

    key = settings.private_key
    if not key:
        logger.error("❌ PRIVATE_KEY is not set!")
        logger.info(f"  Add it to {settings.env_file}: PRIVATE_KEY=0x1234567890abcdef...")
        return False

    logger.info(f"  PRIVATE_KEY: ✅ SET ({mask_secret(key)}, length {len(key)})")

    hex_part = key[2:] if key.startswith('0x') else key
    if len(hex_part) != 64:
        logger.error("  ✗ PRIVATE_KEY should be 32 bytes (64 hex characters)")
        return False

    return True


def check_rpc_connection(settings, state):
    """Check the RPC endpoint responds with the expected chain"""
    logger.info("Checking RPC connection...")

    network = settings.network
    try:
        w3 = Web3(Web3.HTTPProvider(network.rpc_url))
        if not w3.is_connected():
            logger.error(f"  ✗ {network.name}: Connection failed ({network.rpc_url})")
            return False

        chain_id = w3.eth.chain_id
        block = w3.eth.block_number
    except Exception as e:
        logger.error(f"  ✗ {network.name}: {e}")
        return False

    if chain_id != network.chain_id:
        logger.error(f"  ✗ Chain id {chain_id} does not match configured {network.chain_id}")
        return False

    state['w3'] = w3
    logger.success(f"  ✓ {network.name}: Connected (Block: {block})")
    return True


def check_wallet_balance(settings, state):
    """Check the deployer can pay for gas"""
    logger.info("Checking wallet balance...")

    w3 = state.get('w3')
    if w3 is None or not settings.private_key:
        logger.warning("  No connection or key - skipping balance check")
        return True

    wallet = WalletManager(settings.private_key)
    balance = wallet.get_native_balance(w3)
    symbol = settings.network.native_symbol

    logger.info(f"  Deployer: {balance:.4f} {symbol}")

    if balance < settings.min_deployer_balance_eth:
        logger.warning(
            f"  ⚠ Deployer balance low (need at least {settings.min_deployer_balance_eth} {symbol})"
        )
    else:
        logger.success("  ✓ Deployer balance sufficient")

    return True


def check_contract_deployment(settings, state):
    """Check every configured address has code"""
    logger.info("Checking contract deployment...")

    if not settings.contract_addresses:
        logger.warning("  No contracts configured for this network")
        logger.info("  Run: python deploy.py")
        return False

    w3 = state.get('w3')
    if w3 is None:
        return True

    ok = True
    for name, address in settings.contract_addresses.items():
        code = w3.eth.get_code(Web3.to_checksum_address(address))
        if code in (b'', '0x'):
            logger.error(f"  ✗ No contract code for {name} at {address}")
            ok = False
        else:
            logger.success(f"  ✓ {name} deployed at {address}")

    return ok


def check_artifacts(settings, state):
    """Check compiled artifacts exist for the configured contracts"""
    logger.info("Checking compiled artifacts...")

    missing = [
        name for name in settings.contract_addresses
        if not artifact_path(settings.artifacts_dir, name).exists()
    ]

    if missing:
        logger.warning(f"  Missing artifacts: {', '.join(missing)}")
        logger.info("  Run: npx hardhat compile")
        return False

    logger.success("  ✓ All artifacts present")
    return True


def main():
    """Run all checks"""
    settings = load_settings()
    configure_logging(settings.log_level, settings.log_file)

    logger.info("=" * 70)
    logger.info(f"Environment Check ({settings.network.name})")
    logger.info("=" * 70)

    checks = [
        ("Private Key", lambda state: check_private_key(settings)),
        ("RPC Connection", lambda state: check_rpc_connection(settings, state)),
        ("Wallet Balance", lambda state: check_wallet_balance(settings, state)),
        ("Contract Deployment", lambda state: check_contract_deployment(settings, state)),
        ("Compiled Artifacts", lambda state: check_artifacts(settings, state))
    ]

    state = {}
    results = []

    for name, check_func in checks:
        logger.info("")
        try:
            results.append((name, check_func(state)))
        except Exception as e:
            logger.error(f"Error in {name}: {e}")
            results.append((name, False))

    logger.info("")
    logger.info("=" * 70)
    logger.info("Summary")
    logger.info("=" * 70)

    passed = sum(1 for _, result in results if result)

    for name, result in results:
        status = "✓ PASS" if result else "✗ FAIL"
        logger.info(f"  {status}: {name}")

    logger.info(f"Total: {passed}/{len(results)} checks passed")

    if passed == len(results):
        logger.success("✅ Environment ready")
        return 0

    logger.error("❌ Environment not ready - fix issues above")
    return 1


if __name__ == "__main__":
    sys.exit(main())
