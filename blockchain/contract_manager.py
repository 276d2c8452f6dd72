"""
Contract Manager
Reads from and transacts with the deployed Study contracts
"""

from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence
from web3 import Web3
from loguru import logger

from .artifacts import ERC20_MINIMAL_ABI, load_artifact


class ContractManager:
    """
    Binds contract ABIs to the configured addresses
    """

    def __init__(self, w3: Web3, settings, tx_builder=None):
        """
        Initialize Contract Manager

        Args:
            w3: Web3 instance
            settings: Settings (address table, artifacts dir)
            tx_builder: TransactionBuilder, required only for writes
        """
        self.w3 = w3
        self.settings = settings
        self.tx_builder = tx_builder
        self._contracts = {}

    def get_contract(self, contract_name: str, address: Optional[str] = None):
        """
        Contract instance for a name

        Uses the compiled artifact when present; ERC20-only ABI otherwise.

        Args:
            contract_name: e.g. 'StudyToken'
            address: Override the configured address

        Returns:
            web3 Contract
        """
        address = Web3.to_checksum_address(
            address or self.settings.contract_address(contract_name)
        )
        cache_key = (contract_name, address)

        if cache_key not in self._contracts:
            try:
                abi = load_artifact(self.settings.artifacts_dir, contract_name)['abi']
            except FileNotFoundError:
                logger.warning(f"{contract_name} artifact missing - using minimal ERC20 ABI")
                abi = ERC20_MINIMAL_ABI

            self._contracts[cache_key] = self.w3.eth.contract(address=address, abi=abi)

        return self._contracts[cache_key]

    def token(self):
        """StudyToken instance"""
        return self.get_contract('StudyToken')

    def token_info(self) -> Dict:
        """Name, symbol and decimals of StudyToken"""
        token = self.token()
        return {
            'name': token.functions.name().call(),
            'symbol': token.functions.symbol().call(),
            'decimals': token.functions.decimals().call()
        }

    def balance_of(self, address: str) -> int:
        """StudyToken balance in wei"""
        return self.token().functions.balanceOf(Web3.to_checksum_address(address)).call()

    def study_rewards(self, address: str) -> Dict:
        """
        Study reward details for an address

        These view functions are not on every token build; missing
        values come back as None.

        Returns:
            {'rewards': wei or None, 'last_claim': ISO string, 'Never' or None}
        """
        token = self.token()
        holder = Web3.to_checksum_address(address)

        try:
            rewards = token.functions.getUserStudyRewards(holder).call()
            claim_time = token.functions.getUserLastRewardClaim(holder).call()
        except Exception as e:
            logger.debug(f"Study reward info not available for {address}: {e}")
            return {'rewards': None, 'last_claim': None}

        if claim_time > 0:
            last_claim = datetime.fromtimestamp(claim_time, tz=timezone.utc).isoformat()
        else:
            last_claim = 'Never'

        return {'rewards': rewards, 'last_claim': last_claim}

    def _require_builder(self):
        if self.tx_builder is None:
            raise ValueError("Transactions need a TransactionBuilder (is PRIVATE_KEY set?)")
        return self.tx_builder

    def _check_sender_balance(self, required: int) -> int:
        sender = self._require_builder().wallet_manager.address
        balance = self.balance_of(sender)

        if balance < required:
            raise ValueError(
                f"Insufficient token balance: required "
                f"{Web3.from_wei(required, 'ether')}, available {Web3.from_wei(balance, 'ether')}"
            )

        return balance

    def transfer(self, to_address: str, amount: int) -> Dict:
        """
        Transfer StudyToken from the deployer

        Args:
            to_address: Recipient
            amount: Amount in wei

        Returns:
            Transaction receipt
        """
        self._check_sender_balance(amount)

        logger.info(
            f"🔄 Transferring {Web3.from_wei(amount, 'ether')} tokens to {to_address}"
        )
        call = self.token().functions.transfer(Web3.to_checksum_address(to_address), amount)
        receipt = self.tx_builder.send(call)

        logger.success("✅ Transfer completed!")
        return receipt

    def distribute_tokens(self, recipients: Sequence[str], amount_per_recipient: int) -> Dict:
        """
        Send the same amount to every recipient in one batch call

        Args:
            recipients: Recipient addresses
            amount_per_recipient: Amount in wei

        Returns:
            Transaction receipt
        """
        if not recipients:
            raise ValueError("No recipients given")

        self._check_sender_balance(amount_per_recipient * len(recipients))

        checksummed = [Web3.to_checksum_address(r) for r in recipients]
        call = self.token().functions.distributeTokens(checksummed, amount_per_recipient)
        receipt = self.tx_builder.send(call)

        logger.success(f"✅ Distribution to {len(recipients)} recipients completed!")
        return receipt

    def distribute_tokens_custom(self, recipients: Sequence[str], amounts: Sequence[int]) -> Dict:
        """
        Send a different amount to each recipient

        Args:
            recipients: Recipient addresses
            amounts: Amounts in wei, same order as recipients

        Returns:
            Transaction receipt
        """
        if len(recipients) != len(amounts):
            raise ValueError(
                f"Recipients and amounts differ in length ({len(recipients)} != {len(amounts)})"
            )
        if not recipients:
            raise ValueError("No recipients given")

        self._check_sender_balance(sum(amounts))

        checksummed = [Web3.to_checksum_address(r) for r in recipients]
        call = self.token().functions.distributeTokensCustom(checksummed, list(amounts))
        receipt = self.tx_builder.send(call)

        logger.success("✅ Custom distribution completed!")
        return receipt

    def mint_study_reward(self, to_address: str, amount: int) -> Dict:
        """Mint StudyToken rewards; the sender must own the token"""
        self._require_builder()

        call = self.token().functions.mintStudyReward(Web3.to_checksum_address(to_address), amount)
        receipt = self.tx_builder.send(call)

        logger.success(f"✅ Minted {Web3.from_wei(amount, 'ether')} STUDY to {to_address}")
        return receipt

    def approve(self, spender: str, amount: int) -> Dict:
        """Allow spender to move StudyToken from the sender"""
        self._require_builder()

        call = self.token().functions.approve(Web3.to_checksum_address(spender), amount)
        receipt = self.tx_builder.send(call)

        logger.success(f"✅ Approved {spender} to spend {Web3.from_wei(amount, 'ether')} STUDY")
        return receipt

    def stake(self, pool_id: int, amount: int) -> Dict:
        """
        Stake StudyToken in a StudyStaking pool

        The staking contract must already be approved for amount.

        Args:
            pool_id: 0 short term, 1 medium term, 2 long term
            amount: Amount in wei

        Returns:
            Transaction receipt
        """
        self._check_sender_balance(amount)

        call = self.get_contract('StudyStaking').functions.stake(pool_id, amount)
        receipt = self.tx_builder.send(call)

        logger.success(f"✅ Staked {Web3.from_wei(amount, 'ether')} tokens in pool {pool_id}")
        return receipt

    def purchase_premium_monthly(self, user: Optional[str] = None) -> Dict:
        """Buy a monthly premium subscription, for the sender by default"""
        builder = self._require_builder()
        user = Web3.to_checksum_address(user or builder.wallet_manager.address)

        call = self.get_contract('StudySubscription').functions.purchasePremiumMonthly(user)
        receipt = self.tx_builder.send(call)

        logger.success("✅ Purchased premium monthly subscription")
        return receipt

    def _struct_call(self, contract, function_name: str, *args) -> Dict:
        # Struct outputs decode to plain tuples; name them from the ABI
        result = getattr(contract.functions, function_name)(*args).call()
        if hasattr(result, '_asdict'):
            return dict(result._asdict())

        for entry in contract.abi:
            if entry.get('type') == 'function' and entry.get('name') == function_name:
                names = [c['name'] for c in entry['outputs'][0].get('components', [])]
                return dict(zip(names, result))

        raise ValueError(f"{function_name} not found in ABI")

    def user_stake(self, address: str, pool_id: int) -> Dict:
        """Stake record of an address in one pool"""
        return self._struct_call(
            self.get_contract('StudyStaking'), 'getUserStake',
            Web3.to_checksum_address(address), pool_id
        )

    def user_subscription(self, address: str) -> Dict:
        """Subscription record of an address"""
        return self._struct_call(
            self.get_contract('StudySubscription'), 'getUserSubscription',
            Web3.to_checksum_address(address)
        )

    def achievement_count(self, address: str) -> int:
        """Number of StudyAchievements NFTs held"""
        achievements = self.get_contract('StudyAchievements')
        return achievements.functions.balanceOf(Web3.to_checksum_address(address)).call()

    def token_owner(self) -> str:
        """Current owner of StudyToken"""
        return self.token().functions.owner().call()

    def transfer_ownership(self, new_owner: str) -> Optional[Dict]:
        """
        Hand StudyToken ownership to another address

        Args:
            new_owner: Usually the StudyTokenShop, so it can mint on purchase

        Returns:
            Transaction receipt, or None when new_owner already owns the token
        """
        self._require_builder()
        new_owner = Web3.to_checksum_address(new_owner)

        current_owner = self.token_owner()
        logger.info(f"Current StudyToken owner: {current_owner}")

        if current_owner.lower() == new_owner.lower():
            logger.success(f"✅ {new_owner} is already the owner!")
            return None

        logger.info(f"🔄 Transferring ownership to: {new_owner}")
        receipt = self.tx_builder.send(self.token().functions.transferOwnership(new_owner))

        owner_after = self.token_owner()
        if owner_after.lower() != new_owner.lower():
            raise RuntimeError(f"Ownership transfer failed: owner is still {owner_after}")

        logger.success(f"✅ Ownership transferred! Gas used: {receipt['gasUsed']}")
        return receipt

    def batch_distribution_events(self, receipt: Dict) -> List[Dict]:
        """Decoded BatchDistribution events from a receipt"""
        try:
            events = self.token().events.BatchDistribution().process_receipt(receipt)
        except Exception as e:
            logger.debug(f"Could not decode BatchDistribution events: {e}")
            return []
        return [dict(event['args']) for event in events]
