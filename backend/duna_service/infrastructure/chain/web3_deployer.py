"""web3.py deployer — implements the ContractDeployer interface.

Builds the constructor transaction, signs it locally with the service
account and blocks (asynchronously) until a receipt arrives or the
confirmation timeout expires.
"""

import json
import logging
from pathlib import Path

from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import AsyncWeb3, Web3
from web3.exceptions import TimeExhausted

from duna_service.application.interfaces.contract_deployer import ContractDeployer
from duna_service.domain.entities import CompiledContract, DeployedContract
from duna_service.domain.exceptions import DeploymentError

logger = logging.getLogger(__name__)


def load_account(
    private_key: str = "",
    private_key_file: str = "",
    keystore_password: str = "",
) -> LocalAccount:
    """Load the signing account from a hex key or a key file.

    A key file may hold either a raw hex key or an encrypted JSON keystore
    (decrypted with ``keystore_password``).
    """
    if private_key.strip():
        return Account.from_key(private_key.strip())
    if not private_key_file.strip():
        raise ValueError("either private_key or private_key_file must be set")

    content = Path(private_key_file).read_text("utf-8").strip()
    if content.startswith("{"):
        keystore = json.loads(content)
        return Account.from_key(Account.decrypt(keystore, keystore_password))
    return Account.from_key(content)


class Web3ContractDeployer(ContractDeployer):
    """Infrastructure adapter — deploys contracts over JSON-RPC with web3.py."""

    def __init__(
        self,
        w3: AsyncWeb3,
        account: LocalAccount,
        *,
        chain_id: int | None = None,
        confirmation_timeout: float = 180.0,
        poll_latency: float = 1.0,
    ):
        self._w3 = w3
        self._account = account
        self._chain_id = chain_id
        self._timeout = confirmation_timeout
        self._poll_latency = poll_latency

    @property
    def sender(self) -> str:
        return self._account.address

    async def deploy(self, contract: CompiledContract) -> DeployedContract:
        tx_hash = await self._submit(contract)
        logger.info("Deployment of '%s' submitted in tx %s", contract.name, tx_hash)
        return await self._confirm(tx_hash)

    async def _submit(self, contract: CompiledContract) -> str:
        try:
            factory = self._w3.eth.contract(abi=contract.abi, bytecode=contract.bytecode)
            chain_id = self._chain_id or await self._w3.eth.chain_id
            nonce = await self._w3.eth.get_transaction_count(self.sender, "pending")
            transaction = await factory.constructor().build_transaction(
                {"from": self.sender, "nonce": nonce, "chainId": chain_id}
            )
            signed = self._account.sign_transaction(transaction)
            tx_hash = await self._w3.eth.send_raw_transaction(signed.raw_transaction)
        except Exception as exc:
            logger.warning("Deployment submission failed: %s", type(exc).__name__)
            raise DeploymentError(DeploymentError.SUBMISSION, str(exc) or type(exc).__name__) from exc
        return Web3.to_hex(tx_hash)

    async def _confirm(self, tx_hash: str) -> DeployedContract:
        try:
            receipt = await self._w3.eth.wait_for_transaction_receipt(
                tx_hash, timeout=self._timeout, poll_latency=self._poll_latency
            )
        except TimeExhausted as exc:
            raise DeploymentError(
                DeploymentError.CONFIRMATION,
                f"transaction {tx_hash} not confirmed within {self._timeout:g}s",
            ) from exc
        except Exception as exc:
            raise DeploymentError(
                DeploymentError.CONFIRMATION, str(exc) or type(exc).__name__
            ) from exc

        if receipt.get("status") == 0:
            raise DeploymentError(
                DeploymentError.CONFIRMATION, f"transaction {tx_hash} reverted"
            )
        address = receipt.get("contractAddress")
        if not address:
            raise DeploymentError(
                DeploymentError.CONFIRMATION,
                f"receipt for {tx_hash} has no contract address",
            )
        return DeployedContract(
            address=Web3.to_checksum_address(address),
            transaction_hash=tx_hash,
            block_number=receipt.get("blockNumber"),
        )
