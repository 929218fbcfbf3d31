"""Network-bound execution contexts for rootstock-deployments library."""

import logging
import time
from pathlib import Path
from typing import Any, Dict, Optional, Protocol, Sequence, Union

from eth_account import Account
from eth_utils import to_checksum_address

from .artifacts import deployment_data, load_artifact
from .exceptions import NetworkExecutionError
from .paths import get_default_artifacts_dir
from .rpc import JsonRpcClient
from .types import ContractHandle, NetworkProfile

logger = logging.getLogger(__name__)


class DeploymentContext(Protocol):
    """Anything that can instantiate a contract on one network."""

    network: NetworkProfile

    def contract(self, contract_name: str, args: Sequence[Any] = ()) -> ContractHandle:
        ...


class RpcDeploymentContext:
    """Deploys contracts by submitting creation transactions over JSON-RPC."""

    def __init__(
        self,
        network: NetworkProfile,
        artifacts_dir: Optional[Union[Path, str]] = None,
        client: Optional[JsonRpcClient] = None,
        poll_interval: float = 2.0,
        timeout: float = 300.0,
    ):
        """
        Initialize the context.

        Args:
            network: Target network profile
            artifacts_dir: Hardhat artifacts directory (defaults to ./artifacts)
            client: RPC client (defaults to one bound to network.rpc_url)
            poll_interval: Seconds between receipt polls
            timeout: Seconds to wait for a receipt before failing
        """
        self.network = network
        self.artifacts_dir = Path(artifacts_dir) if artifacts_dir else get_default_artifacts_dir()
        self.client = client or JsonRpcClient(network.rpc_url)
        self.poll_interval = poll_interval
        self.timeout = timeout

    def contract(self, contract_name: str, args: Sequence[Any] = ()) -> ContractHandle:
        """
        Deploy one contract and wait until it is mined.

        Args:
            contract_name: Bare or fully qualified contract name
            args: Ordered constructor arguments

        Returns:
            ContractHandle for the new contract

        Raises:
            ArtifactNotFoundError: If the contract hasn't been compiled
            ConstructorArgumentsError: If args don't match the constructor
            NetworkExecutionError: If submission fails, times out or reverts
        """
        artifact = load_artifact(self.artifacts_dir, contract_name)
        data = deployment_data(artifact, args)

        if self.network.signing_key:
            tx_hash = self._send_signed(data)
        else:
            tx_hash = self._send_unsigned(data)

        logger.info("Deploying %s on %s (tx %s)", artifact.contract_name, self.network.name, tx_hash)
        receipt = self.wait_for_receipt(tx_hash)

        status = receipt.get("status")
        if status is not None and int(status, 16) == 0:
            raise NetworkExecutionError(
                f"Deployment of {artifact.contract_name} reverted (tx {tx_hash})"
            )
        if not receipt.get("contractAddress"):
            raise NetworkExecutionError(
                f"Receipt for {tx_hash} has no contract address"
            )

        address = to_checksum_address(receipt["contractAddress"])
        logger.info("%s deployed at %s", artifact.contract_name, address)

        return ContractHandle(
            contract_name=artifact.contract_name,
            address=address,
            abi=artifact.abi,
            network=self.network.name,
            transaction_hash=tx_hash,
            block=int(receipt["blockNumber"], 16) if receipt.get("blockNumber") else None,
            constructor_args=tuple(args),
        )

    def _send_signed(self, data: str) -> str:
        account = Account.from_key(self.network.signing_key)
        sender = account.address

        nonce = int(self.client.call("eth_getTransactionCount", [sender, "pending"]), 16)
        gas_price = self.network.gas_price
        if gas_price is None:
            gas_price = int(self.client.call("eth_gasPrice"), 16)
        gas = int(self.client.call("eth_estimateGas", [{"from": sender, "data": data}]), 16)

        # Legacy transaction; Rootstock doesn't support EIP-1559
        tx: Dict[str, Any] = {
            "nonce": nonce,
            "gasPrice": gas_price,
            "gas": gas,
            "value": 0,
            "data": data,
            "chainId": self.network.chain_id,
        }
        signed = account.sign_transaction(tx)
        raw = "0x" + bytes(signed.raw_transaction).hex()
        return self.client.call("eth_sendRawTransaction", [raw])

    def _send_unsigned(self, data: str) -> str:
        # Local development node with unlocked accounts
        accounts = self.client.call("eth_accounts")
        if not accounts:
            raise NetworkExecutionError(
                f"Network '{self.network.name}' has no signing key and no unlocked accounts"
            )
        tx: Dict[str, Any] = {"from": accounts[0], "data": data}
        if self.network.gas_price is not None:
            tx["gasPrice"] = hex(self.network.gas_price)
        return self.client.call("eth_sendTransaction", [tx])

    def wait_for_receipt(self, tx_hash: str) -> Dict[str, Any]:
        """
        Poll for a transaction receipt.

        Raises:
            NetworkExecutionError: If no receipt appears within the timeout
        """
        deadline = time.monotonic() + self.timeout
        while True:
            receipt = self.client.call("eth_getTransactionReceipt", [tx_hash])
            if receipt:
                return receipt
            if time.monotonic() >= deadline:
                raise NetworkExecutionError(
                    f"Timed out after {self.timeout}s waiting for receipt of {tx_hash}"
                )
            time.sleep(self.poll_interval)
