"""Shared pytest fixtures for rootstock-deployments tests."""

import json
from pathlib import Path
from typing import Any, Dict, List, Sequence, Tuple

import pytest
import responses

from rootstock_deployments.config import load_config
from rootstock_deployments.types import ContractHandle, DeployerConfig, NetworkProfile

# Hardhat's well-known development account #0
DEV_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
DEV_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"

TESTNET_RPC = "http://rsk-testnet.example.com"
CONTRACT_ADDRESS = "0x5FbDB2315678afecb367f032d93F642f64180aa3"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def artifacts_dir(fixtures_dir: Path) -> Path:
    """Return the path to the sample Hardhat artifacts."""
    return fixtures_dir / "artifacts"


@pytest.fixture
def valid_env() -> Dict[str, str]:
    """Environment with every required variable set."""
    return {
        "RSK_TESTNET_RPC_URL": TESTNET_RPC,
        "PRIVATE_KEY": DEV_PRIVATE_KEY,
        "API_KEY": "blockscout-any-key",
    }


@pytest.fixture
def config(valid_env: Dict[str, str]) -> DeployerConfig:
    """Configuration loaded from valid_env."""
    return load_config(valid_env)


@pytest.fixture
def testnet(config: DeployerConfig) -> NetworkProfile:
    return config.networks["rskTestnet"]


class FakeContext:
    """Deployment context that records requests instead of sending transactions."""

    def __init__(self, network: NetworkProfile, fail_with: Exception = None):
        self.network = network
        self.requests: List[Tuple[str, Tuple[Any, ...]]] = []
        self.fail_with = fail_with

    def contract(self, contract_name: str, args: Sequence[Any] = ()) -> ContractHandle:
        self.requests.append((contract_name, tuple(args)))
        if self.fail_with is not None:
            raise self.fail_with
        return ContractHandle(
            contract_name=contract_name,
            address=CONTRACT_ADDRESS,
            abi=[],
            network=self.network.name,
            transaction_hash="0x" + "ab" * 32,
            block=16,
            constructor_args=tuple(args),
        )


@pytest.fixture
def fake_context(testnet: NetworkProfile) -> FakeContext:
    return FakeContext(testnet)


class FakeNode:
    """JSON-RPC node backed by `responses`; results are looked up by method."""

    def __init__(self, mock: responses.RequestsMock, url: str):
        self.results: Dict[str, Any] = {}
        self.errors: Dict[str, str] = {}
        self.calls: List[Tuple[str, List[Any]]] = []
        mock.add_callback(
            responses.POST, url, callback=self._handle, content_type="application/json"
        )

    def _handle(self, request):
        body = json.loads(request.body)
        self.calls.append((body["method"], body["params"]))
        if body["method"] in self.errors:
            error = {"code": -32000, "message": self.errors[body["method"]]}
            return (200, {}, json.dumps({"jsonrpc": "2.0", "id": body["id"], "error": error}))
        result = self.results[body["method"]]
        if callable(result):
            result = result(body["params"])
        return (200, {}, json.dumps({"jsonrpc": "2.0", "id": body["id"], "result": result}))

    def methods(self) -> List[str]:
        return [method for method, _ in self.calls]

    def params(self, method: str) -> List[Any]:
        return [params for m, params in self.calls if m == method][-1]


@pytest.fixture
def mocked_responses():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as mock:
        yield mock


@pytest.fixture
def testnet_node(mocked_responses) -> FakeNode:
    """Fake testnet node that accepts one deployment."""
    node = FakeNode(mocked_responses, TESTNET_RPC)
    node.results.update(
        {
            "eth_getTransactionCount": "0x7",
            "eth_gasPrice": "0x3b9aca00",
            "eth_estimateGas": "0x30d40",
            "eth_sendRawTransaction": "0x" + "cd" * 32,
            "eth_getTransactionReceipt": {
                "transactionHash": "0x" + "cd" * 32,
                "status": "0x1",
                "blockNumber": "0x10",
                "contractAddress": CONTRACT_ADDRESS.lower(),
            },
        }
    )
    return node


@pytest.fixture
def local_node(mocked_responses) -> FakeNode:
    """Fake development node with unlocked accounts."""
    node = FakeNode(mocked_responses, "http://127.0.0.1:8545")
    node.results.update(
        {
            "eth_accounts": [DEV_ADDRESS.lower()],
            "eth_sendTransaction": "0x" + "ef" * 32,
            "eth_getTransactionReceipt": {
                "transactionHash": "0x" + "ef" * 32,
                "status": "0x1",
                "blockNumber": "0x1",
                "contractAddress": CONTRACT_ADDRESS.lower(),
            },
        }
    )
    return node
