"""Configuration constants for rootstock-deployments library."""

# Compiler pin; artifacts built with any other solc version are rejected by verification
SOLIDITY_VERSION = "0.8.27"

# Fixed legacy gas price (wei) used on both Rootstock networks
RSK_GAS_PRICE = 60_000_000

# Environment variables: name -> human readable description
REQUIRED_ENV_VARS = {
    "RSK_TESTNET_RPC_URL": "testnet RPC URL",
    "PRIVATE_KEY": "private key",
    "API_KEY": "API key",
}

# Reserved for future use; absence never fails config loading
OPTIONAL_ENV_VARS = {
    "RSK_MAINNET_RPC_URL": "mainnet RPC URL",
}

# Network parameters keyed by network name
NETWORK_CONFIG = {
    "localhost": {
        "chain_id": 31337,
        "rpc_url": "http://127.0.0.1:8545",
        "gas_price": None,
        "live": False,
    },
    "rskTestnet": {
        "chain_id": 31,
        "rpc_env": "RSK_TESTNET_RPC_URL",
        "gas_price": RSK_GAS_PRICE,
        "live": True,
        "verification_key": "rsktestnet",
    },
    "rskMainnet": {
        "chain_id": 30,
        "rpc_env": "RSK_MAINNET_RPC_URL",
        "gas_price": RSK_GAS_PRICE,
        "live": True,
        "verification_key": "rskmainnet",
    },
}

# Blockscout exposes an etherscan-compatible API on both networks
CUSTOM_CHAINS = {
    "rsktestnet": {
        "chain_id": 31,
        "api_url": "https://rootstock-testnet.blockscout.com/api/",
        "browser_url": "https://rootstock-testnet.blockscout.com/",
    },
    "rskmainnet": {
        "chain_id": 30,
        "api_url": "https://rootstock.blockscout.com/api/",
        "browser_url": "https://rootstock.blockscout.com/",
    },
}

SOURCIFY_SERVER_URL = "https://sourcify.dev/server"
