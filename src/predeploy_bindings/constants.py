"""Configuration constants for predeploy-bindings library."""

# Chain where tracked contracts were originally deployed
PRIMARY_CHAIN = "eth"

# Rollup chain hosting the predeploys
SECONDARY_CHAIN = "op"

# Etherscan-compatible explorer configuration per chain identifier
CHAIN_CONFIG = {
    "eth": {
        "chain_id": 1,
        "chain_name": "Ethereum",
        "api_url": "https://api.etherscan.io/api",
        "api_key_env": "ETHERSCAN_API_KEY",
    },
    "op": {
        "chain_id": 10,
        "chain_name": "OP Mainnet",
        "api_url": "https://api-optimistic.etherscan.io/api",
        "api_key_env": "OP_ETHERSCAN_API_KEY",
    },
}

# Contracts whose deployment idiosyncrasies need a dedicated handler
MULTI_SEND_CONTRACT = "MultiSend_v130"
SENDER_CREATOR_CONTRACT = "SenderCreator"
PERMIT2_CONTRACT = "Permit2"

# The Create2Deployer predeploy is a modified version that is not deployed
# on the secondary chain, so there is nothing to compare it against.
RECONCILE_EXCLUDED = frozenset({"Create2Deployer"})

# Suffix of generated metadata modules
METADATA_FILE_SUFFIX = "_more.py"
