"""Well-known EVM networks keyed by chain id."""

from web3_quarters.models import Network

KNOWN_NETWORKS: dict[int, str] = {
    1: "mainnet",
    5: "goerli",
    10: "optimism",
    56: "bnb",
    137: "matic",
    8453: "base",
    42161: "arbitrum",
    80002: "matic-amoy",
    11155111: "sepolia",
    17000: "holesky",
    31337: "hardhat",
}


def resolve_network(chain_id: int) -> Network:
    """Build a Network for a chain id, naming it when the chain is known."""
    return Network(chain_id=chain_id, name=KNOWN_NETWORKS.get(chain_id, "unknown"))
