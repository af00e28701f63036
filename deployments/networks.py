NETWORK_CONFIG: dict[int, dict] = {
    4: {
        "name": "rinkeby",
        "eth_usd_price_feed": "0x8A753747A1Fa494EC906cE90E9f37563A8AF630e",
    },
    5: {
        "name": "goerli",
        "eth_usd_price_feed": "0xD4a33860578De61DBAbDc8BFdb98FD742fA7028e",
    },
    137: {
        "name": "polygon",
        "eth_usd_price_feed": "0xF9680D99D6C9589e2a93a78A04A279e509205945",
    },
    11155111: {
        "name": "sepolia",
        "eth_usd_price_feed": "0x694AA1769357215DE4FAC081bf1f309aDC325306",
    },
}

DEVELOPMENT_CHAINS = ("hardhat", "localhost")


def is_development(network: str) -> bool:
    return network in DEVELOPMENT_CHAINS
