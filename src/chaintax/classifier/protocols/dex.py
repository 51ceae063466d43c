"""DEX routers, pools and aggregators (Ethereum mainnet)."""

from chaintax.classifier.utils.types import ProtocolSpec, method
from chaintax.domain.enums.protocol import MethodCategory, ProtocolCategory

SWAP = MethodCategory.SWAP

# Shared by Uniswap V2 forks
V2_ROUTER_METHODS = {
    "0x38ed1739": method("swapExactTokensForTokens", SWAP),
    "0x8803dbee": method("swapTokensForExactTokens", SWAP),
    "0x7ff36ab5": method("swapExactETHForTokens", SWAP),
    "0x18cbafe5": method("swapExactTokensForETH", SWAP),
}

UNISWAP_V2 = ProtocolSpec(
    id="uniswap_v2",
    name="Uniswap V2",
    category=ProtocolCategory.DEX,
    contracts={"0x7a250d5630b4cf539739df2c5dacb4c659f2488d": "Router"},
    methods=V2_ROUTER_METHODS,
)

UNISWAP_V3 = ProtocolSpec(
    id="uniswap_v3",
    name="Uniswap V3",
    category=ProtocolCategory.DEX,
    contracts={
        "0xe592427a0aece92de3edee1f18e0157c05861564": "SwapRouter",
        "0x68b3465833fb72a70ecdf485e0e4c7bd8665fc45": "SwapRouter02",
    },
    methods={
        "0x414bf389": method("exactInputSingle", SWAP),
        "0xb858183f": method("exactInput", SWAP),
        "0xdb3e2198": method("exactOutputSingle", SWAP),
        "0x09b81346": method("exactOutput", SWAP),
    },
)

SUSHISWAP = ProtocolSpec(
    id="sushiswap",
    name="SushiSwap",
    category=ProtocolCategory.DEX,
    contracts={"0xd9e1ce17f2641f24ae83637ab66a2cca9c378b9f": "Router"},
    methods=V2_ROUTER_METHODS,
)

CURVE = ProtocolSpec(
    id="curve",
    name="Curve",
    category=ProtocolCategory.DEX,
    contracts={
        "0xbebc44782c7db0a1a60cb6fe97d0b483032ff1c7": "3pool",
        "0xd51a44d3fae010294c616388b506acda1bfaae46": "TriCrypto2",
        "0xa5407eae9ba41422680e2e00537571bcc53efbfd": "sUSD Pool",
    },
    methods={
        "0x3df02124": method("exchange", SWAP),
        "0x394747c5": method("exchange_underlying", SWAP),
        "0x0b4c7e4d": method("add_liquidity", MethodCategory.DEPOSIT),
        "0x5b36389c": method("remove_liquidity", MethodCategory.WITHDRAW),
    },
)

ONEINCH = ProtocolSpec(
    id="oneinch",
    name="1inch",
    category=ProtocolCategory.DEX,
    contracts={
        "0x1111111254eeb25477b68fb85ed929f73a960582": "AggregationRouter V5",
        "0x111111125421ca6dc452d289314280a0f8842a65": "AggregationRouter V6",
    },
    methods={
        "0x12aa3caf": method("swap", SWAP),
        "0x7c025200": method("swap", SWAP),
        "0xe449022e": method("uniswapV3Swap", SWAP),
    },
)

BALANCER_V2 = ProtocolSpec(
    id="balancer_v2",
    name="Balancer V2",
    category=ProtocolCategory.DEX,
    contracts={"0xba12222222228d8ba445958a75a0704d566bf2c8": "Vault"},
    methods={
        "0x52bbbe29": method("swap", SWAP),
        "0x945bcec9": method("batchSwap", SWAP),
        "0xb95cac28": method("joinPool", MethodCategory.DEPOSIT),
        "0x8bdb3913": method("exitPool", MethodCategory.WITHDRAW),
    },
)

DEX_PROTOCOLS: list[ProtocolSpec] = [UNISWAP_V2, UNISWAP_V3, SUSHISWAP, CURVE, ONEINCH, BALANCER_V2]
