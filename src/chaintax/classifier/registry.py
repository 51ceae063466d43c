"""ProtocolRegistry — (network, contract address) → known protocol lookup."""

from chaintax.classifier.utils.types import ProtocolMatch, ProtocolSpec
from chaintax.domain.enums.protocol import MethodCategory
from chaintax.domain.enums.tax import TaxCategory

# Depositing disposes of the underlying; borrow/repay ignore the debt liability.
METHOD_TAX_CATEGORY: dict[MethodCategory, TaxCategory] = {
    MethodCategory.SWAP: TaxCategory.DISPOSAL,
    MethodCategory.STAKE: TaxCategory.STAKING,
    MethodCategory.DEPOSIT: TaxCategory.DISPOSAL,
    MethodCategory.WITHDRAW: TaxCategory.TRANSFER,
    MethodCategory.CLAIM: TaxCategory.TRANSFER,
    MethodCategory.BORROW: TaxCategory.TRANSFER,
    MethodCategory.REPAY: TaxCategory.DISPOSAL,
}

METHOD_NOTES: dict[MethodCategory, str] = {
    MethodCategory.SWAP: "swap",
    MethodCategory.STAKE: "staking",
    MethodCategory.DEPOSIT: "deposit",
    MethodCategory.WITHDRAW: "withdrawal",
    MethodCategory.CLAIM: "withdrawal",
    MethodCategory.BORROW: "borrow",
    MethodCategory.REPAY: "repay",
}


class ProtocolRegistry:
    """Registry mapping (network, contract_address) → (protocol, contract name)."""

    def __init__(self) -> None:
        self._contracts: dict[str, dict[str, tuple[ProtocolSpec, str]]] = {}

    def register(self, protocol: ProtocolSpec) -> None:
        chain_map = self._contracts.setdefault(protocol.network, {})
        for address, contract_name in protocol.contracts.items():
            chain_map[address.lower()] = (protocol, contract_name)

    def register_all(self, protocols: list[ProtocolSpec]) -> None:
        for protocol in protocols:
            self.register(protocol)

    def lookup(self, network: str, address: str | None) -> tuple[ProtocolSpec, str] | None:
        if not address:
            return None
        return self._contracts.get(network, {}).get(address.lower())

    def match(self, network: str, address: str | None, selector: str | None) -> ProtocolMatch | None:
        """Known contract AND known method selector, else None."""
        found = self.lookup(network, address)
        if found is None or not selector:
            return None
        protocol, contract_name = found
        spec = protocol.methods.get(selector.lower())
        if spec is None:
            return None
        return ProtocolMatch(protocol=protocol, contract_name=contract_name, selector=selector.lower(), method=spec)

    def __len__(self) -> int:
        return sum(len(m) for m in self._contracts.values())


def build_default_registry() -> ProtocolRegistry:
    """Create a ProtocolRegistry with all bundled protocol tables."""
    from chaintax.classifier.protocols.dex import DEX_PROTOCOLS
    from chaintax.classifier.protocols.lending import LENDING_PROTOCOLS
    from chaintax.classifier.protocols.staking import STAKING_PROTOCOLS

    registry = ProtocolRegistry()
    registry.register_all(DEX_PROTOCOLS)
    registry.register_all(LENDING_PROTOCOLS)
    registry.register_all(STAKING_PROTOCOLS)
    return registry
