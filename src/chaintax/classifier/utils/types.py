"""Data-driven protocol descriptions. Adding a protocol is a data change."""

from pydantic import BaseModel

from chaintax.domain.enums.protocol import MethodCategory, ProtocolCategory


class MethodSpec(BaseModel):
    name: str
    category: MethodCategory


class ProtocolSpec(BaseModel):
    """A known protocol: its contracts (address → contract name) and method selectors."""

    id: str
    name: str
    category: ProtocolCategory
    network: str = "ethereum"
    contracts: dict[str, str]
    methods: dict[str, MethodSpec]


class ProtocolMatch(BaseModel):
    protocol: ProtocolSpec
    contract_name: str
    selector: str
    method: MethodSpec


def method(name: str, category: MethodCategory) -> MethodSpec:
    return MethodSpec(name=name, category=category)
