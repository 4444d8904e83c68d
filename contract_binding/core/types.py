from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, NamedTuple, Optional, TypedDict, Union

from eth_typing import HexStr, Hash32
from hexbytes import HexBytes

DEFAULT_NETWORK = "default"
MAIN_NETWORK_ID = "1"
MAIN_NETWORK_ALIASES = ("1", "live", "default")

# seconds
DEFAULT_SYNCHRONIZATION_TIMEOUT = 240
POLL_INTERVAL = 1.0

ADDRESS_LENGTH = 42

Abi = List[Dict[str, Any]]
TransactionHash = Union[Hash32, HexBytes, HexStr]


TransactionOptions = TypedDict("TransactionOptions", {
    "from": HexStr,
    "to": HexStr,
    "gas": int,
    "gasPrice": int,
    "maxFeePerGas": int,
    "maxPriorityFeePerGas": int,
    "value": int,
    "data": HexStr,
    "nonce": int,
    "chainId": int,
}, total=False)


class AbiEntryType(Enum):
    FUNCTION = "function"
    EVENT = "event"
    CONSTRUCTOR = "constructor"
    FALLBACK = "fallback"
    RECEIVE = "receive"
    ERROR = "error"


class PollState(Enum):
    SUBMITTED = "submitted"
    PENDING = "pending"
    CONFIRMED = "confirmed"
    TIMED_OUT = "timed-out"
    ERRORED = "errored"

    @property
    def is_terminal(self) -> bool:
        return self in (PollState.CONFIRMED, PollState.TIMED_OUT, PollState.ERRORED)


class TransactionResult(NamedTuple):
    transaction_hash: HexStr
    receipt: Any


@dataclass
class DeploymentRecord:
    abi: Optional[Abi] = None
    unlinked_binary: Optional[HexStr] = None
    address: Optional[HexStr] = None
    updated_at: Optional[int] = None
    links: Dict[str, HexStr] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DeploymentRecord":
        return cls(abi=data.get("abi"),
                   unlinked_binary=data.get("unlinked_binary", data.get("bytecode")),
                   address=data.get("address"),
                   updated_at=data.get("updated_at"),
                   links=dict(data.get("links") or {}))

    def is_empty(self) -> bool:
        return self.abi is None and self.unlinked_binary is None and self.address is None


def entry_type(entry: Dict[str, Any]) -> AbiEntryType:
    # Solidity ABI: a missing type means function
    return AbiEntryType(entry.get("type", AbiEntryType.FUNCTION.value))


def is_constant(entry: Dict[str, Any]) -> bool:
    if "constant" in entry:
        return entry["constant"] is True
    return entry.get("stateMutability") in ("view", "pure")
