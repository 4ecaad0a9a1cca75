"""Contract binding: address plus interface description.

Encodes calldata offline with eth-abi so a transaction can be previewed
(and tested) without a provider. The wallet only ever sees the final
``{from, to, value, data}`` dict.
"""

import logging
from dataclasses import dataclass
from typing import Any, Sequence

from eth_abi import encode
from eth_utils import function_signature_to_4byte_selector
from web3 import Web3

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContractFunction:
    """A single function entry from the ABI."""

    name: str
    input_names: tuple[str, ...]
    input_types: tuple[str, ...]
    payable: bool

    @property
    def signature(self) -> str:
        return f"{self.name}({','.join(self.input_types)})"

    @property
    def selector(self) -> bytes:
        return function_signature_to_4byte_selector(self.signature)

    @classmethod
    def from_abi(cls, entry: dict) -> "ContractFunction":
        inputs = entry.get("inputs", [])
        return cls(
            name=entry["name"],
            input_names=tuple(i["name"] for i in inputs),
            input_types=tuple(i["type"] for i in inputs),
            payable=entry.get("stateMutability") == "payable",
        )


class ContractBinding:
    """Immutable binding to a deployed contract.

    Args:
        address: Contract address (any case, stored checksummed)
        abi: Interface description (list of ABI entries)
    """

    def __init__(self, address: str, abi: list[dict]):
        self.address = Web3.to_checksum_address(address)
        self.abi = abi
        self._functions = {
            entry["name"]: ContractFunction.from_abi(entry)
            for entry in abi
            if entry.get("type") == "function"
        }

    def __repr__(self) -> str:
        return f"ContractBinding({self.address}, functions={sorted(self._functions)})"

    @property
    def function_names(self) -> list[str]:
        return sorted(self._functions)

    def function(self, name: str) -> ContractFunction:
        """Look up a function by name.

        Raises:
            ValueError: If the ABI has no such function
        """
        try:
            return self._functions[name]
        except KeyError:
            raise ValueError(f"Unknown contract function: {name}")

    def encode_call(self, name: str, args: Sequence[Any]) -> str:
        """Encode calldata for ``name(*args)`` as a 0x-prefixed hex string."""
        fn = self.function(name)
        if len(args) != len(fn.input_types):
            raise ValueError(
                f"{fn.signature} takes {len(fn.input_types)} arguments, got {len(args)}"
            )

        data = fn.selector + encode(list(fn.input_types), list(args))
        logger.debug(f"Encoded {fn.signature} ({len(data)} bytes)")
        return "0x" + data.hex()
