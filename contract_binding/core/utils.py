import re
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, cast

from eth_typing import HexStr
from eth_utils import remove_0x_prefix

from contract_binding.core.types import ADDRESS_LENGTH, TransactionOptions

NumberType = Callable[[Any], Any]

# solc library placeholder: "__" + name, padded with "_" to 40 chars
PLACEHOLDER_LENGTH = 40
LIBRARY_PLACEHOLDER = re.compile(r"__[^_].{%d}" % (PLACEHOLDER_LENGTH - 3))


def is_object(value: Any) -> bool:
    return isinstance(value, Mapping)


def is_big_number(value: Any, number_type: NumberType = Decimal) -> bool:
    """Tells whether ``number_type`` accepts ``value``.

    Big integers may arrive as arbitrary objects, so there is no reliable type
    tag to check. Whatever the number type can be constructed from counts as a
    number.
    """
    if not is_object(value):
        return False
    try:
        number_type(value)
        return True
    except Exception as _:
        return False


def merge_options(*layers: Optional[Mapping]) -> TransactionOptions:
    merged: Dict[str, Any] = {}
    for layer in layers:
        if layer is None:
            continue
        for key, value in layer.items():
            merged[key] = value
    return cast(TransactionOptions, merged)


def split_tx_options(args: Sequence[Any],
                     defaults: Optional[Mapping] = None,
                     number_type: NumberType = Decimal) -> Tuple[List[Any], TransactionOptions]:
    """Separates trailing transaction options from contract call arguments.

    The last argument is taken as options only if it is a mapping that is not a
    big number. Options are merged on top of ``defaults``.
    """
    args = list(args)
    tx_options = {}
    if len(args) > 0:
        last_arg = args[-1]
        if is_object(last_arg) and not is_big_number(last_arg, number_type):
            tx_options = args.pop()
    return args, merge_options(defaults, tx_options)


def is_address_length(address: Any) -> bool:
    return isinstance(address, str) and len(address) == ADDRESS_LENGTH


def library_placeholder(library_name: str) -> str:
    """Placeholder solc leaves for ``library_name``: ``__Name___...``, 40 chars wide."""
    return ("__" + library_name + "_" * PLACEHOLDER_LENGTH)[:PLACEHOLDER_LENGTH]


def link_bytecode(unlinked_binary: HexStr, links: Mapping) -> HexStr:
    binary = unlinked_binary
    for library_name, library_address in links.items():
        binary = binary.replace(library_placeholder(library_name), remove_0x_prefix(HexStr(library_address)))
    return HexStr(binary)


def find_unlinked_libraries(binary: Optional[str]) -> List[str]:
    if not binary:
        return []
    names = {placeholder.strip("_") for placeholder in LIBRARY_PLACEHOLDER.findall(binary)}
    return sorted(names)
