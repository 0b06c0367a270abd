"""
Clock mode for vote checkpoints
"""

from .contract import ContractBuilder, ReferencedContract, define_functions
from .options import ClockMode

functions = define_functions({
    "clock": {
        "kind": "public",
        "returns": ["uint48"],
        "mutability": "view",
    },
    "CLOCK_MODE": {
        "kind": "public",
        "returns": ["string memory"],
        "mutability": "pure",
    },
})


def set_clock_mode(c: ContractBuilder, parent: ReferencedContract, clock_mode: ClockMode) -> None:
    """Block numbers are the inherited default; timestamps need both clock overrides."""
    if ClockMode(clock_mode) != ClockMode.TIMESTAMP:
        return

    c.add_override(parent, functions["clock"])
    c.set_function_body(["return uint48(block.timestamp);"], functions["clock"])

    c.set_function_comments(["// solhint-disable-next-line func-name-mixedcase"], functions["CLOCK_MODE"])
    c.add_override(parent, functions["CLOCK_MODE"])
    c.set_function_body(['return "mode=timestamp";'], functions["CLOCK_MODE"])
