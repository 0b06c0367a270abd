"""
Pause / unpause functions shared by pausable extensions
"""

from .access_control import require_access_control
from .contract import ContractBuilder, define_functions
from .options import AccessOption

functions = define_functions({
    "pause": {"kind": "public"},
    "unpause": {"kind": "public"},
})


def add_pause_functions(c: ContractBuilder, access: AccessOption) -> None:
    require_access_control(c, functions["pause"], access, "PAUSER", "pauser")
    c.add_function_code("_pause();", functions["pause"])

    require_access_control(c, functions["unpause"], access, "PAUSER", "pauser")
    c.add_function_code("_unpause();", functions["unpause"])
