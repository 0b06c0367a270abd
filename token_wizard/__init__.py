# token_wizard/__init__.py
"""ERC20 contract generation from declarative options."""

from .amount import NormalizedAmount, normalize_amount
from .config import load_options
from .contract import ContractBuilder
from .erc20 import build_erc20, is_access_control_required, print_erc20
from .errors import OptionsError
from .generator import GenerationResult, generate_erc20
from .options import DEFAULTS, Access, ClockMode, ERC20Options, Info, Restriction, Upgradeable
from .printer import print_contract

__all__ = [
    "build_erc20",
    "print_erc20",
    "generate_erc20",
    "is_access_control_required",
    "normalize_amount",
    "load_options",
    "print_contract",
    "NormalizedAmount",
    "ContractBuilder",
    "GenerationResult",
    "OptionsError",
    "ERC20Options",
    "Info",
    "DEFAULTS",
    "Access",
    "ClockMode",
    "Restriction",
    "Upgradeable",
]
