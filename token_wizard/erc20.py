"""
ERC20 Composition Engine
========================

Builds an ERC20 contract from an ERC20Options set:

1. merge options over DEFAULTS
2. check cross-feature dependencies (votes requires permit)
3. add the ERC20 base and register `_update` as the shared transfer hook
4. apply feature modules in a fixed order
5. apply access control, upgradeability and info last, since they need
   to see every function the features added

Every transfer guard (pausable, restriction, limit, votes) attaches to
the same `_update(from, to, value)` override, so guards accumulate in
pipeline order rather than each declaring its own hook.
"""

from typing import Optional

from .access_control import require_access_control, set_access_control
from .amount import normalize_amount
from .clock_mode import set_clock_mode
from .contract import ContractBuilder, ImportContract, ReferencedContract, define_functions
from .errors import OptionsError
from .info import set_info
from .options import (
    CLOCK_MODE_DEFAULT,
    RESTRICTION_DEFAULT,
    AccessOption,
    ClockMode,
    ERC20Options,
    Restriction,
    Upgradeable,
    with_defaults,
)
from .pausable import add_pause_functions
from .printer import print_contract
from .upgradeable import set_upgradeable

ERC20 = ImportContract(name="ERC20", path="@openzeppelin/contracts/token/ERC20/ERC20.sol")
ERC20_BURNABLE = ImportContract(
    name="ERC20Burnable",
    path="@openzeppelin/contracts/token/ERC20/extensions/ERC20Burnable.sol",
)
ERC20_PAUSABLE = ImportContract(
    name="ERC20Pausable",
    path="@openzeppelin/contracts/token/ERC20/extensions/ERC20Pausable.sol",
)
ERC20_PERMIT = ImportContract(
    name="ERC20Permit",
    path="@openzeppelin/contracts/token/ERC20/extensions/ERC20Permit.sol",
)
ERC20_VOTES = ImportContract(
    name="ERC20Votes",
    path="@openzeppelin/contracts/token/ERC20/extensions/ERC20Votes.sol",
)
ERC20_FLASH_MINT = ImportContract(
    name="ERC20FlashMint",
    path="@openzeppelin/contracts/token/ERC20/extensions/ERC20FlashMint.sol",
)
NONCES = ReferencedContract(name="Nonces")

LIMIT_WINDOW = "1 days"

functions = define_functions({
    "_update": {
        "kind": "internal",
        "args": [("from", "address"), ("to", "address"), ("value", "uint256")],
    },
    "mint": {
        "kind": "public",
        "args": [("to", "address"), ("amount", "uint256")],
    },
    "nonces": {
        "kind": "public",
        "args": [("owner", "address")],
        "returns": ["uint256"],
        "mutability": "view",
    },
    "blockUser": {
        "kind": "public",
        "args": [("user", "address")],
    },
    "unblockUser": {
        "kind": "public",
        "args": [("user", "address")],
    },
    "allow": {
        "kind": "public",
        "args": [("user", "address")],
    },
    "unallow": {
        "kind": "public",
        "args": [("user", "address")],
    },
    "update": {
        "kind": "public",
        "args": [("from", "address"), ("to", "address"), ("value", "uint256")],
    },
    "_limit": {
        "kind": "internal",
        "args": [("account", "address"), ("value", "uint256")],
    },
})


def print_erc20(opts: Optional[ERC20Options] = None) -> str:
    return print_contract(build_erc20(opts))


def is_access_control_required(opts: ERC20Options) -> bool:
    """True when some selected feature needs a permission guard"""
    return bool(
        opts.mintable
        or opts.custodian
        or opts.pausable
        or opts.restriction
        or opts.upgradeable == Upgradeable.UUPS
    )


def check_options(opts: ERC20Options) -> None:
    """Reject option sets whose hard dependencies are unmet"""
    if opts.votes and not opts.permit:
        raise OptionsError({"votes": "Votes requires permit to be enabled"})


def build_erc20(opts: Optional[ERC20Options] = None, debug: bool = False) -> ContractBuilder:
    all_opts = with_defaults(opts)
    check_options(all_opts)

    c = ContractBuilder(all_opts.name)
    access = all_opts.access

    if debug:
        print(f"[ERC20] Building {c.name} ({all_opts.symbol})")

    add_base(c, all_opts.name, all_opts.symbol)

    if all_opts.burnable:
        add_burnable(c)

    if all_opts.pausable:
        add_pausable_extension(c, access)

    if all_opts.premint:
        add_premint(c, all_opts.premint)

    if all_opts.mintable:
        add_mintable(c, access)

    if all_opts.restriction:
        restriction = RESTRICTION_DEFAULT if all_opts.restriction is True else Restriction(all_opts.restriction)
        add_restriction(c, access, restriction)

    if all_opts.custodian:
        add_custodian(c, access)

    if all_opts.limit:
        add_limit(c, all_opts.limit)

    if all_opts.permit:
        add_permit(c, all_opts.name)

    if all_opts.votes:
        clock_mode = CLOCK_MODE_DEFAULT if all_opts.votes is True else ClockMode(all_opts.votes)
        add_votes(c, clock_mode)

    if all_opts.flashmint:
        add_flash_mint(c)

    set_access_control(c, access)
    set_upgradeable(c, all_opts.upgradeable, access)
    set_info(c, all_opts.info)

    if debug:
        print(f"[ERC20] Parents: {[p.contract.name for p in c.parents]}")
        update_fn = c.get_function(functions["_update"])
        print(f"[ERC20] _update overrides: {list(update_fn.override)}, guards: {len(update_fn.code)}")

    return c


# -------------------------------------------------------------
# Feature modules
# -------------------------------------------------------------
def add_base(c: ContractBuilder, name: str, symbol: str) -> None:
    c.add_parent(ERC20, [name, symbol])
    c.add_override(ERC20, functions["_update"])


def add_burnable(c: ContractBuilder) -> None:
    c.add_parent(ERC20_BURNABLE)


def add_pausable_extension(c: ContractBuilder, access: AccessOption) -> None:
    c.add_parent(ERC20_PAUSABLE)
    c.add_override(ERC20_PAUSABLE, functions["_update"])
    add_pause_functions(c, access)


def add_premint(c: ContractBuilder, amount: str) -> None:
    normalized = normalize_amount(amount)
    if normalized is None:
        return
    c.add_constructor_code(f"_mint(msg.sender, {normalized.to_solidity()});")


def add_mintable(c: ContractBuilder, access: AccessOption) -> None:
    require_access_control(c, functions["mint"], access, "MINTER", "minter")
    c.add_function_code("_mint(to, amount);", functions["mint"])


def add_restriction(c: ContractBuilder, access: AccessOption, restriction: Restriction) -> None:
    if restriction == Restriction.BLOCKLIST:
        add_blocklist(c, access)
    else:
        add_allowlist(c, access)


def add_blocklist(c: ContractBuilder, access: AccessOption) -> None:
    c.add_variable("mapping(address => bool) public blocked;")

    require_access_control(c, functions["blockUser"], access, "BLOCKER", "blocker")
    c.add_function_code("blocked[user] = true;", functions["blockUser"])

    require_access_control(c, functions["unblockUser"], access, "BLOCKER", "blocker")
    c.add_function_code("blocked[user] = false;", functions["unblockUser"])

    # mints come from address(0)
    c.add_function_code(
        'if (from != address(0)) require(!blocked[from], "ERC20Blacklist: Blocked");',
        functions["_update"],
    )


def add_allowlist(c: ContractBuilder, access: AccessOption) -> None:
    c.add_variable("mapping(address => bool) public allowed;")

    require_access_control(c, functions["allow"], access, "ALLOWER", "allower")
    c.add_function_code("allowed[user] = true;", functions["allow"])

    require_access_control(c, functions["unallow"], access, "ALLOWER", "allower")
    c.add_function_code("allowed[user] = false;", functions["unallow"])

    # mints and burns are exempt
    c.add_function_code(
        "if (from != address(0) && to != address(0)) "
        'require(allowed[from] && allowed[to], "ERC20Allowlist: Unallowed");',
        functions["_update"],
    )


def add_custodian(c: ContractBuilder, access: AccessOption) -> None:
    require_access_control(c, functions["update"], access, "CUSTODIAN", "custodian")
    c.add_function_code("_update(from, to, value);", functions["update"])


def add_limit(c: ContractBuilder, amount: str) -> None:
    normalized = normalize_amount(amount)
    if normalized is None:
        return

    c.add_variable("uint256 public immutable TOKEN_LIMIT;")
    c.add_variable("mapping(address => TransferRecord) private records;")
    c.add_variable("struct TransferRecord { uint256 amount; uint256 timestamp; }")

    c.add_constructor_code(f"TOKEN_LIMIT = {normalized.to_solidity()};")
    c.add_function_code("if (from != address(0)) _limit(from, value);", functions["_update"])

    c.set_function_body([
        "TransferRecord storage record = records[account];",
        f"if (block.timestamp - record.timestamp >= {LIMIT_WINDOW}) {{",
        "    record.amount = value;",
        "    record.timestamp = block.timestamp;",
        "} else {",
        "    uint256 newTotal = record.amount + value;",
        '    require(newTotal <= TOKEN_LIMIT, "ERC20Limit: Limited");',
        "    record.amount = newTotal;",
        "}",
    ], functions["_limit"])


def add_permit(c: ContractBuilder, name: str) -> None:
    c.add_parent(ERC20_PERMIT, [name])
    c.add_override(ERC20_PERMIT, functions["nonces"])


def add_votes(c: ContractBuilder, clock_mode: ClockMode) -> None:
    if not c.has_parent(ERC20_PERMIT.name):
        raise OptionsError({"votes": "Missing ERC20Permit requirement for ERC20Votes"})

    c.add_parent(ERC20_VOTES)
    c.add_override(ERC20_VOTES, functions["_update"])
    c.add_override(NONCES, functions["nonces"])

    set_clock_mode(c, ERC20_VOTES, clock_mode)


def add_flash_mint(c: ContractBuilder) -> None:
    c.add_parent(ERC20_FLASH_MINT)
