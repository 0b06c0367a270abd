"""
Access control wiring (Ownable / AccessControl / AccessManaged)
"""

from typing import Optional

from .contract import BaseFunction, ContractBuilder, FunctionArgument, ImportContract, Lit, define_functions
from .options import DEFAULT_ACCESS_CONTROL, Access, AccessOption

PARENTS = {
    Access.OWNABLE: ImportContract(
        name="Ownable",
        path="@openzeppelin/contracts/access/Ownable.sol",
    ),
    Access.ROLES: ImportContract(
        name="AccessControl",
        path="@openzeppelin/contracts/access/AccessControl.sol",
    ),
    Access.MANAGED: ImportContract(
        name="AccessManaged",
        path="@openzeppelin/contracts/access/manager/AccessManaged.sol",
    ),
}

functions = define_functions({
    "supportsInterface": {
        "kind": "public",
        "args": [("interfaceId", "bytes4")],
        "returns": ["bool"],
        "mutability": "view",
    },
})


def set_access_control(c: ContractBuilder, access: AccessOption) -> None:
    """Add the parent (and constructor wiring) for an access scheme. False is a no-op."""
    if access is False or access is None:
        return
    if access is True:
        access = DEFAULT_ACCESS_CONTROL
    access = Access(access)
    parent = PARENTS[access]

    if access == Access.OWNABLE:
        if c.add_parent(parent, [Lit("initialOwner")]):
            c.add_constructor_argument(FunctionArgument(type="address", name="initialOwner"))

    elif access == Access.ROLES:
        if c.add_parent(parent):
            c.add_constructor_argument(FunctionArgument(type="address", name="defaultAdmin"))
            c.add_constructor_code("_grantRole(DEFAULT_ADMIN_ROLE, defaultAdmin);")
        c.add_override(parent, functions["supportsInterface"])

    elif access == Access.MANAGED:
        if c.add_parent(parent, [Lit("initialAuthority")]):
            c.add_constructor_argument(FunctionArgument(type="address", name="initialAuthority"))


def require_access_control(
    c: ContractBuilder,
    fn: BaseFunction,
    access: AccessOption,
    role_id_prefix: str,
    role_owner: Optional[str] = None,
) -> None:
    """
    Guard `fn` with the given access scheme.

    With no scheme selected the default (ownable) is used. For roles, the
    first function guarded by a role declares the role constant and
    grants it to a constructor argument named `role_owner`.
    """
    if access is False or access is None or access is True:
        access = DEFAULT_ACCESS_CONTROL
    access = Access(access)

    set_access_control(c, access)

    if access == Access.OWNABLE:
        c.add_modifier("onlyOwner", fn)

    elif access == Access.ROLES:
        role_id = f"{role_id_prefix}_ROLE"
        added_constant = c.add_variable(f'bytes32 public constant {role_id} = keccak256("{role_id}");')
        if role_owner is not None and added_constant:
            c.add_constructor_argument(FunctionArgument(type="address", name=role_owner))
            c.add_constructor_code(f"_grantRole({role_id}, {role_owner});")
        c.add_modifier(f"onlyRole({role_id})", fn)

    elif access == Access.MANAGED:
        c.add_modifier("restricted", fn)
