"""
Solidity Printer
================

Renders a ContractBuilder into Solidity source:

    // SPDX-License-Identifier: MIT
    // Compatible with OpenZeppelin Contracts ^5.0.0
    pragma solidity ^0.8.20;

    import {ERC20} from "@openzeppelin/contracts/token/ERC20/ERC20.sol";

    contract MyToken is ERC20 { ... }

Upgradeable contracts are printed against @openzeppelin/contracts-upgradeable:
transpiled parents get the "Upgradeable" suffix, the constructor becomes an
`initialize` function and each parent is set up with `__<Name>_init(...)`.
"""

import json
import re
from typing import List, Union

from .contract import (
    ContractBuilder,
    ContractFunction,
    FunctionArgument,
    ImportContract,
    Lit,
    Parent,
    ReferencedContract,
    Value,
)

SOLIDITY_VERSION = "0.8.20"
COMPATIBLE_OZ_VERSION = "^5.0.0"
INDENT = "    "
MAX_HEADING_LENGTH = 72

# Parents that never take an initializer call
NO_INITIALIZER = {"Initializable"}


class _Blank:
    """Marker for an empty line inside a block"""


BLANK = _Blank()

Line = Union[str, _Blank, list]


def format_lines(lines: List[Line]) -> str:
    return "\n".join(_indent_each(0, lines)) + "\n"


def _indent_each(indent: int, lines: List[Line]):
    for line in lines:
        if line is BLANK:
            yield ""
        elif isinstance(line, list):
            yield from _indent_each(indent + 1, line)
        else:
            yield INDENT * indent + line


def space_between(*groups: List[Line]) -> List[Line]:
    """Join non-empty groups with a blank line between them"""
    out: List[Line] = []
    for group in groups:
        if not group:
            continue
        if out:
            out.append(BLANK)
        out.extend(group)
    return out


# -------------------------------------------------------------
# Upgradeable name/import transforms
# -------------------------------------------------------------
def infer_transpiled(c: ReferencedContract) -> bool:
    if c.transpiled is not None:
        return c.transpiled
    # Interfaces (IERC20, ...) are not transpiled
    return not re.match(r"^I[A-Z]", c.name)


def upgradeable_name(name: str) -> str:
    if name == "Initializable":
        return name
    return re.sub(r"(Upgradeable)?$", "Upgradeable", name, count=1)


def upgradeable_import(p: ImportContract) -> ImportContract:
    directory, _, filename = p.path.rpartition("/")
    stem, dot, ext = filename.rpartition(".")
    directory = re.sub(r"^@openzeppelin/contracts(?=/)", "@openzeppelin/contracts-upgradeable", directory)
    return ImportContract(
        name=upgradeable_name(p.name),
        path=f"{directory}/{upgradeable_name(stem)}{dot}{ext}",
        transpiled=p.transpiled,
    )


class Helpers:
    """Name and import transforms, which depend on whether the contract is upgradeable"""

    def __init__(self, contract: ContractBuilder):
        self.upgradeable = contract.upgradeable

    def transform_name(self, c: ReferencedContract) -> str:
        if self.upgradeable and infer_transpiled(c):
            return upgradeable_name(c.name)
        return c.name

    def transform_import(self, p: ImportContract) -> ImportContract:
        if self.upgradeable and infer_transpiled(p):
            return upgradeable_import(p)
        return p


# -------------------------------------------------------------
# Printing
# -------------------------------------------------------------
def print_contract(contract: ContractBuilder) -> str:
    helpers = Helpers(contract)

    code_fns, modifier_fns, override_fns = _sorted_functions(contract)
    printed_code = [_print_function(fn, helpers) for fn in code_fns]
    printed_modifiers = [_print_function(fn, helpers) for fn in modifier_fns]
    printed_overrides = [_print_function(fn, helpers) for fn in override_fns]
    has_overrides = any(printed_overrides)

    return format_lines(
        space_between(
            [
                f"// SPDX-License-Identifier: {contract.license}",
                f"// Compatible with OpenZeppelin Contracts {COMPATIBLE_OZ_VERSION}",
                f"pragma solidity ^{SOLIDITY_VERSION};",
            ],
            _print_imports(contract.imports, helpers),
            [
                *_print_natspec_tags(contract),
                " ".join([f"contract {contract.name}", *_print_inheritance(contract, helpers), "{"]),
                space_between(
                    contract.variables,
                    _print_constructor(contract, helpers),
                    *printed_code,
                    *printed_modifiers,
                    ["// The following functions are overrides required by Solidity."] if has_overrides else [],
                    *printed_overrides,
                ),
                "}",
            ],
        )
    )


def _sorted_functions(contract: ContractBuilder):
    code, modifiers, override = [], [], []
    for fn in contract.functions:
        if fn.code:
            code.append(fn)
        elif fn.modifiers:
            modifiers.append(fn)
        else:
            override.append(fn)
    return code, modifiers, override


def _print_imports(imports: List[ImportContract], helpers: Helpers) -> List[str]:
    lines = []
    for p in sorted(imports, key=lambda i: i.name):
        imported = helpers.transform_import(p)
        lines.append(f'import {{{imported.name}}} from "{imported.path}";')
    return lines


def _print_natspec_tags(contract: ContractBuilder) -> List[str]:
    return [f"/// @{tag.key} {tag.value}" for tag in contract.natspec_tags]


def _print_inheritance(contract: ContractBuilder, helpers: Helpers) -> List[str]:
    if not contract.parents:
        return []
    return ["is " + ", ".join(helpers.transform_name(p.contract) for p in contract.parents)]


DISABLE_INITIALIZERS: List[Line] = [
    "/// @custom:oz-upgrades-unsafe-allow constructor",
    "constructor() {",
    ["_disableInitializers();"],
    "}",
]


def _print_constructor(contract: ContractBuilder, helpers: Helpers) -> List[Line]:
    has_parent_params = any(p.params for p in contract.parents)
    has_constructor_code = bool(contract.constructor_code)
    parents_with_initializers = [p for p in contract.parents if p.contract.name not in NO_INITIALIZER]

    if has_parent_params or has_constructor_code or (helpers.upgradeable and parents_with_initializers):
        parents = [line for p in parents_with_initializers for line in _print_parent_constructor(p, helpers)]
        args = [_print_argument(a, helpers) for a in contract.constructor_args]
        if helpers.upgradeable:
            body = space_between([p + ";" for p in parents], contract.constructor_code)
            initializer = _print_function_lines([], "function initialize", args, ["initializer public"], body)
            return space_between(DISABLE_INITIALIZERS, initializer)
        return _print_function_lines([], "constructor", args, parents, contract.constructor_code)

    if helpers.upgradeable:
        return list(DISABLE_INITIALIZERS)
    return []


def _print_parent_constructor(parent: Parent, helpers: Helpers) -> List[str]:
    use_transpiled = helpers.upgradeable and infer_transpiled(parent.contract)
    fn = f"__{parent.contract.name}_init" if use_transpiled else parent.contract.name
    if use_transpiled or parent.params:
        return [fn + "(" + ", ".join(print_value(v) for v in parent.params) + ")"]
    return []


def print_value(value: Value) -> str:
    if isinstance(value, Lit):
        return value.lit
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    raise TypeError(f"Unknown value type: {value!r}")


def _print_argument(arg: FunctionArgument, helpers: Helpers) -> str:
    arg_type = arg.type if isinstance(arg.type, str) else helpers.transform_name(arg.type)
    return f"{arg_type} {arg.name}"


def _print_function(fn: ContractFunction, helpers: Helpers) -> List[Line]:
    # A lone override adds nothing over the inherited function
    if len(fn.override) <= 1 and not fn.modifiers and not fn.code and not fn.final:
        return []

    modifiers = [fn.kind, *fn.modifiers]
    if fn.mutability != "nonpayable":
        modifiers.insert(1, fn.mutability)

    if len(fn.override) == 1:
        modifiers.append("override")
    elif len(fn.override) > 1:
        names = ", ".join(helpers.transform_name(c) for c in fn.override.values())
        modifiers.append(f"override({names})")

    if fn.returns:
        modifiers.append(f"returns ({', '.join(fn.returns)})")

    code = list(fn.code)
    if fn.override and not fn.final:
        super_call = f"super.{fn.name}({', '.join(a.name for a in fn.args)});"
        code.append("return " + super_call if fn.returns else super_call)

    if len(modifiers) + len(fn.code) > 1:
        args = [_print_argument(a, helpers) for a in fn.args]
        return _print_function_lines(fn.comments, f"function {fn.name}", args, modifiers, code)
    return []


def _print_function_lines(comments: List[str], kinded_name: str, args: List[str],
                          modifiers: List[str], code: List[Line]) -> List[Line]:
    lines: List[Line] = list(comments)
    heading_length = sum(len(s) for s in [kinded_name, *args, *modifiers])
    braces = "{" if code else "{}"
    heading = f"{kinded_name}({', '.join(args)})"

    if heading_length <= MAX_HEADING_LENGTH:
        lines.append(" ".join([heading, *modifiers, braces]))
    else:
        lines.extend([heading, list(modifiers), braces])

    if code:
        lines.extend([list(code), "}"])
    return lines
