# token_wizard/generator.py
from dataclasses import dataclass
from typing import Dict, List, Optional

from .contract import ContractBuilder
from .erc20 import build_erc20, is_access_control_required
from .options import ERC20Options, with_defaults
from .printer import Helpers, print_contract
from .validator import validate_solidity


@dataclass
class GenerationResult:
    solidity_code: str
    contract_name: str
    options: ERC20Options
    imports_used: List[str]
    inheritance_chain: List[str]
    access_control_required: bool
    validation_errors: List[str]
    validation_warnings: List[str]

    def to_metadata_dict(self) -> Dict:
        return {
            "contract_name": self.contract_name,
            "options": self.options.to_dict(),
            "imports_used": self.imports_used,
            "inheritance_chain": self.inheritance_chain,
            "access_control_required": self.access_control_required,
            "validation_errors": self.validation_errors,
            "validation_warnings": self.validation_warnings,
        }


def _imports_and_inheritance(contract: ContractBuilder):
    helpers = Helpers(contract)
    imports_used = sorted(helpers.transform_import(p).path for p in contract.imports)
    inheritance_chain = [helpers.transform_name(p.contract) for p in contract.parents]
    return imports_used, inheritance_chain


def generate_erc20(opts: Optional[ERC20Options] = None, debug: bool = False) -> GenerationResult:
    if debug:
        print("=" * 80)
        print("GENERATING ERC20")
        print("=" * 80)

    all_opts = with_defaults(opts)

    # 1) Compose (raises OptionsError on unmet dependencies)
    contract = build_erc20(all_opts, debug=debug)

    # 2) Print
    solidity_code = print_contract(contract)

    # 3) Validate the printed source
    validation = validate_solidity(solidity_code, debug=debug)
    if debug and validation["errors"]:
        print(f"Found {validation['error_count']} validation issues:")
        for e in validation["errors"][:5]:
            print(" -", e)

    imports_used, inheritance_chain = _imports_and_inheritance(contract)
    result = GenerationResult(
        solidity_code=solidity_code,
        contract_name=contract.name,
        options=all_opts,
        imports_used=imports_used,
        inheritance_chain=inheritance_chain,
        access_control_required=is_access_control_required(all_opts),
        validation_errors=validation["errors"],
        validation_warnings=validation["warnings"],
    )

    if debug:
        print("Generation complete:", contract.name, "|", ", ".join(inheritance_chain))
        print("=" * 80)
    return result
