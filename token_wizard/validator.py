"""
Post-generation validation to catch structural issues in printed contracts
"""
import re
from typing import Dict, List, Tuple


class SolidityValidator:
    """Validates printed Solidity code for common issues"""

    def __init__(self, debug: bool = False):
        self.debug = debug

    def validate(self, solidity_code: str) -> Tuple[bool, List[str], List[str]]:
        """
        Validate Solidity code
        Returns: (is_valid, errors, warnings)
        """
        errors = []
        warnings = []

        # Check 1: Has required headers
        if "SPDX-License-Identifier" not in solidity_code:
            errors.append("Missing SPDX license identifier")
        if "pragma solidity" not in solidity_code:
            errors.append("Missing pragma statement")

        # Check 2: Braces and parentheses
        errors.extend(self._check_balance(solidity_code))

        # Check 3: Every parent is imported
        errors.extend(self._check_imports(solidity_code))

        # Check 4: Base contracts are initialized
        errors.extend(self._check_initialization(solidity_code))

        # Check 5: Role constants
        warnings.extend(self._check_roles(solidity_code))

        is_valid = len(errors) == 0

        if self.debug:
            print(f"[Validator] Valid: {is_valid}, Errors: {len(errors)}, Warnings: {len(warnings)}")

        return is_valid, errors, warnings

    def _check_balance(self, code: str) -> List[str]:
        errors = []
        for open_char, close_char in (("{", "}"), ("(", ")")):
            depth = 0
            for char in code:
                if char == open_char:
                    depth += 1
                elif char == close_char:
                    depth -= 1
                    if depth < 0:
                        break
            if depth != 0:
                errors.append(f"CRITICAL: Unbalanced '{open_char}{close_char}'")
        return errors

    def _extract_parents(self, code: str) -> List[str]:
        m = re.search(r"contract\s+\w+\s+is\s+([^{]+)\{", code)
        if not m:
            return []
        return [p.strip() for p in m.group(1).split(",") if p.strip()]

    def _check_imports(self, code: str) -> List[str]:
        errors = []
        imported = set(re.findall(r"import\s*\{(\w+)\}\s*from", code))
        for parent in self._extract_parents(code):
            if parent not in imported:
                errors.append(f"CRITICAL: Parent '{parent}' is inherited but not imported")
        return errors

    def _check_initialization(self, code: str) -> List[str]:
        errors = []
        parents = self._extract_parents(code)

        if "Initializable" in parents:
            if "function initialize(" not in code:
                errors.append("CRITICAL: Upgradeable contract has no initialize function")
            if "_disableInitializers();" not in code:
                errors.append("CRITICAL: Upgradeable contract must disable initializers in its constructor")
            if "ERC20Upgradeable" in parents and "__ERC20_init(" not in code:
                errors.append("CRITICAL: ERC20Upgradeable must be initialized with __ERC20_init")
            return errors

        constructor_match = re.search(r"constructor\s*\([^)]*\)([^{]*)\{", code)
        constructor_sig = constructor_match.group(1) if constructor_match else ""
        if "ERC20" in parents and "ERC20(" not in constructor_sig:
            errors.append("CRITICAL: ERC20 constructor must be initialized with name and symbol")
        if "Ownable" in parents and "Ownable(" not in constructor_sig:
            errors.append("CRITICAL: Ownable constructor must be initialized with initialOwner")
        if "AccessManaged" in parents and "AccessManaged(" not in constructor_sig:
            errors.append("CRITICAL: AccessManaged constructor must be initialized with initialAuthority")
        return errors

    def _check_roles(self, code: str) -> List[str]:
        warnings = []
        for role in re.findall(r"onlyRole\((\w+)\)", code):
            if f"bytes32 public constant {role}" not in code:
                warnings.append(f"WARNING: Role '{role}' is used but never declared")
        return warnings


def validate_solidity(solidity_code: str, debug: bool = False) -> Dict:
    """
    Validate printed Solidity code
    Returns dict with validation results
    """
    validator = SolidityValidator(debug=debug)
    is_valid, errors, warnings = validator.validate(solidity_code)

    return {
        "is_valid": is_valid,
        "errors": errors,
        "warnings": warnings,
        "error_count": len(errors),
        "warning_count": len(warnings)
    }
