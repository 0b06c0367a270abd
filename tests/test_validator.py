"""
Tests for printed-source validation
"""

from token_wizard.erc20 import print_erc20
from token_wizard.options import ERC20Options
from token_wizard.validator import SolidityValidator, validate_solidity


class TestValidator:
    def test_default_is_valid(self):
        result = validate_solidity(print_erc20())
        assert result["is_valid"] is True
        assert result["error_count"] == 0
        assert result["warning_count"] == 0

    def test_missing_headers(self):
        is_valid, errors, _ = SolidityValidator().validate("contract A {}")
        assert is_valid is False
        assert "Missing SPDX license identifier" in errors
        assert "Missing pragma statement" in errors

    def test_unbalanced_braces(self):
        code = print_erc20().rstrip().rstrip("}")
        result = validate_solidity(code)
        assert any("Unbalanced '{}'" in e for e in result["errors"])

    def test_parent_not_imported(self):
        code = print_erc20().replace(
            'import {ERC20Permit} from "@openzeppelin/contracts/token/ERC20/extensions/ERC20Permit.sol";\n', ""
        )
        result = validate_solidity(code)
        assert "CRITICAL: Parent 'ERC20Permit' is inherited but not imported" in result["errors"]

    def test_ownable_must_be_initialized(self):
        code = print_erc20(ERC20Options(mintable=True)).replace("Ownable(initialOwner)", "")
        result = validate_solidity(code)
        assert any("Ownable constructor" in e for e in result["errors"])

    def test_upgradeable_initializer_checks(self):
        code = print_erc20(ERC20Options(upgradeable=True)).replace("_disableInitializers();", "")
        result = validate_solidity(code)
        assert any("disable initializers" in e for e in result["errors"])

    def test_undeclared_role_is_a_warning(self):
        code = print_erc20(ERC20Options(mintable=True, access="roles")).replace(
            'bytes32 public constant MINTER_ROLE = keccak256("MINTER_ROLE");', ""
        )
        result = validate_solidity(code)
        assert result["is_valid"] is True
        assert result["warnings"] == ["WARNING: Role 'MINTER_ROLE' is used but never declared"]
