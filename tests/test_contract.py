"""
Tests for the contract representation (ContractBuilder)
"""

import pytest

from token_wizard.contract import (
    ContractBuilder,
    ImportContract,
    ReferencedContract,
    define_functions,
    to_identifier,
)

A = ImportContract(name="A", path="contracts/A.sol")
B = ImportContract(name="B", path="contracts/B.sol")
INITIALIZABLE = ImportContract(name="Initializable", path="contracts/Initializable.sol", transpiled=False)

functions = define_functions({
    "hook": {"kind": "internal", "args": [("x", "uint256")]},
    "get": {"kind": "public", "returns": ["uint256"], "mutability": "view"},
})


class TestToIdentifier:
    def test_spaces_are_camel_cased(self):
        assert to_identifier("My Token") == "MyToken"
        assert to_identifier("my token", capitalize=True) == "MyToken"

    def test_accents_are_dropped(self):
        assert to_identifier("Café Coin") == "CafeCoin"

    def test_leading_digits_are_dropped(self):
        assert to_identifier("123abc", capitalize=True) == "Abc"

    def test_builder_name(self):
        assert ContractBuilder("gov token").name == "GovToken"


class TestParents:
    def test_add_parent_is_idempotent(self):
        c = ContractBuilder("T")
        assert c.add_parent(A) is True
        assert c.add_parent(A) is False
        assert [p.contract.name for p in c.parents] == ["A"]

    def test_parents_keep_insertion_order_with_initializable_first(self):
        c = ContractBuilder("T")
        c.add_parent(A)
        c.add_parent(B)
        c.add_parent(INITIALIZABLE)
        assert [p.contract.name for p in c.parents] == ["Initializable", "A", "B"]

    def test_import_only_parent_is_not_inherited(self):
        c = ContractBuilder("T")
        c.add_import_only(B)
        assert c.parents == []
        assert [i.name for i in c.imports] == ["B"]
        assert c.has_parent("B") is False


class TestFunctions:
    def test_overrides_accumulate_without_duplicates(self):
        c = ContractBuilder("T")
        c.add_override(A, functions["hook"])
        c.add_override(B, functions["hook"])
        c.add_override(ReferencedContract(name="A"), functions["hook"])
        fn = c.get_function(functions["hook"])
        assert list(fn.override) == ["A", "B"]
        assert len(c.functions) == 1

    def test_code_is_appended_in_order(self):
        c = ContractBuilder("T")
        c.add_function_code("first();", functions["hook"])
        c.add_function_code("second();", functions["hook"])
        assert c.get_function(functions["hook"]).code == ["first();", "second();"]

    def test_final_body_rejects_more_code(self):
        c = ContractBuilder("T")
        c.set_function_body(["return 1;"], functions["get"])
        with pytest.raises(ValueError):
            c.add_function_code("x();", functions["get"])

    def test_body_cannot_replace_existing_code(self):
        c = ContractBuilder("T")
        c.add_function_code("x();", functions["hook"])
        with pytest.raises(ValueError):
            c.set_function_body(["y();"], functions["hook"])

    def test_base_mutability_is_kept(self):
        c = ContractBuilder("T")
        c.add_override(A, functions["get"])
        assert c.get_function(functions["get"]).mutability == "view"

    def test_modifiers_are_not_repeated(self):
        c = ContractBuilder("T")
        c.add_modifier("onlyOwner", functions["hook"])
        c.add_modifier("onlyOwner", functions["hook"])
        assert c.get_function(functions["hook"]).modifiers == ["onlyOwner"]


class TestVariables:
    def test_add_variable_reports_duplicates(self):
        c = ContractBuilder("T")
        assert c.add_variable("uint256 x;") is True
        assert c.add_variable("uint256 x;") is False
        assert c.variables == ["uint256 x;"]
