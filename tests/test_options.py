"""
Tests for option parsing and defaults
"""

import pytest

from token_wizard.errors import OptionsError
from token_wizard.options import (
    DEFAULTS,
    Access,
    ClockMode,
    ERC20Options,
    Info,
    Restriction,
    Upgradeable,
    with_defaults,
)


class TestWithDefaults:
    def test_empty_options_equal_defaults(self):
        assert with_defaults(ERC20Options()) == DEFAULTS
        assert with_defaults(None) == DEFAULTS

    def test_defaults_values(self):
        assert DEFAULTS.name == "MyToken"
        assert DEFAULTS.symbol == "MTK"
        assert DEFAULTS.permit is True
        assert DEFAULTS.premint == "0"
        assert DEFAULTS.limit == "0"
        assert DEFAULTS.access is False
        assert DEFAULTS.info == Info(license="MIT")

    def test_supplied_values_win(self):
        merged = with_defaults(ERC20Options(name="Gov", permit=False, mintable=True))
        assert merged.name == "Gov"
        assert merged.permit is False
        assert merged.mintable is True
        assert merged.symbol == "MTK"

    def test_empty_amounts_fall_back(self):
        merged = with_defaults(ERC20Options(premint="", limit=""))
        assert merged.premint == "0"
        assert merged.limit == "0"


class TestFromDict:
    def test_variants_are_parsed(self):
        opts = ERC20Options.from_dict({
            "restriction": "allowlist",
            "votes": "timestamp",
            "access": "roles",
            "upgradeable": "uups",
        })
        assert opts.restriction is Restriction.ALLOWLIST
        assert opts.votes is ClockMode.TIMESTAMP
        assert opts.access is Access.ROLES
        assert opts.upgradeable is Upgradeable.UUPS

    def test_booleans_pass_through(self):
        opts = ERC20Options.from_dict({"votes": True, "access": False})
        assert opts.votes is True
        assert opts.access is False

    def test_numeric_amounts_become_strings(self):
        opts = ERC20Options.from_dict({"premint": 1000000, "limit": 2.5})
        assert opts.premint == "1000000"
        assert opts.limit == "2.5"

    def test_unknown_key(self):
        with pytest.raises(OptionsError) as exc:
            ERC20Options.from_dict({"capped": True})
        assert "capped" in exc.value.messages

    def test_unknown_variant(self):
        with pytest.raises(OptionsError) as exc:
            ERC20Options.from_dict({"access": "multisig"})
        assert "access" in exc.value.messages
        assert "multisig" in str(exc.value)

    def test_info_accepts_camel_case(self):
        opts = ERC20Options.from_dict({"info": {"securityContact": "sec@example.com"}})
        assert opts.info == Info(license="MIT", security_contact="sec@example.com")

    def test_info_rejects_unknown_keys(self):
        with pytest.raises(OptionsError):
            ERC20Options.from_dict({"info": {"author": "me"}})

    def test_to_dict_flattens(self):
        opts = ERC20Options.from_dict({"access": "managed", "info": {"license": "GPL-3.0"}})
        data = opts.to_dict()
        assert data["access"] == "managed"
        assert data["info"] == {"license": "GPL-3.0", "security_contact": None}
        assert ERC20Options.from_dict(data) == opts

    @pytest.mark.parametrize("value, expected", [
        (0.00001, "0.00001"),
        (1.5, "1.5"),
        (1e21, "1000000000000000000000"),
        (250, "250"),
        ("2e6", "2e6"),
    ])
    def test_numeric_amounts_are_written_out(self, value, expected):
        assert ERC20Options.from_dict({"premint": value}).premint == expected

    @pytest.mark.parametrize("value", [True, [1], {"amount": 1}])
    def test_amount_type_is_checked(self, value):
        with pytest.raises(OptionsError) as exc:
            ERC20Options.from_dict({"limit": value})
        assert "limit" in exc.value.messages

    @pytest.mark.parametrize("key", ["burnable", "pausable", "mintable", "permit", "custodian", "flashmint"])
    def test_boolean_fields_reject_strings(self, key):
        with pytest.raises(OptionsError) as exc:
            ERC20Options.from_dict({key: "false"})
        assert key in exc.value.messages

    def test_access_true_defaults_to_ownable(self):
        opts = ERC20Options.from_dict({"access": True})
        assert opts.access is True
        assert with_defaults(opts).access is Access.OWNABLE
