"""
Tests for the Solidity printer
"""

from token_wizard.erc20 import print_erc20
from token_wizard.options import ERC20Options, Info
from token_wizard.printer import (
    BLANK,
    format_lines,
    space_between,
    upgradeable_import,
    upgradeable_name,
)
from token_wizard.contract import ImportContract

DEFAULT_CONTRACT = """\
// SPDX-License-Identifier: MIT
// Compatible with OpenZeppelin Contracts ^5.0.0
pragma solidity ^0.8.20;

import {ERC20} from "@openzeppelin/contracts/token/ERC20/ERC20.sol";
import {ERC20Permit} from "@openzeppelin/contracts/token/ERC20/extensions/ERC20Permit.sol";

contract MyToken is ERC20, ERC20Permit {
    constructor() ERC20("MyToken", "MTK") ERC20Permit("MyToken") {}
}
"""

PAUSABLE_MINTABLE_CONTRACT = """\
// SPDX-License-Identifier: MIT
// Compatible with OpenZeppelin Contracts ^5.0.0
pragma solidity ^0.8.20;

import {ERC20} from "@openzeppelin/contracts/token/ERC20/ERC20.sol";
import {ERC20Pausable} from "@openzeppelin/contracts/token/ERC20/extensions/ERC20Pausable.sol";
import {Ownable} from "@openzeppelin/contracts/access/Ownable.sol";

contract MyToken is ERC20, ERC20Pausable, Ownable {
    constructor(address initialOwner)
        ERC20("MyToken", "MTK")
        Ownable(initialOwner)
    {
        _mint(msg.sender, 1000 * 10 ** decimals());
    }

    function pause() public onlyOwner {
        _pause();
    }

    function unpause() public onlyOwner {
        _unpause();
    }

    function mint(address to, uint256 amount) public onlyOwner {
        _mint(to, amount);
    }

    // The following functions are overrides required by Solidity.

    function _update(address from, address to, uint256 value)
        internal
        override(ERC20, ERC20Pausable)
    {
        super._update(from, to, value);
    }
}
"""

UUPS_CONTRACT = """\
// SPDX-License-Identifier: MIT
// Compatible with OpenZeppelin Contracts ^5.0.0
pragma solidity ^0.8.20;

import {ERC20Upgradeable} from "@openzeppelin/contracts-upgradeable/token/ERC20/ERC20Upgradeable.sol";
import {ERC20PermitUpgradeable} from "@openzeppelin/contracts-upgradeable/token/ERC20/extensions/ERC20PermitUpgradeable.sol";
import {Initializable} from "@openzeppelin/contracts-upgradeable/proxy/utils/Initializable.sol";
import {OwnableUpgradeable} from "@openzeppelin/contracts-upgradeable/access/OwnableUpgradeable.sol";
import {UUPSUpgradeable} from "@openzeppelin/contracts-upgradeable/proxy/utils/UUPSUpgradeable.sol";

contract MyToken is Initializable, ERC20Upgradeable, ERC20PermitUpgradeable, OwnableUpgradeable, UUPSUpgradeable {
    /// @custom:oz-upgrades-unsafe-allow constructor
    constructor() {
        _disableInitializers();
    }

    function initialize(address initialOwner) initializer public {
        __ERC20_init("MyToken", "MTK");
        __ERC20Permit_init("MyToken");
        __Ownable_init(initialOwner);
        __UUPSUpgradeable_init();
    }

    function _authorizeUpgrade(address newImplementation)
        internal
        onlyOwner
        override
    {}
}
"""


class TestLayout:
    def test_format_lines_indents_nested_lists(self):
        assert format_lines(["a {", ["b;", ["c;"]], BLANK, "}"]) == "a {\n    b;\n        c;\n\n}\n"

    def test_space_between_skips_empty_groups(self):
        assert space_between(["a"], [], ["b", "c"]) == ["a", BLANK, "b", "c"]
        assert space_between([], []) == []


class TestUpgradeableTransforms:
    def test_names(self):
        assert upgradeable_name("ERC20") == "ERC20Upgradeable"
        assert upgradeable_name("UUPSUpgradeable") == "UUPSUpgradeable"
        assert upgradeable_name("Initializable") == "Initializable"

    def test_import(self):
        p = ImportContract(name="Ownable", path="@openzeppelin/contracts/access/Ownable.sol")
        got = upgradeable_import(p)
        assert got.name == "OwnableUpgradeable"
        assert got.path == "@openzeppelin/contracts-upgradeable/access/OwnableUpgradeable.sol"


class TestPrintERC20:
    def test_default(self):
        assert print_erc20() == DEFAULT_CONTRACT

    def test_pausable_mintable_premint(self):
        opts = ERC20Options(pausable=True, mintable=True, premint="1000", permit=False)
        assert print_erc20(opts) == PAUSABLE_MINTABLE_CONTRACT

    def test_uups(self):
        assert print_erc20(ERC20Options(upgradeable="uups")) == UUPS_CONTRACT

    def test_votes_nonces_override(self):
        out = print_erc20(ERC20Options(votes=True))
        assert "contract MyToken is ERC20, ERC20Permit, ERC20Votes {" in out
        assert (
            "    function nonces(address owner)\n"
            "        public\n"
            "        view\n"
            "        override(ERC20Permit, Nonces)\n"
            "        returns (uint256)\n"
            "    {\n"
            "        return super.nonces(owner);\n"
            "    }\n"
        ) in out
        assert "override(ERC20, ERC20Votes)" in out

    def test_timestamp_clock(self):
        out = print_erc20(ERC20Options(votes="timestamp"))
        assert "    function clock() public view override returns (uint48) {\n" in out
        assert "        return uint48(block.timestamp);\n" in out
        assert (
            "    // solhint-disable-next-line func-name-mixedcase\n"
            "    function CLOCK_MODE() public pure override returns (string memory) {\n"
            '        return "mode=timestamp";\n'
        ) in out

    def test_info_header_and_tag(self):
        out = print_erc20(ERC20Options(info=Info(license="WTFPL", security_contact="sec@example.com")))
        assert out.startswith("// SPDX-License-Identifier: WTFPL\n")
        assert "/// @custom:security-contact sec@example.com\ncontract MyToken" in out

    def test_name_is_escaped(self):
        out = print_erc20(ERC20Options(name='My "Quoted" Token'))
        assert "contract MyQuotedToken is" in out
        assert 'ERC20("My \\"Quoted\\" Token", "MTK")' in out

    def test_roles_constructor(self):
        out = print_erc20(ERC20Options(mintable=True, access="roles"))
        assert "constructor(address defaultAdmin, address minter)" in out
        assert "function mint(address to, uint256 amount) public onlyRole(MINTER_ROLE) {" in out
        assert 'bytes32 public constant MINTER_ROLE = keccak256("MINTER_ROLE");' in out
