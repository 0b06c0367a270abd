"""
Upgradeability (transparent proxy / UUPS)
"""

from .access_control import require_access_control
from .contract import ContractBuilder, ImportContract, define_functions
from .options import AccessOption, Upgradeable, UpgradeableOption

INITIALIZABLE = ImportContract(
    name="Initializable",
    path="@openzeppelin/contracts-upgradeable/proxy/utils/Initializable.sol",
    transpiled=False,
)

UUPS_UPGRADEABLE = ImportContract(
    name="UUPSUpgradeable",
    path="@openzeppelin/contracts-upgradeable/proxy/utils/UUPSUpgradeable.sol",
)

functions = define_functions({
    "_authorizeUpgrade": {
        "kind": "internal",
        "args": [("newImplementation", "address")],
    },
})


def set_upgradeable(c: ContractBuilder, upgradeable: UpgradeableOption, access: AccessOption) -> None:
    if upgradeable is False or upgradeable is None:
        return

    c.upgradeable = True
    c.add_parent(INITIALIZABLE)

    if upgradeable is True:
        upgradeable = Upgradeable.TRANSPARENT

    if Upgradeable(upgradeable) == Upgradeable.UUPS:
        require_access_control(c, functions["_authorizeUpgrade"], access, "UPGRADER", "upgrader")
        c.add_parent(UUPS_UPGRADEABLE)
        c.add_override(UUPS_UPGRADEABLE, functions["_authorizeUpgrade"])
        c.set_function_body([], functions["_authorizeUpgrade"])
