"""
Option combinations
===================

Enumerates option sets from a blueprint (field -> candidate values) so
every combination of features can be built and checked.
"""

import itertools
from typing import Dict, Iterator, List, Optional

from .options import Access, ClockMode, ERC20Options, Info, Restriction, Upgradeable

BOOLEANS = [True, False]

BLUEPRINT: Dict[str, List] = {
    "name": ["MyToken"],
    "symbol": ["MTK"],
    "burnable": BOOLEANS,
    "pausable": BOOLEANS,
    "mintable": BOOLEANS,
    "permit": BOOLEANS,
    "votes": [*BOOLEANS, *ClockMode],
    "flashmint": BOOLEANS,
    "premint": ["1"],
    "restriction": [False, *Restriction],
    "custodian": BOOLEANS,
    "limit": ["0", "100"],
    "access": [False, *Access],
    "upgradeable": [False, *Upgradeable],
    "info": [Info(), Info(security_contact="security@example.com", license="WTFPL")],
}


def generate_options(blueprint: Optional[Dict[str, List]] = None) -> Iterator[ERC20Options]:
    """Yield every valid combination of the blueprint, skipping votes without permit"""
    blueprint = blueprint or BLUEPRINT
    keys = list(blueprint)
    for values in itertools.product(*(blueprint[k] for k in keys)):
        opts = ERC20Options(**dict(zip(keys, values)))
        if opts.votes and opts.permit is False:
            continue
        yield opts
