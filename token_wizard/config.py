"""
Option Loader
=============

Load ERC20 options from YAML files, e.g.

    name: GovToken
    symbol: GOV
    mintable: true
    votes: timestamp
    access: roles
    info:
      securityContact: security@example.com
"""

from pathlib import Path
from typing import Union

import yaml

from .errors import OptionsError
from .options import ERC20Options


def load_options(path: Union[str, Path]) -> ERC20Options:
    """
    Load an option file.

    Args:
        path: YAML file holding a flat mapping of option keys

    Returns:
        ERC20Options (unset fields stay None and are defaulted at build time)
    """
    with open(path, "r", encoding="utf8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return ERC20Options()
    if not isinstance(data, dict):
        raise OptionsError({"config": f"Expected a mapping in {path}, got {type(data).__name__}"})

    return ERC20Options.from_dict(data)
