"""
ERC20 options, schemes and defaults
"""

from dataclasses import dataclass, fields, replace
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional, Union

from .errors import OptionsError


class Access(str, Enum):
    OWNABLE = "ownable"
    ROLES = "roles"
    MANAGED = "managed"


class Upgradeable(str, Enum):
    TRANSPARENT = "transparent"
    UUPS = "uups"


class Restriction(str, Enum):
    BLOCKLIST = "blocklist"
    ALLOWLIST = "allowlist"


class ClockMode(str, Enum):
    BLOCKNUMBER = "blocknumber"
    TIMESTAMP = "timestamp"


DEFAULT_ACCESS_CONTROL = Access.OWNABLE
RESTRICTION_DEFAULT = Restriction.BLOCKLIST
CLOCK_MODE_DEFAULT = ClockMode.BLOCKNUMBER

BOOLEAN_FIELDS = ("burnable", "pausable", "mintable", "permit", "custodian", "flashmint")

AccessOption = Union[bool, Access]
UpgradeableOption = Union[bool, Upgradeable]
RestrictionOption = Union[bool, Restriction]
VotesOption = Union[bool, ClockMode]


@dataclass(frozen=True)
class Info:
    license: str = "MIT"
    security_contact: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict]) -> "Info":
        data = dict(data or {})
        if "securityContact" in data:
            data["security_contact"] = data.pop("securityContact")
        unknown = set(data) - {"license", "security_contact"}
        if unknown:
            raise OptionsError({k: "Unknown info option" for k in sorted(unknown)})
        return cls(
            license=data.get("license") or "MIT",
            security_contact=data.get("security_contact") or None,
        )

    def to_dict(self) -> Dict:
        return {"license": self.license, "security_contact": self.security_contact}


@dataclass(frozen=True)
class ERC20Options:
    """
    Option set for an ERC20 token.

    Fields left as None are filled in from DEFAULTS by with_defaults().
    Boolean-or-variant fields accept True for the scheme default.
    """
    name: Optional[str] = None
    symbol: Optional[str] = None
    burnable: Optional[bool] = None
    pausable: Optional[bool] = None
    premint: Optional[str] = None
    mintable: Optional[bool] = None
    permit: Optional[bool] = None
    restriction: Optional[RestrictionOption] = None
    custodian: Optional[bool] = None
    limit: Optional[str] = None
    votes: Optional[VotesOption] = None
    flashmint: Optional[bool] = None
    access: Optional[AccessOption] = None
    upgradeable: Optional[UpgradeableOption] = None
    info: Optional[Info] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ERC20Options":
        """
        Build options from a plain mapping (YAML file, CLI, model output).

        Raises OptionsError for unknown keys or unknown variant tags.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise OptionsError({k: "Unknown option" for k in sorted(unknown)})

        values = dict(data)
        for key in BOOLEAN_FIELDS:
            if values.get(key) is not None and not isinstance(values[key], bool):
                raise OptionsError({key: f"Expected a boolean, got {values[key]!r}"})
        if "restriction" in values:
            values["restriction"] = _parse_variant("restriction", values["restriction"], Restriction)
        if "votes" in values:
            values["votes"] = _parse_variant("votes", values["votes"], ClockMode)
        if "access" in values:
            values["access"] = _parse_variant("access", values["access"], Access)
        if "upgradeable" in values:
            values["upgradeable"] = _parse_variant("upgradeable", values["upgradeable"], Upgradeable)
        if "info" in values and not isinstance(values["info"], Info):
            values["info"] = Info.from_dict(values["info"])
        for key in ("premint", "limit"):
            if values.get(key) is not None:
                values[key] = _parse_amount(key, values[key])
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        out = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, Enum):
                value = value.value
            elif isinstance(value, Info):
                value = value.to_dict()
            out[f.name] = value
        return out


def _parse_amount(key: str, value: Any) -> str:
    """Amounts stay strings; numbers from YAML or JSON are written out in full"""
    if isinstance(value, str):
        return value
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise OptionsError({key: f"Expected an amount string or number, got {value!r}"})
    if isinstance(value, float):
        # str(1e-05) would leave the amount grammar
        return format(Decimal(repr(value)), "f")
    return str(value)


def _parse_variant(key: str, value: Any, enum_cls) -> Any:
    if value is None or isinstance(value, bool):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(repr(m.value) for m in enum_cls)
        raise OptionsError({key: f"Expected a boolean or one of {allowed}, got {value!r}"})


DEFAULTS = ERC20Options(
    name="MyToken",
    symbol="MTK",
    burnable=False,
    pausable=False,
    premint="0",
    mintable=False,
    permit=True,
    restriction=False,
    custodian=False,
    limit="0",
    votes=False,
    flashmint=False,
    access=False,
    upgradeable=False,
    info=Info(),
)


def with_defaults(opts: Optional[ERC20Options] = None) -> ERC20Options:
    """
    Merge supplied options over DEFAULTS field by field.

    Amount fields fall back to the default when empty, so "" is never
    treated as an explicit amount. `access=True` selects the default
    scheme.
    """
    opts = opts or ERC20Options()
    merged = {}
    for f in fields(ERC20Options):
        value = getattr(opts, f.name)
        if f.name in ("premint", "limit", "name", "symbol"):
            merged[f.name] = value or getattr(DEFAULTS, f.name)
        else:
            merged[f.name] = getattr(DEFAULTS, f.name) if value is None else value
    if merged["access"] is True:
        merged["access"] = DEFAULT_ACCESS_CONTROL
    return replace(DEFAULTS, **merged)
