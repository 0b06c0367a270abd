"""
Contract Representation
=======================

In-memory model of the contract being generated. Feature modules only
ever add to it; the printer reads it once composition is finished.
"""

import re
import unicodedata
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Union


@dataclass(frozen=True)
class ReferencedContract:
    """A contract named in an override list (not necessarily imported)"""
    name: str
    transpiled: Optional[bool] = None


@dataclass(frozen=True)
class ImportContract(ReferencedContract):
    path: str = ""


@dataclass(frozen=True)
class Lit:
    """A literal value printed verbatim (e.g. an identifier)"""
    lit: str


Value = Union[str, int, Lit]


@dataclass
class Parent:
    contract: ImportContract
    params: List[Value] = field(default_factory=list)
    import_only: bool = False


@dataclass(frozen=True)
class FunctionArgument:
    type: Union[str, ReferencedContract]
    name: str


@dataclass(frozen=True)
class BaseFunction:
    name: str
    kind: str  # "internal" | "public"
    args: Tuple[FunctionArgument, ...] = ()
    returns: Tuple[str, ...] = ()
    mutability: str = "nonpayable"

    @property
    def signature(self) -> str:
        types = ",".join(
            a.type if isinstance(a.type, str) else a.type.name for a in self.args
        )
        return f"{self.name}({types})"


@dataclass
class ContractFunction:
    name: str
    kind: str
    args: Tuple[FunctionArgument, ...]
    returns: Tuple[str, ...]
    mutability: str
    override: Dict[str, ReferencedContract] = field(default_factory=dict)
    modifiers: List[str] = field(default_factory=list)
    code: List[str] = field(default_factory=list)
    final: bool = False
    comments: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class NatspecTag:
    key: str
    value: str


def define_functions(definitions: Dict[str, Dict]) -> Dict[str, BaseFunction]:
    """
    Build a name -> BaseFunction table from plain definitions.

    Each definition holds "kind" and optionally "args" (list of
    (name, type) pairs), "returns" and "mutability".
    """
    table = {}
    for name, d in definitions.items():
        table[name] = BaseFunction(
            name=name,
            kind=d["kind"],
            args=tuple(FunctionArgument(type=t, name=n) for n, t in d.get("args", [])),
            returns=tuple(d.get("returns", [])),
            mutability=d.get("mutability", "nonpayable"),
        )
    return table


def to_identifier(text: str, capitalize: bool = False) -> str:
    """Turn free text like "My Token 2" into a Solidity identifier ("MyToken2")"""
    text = unicodedata.normalize("NFD", text)
    text = re.sub(r"[\u0300-\u036f]", "", text)
    text = re.sub(r"^[^a-zA-Z$_]+", "", text)
    if capitalize:
        text = text[:1].upper() + text[1:]
    return re.sub(r"[^\w$]+(.?)", lambda m: m.group(1).upper(), text, flags=re.ASCII)


class ContractBuilder:
    """
    Mutable contract model.

    - parents are unique by name and keep insertion order
    - functions are keyed by signature; overrides on the same signature
      accumulate instead of replacing each other
    - variables are unique and keep insertion order
    """

    def __init__(self, name: str):
        self.name = to_identifier(name, capitalize=True)
        self.license = "MIT"
        self.upgradeable = False
        self.natspec_tags: List[NatspecTag] = []
        self.constructor_args: List[FunctionArgument] = []
        self.constructor_code: List[str] = []
        self._parents: Dict[str, Parent] = {}
        self._functions: Dict[str, ContractFunction] = {}
        self._variables: Dict[str, None] = {}

    @property
    def parents(self) -> List[Parent]:
        inherited = [p for p in self._parents.values() if not p.import_only]
        # Initializable must come first in the linearization
        return sorted(inherited, key=lambda p: p.contract.name != "Initializable")

    @property
    def imports(self) -> List[ImportContract]:
        return [p.contract for p in self._parents.values()]

    @property
    def functions(self) -> List[ContractFunction]:
        return list(self._functions.values())

    @property
    def variables(self) -> List[str]:
        return list(self._variables)

    def has_parent(self, name: str) -> bool:
        return name in self._parents and not self._parents[name].import_only

    def add_parent(self, contract: ImportContract, params: Optional[List[Value]] = None) -> bool:
        """Returns True if the parent was not present before"""
        present = contract.name in self._parents
        self._parents[contract.name] = Parent(contract=contract, params=list(params or []))
        return not present

    def add_import_only(self, contract: ImportContract) -> bool:
        present = contract.name in self._parents
        if not present:
            self._parents[contract.name] = Parent(contract=contract, import_only=True)
        return not present

    def add_override(self, parent: ReferencedContract, base_fn: BaseFunction,
                     mutability: Optional[str] = None) -> None:
        fn = self._add_function(base_fn)
        fn.override.setdefault(parent.name, parent)
        if mutability:
            fn.mutability = mutability

    def add_modifier(self, modifier: str, base_fn: BaseFunction) -> None:
        fn = self._add_function(base_fn)
        if modifier not in fn.modifiers:
            fn.modifiers.append(modifier)

    def add_natspec_tag(self, key: str, value: str) -> None:
        self.natspec_tags.append(NatspecTag(key=key, value=value))

    def add_constructor_argument(self, arg: FunctionArgument) -> None:
        self.constructor_args.append(arg)

    def add_constructor_code(self, code: str) -> None:
        self.constructor_code.append(code)

    def add_function_code(self, code: str, base_fn: BaseFunction,
                          mutability: Optional[str] = None) -> None:
        fn = self._add_function(base_fn)
        if fn.final:
            raise ValueError(f"Function {base_fn.name} is already finalized")
        fn.code.append(code)
        if mutability:
            fn.mutability = mutability

    def set_function_body(self, code: List[str], base_fn: BaseFunction,
                          mutability: Optional[str] = None) -> None:
        fn = self._add_function(base_fn)
        if fn.code:
            raise ValueError(f"Function {base_fn.name} has additional code")
        fn.code.extend(code)
        fn.final = True
        if mutability:
            fn.mutability = mutability

    def set_function_comments(self, comments: List[str], base_fn: BaseFunction) -> None:
        fn = self._add_function(base_fn)
        fn.comments = list(comments)

    def add_variable(self, code: str) -> bool:
        """Returns True if the variable was not declared before"""
        present = code in self._variables
        self._variables[code] = None
        return not present

    def get_function(self, base_fn: BaseFunction) -> Optional[ContractFunction]:
        return self._functions.get(base_fn.signature)

    def _add_function(self, base_fn: BaseFunction) -> ContractFunction:
        got = self._functions.get(base_fn.signature)
        if got is not None:
            return got
        fn = ContractFunction(
            name=base_fn.name,
            kind=base_fn.kind,
            args=base_fn.args,
            returns=base_fn.returns,
            mutability=base_fn.mutability,
        )
        self._functions[base_fn.signature] = fn
        return fn
