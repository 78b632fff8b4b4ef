"""
Hack Symbol Table
=================

Maps symbol names to RAM/ROM addresses for one assembly run.

The table starts out holding the predefined Hack symbols (SP, LCL, ARG,
THIS, THAT, R0-R15, SCREEN, KBD). Pass 1 adds labels; pass 2 adds
variables lazily, in the order they are first referenced, starting at
address 16.

Example
-------
>>> table = SymbolTable()
>>> table.address("SCREEN")
16384
>>> table.bind_variable("counter")
16
>>> table.bind_variable("sum")
17
>>> table.bind_variable("counter")
16
"""

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional

from hackasm.cpu import PREDEFINED_SYMBOLS, VARIABLE_BASE, is_predefined_symbol
from hackasm.errors import SourceLocation, UndefinedSymbolError

logger = logging.getLogger(__name__)


class SymbolKind(Enum):
    """How a symbol came to be bound."""
    PREDEFINED = auto()  # Built into the Hack platform
    LABEL = auto()       # (NAME) declaration, bound in pass 1
    VARIABLE = auto()    # First use of an unknown @NAME in pass 2


@dataclass
class Symbol:
    """
    Symbol table entry.

    Attributes:
        name: Symbol name (case-sensitive)
        address: Bound address
        kind: Predefined, label or variable
        location: Where the symbol was bound (None for predefined symbols)
    """
    name: str
    address: int
    kind: SymbolKind
    location: Optional[SourceLocation] = None


class SymbolTable:
    """
    Name-to-address mapping with Hack variable allocation.

    Usage:
        table = SymbolTable()
        table.bind("LOOP", 4)              # label
        addr = table.bind_variable("i")    # variable, 16 on first use
        if "LOOP" in table:
            table.address("LOOP")
    """

    def __init__(self, variable_base: int = VARIABLE_BASE):
        self._symbols: dict[str, Symbol] = {}
        self._next_variable = variable_base
        self._variables: list[str] = []

        for name, address in PREDEFINED_SYMBOLS.items():
            self._symbols[name] = Symbol(name, address, SymbolKind.PREDEFINED)

    def __contains__(self, name: str) -> bool:
        return name in self._symbols

    def __len__(self) -> int:
        return len(self._symbols)

    def __iter__(self) -> Iterator[str]:
        return iter(self._symbols)

    def contains(self, name: str) -> bool:
        """Return True if name is bound (predefined, label or variable)."""
        return name in self._symbols

    def address(self, name: str) -> int:
        """
        Return the address bound to name.

        Raises:
            UndefinedSymbolError: If name has never been bound
        """
        try:
            return self._symbols[name].address
        except KeyError:
            raise UndefinedSymbolError(name) from None

    def get(self, name: str) -> Optional[Symbol]:
        """Return the full entry for name, or None if unbound."""
        return self._symbols.get(name)

    def bind(
        self,
        name: str,
        address: int,
        location: Optional[SourceLocation] = None,
    ) -> None:
        """
        Bind name to address unconditionally (used for labels).

        Rebinding an existing name replaces its address. This is allowed
        but logged, since it usually means a duplicated label or a label
        shadowing a predefined symbol.
        """
        where = f" at {location}" if location else ""
        previous = self._symbols.get(name)
        if is_predefined_symbol(name):
            logger.warning(
                f"Label '{name}' shadows predefined symbol "
                f"(was {PREDEFINED_SYMBOLS[name]}, now {address}){where}"
            )
        elif previous is not None:
            logger.warning(
                f"Rebinding symbol '{name}' from {previous.address} to {address}{where}"
            )
        self._symbols[name] = Symbol(name, address, SymbolKind.LABEL, location)

    def bind_variable(
        self,
        name: str,
        location: Optional[SourceLocation] = None,
    ) -> int:
        """
        Return the address of name, allocating a variable slot if unbound.

        Slots are handed out sequentially in first-use order, so the same
        source always produces the same variable addresses.
        """
        existing = self._symbols.get(name)
        if existing is not None:
            return existing.address

        address = self._next_variable
        self._next_variable += 1
        self._symbols[name] = Symbol(name, address, SymbolKind.VARIABLE, location)
        self._variables.append(name)
        logger.debug(f"Allocated variable '{name}' at {address}")
        return address

    @property
    def next_variable_address(self) -> int:
        """Address the next new variable will receive."""
        return self._next_variable

    def symbols(self) -> dict[str, int]:
        """Return a dictionary of every bound name to its address."""
        return {name: sym.address for name, sym in self._symbols.items()}

    def entries(self, kind: Optional[SymbolKind] = None) -> list[Symbol]:
        """Return symbol entries, optionally filtered by kind."""
        return [
            sym for sym in self._symbols.values()
            if kind is None or sym.kind is kind
        ]

    def labels(self) -> dict[str, int]:
        """Return label names and addresses."""
        return {sym.name: sym.address for sym in self.entries(SymbolKind.LABEL)}

    def variables(self) -> list[str]:
        """Return variable names in allocation order."""
        return list(self._variables)
