"""Ordered registry of block rules.

Rules run in registration order; the first one that matches wins. A rule can
also join alternative chains (``alt``): the paragraph rule asks the
"paragraph" chain whether the next line starts a block that interrupts it.

Example:
    >>> ruler = Ruler()
    >>> ruler.push("paragraph", paragraph_rule)
    >>> ruler.before("paragraph", "heading", heading_rule, alt=("paragraph",))
    >>> [name for name in ruler.names]
    ['heading', 'paragraph']
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mesita.block.state import BlockState

BlockRule = Callable[["BlockState", int, int, bool], bool]
"""``rule(state, start_line, end_line, silent) -> matched``"""


@dataclass(slots=True)
class _Rule:
    name: str
    fn: BlockRule
    alt: tuple[str, ...] = ()
    enabled: bool = True


@dataclass(slots=True)
class Ruler:
    """Mutable, ordered collection of named block rules."""

    _rules: list[_Rule] = field(default_factory=list)
    _cache: dict[str, tuple[BlockRule, ...]] | None = None

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(rule.name for rule in self._rules)

    def _find(self, name: str) -> int:
        for i, rule in enumerate(self._rules):
            if rule.name == name:
                return i
        raise KeyError(f"Unknown block rule: {name!r}")

    def push(self, name: str, fn: BlockRule, *, alt: Iterable[str] = ()) -> None:
        """Append a rule at the end of the chain."""
        self._rules.append(_Rule(name, fn, tuple(alt)))
        self._cache = None

    def before(
        self, before_name: str, name: str, fn: BlockRule, *, alt: Iterable[str] = ()
    ) -> None:
        """Insert a rule right before ``before_name``."""
        self._rules.insert(self._find(before_name), _Rule(name, fn, tuple(alt)))
        self._cache = None

    def after(
        self, after_name: str, name: str, fn: BlockRule, *, alt: Iterable[str] = ()
    ) -> None:
        """Insert a rule right after ``after_name``."""
        self._rules.insert(self._find(after_name) + 1, _Rule(name, fn, tuple(alt)))
        self._cache = None

    def disable(self, name: str) -> None:
        self._rules[self._find(name)].enabled = False
        self._cache = None

    def get_rules(self, chain: str = "") -> tuple[BlockRule, ...]:
        """Enabled rules of a chain; ``""`` is the main chain."""
        if self._cache is None:
            cache: dict[str, tuple[BlockRule, ...]] = {}
            chains = {""} | {name for rule in self._rules for name in rule.alt}
            for chain_name in chains:
                cache[chain_name] = tuple(
                    rule.fn
                    for rule in self._rules
                    if rule.enabled and (not chain_name or chain_name in rule.alt)
                )
            self._cache = cache
        return self._cache.get(chain, ())
