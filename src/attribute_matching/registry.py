from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Union

from .comparators import DEFAULT_COMPARATOR, AttributeComparator, comparator_for
from .exceptions import RegistryFrozenError

logger = logging.getLogger(__name__)


class ComparatorRegistry:
    """Maps attribute names to comparators.

    Attributes without a registered comparator resolve to strict,
    case-sensitive equality with no default, which makes them mandatory.

    Registration is a setup-time operation. Once a registry has been frozen
    (``MatchSelector`` freezes the registry it is given; the module-level
    ``select`` works on a frozen copy instead) further registration raises
    ``RegistryFrozenError``; use ``copy()`` to derive a new configuration.
    Registering while a selection is running on another thread is undefined
    behaviour.
    """

    def __init__(self, default: AttributeComparator = DEFAULT_COMPARATOR) -> None:
        self._comparators: Dict[str, AttributeComparator] = {}
        self._default = default
        self._frozen = False

    @classmethod
    def from_mapping(
        cls,
        comparators: Mapping[str, Union[AttributeComparator, str]],
        freeze: bool = False,
    ) -> "ComparatorRegistry":
        """Build a registry from comparators or comparator tags such as ``"optional"``."""
        registry = cls()
        for name, comparator in comparators.items():
            if isinstance(comparator, str):
                comparator = comparator_for(comparator)
            registry.register(name, comparator)
        if freeze:
            registry.freeze()
        return registry

    def register(self, attribute_name: str, comparator: AttributeComparator) -> None:
        """Associate ``comparator`` with ``attribute_name``.

        Re-registering a name replaces the previous comparator.
        """
        if self._frozen:
            raise RegistryFrozenError(
                f"cannot register '{attribute_name}': registry is frozen"
            )
        if not isinstance(comparator, AttributeComparator):
            raise TypeError(
                f"expected an AttributeComparator for '{attribute_name}', got {type(comparator).__name__}"
            )
        previous = self._comparators.get(attribute_name)
        if previous is not None:
            logger.debug(
                "Overwriting comparator for attribute %r: %r -> %r",
                attribute_name,
                previous,
                comparator,
            )
        self._comparators[attribute_name] = comparator

    def resolve(self, attribute_name: str) -> AttributeComparator:
        return self._comparators.get(attribute_name, self._default)

    def freeze(self) -> "ComparatorRegistry":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def snapshot(self) -> Mapping[str, AttributeComparator]:
        return MappingProxyType(dict(self._comparators))

    def copy(self) -> "ComparatorRegistry":
        clone = ComparatorRegistry(default=self._default)
        clone._comparators = dict(self._comparators)
        return clone

    def names(self) -> List[str]:
        return sorted(self._comparators)

    def __contains__(self, attribute_name: object) -> bool:
        return attribute_name in self._comparators

    def __len__(self) -> int:
        return len(self._comparators)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "open"
        return f"ComparatorRegistry({self.names()}, {state})"
