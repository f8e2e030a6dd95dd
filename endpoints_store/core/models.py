"""Domain models for the endpoints store.

All models in this module use only Python standard library types,
keeping the core free of external dependencies.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, TypeAlias

if TYPE_CHECKING:
    from .ports import RemoteApiPort

Record: TypeAlias = dict[str, Any]


class _Unset:
    """Marker for an option that was not supplied at all."""

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


@dataclass(frozen=True)
class SortInformation:
    """One sort key of a query, in priority order."""

    attribute: str
    descending: bool = False

    def __post_init__(self) -> None:
        """Validate sort invariants on creation."""
        if not isinstance(self.attribute, str) or not self.attribute.strip():
            raise ValueError("attribute must be a non-empty string")

    def to_order_term(self) -> str:
        """Render as a remote order term, e.g. ``name`` or ``-age``."""
        prefix = "-" if self.descending else ""
        return prefix + self.attribute


@dataclass(frozen=True)
class QueryOptions:
    """Pagination and sort directives for a query.

    ``start`` and ``count`` mirror the store contract; they become the
    remote ``offset`` and ``limit`` fields.
    """

    start: int | None = None
    count: int | None = None
    sort: tuple[SortInformation, ...] = ()

    def __post_init__(self) -> None:
        # Normalise lists and mappings to a tuple of SortInformation
        object.__setattr__(
            self,
            "sort",
            tuple(
                item if isinstance(item, SortInformation) else SortInformation(**item)
                for item in self.sort
            ),
        )

    @classmethod
    def coerce(cls, options: "QueryOptions | Mapping[str, Any] | None") -> "QueryOptions":
        """Build options from an instance, a store-contract mapping, or None."""
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        return cls(
            start=options.get("start"),
            count=options.get("count"),
            sort=tuple(options.get("sort") or ()),
        )


@dataclass(frozen=True)
class PutDirectives:
    """Metadata for put/add.

    ``id`` distinguishes "not supplied" (UNSET) from an explicit None.
    ``overwrite`` is accepted for contract compatibility and not honored.
    """

    id: Any = UNSET
    overwrite: bool | None = None

    @property
    def has_explicit_id(self) -> bool:
        return self.id is not UNSET

    @classmethod
    def coerce(cls, options: "PutDirectives | Mapping[str, Any] | None") -> "PutDirectives":
        """Build directives from an instance, a store-contract mapping, or None."""
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        return cls(
            id=options["id"] if "id" in options else UNSET,
            overwrite=options.get("overwrite"),
        )


@dataclass(frozen=True)
class QueryPage:
    """One resolved page of a remote list call."""

    items: list[Record] = field(default_factory=list)
    total: Any = 0
    next_page_token: str | None = None


@dataclass(frozen=True)
class StoreConfig:
    """Configuration of an EndpointsStore.

    ``api`` is the remote client handle and is required. ``id_property``
    names the identity field of every record.
    """

    api: "RemoteApiPort | None" = None
    id_property: str = "id"

    def __post_init__(self) -> None:
        if self.api is None:
            raise AssertionError("API not defined")
        if not self.id_property:
            raise ValueError("id_property must be a non-empty string")
