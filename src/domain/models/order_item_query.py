"""OrderItemQuery value object.

Predicate over the order items collection, built with chained ``where`` calls
and executed by an OrderRepository.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable


@dataclass(frozen=True)
class OrderItemQuery:
    """Conjunction of equality and membership filters on order item fields.

    Builders never mutate the receiver; each call returns a new query, so a
    common base query can be safely refined in several directions.
    """

    equals: tuple[tuple[str, Any], ...] = ()
    includes: tuple[tuple[str, tuple[Any, ...]], ...] = ()
    name: str = field(default="", compare=False)

    def where(self, field_name: str, value: Any) -> "OrderItemQuery":
        """Add an equality filter (``field == value``)."""
        return OrderItemQuery(equals=self.equals + ((field_name, value),), includes=self.includes, name=self.name)

    def where_in(self, field_name: str, values: Iterable[Any]) -> "OrderItemQuery":
        """Add a membership filter (``field in values``)."""
        return OrderItemQuery(equals=self.equals, includes=self.includes + ((field_name, tuple(values)),), name=self.name)

    def named(self, name: str) -> "OrderItemQuery":
        """Return the same query with a label used in log lines."""
        return OrderItemQuery(equals=self.equals, includes=self.includes, name=name)

    def matches(self, document: dict[str, Any]) -> bool:
        """Check whether a stored document satisfies every filter."""
        for field_name, value in self.equals:
            if field_name not in document or document[field_name] != value:
                return False
        for field_name, values in self.includes:
            if field_name not in document or document[field_name] not in values:
                return False
        return True

    def to_filter(self) -> dict[str, Any]:
        """Render as a MongoDB filter document."""
        filter_dict: dict[str, Any] = {}
        for field_name, value in self.equals:
            filter_dict[field_name] = value
        for field_name, values in self.includes:
            filter_dict[field_name] = {"$in": list(values)}
        return filter_dict
