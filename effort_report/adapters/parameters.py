"""Tagged portal call parameters with query encoding and canonical cache keys."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
import json

ScalarValue = str | int | float | bool


@dataclass(frozen=True)
class RestCallParameters:
    """Immutable parameter set for one portal method call.

    Each field is one tag of the parameter sum type, so encoding never needs to
    inspect value types to decide where a key belongs.

    Attributes:
        scalar_fields: Plain query fields such as `start` or `limit`.
        filter_fields: Filter map expanded into `filter[KEY]` fields.
        select_fields: Ordered field selection expanded into `select[N]` fields.
        order_fields: Ordering map expanded into `order[KEY]` fields.
    """

    scalar_fields: tuple[tuple[str, ScalarValue | None], ...] = ()
    filter_fields: tuple[tuple[str, ScalarValue | None], ...] = ()
    select_fields: tuple[str, ...] = ()
    order_fields: tuple[tuple[str, str], ...] = ()

    @classmethod
    def params_build(
        cls,
        filter_fields: Mapping[str, ScalarValue | None] | None = None,
        select_fields: Sequence[str] | None = None,
        order_fields: Mapping[str, str] | None = None,
        scalar_fields: Mapping[str, ScalarValue | None] | None = None,
    ) -> "RestCallParameters":
        """Build a parameter set from plain mappings resolved at the call site.

        Args:
            filter_fields: Optional filter map.
            select_fields: Optional ordered field selection.
            order_fields: Optional ordering map (`{"ID": "ASC"}`).
            scalar_fields: Optional plain query fields.

        Returns:
            RestCallParameters: Immutable parameter set.

        Raises:
            ValueError: Raised when a key is blank.
        """

        for label, mapping in (("filter", filter_fields), ("order", order_fields), ("scalar", scalar_fields)):
            for key in (mapping or {}):
                if not str(key).strip():
                    raise ValueError(f"{label} parameter key must not be blank")

        return cls(
            scalar_fields=tuple((str(key), value) for key, value in (scalar_fields or {}).items()),
            filter_fields=tuple((str(key), value) for key, value in (filter_fields or {}).items()),
            select_fields=tuple(str(field) for field in (select_fields or ())),
            order_fields=tuple((str(key), str(value)) for key, value in (order_fields or {}).items()),
        )

    def params_with_scalar(self, name: str, value: ScalarValue | None) -> "RestCallParameters":
        """Return a copy with one scalar field set or replaced.

        Args:
            name: Scalar field name.
            value: Scalar field value.

        Returns:
            RestCallParameters: New parameter set.
        """

        remaining = tuple((key, existing) for key, existing in self.scalar_fields if key != name)
        return replace(self, scalar_fields=remaining + ((name, value),))

    def params_encode(self) -> list[tuple[str, str]]:
        """Encode the parameter set into ordered query pairs.

        Empty-string and `None` scalar and filter values are omitted entirely.

        Returns:
            list[tuple[str, str]]: Query pairs in deterministic order.
        """

        query_pairs: list[tuple[str, str]] = []
        for key, value in self.scalar_fields:
            if _params_is_present(value):
                query_pairs.append((key, _params_encode_value(value)))
        for key, value in self.filter_fields:
            if _params_is_present(value):
                query_pairs.append((f"filter[{key}]", _params_encode_value(value)))
        for index, field in enumerate(self.select_fields):
            query_pairs.append((f"select[{index}]", field))
        for key, direction in self.order_fields:
            query_pairs.append((f"order[{key}]", direction))
        return query_pairs

    def params_cache_fragment(self) -> str:
        """Return a canonical serialization used as the parameter half of a cache key.

        Scalar and filter fields are sorted by key so semantically equal maps
        serialize identically; select and order keep their meaningful order.

        Returns:
            str: Canonical JSON text.
        """

        canonical_payload = {
            "scalar": sorted(
                (key, _params_encode_value(value)) for key, value in self.scalar_fields if _params_is_present(value)
            ),
            "filter": sorted(
                (key, _params_encode_value(value)) for key, value in self.filter_fields if _params_is_present(value)
            ),
            "select": list(self.select_fields),
            "order": [list(pair) for pair in self.order_fields],
        }
        return json.dumps(canonical_payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def _params_is_present(value: ScalarValue | None) -> bool:
    return value is not None and value != ""


def _params_encode_value(value: ScalarValue | None) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
