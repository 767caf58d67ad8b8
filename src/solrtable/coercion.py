"""Document coercion: schema-driven type conversion applied before writes.

Each field declares the type the application supplies (``source_type``)
and the type Solr stores (``logical_type``). When the two differ, the
registry is consulted for a rule keyed by the pair. Pairs without a rule
pass through untouched; the rule set only covers pairs actually used in
schemas.

Adding a pair::

    registry = default_registry()
    registry.register("float", "string", lambda v: None if v is None else repr(float(v)))
"""

from __future__ import annotations

import calendar
import logging
import re
from collections.abc import Callable, Mapping
from datetime import date, datetime, time
from typing import Any

from solrtable.exceptions import ValidationError
from solrtable.models.schema import EntitySchema, FieldSchema

logger = logging.getLogger(__name__)

CoercionRule = Callable[[Any], Any]

ZERO_DATES = frozenset({"0000-00-00 00:00:00", "0000-00-00"})

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def integer_to_string(value: Any) -> str | None:
    """Render an integer as its decimal string form."""
    if value is None:
        return None
    if isinstance(value, int):
        return str(int(value))
    return str(value)


def string_to_integer(value: Any) -> int:
    """Parse the leading integer of a value; anything non-numeric becomes 0."""
    if value is None:
        return 0
    if isinstance(value, (bool, int, float)):
        return int(value)
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else 0


def date_to_integer(value: Any) -> int:
    """Convert a date/datetime (or its text form) into Unix epoch seconds.

    Empty values and the all-zero sentinel date map to 0. Naive values are
    read as UTC.
    """
    if value is None:
        return 0
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time())
    else:
        text = str(value).strip()
        if not text or text in ZERO_DATES:
            return 0
        try:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError as e:
            raise ValidationError(f"Cannot parse date {text!r}") from e
    return calendar.timegm(parsed.utctimetuple())


def boolean_to_integer(value: Any) -> int:
    if isinstance(value, str):
        return 1 if value.strip().lower() in ("1", "true", "yes", "on") else 0
    return 1 if value else 0


class CoercionRegistry:
    """Open table of coercion rules keyed by ``(source_type, logical_type)``."""

    def __init__(self) -> None:
        self._rules: dict[tuple[str, str], CoercionRule] = {}

    def register(self, source_type: str, logical_type: str, rule: CoercionRule) -> None:
        """Register (or replace) the rule converting ``source_type`` values to ``logical_type``."""
        pair = (source_type, logical_type)
        if pair in self._rules:
            logger.warning("Overwriting coercion rule: %s -> %s", source_type, logical_type)
        self._rules[pair] = rule

    def get(self, source_type: str, logical_type: str) -> CoercionRule | None:
        return self._rules.get((source_type, logical_type))

    def __contains__(self, pair: object) -> bool:
        return pair in self._rules

    @property
    def pairs(self) -> list[tuple[str, str]]:
        """All registered ``(source_type, logical_type)`` pairs."""
        return list(self._rules)


def default_registry() -> CoercionRegistry:
    """Build a registry holding the built-in rules."""
    registry = CoercionRegistry()
    registry.register("integer", "string", integer_to_string)
    registry.register("string", "integer", string_to_integer)
    registry.register("date", "integer", date_to_integer)
    registry.register("datetime", "integer", date_to_integer)
    registry.register("timestamp", "integer", date_to_integer)
    registry.register("boolean", "integer", boolean_to_integer)
    return registry


class DocumentCoercer:
    """Applies registry rules to a record according to an entity schema."""

    def __init__(self, registry: CoercionRegistry | None = None) -> None:
        self._registry = registry or default_registry()

    @property
    def registry(self) -> CoercionRegistry:
        return self._registry

    def coerce(self, record: Mapping[str, Any], schema: EntitySchema | Mapping[str, FieldSchema]) -> dict[str, Any]:
        """Return a copy of ``record`` with declared type changes applied.

        Only fields present in both the record and the schema are touched.

        Raises:
            ValidationError: If a rule rejects a value.
        """
        fields = schema.fields if isinstance(schema, EntitySchema) else schema
        data = dict(record)
        for name, field in fields.items():
            if name not in data or not field.needs_coercion:
                continue
            rule = self._registry.get(field.source_type, field.logical_type)
            if rule is None:
                continue
            try:
                data[name] = rule(data[name])
            except ValidationError:
                raise
            except (TypeError, ValueError, OverflowError) as e:
                raise ValidationError(
                    f"Field '{name}': cannot coerce {data[name]!r} from {field.source_type} to {field.logical_type}"
                ) from e
        return data
