"""
Normalization of SAP OData V2 payloads.

Covers the two date encodings SAP Gateway emits and the ``d`` /
``d.results`` envelope wrapped around every JSON response.
"""
import re
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Sequence, Type, TypeVar

R = TypeVar("R")

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_JSON_DATE = re.compile(r"/Date\((\d+)\)/")
_COMPACT_DATE = re.compile(r"\d{8}")


def parse_sap_date(value: Any) -> Optional[str]:
    """
    Convert an SAP date to ``YYYY-MM-DD``.

    Accepts ``/Date(<epoch millis>)/`` (converted in UTC, time of day dropped)
    and compact ``YYYYMMDD`` strings (split without calendar validation).
    Returns None for anything else.
    """
    if not isinstance(value, str):
        return None

    match = _JSON_DATE.search(value)
    if match:
        try:
            instant = _EPOCH + timedelta(milliseconds=int(match.group(1)))
        except (OverflowError, ValueError):
            # beyond the datetime range, or more digits than int() accepts
            return None
        return instant.date().isoformat()

    if _COMPACT_DATE.fullmatch(value):
        return f"{value[0:4]}-{value[4:6]}-{value[6:8]}"

    return None


class ODataNormalizer:
    """Unwraps OData V2 envelopes and maps entities to domain records."""

    @staticmethod
    def extract_entity(payload: Any) -> Optional[Dict[str, Any]]:
        """
        Return ``payload["d"]`` or None when the envelope holds no entity.

        Raises:
            ValueError: If ``d`` is present but not an object.
        """
        if not isinstance(payload, dict):
            raise ValueError("Upstream response is not a JSON object")
        entity = payload.get("d")
        if entity is None:
            return None
        if not isinstance(entity, dict):
            raise ValueError("Upstream entity is not a JSON object")
        return entity

    @classmethod
    def extract_results(cls, payload: Any) -> List[Dict[str, Any]]:
        """
        Return ``payload["d"]["results"]``, defaulting to an empty list.

        Raises:
            ValueError: If ``results`` is present but not a list of objects.
        """
        container = cls.extract_entity(payload)
        if container is None:
            return []
        results = container.get("results")
        if results is None:
            return []
        if not isinstance(results, list) or not all(isinstance(r, dict) for r in results):
            raise ValueError("Upstream results is not a list of JSON objects")
        return results

    @staticmethod
    def normalize(entity: Dict[str, Any], record_type: Type[R]) -> R:
        return record_type.from_entity(entity)

    @classmethod
    def normalize_many(cls, entities: Sequence[Dict[str, Any]], record_type: Type[R]) -> List[R]:
        return [cls.normalize(entity, record_type) for entity in entities]
