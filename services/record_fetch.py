"""Fault-tolerant fetch helpers shared by the weekly and daily collectors."""

from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from services.record_store import Record, RecordStore
from utils.logger import setup_logger

logger = setup_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def to_model(model: Type[ModelT], data: Record, source: str) -> Optional[ModelT]:
    """Validate a raw document, dropping it (with a warning) if it is malformed."""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        logger.warning("Skipping malformed document %s: %s", source, e.errors()[:3])
        return None


async def fetch_doc(
    store: RecordStore,
    collection: str,
    doc_id: str,
    model: Type[ModelT],
    **overrides: Any,
) -> Optional[ModelT]:
    """Point lookup. Missing documents and store failures both yield None."""
    source = f"{collection}/{doc_id}"
    try:
        raw = await store.get_doc(collection, doc_id)
    except Exception as e:
        logger.warning("Fetch of %s failed, treating as missing: %s", source, e)
        return None
    if raw is None:
        return None
    return to_model(model, {**raw, **overrides}, source)


async def fetch_query(
    store: RecordStore,
    collection: str,
    predicates: Dict[str, Any],
    model: Type[ModelT],
    **overrides: Any,
) -> List[ModelT]:
    """Filtered query. Store failures yield an empty list for this query only."""
    try:
        rows = await store.query_docs(collection, predicates)
    except Exception as e:
        logger.warning("Query on %s %s failed, treating as empty: %s", collection, predicates, e)
        return []
    records = []
    for raw in rows:
        record = to_model(model, {**raw, **overrides}, f"{collection}/{raw.get('id', '?')}")
        if record is not None:
            records.append(record)
    return records


def present(records: List[Optional[ModelT]]) -> List[ModelT]:
    """Keep only the records that exist, preserving order."""
    return [record for record in records if record is not None]
