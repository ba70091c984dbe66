"""Document store adapter used by the coaching pipeline."""

from typing import Any, Dict, List, Optional, Protocol

from models.database import get_database
from utils.logger import setup_logger

logger = setup_logger(__name__)

Record = Dict[str, Any]


class RecordStore(Protocol):
    """Point lookups and filtered queries over loosely-typed documents.

    ``get_doc`` returns ``None`` when the document does not exist; that is a
    normal outcome, not an error. Transport failures raise.
    """

    async def get_doc(self, collection: str, doc_id: str) -> Optional[Record]:
        ...

    async def query_docs(self, collection: str, predicates: Record) -> List[Record]:
        ...

    async def set_doc(self, collection: str, doc_id: str, data: Record) -> None:
        ...


def _serialize(document: Record) -> Record:
    """Expose the Mongo ``_id`` as a plain string ``id``."""
    document = dict(document)
    if "_id" in document:
        document["id"] = str(document.pop("_id"))
    return document


class MongoRecordStore:
    """RecordStore backed by the async Motor client."""

    def __init__(self, database=None):
        self._database = database

    @property
    def database(self):
        return self._database if self._database is not None else get_database()

    async def get_doc(self, collection: str, doc_id: str) -> Optional[Record]:
        document = await self.database[collection].find_one({"_id": doc_id})
        if document is None:
            return None
        return _serialize(document)

    async def query_docs(self, collection: str, predicates: Record) -> List[Record]:
        cursor = self.database[collection].find(predicates)
        documents = await cursor.to_list(length=None)
        return [_serialize(document) for document in documents]

    async def set_doc(self, collection: str, doc_id: str, data: Record) -> None:
        await self.database[collection].replace_one({"_id": doc_id}, data, upsert=True)
        logger.debug("Saved %s/%s", collection, doc_id)
