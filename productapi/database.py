import copy
import secrets
import string
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

# Document store capability used by the product facade, and the in-memory
# backend used for local runs and tests.

_ID_ALPHABET = string.ascii_letters + string.digits
_ID_LENGTH = 20


class StoreError(Exception):
    """A document store call failed."""


class DocumentNotFound(StoreError):
    """The addressed document does not exist."""


class StoreUnavailable(StoreError):
    """The document store could not be reached."""


@dataclass
class Document:
    id: str
    data: Dict[str, Any]


def ensure_mapping(data: Any) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise StoreError("document data must be a JSON object")
    return data


def generate_id() -> str:
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(_ID_LENGTH))


class DocumentStore:
    """
    Async document store keyed by collection name and document id.

    ``update`` merges the given fields into an existing document and raises
    ``DocumentNotFound`` when there is none. ``delete`` of an absent document
    is not an error.
    """

    async def add(self, collection: str, data: Dict[str, Any]) -> str:
        raise NotImplementedError

    async def get_all(self, collection: str) -> List[Document]:
        raise NotImplementedError

    async def get(self, collection: str, doc_id: str) -> Optional[Document]:
        raise NotImplementedError

    async def update(self, collection: str, doc_id: str, data: Dict[str, Any]) -> None:
        raise NotImplementedError

    async def delete(self, collection: str, doc_id: str) -> None:
        raise NotImplementedError

    async def close(self) -> None:
        return None


class InMemoryDocumentStore(DocumentStore):
    def __init__(self):
        self._collections: Dict[str, Dict[str, Dict[str, Any]]] = {}

    def _collection(self, name: str) -> Dict[str, Dict[str, Any]]:
        return self._collections.setdefault(name, {})

    async def add(self, collection: str, data: Dict[str, Any]) -> str:
        data = ensure_mapping(data)
        docs = self._collection(collection)
        doc_id = generate_id()
        while doc_id in docs:
            doc_id = generate_id()
        docs[doc_id] = copy.deepcopy(data)
        return doc_id

    async def get_all(self, collection: str) -> List[Document]:
        return [
            Document(doc_id, copy.deepcopy(data))
            for doc_id, data in self._collection(collection).items()
        ]

    async def get(self, collection: str, doc_id: str) -> Optional[Document]:
        data = self._collection(collection).get(doc_id)
        if data is None:
            return None
        return Document(doc_id, copy.deepcopy(data))

    async def update(self, collection: str, doc_id: str, data: Dict[str, Any]) -> None:
        data = ensure_mapping(data)
        if not data:
            raise StoreError("cannot update with an empty document")
        docs = self._collection(collection)
        if doc_id not in docs:
            raise DocumentNotFound(f"No document to update: {collection}/{doc_id}")
        docs[doc_id].update(copy.deepcopy(data))

    async def delete(self, collection: str, doc_id: str) -> None:
        self._collection(collection).pop(doc_id, None)

    def clear(self):
        self._collections.clear()


def build_store(settings) -> DocumentStore:
    """Create the store backend named by ``settings.store_backend``."""
    if settings.store_backend == "memory":
        return InMemoryDocumentStore()
    if settings.store_backend == "firestore":
        from .firestore_store import FirestoreDocumentStore

        return FirestoreDocumentStore(
            project=settings.firestore_project_id,
            database=settings.firestore_database,
        )
    raise ValueError(f"unknown store backend: {settings.store_backend!r}")
