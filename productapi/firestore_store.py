"""
Google Cloud Firestore backend for the document store.

Wraps ``google.cloud.firestore.AsyncClient`` and translates
``google.api_core`` exceptions into the store errors the facade understands.
Credentials and project resolution follow Application Default Credentials
unless a project id is configured.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

from google.api_core import exceptions as gcp_exceptions
from google.cloud import firestore

from .database import (
    Document,
    DocumentNotFound,
    DocumentStore,
    StoreError,
    StoreUnavailable,
    ensure_mapping,
)

logger = logging.getLogger(__name__)


@contextmanager
def _translate_errors():
    try:
        yield
    except gcp_exceptions.NotFound as e:
        raise DocumentNotFound(e.message) from e
    except (
        gcp_exceptions.ServiceUnavailable,
        gcp_exceptions.DeadlineExceeded,
        gcp_exceptions.RetryError,
    ) as e:
        raise StoreUnavailable(str(e)) from e
    except gcp_exceptions.GoogleAPICallError as e:
        raise StoreError(e.message) from e


class FirestoreDocumentStore(DocumentStore):
    def __init__(
        self,
        client: Any = None,
        project: Optional[str] = None,
        database: Optional[str] = None,
    ):
        if client is None:
            kwargs = {}
            if project:
                kwargs["project"] = project
            if database:
                kwargs["database"] = database
            client = firestore.AsyncClient(**kwargs)
            logger.info("Firestore client created for project %s", client.project)
        self._client = client

    async def add(self, collection: str, data: Dict[str, Any]) -> str:
        data = ensure_mapping(data)
        with _translate_errors():
            _, ref = await self._client.collection(collection).add(data)
        return ref.id

    async def get_all(self, collection: str) -> List[Document]:
        with _translate_errors():
            return [
                Document(snapshot.id, snapshot.to_dict() or {})
                async for snapshot in self._client.collection(collection).stream()
            ]

    async def get(self, collection: str, doc_id: str) -> Optional[Document]:
        with _translate_errors():
            snapshot = await self._client.collection(collection).document(doc_id).get()
        if not snapshot.exists:
            return None
        return Document(snapshot.id, snapshot.to_dict() or {})

    async def update(self, collection: str, doc_id: str, data: Dict[str, Any]) -> None:
        # Keys are Firestore field paths, so "a.b" updates a nested field.
        data = ensure_mapping(data)
        if not data:
            raise StoreError("cannot update with an empty document")
        with _translate_errors():
            await self._client.collection(collection).document(doc_id).update(data)

    async def delete(self, collection: str, doc_id: str) -> None:
        with _translate_errors():
            await self._client.collection(collection).document(doc_id).delete()
