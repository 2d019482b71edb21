"""File-system document store: references, snapshots, queries and operations."""

from dummydb.store.database import Database, initialize_db
from dummydb.store.documents import add_doc, delete_doc, get_doc, get_docs, set_doc
from dummydb.store.query import Query, query, where
from dummydb.store.reference import (
    CollectionReference,
    DocumentReference,
    Reference,
    collection,
    doc,
)
from dummydb.store.snapshot import DocumentSnapshot
