"""Local, file-system backed JSON document store."""

from dummydb.config import DbConfig, create_config
from dummydb.errors import ConfigError, DocumentDeleteError, DummyDbError
from dummydb.store import (
    CollectionReference,
    Database,
    DocumentReference,
    DocumentSnapshot,
    Query,
    Reference,
    add_doc,
    collection,
    delete_doc,
    doc,
    get_doc,
    get_docs,
    initialize_db,
    query,
    set_doc,
    where,
)

__version__ = "0.1.0"
