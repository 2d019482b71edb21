"""Command line interface for dummydb."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
from rich.console import Console
from rich.table import Table

from dummydb.config import DB_NAME, DB_ROOT_DIR, create_config
from dummydb.errors import DummyDbError
from dummydb.store import (
    Database,
    Query,
    add_doc,
    collection,
    delete_doc,
    doc,
    get_doc,
    get_docs,
    initialize_db,
    set_doc,
)
from dummydb.store.query import parse_clause
from dummydb.web.app import app as web_app


console = Console()
app = typer.Typer(help="dummydb - local file-system document store")

RootOption = typer.Option(Path(DB_ROOT_DIR), "--root", help="Root directory holding the databases")
NameOption = typer.Option(DB_NAME, "--name", help="Database name")
VerboseOption = typer.Option(False, "--verbose", "-v", help="Verbose logging")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _open_db(root: Path, name: str) -> Database:
    try:
        return initialize_db(create_config(name=name, root_dir=root))
    except DummyDbError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _parse_data(raw: str) -> Dict[str, Any]:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"Invalid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise typer.BadParameter("Document data must be a JSON object")
    return data


@app.command()
def init(
    root: Path = RootOption,
    name: str = NameOption,
    verbose: bool = VerboseOption,
) -> None:
    """Create the root directory and bootstrap the database."""
    _setup_logging(verbose)
    root.mkdir(parents=True, exist_ok=True)
    db = _open_db(root, name)
    console.print(f"Database ready at [bold]{db.path}[/bold]")


@app.command()
def get(
    collection_id: str = typer.Argument(..., help="Collection name"),
    doc_id: str = typer.Argument(..., help="Document id"),
    root: Path = RootOption,
    name: str = NameOption,
    verbose: bool = VerboseOption,
) -> None:
    """Print one document as JSON."""
    _setup_logging(verbose)
    db = _open_db(root, name)
    snapshot = asyncio.run(get_doc(doc(collection(db, collection_id), doc_id)))
    if not snapshot.exists():
        console.print("[yellow]Document not found.[/yellow]")
        raise typer.Exit(code=1)
    console.print_json(data=snapshot.to_dict())


@app.command("set")
def set_command(
    collection_id: str = typer.Argument(..., help="Collection name"),
    doc_id: str = typer.Argument(..., help="Document id"),
    data: str = typer.Argument(..., help="Document data as a JSON object"),
    root: Path = RootOption,
    name: str = NameOption,
    verbose: bool = VerboseOption,
) -> None:
    """Write a document, replacing any existing one."""
    _setup_logging(verbose)
    payload = _parse_data(data)
    db = _open_db(root, name)
    asyncio.run(set_doc(doc(collection(db, collection_id), doc_id), payload))
    console.print(f"Saved [bold]{collection_id}/{doc_id}[/bold]")


@app.command()
def add(
    collection_id: str = typer.Argument(..., help="Collection name"),
    data: str = typer.Argument(..., help="Document data as a JSON object"),
    root: Path = RootOption,
    name: str = NameOption,
    verbose: bool = VerboseOption,
) -> None:
    """Add a document under a generated id and print the id."""
    _setup_logging(verbose)
    payload = _parse_data(data)
    db = _open_db(root, name)
    ref = asyncio.run(add_doc(collection(db, collection_id), payload))
    console.print(ref.id)


@app.command()
def delete(
    collection_id: str = typer.Argument(..., help="Collection name"),
    doc_id: str = typer.Argument(..., help="Document id"),
    root: Path = RootOption,
    name: str = NameOption,
    verbose: bool = VerboseOption,
) -> None:
    """Delete a document. Missing documents are not an error."""
    _setup_logging(verbose)
    db = _open_db(root, name)
    try:
        asyncio.run(delete_doc(doc(collection(db, collection_id), doc_id)))
    except DummyDbError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc
    console.print(f"Deleted [bold]{collection_id}/{doc_id}[/bold]")


@app.command("list")
def list_command(
    collection_id: str = typer.Argument(..., help="Collection name"),
    where: Optional[List[str]] = typer.Option(
        None, "--where", "-w", help='Filter such as "age>=18"; repeatable'
    ),
    root: Path = RootOption,
    name: str = NameOption,
    verbose: bool = VerboseOption,
) -> None:
    """List up to 100 documents of a collection, optionally filtered."""
    _setup_logging(verbose)
    db = _open_db(root, name)
    source = Query(collection(db, collection_id))
    for expression in where or []:
        try:
            clause = parse_clause(expression)
        except ValueError as exc:
            raise typer.BadParameter(str(exc)) from exc
        source = source.where(clause.field, clause.op, clause.value)

    snapshots = asyncio.run(get_docs(source))
    if not snapshots:
        console.print("[yellow]No documents found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Id")
    table.add_column("Updated")
    table.add_column("Data")

    for snapshot in snapshots:
        meta = snapshot.metadata()
        data = snapshot.data()
        table.add_row(
            snapshot.id,
            meta.updated_at if meta is not None else "-",
            json.dumps(data, ensure_ascii=False)[:180] if data is not None else "[dim]unreadable[/dim]",
        )

    console.print(table)


@app.command()
def web(
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(8000, help="Server port"),
    root: Path = RootOption,
) -> None:
    """Serve the HTTP API for the databases under --root."""
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover - defensive
        raise typer.BadParameter(
            "uvicorn is not installed. Install the web extras with \"python -m pip install '.[web]'\""
        ) from exc

    web_app.state.root_dir = root
    console.print(f"Starting HTTP API on http://{host}:{port} (root: {root})")
    uvicorn.run(
        web_app,
        host=host,
        port=port,
        reload=False,
        log_level="info",
    )
