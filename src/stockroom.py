#!/usr/bin/env python3
"""
Command-line entry point for the Stockroom exercises.
"""

from typing import Dict, Iterable, Optional, Type

import typer
from rich import print
from rich.markup import escape

from config import INVENTORY_LOG_FILE, STUDENTS_REPORT_FILE
from events import EventBus, Event, EventType
from models import (
    InventoryItem,
    ElectronicItem,
    GroceryItem,
    Patient,
    Prescription,
    Student,
    Transaction,
)
from repositories import ErrorKind, RepositoryError, SnapshotRepository
from services import (
    WarehouseService,
    ItemCategory,
    InventoryLogService,
    HealthSystemService,
    StudentResultService,
    StudentRecordError,
    MissingFieldError,
    FinanceService,
)

app = typer.Typer(help="Stockroom inventory and records CLI")

ENTITY_TYPES: Dict[str, Type] = {
    cls.__name__: cls
    for cls in (InventoryItem, ElectronicItem, GroceryItem, Patient, Prescription, Student, Transaction)
}

ERROR_PREFIXES = {
    ErrorKind.DUPLICATE_IDENTITY: "Add failed",
    ErrorKind.NOT_FOUND: "Not found",
    ErrorKind.INVALID_VALUE: "Invalid value",
    ErrorKind.PERSISTENCE_WRITE: "Could not save",
    ErrorKind.PERSISTENCE_READ: "Could not read",
    ErrorKind.PERSISTENCE_FORMAT: "Corrupt data",
}


def describe_error(error: RepositoryError) -> str:
    """Turn a repository error into a one-line user message."""
    return f"{ERROR_PREFIXES.get(error.kind, 'Error')}: {error}"


def print_items(title: str, items: Iterable, empty_message: str = "No items to display.") -> None:
    print(f"[bold]=== {escape(title)} ===[/bold]")
    items = list(items)
    if not items:
        print(empty_message)
        return
    for item in items:
        print(escape(str(item)))


def _print_event(event: Event) -> None:
    data = event.data
    if event.type == EventType.ERROR_OCCURRED:
        error = data.get('error')
        message = describe_error(error) if isinstance(error, RepositoryError) else data.get('message', '')
        print(f"[red]{escape(message)}[/red]")
    elif event.type == EventType.STOCK_UPDATED:
        print(f"Updated quantity for ID {data['id']} ({escape(data['name'])}) -> {data['quantity']}")
    elif event.type == EventType.ITEM_REMOVED:
        print(f"Removed item with ID {data['id']}")
    elif event.type == EventType.ITEM_ADDED:
        print(f"Added item: {escape(str(data['item']))}")
    elif event.type in (EventType.SNAPSHOT_SAVED, EventType.SNAPSHOT_LOADED):
        verb = "Saved" if event.type == EventType.SNAPSHOT_SAVED else "Loaded"
        print(f"{verb} {data['count']} items ({escape(data['path'])}).")


@app.command()
def warehouse(
    save: bool = typer.Option(False, "--save", help="Snapshot both stores when done."),
    data_dir: Optional[str] = typer.Option(None, "--data-dir", help="Snapshot directory."),
):
    """
    Seed the warehouse and exercise duplicate, missing and invalid requests.
    """
    bus = EventBus()
    service = WarehouseService(snapshot_dir=data_dir, event_bus=bus)
    service.seed_data()
    bus.subscribe_all(_print_event)

    print_items("Groceries", service.groceries)
    print_items("Electronics", service.electronics)

    print("\nAttempting to add a duplicate grocery item (ID 101)...")
    duplicate = service.groceries.get(101)
    service.add_item_safe(GroceryItem(101, "Rice (5kg) - Duplicate", 10, duplicate.expiry_date))

    print("\nAttempting to remove non-existent electronic item (ID 999)...")
    service.remove_item(ItemCategory.ELECTRONIC, 999)

    print("\nAttempting to set invalid quantity (negative) for Grocery ID 102...")
    service.increase_stock(ItemCategory.GROCERY, 102, -1000)

    print("\n[bold]Final inventory state:[/bold]")
    print_items("Groceries", service.groceries)
    print_items("Electronics", service.electronics)

    if save:
        try:
            service.save()
        except RepositoryError as e:
            print(f"[red]{escape(describe_error(e))}[/red]")
            raise typer.Exit(code=1)


@app.command()
def inventory_log(
    file: Optional[str] = typer.Option(None, "--file", help=f"Snapshot file (default {INVENTORY_LOG_FILE})."),
):
    """
    Seed the inventory log, save it, then reload it in a fresh session.
    """
    bus = EventBus()
    bus.subscribe(EventType.SNAPSHOT_SAVED, _print_event)
    bus.subscribe(EventType.SNAPSHOT_LOADED, _print_event)

    service = InventoryLogService(file_path=file, event_bus=bus)
    service.seed_sample_data()
    print("Seeded sample data:")
    print_items("Inventory Items", service.get_all(), "No items in inventory.")

    try:
        service.save_data()

        print("\n--- Simulating a new session (clearing memory) ---\n")
        fresh = InventoryLogService(file_path=file, event_bus=bus)
        fresh.load_data()
    except RepositoryError as e:
        print(f"[red]{escape(describe_error(e))}[/red]")
        raise typer.Exit(code=1)
    print_items("Inventory Items", fresh.get_all(), "No items in inventory.")


@app.command()
def health(patient: int = typer.Option(1, "--patient", help="Patient whose prescriptions to print.")):
    """
    Seed patients and prescriptions, then print one patient's prescriptions.
    """
    service = HealthSystemService()
    service.seed_data()
    service.build_prescription_map()
    print_items("All Patients", service.list_patients())

    try:
        found = service.get_patient(patient)
    except RepositoryError:
        print(f"No patient found with ID {patient}.")
        return

    print_items(
        f"Prescriptions for {found.name} (ID: {found.id})",
        service.get_prescriptions_for_patient(patient),
        "No prescriptions found.",
    )


@app.command()
def students(
    input_file: str = typer.Argument(..., help="Text file of 'id, full name, score' lines."),
    report: Optional[str] = typer.Option(None, "--report", help=f"Report path (default {STUDENTS_REPORT_FILE})."),
):
    """
    Grade the students in INPUT_FILE and write a report.
    """
    service = StudentResultService()
    try:
        store = service.read_students(input_file)
        path = service.write_report(store.list_all(), report)
    except FileNotFoundError:
        print(f"[red]Input file not found: {escape(input_file)}[/red]")
        raise typer.Exit(code=1)
    except MissingFieldError as e:
        print(f"[red]Missing field: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)
    except StudentRecordError as e:
        print(f"[red]Invalid score format: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)
    except UnicodeDecodeError:
        print(f"[red]Input file is not valid UTF-8 text: {escape(input_file)}[/red]")
        raise typer.Exit(code=1)
    except OSError as e:
        print(f"[red]File error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)
    except RepositoryError as e:
        print(f"[red]{escape(describe_error(e))}[/red]")
        raise typer.Exit(code=1)

    print(f"Report successfully written to: {escape(str(path))}")
    print_items("Preview", store)


@app.command()
def finance():
    """
    Process three sample transactions against a savings account.
    """
    service = FinanceService()
    for message in service.run():
        print(escape(message))


@app.command()
def show(
    path: str = typer.Argument(..., help="Snapshot file to read."),
    entity_type: str = typer.Option(..., "--type", help=f"One of: {', '.join(ENTITY_TYPES)}."),
):
    """
    Print every entity stored in a snapshot file.
    """
    if entity_type not in ENTITY_TYPES:
        print(f"[red]Unknown type {escape(entity_type)!r}.[/red]")
        raise typer.Exit(code=2)
    try:
        store = SnapshotRepository(ENTITY_TYPES[entity_type]).load(path)
    except RepositoryError as e:
        print(f"[red]{escape(describe_error(e))}[/red]")
        raise typer.Exit(code=1)
    print_items(entity_type, store)


def main():
    app()


if __name__ == "__main__":
    main()
