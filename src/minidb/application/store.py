"""Store - unified entry point for the record store.

This module provides the Store class that owns the in-memory tables and
persists them, one file per table, through a TableRepository.

Usage:
    from minidb.application import Store
    from minidb.domain.entities import Record

    store = Store("/path/to/data")
    store.create_table("users")
    store.insert("users", Record.new(1, name="Stan", role="Admin"))
    store.save()

    # Later, in a new session
    store = Store("/path/to/data")
    store.load()
    store.get_table("users").get(1).data["name"]  # "Stan"

Persistence is whole-table: save rewrites every table's file and load reads
every table file in the directory. Load merges into memory by each table's
recorded name; tables without a file are left alone.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Literal, Mapping

from minidb.adapters.outbound.json_table_repository import JsonTableRepository
from minidb.application.errors import (
    StoreDirectoryError,
    TableLoadError,
    TableNotFoundError,
    TableSaveError,
)
from minidb.domain.entities import Record, Table
from minidb.domain.value_objects import validate_table_name
from minidb.infrastructure.config import Config, get_config
from minidb.infrastructure.logging import get_logger
from minidb.infrastructure.metrics import MetricsRegistry, get_metrics
from minidb.infrastructure.tracing import trace_span
from minidb.ports.outbound.table_repository import PersistenceError, TableRepository


logger = get_logger(__name__)

MissingTablePolicy = Literal["ignore", "raise"]


@dataclass(frozen=True)
class PersistenceFailure:
    """A single table file that could not be saved or loaded."""

    path: Path
    error: Exception
    table_name: str | None = None


@dataclass(frozen=True)
class PersistenceReport:
    """Outcome of a save or load.

    Attributes:
        tables: Names of the tables saved or loaded, in processing order.
        failures: Per-file failures. Only populated in best-effort mode;
            strict mode raises on the first failure instead.
    """

    tables: tuple[str, ...] = ()
    failures: tuple[PersistenceFailure, ...] = ()

    @property
    def ok(self) -> bool:
        """True if nothing failed."""
        return not self.failures

    @property
    def failed_paths(self) -> list[Path]:
        """Paths of the files that failed."""
        return [failure.path for failure in self.failures]


class Store:
    """In-memory tables bound to a directory of table files.

    The Store is the single owner of its tables. Creating a table that
    already exists replaces it, discarding its records. Inserting into a
    table that does not exist drops the record unless the missing-table
    policy is "raise".

    Error Handling:
        save and load stop at the first failing file and raise
        TableSaveError / TableLoadError by default. In best-effort mode
        they attempt every file and report failures instead.

    Thread Safety:
        Not thread-safe. Use one Store per directory from a single thread.
    """

    def __init__(
        self,
        directory: str | Path,
        *,
        repository: TableRepository | None = None,
        metrics: MetricsRegistry | None = None,
        atomic_writes: bool | None = None,
        best_effort: bool | None = None,
        missing_table_policy: MissingTablePolicy | None = None,
        strict_directory: bool | None = None,
    ) -> None:
        """Initialize the store and make sure its directory exists.

        Args:
            directory: Directory for table files. Created with parents.
            repository: Table file adapter. Defaults to a JsonTableRepository
                over directory. An injected repository must point at the
                same directory.
            metrics: Metrics registry (default: process-wide registry).
            atomic_writes: Write via temp file + rename (default from config).
                Only used when no repository is given.
            best_effort: Default mode for save/load (default from config).
            missing_table_policy: "ignore" drops inserts into missing tables,
                "raise" raises TableNotFoundError (default from config).
            strict_directory: Raise StoreDirectoryError if the directory
                cannot be created, instead of logging (default from config).

        Raises:
            ValueError: If repository points at a different directory.
            StoreDirectoryError: If strict_directory is set and the
                directory cannot be created.
        """
        store_config = get_config().store

        if repository is not None and (
            Path(directory).resolve() != Path(repository.directory).resolve()
        ):
            raise ValueError(
                f"repository directory {repository.directory} does not match "
                f"store directory {directory}"
            )

        if repository is None:
            repository = JsonTableRepository(
                directory,
                indent=store_config.indent,
                atomic_writes=(
                    store_config.atomic_writes if atomic_writes is None else atomic_writes
                ),
            )

        self._repository = repository
        self._metrics = metrics or get_metrics()
        self._best_effort = store_config.best_effort if best_effort is None else best_effort
        self._missing_table_policy: MissingTablePolicy = (
            missing_table_policy or store_config.missing_table_policy
        )
        strict = store_config.strict_directory if strict_directory is None else strict_directory

        self._tables: dict[str, Table] = {}

        try:
            self._repository.ensure_directory()
        except OSError as e:
            if strict:
                raise StoreDirectoryError(self.directory, str(e)) from e
            # Soft failure: the store stays usable in memory and save
            # surfaces the I/O error later
            logger.error(
                "store_directory_create_failed",
                directory=str(self.directory),
                error=str(e),
            )

        self._metrics.tables_in_memory.set(0)

    @classmethod
    def from_config(
        cls,
        config: Config,
        metrics: MetricsRegistry | None = None,
    ) -> Store:
        """Create a Store from configuration."""
        store_config = config.store
        repository = JsonTableRepository(
            store_config.data_dir,
            indent=store_config.indent,
            atomic_writes=store_config.atomic_writes,
        )
        return cls(
            store_config.data_dir,
            repository=repository,
            metrics=metrics,
            best_effort=store_config.best_effort,
            missing_table_policy=store_config.missing_table_policy,
            strict_directory=store_config.strict_directory,
        )

    @property
    def directory(self) -> Path:
        """Get the directory holding the table files."""
        return self._repository.directory

    @property
    def tables(self) -> Mapping[str, Table]:
        """Read-only view of the in-memory tables, keyed by name."""
        return MappingProxyType(self._tables)

    @property
    def missing_table_policy(self) -> MissingTablePolicy:
        """Get the policy applied when inserting into a missing table."""
        return self._missing_table_policy

    def get_table(self, name: str) -> Table | None:
        """Get a table by name, or None if it does not exist."""
        return self._tables.get(name)

    def has_table(self, name: str) -> bool:
        """Check if a table exists in memory."""
        return name in self._tables

    def table_names(self) -> list[str]:
        """Get the names of the in-memory tables, sorted."""
        return sorted(self._tables)

    # =========================================================================
    # Mutation
    # =========================================================================

    def create_table(self, name: str) -> Table:
        """Create an empty table, replacing any table with the same name.

        Re-creating an existing table discards all of its records.

        Args:
            name: Table name. Also the file stem on disk.

        Returns:
            The new, empty table.

        Raises:
            ValueError: If the name cannot be used as a file stem.
        """
        table = Table.new(validate_table_name(name))
        replaced = name in self._tables
        self._tables[name] = table

        self._metrics.tables_created_total.inc()
        self._metrics.tables_in_memory.set(len(self._tables))
        logger.info("table_created", table=name, replaced=replaced)

        return table

    def insert(self, table_name: str, record: Record) -> bool:
        """Insert a record into a table, overwriting any record with its id.

        Args:
            table_name: Name of the target table.
            record: The record to insert.

        Returns:
            True if the record was stored, False if the table does not
            exist and the record was dropped.

        Raises:
            TableNotFoundError: If the table does not exist and the
                missing-table policy is "raise".
        """
        table = self._tables.get(table_name)

        if table is None:
            if self._missing_table_policy == "raise":
                raise TableNotFoundError(table_name)

            self._metrics.inserts_dropped_total.inc()
            logger.debug(
                "insert_dropped_missing_table",
                table=table_name,
                record_id=record.id,
            )
            return False

        table.put(record)
        self._metrics.records_inserted_total.inc()
        return True

    # =========================================================================
    # Persistence
    # =========================================================================

    def save(self, *, best_effort: bool | None = None) -> PersistenceReport:
        """Write every in-memory table to its file, overwriting it.

        Args:
            best_effort: Continue past failing tables and report them
                (default: the store's configured mode).

        Returns:
            Report of the tables written and, in best-effort mode, the
            tables that failed.

        Raises:
            TableSaveError: On the first failing table, unless best-effort.
        """
        if best_effort is None:
            best_effort = self._best_effort

        saved: list[str] = []
        failures: list[PersistenceFailure] = []

        with self._metrics.save_duration_seconds.time(), trace_span(
            "minidb.save",
            {"minidb.table_count": len(self._tables), "minidb.best_effort": best_effort},
        ) as span:
            for name in sorted(self._tables):
                table = self._tables[name]
                try:
                    path = self._repository.write_table(table)
                except PersistenceError as e:
                    self._metrics.tables_saved_total.labels(status="error").inc()
                    logger.error(
                        "table_save_failed",
                        table=name,
                        path=str(e.path),
                        error=str(e),
                    )
                    if not best_effort:
                        raise TableSaveError(name, e.path, str(e)) from e
                    failures.append(PersistenceFailure(path=e.path, error=e, table_name=name))
                    continue

                self._metrics.tables_saved_total.labels(status="success").inc()
                logger.info("table_saved", table=name, path=str(path), records=len(table))
                saved.append(name)

            span.set_attribute("minidb.tables_written", len(saved))
            span.set_attribute("minidb.failure_count", len(failures))

        logger.info("store_saved", tables=len(saved), failures=len(failures))
        return PersistenceReport(tables=tuple(saved), failures=tuple(failures))

    def load(self, *, best_effort: bool | None = None) -> PersistenceReport:
        """Read every table file in the directory into memory.

        Each loaded table replaces the in-memory table with the same name.
        The name comes from the file's contents, not its filename. Tables
        with no file on disk are kept.

        Args:
            best_effort: Skip failing files and report them (default: the
                store's configured mode).

        Returns:
            Report of the tables loaded and, in best-effort mode, the files
            that failed.

        Raises:
            TableLoadError: On the first failing file (or an unreadable
                directory), unless best-effort.
        """
        if best_effort is None:
            best_effort = self._best_effort

        loaded: list[str] = []
        failures: list[PersistenceFailure] = []

        with self._metrics.load_duration_seconds.time(), trace_span(
            "minidb.load",
            {"minidb.best_effort": best_effort},
        ) as span:
            try:
                paths = self._repository.list_table_files()
            except PersistenceError as e:
                self._load_failed(e, best_effort, failures)
                paths = []

            for path in paths:
                try:
                    table = self._repository.read_table(path)
                except PersistenceError as e:
                    self._load_failed(e, best_effort, failures)
                    continue

                self._tables[table.name] = table
                self._metrics.tables_loaded_total.labels(status="success").inc()
                logger.info("table_loaded", table=table.name, path=str(path), records=len(table))
                loaded.append(table.name)

            span.set_attribute("minidb.tables_read", len(loaded))
            span.set_attribute("minidb.failure_count", len(failures))

        self._metrics.tables_in_memory.set(len(self._tables))
        logger.info("store_loaded", tables=len(loaded), failures=len(failures))
        return PersistenceReport(tables=tuple(loaded), failures=tuple(failures))

    def _load_failed(
        self,
        error: PersistenceError,
        best_effort: bool,
        failures: list[PersistenceFailure],
    ) -> None:
        """Record a load failure, or raise it in strict mode."""
        self._metrics.tables_loaded_total.labels(status="error").inc()
        logger.error("table_load_failed", path=str(error.path), error=str(error))

        if not best_effort:
            self._metrics.tables_in_memory.set(len(self._tables))
            raise TableLoadError(error.path, str(error)) from error

        failures.append(PersistenceFailure(path=error.path, error=error))
