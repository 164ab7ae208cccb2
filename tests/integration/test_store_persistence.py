"""Integration tests for Store persistence across sessions."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from minidb import Record, Store
from minidb.infrastructure.config import Config, StoreConfig
from minidb.infrastructure.metrics import MetricsRegistry


# Pretty-printed document as produced by earlier releases of the on-disk format
REFERENCE_USERS_FILE = """{
  "name": "users",
  "records": {
    "1": {
      "id": 1,
      "data": {
        "role": "Admin",
        "name": "Stan"
      }
    },
    "2": {
      "id": 2,
      "data": {
        "name": "Ada",
        "role": "User"
      }
    }
  }
}"""


@pytest.mark.integration
class TestStorePersistence:
    """End-to-end save/load behaviour."""

    def test_create_new_database_directory(
        self, temp_dir: Path, metrics_registry: MetricsRegistry
    ) -> None:
        """Constructing a store creates its directory."""
        path = temp_dir / "test_data_1"
        assert not path.exists()

        Store(path, metrics=metrics_registry)

        assert path.is_dir()

    def test_save_and_load_database(
        self, temp_dir: Path, metrics_registry: MetricsRegistry
    ) -> None:
        """A saved table is restored by a new store over the same directory."""
        path = temp_dir / "test_data_3"
        db = Store(path, metrics=metrics_registry)
        db.create_table("products")
        db.insert("products", Record.new(10, name="Laptop", price="999"))
        db.save()

        assert (path / "products.json").exists()

        db2 = Store(path, metrics=metrics_registry)
        db2.load()

        table = db2.get_table("products")
        assert table is not None
        record = table.get(10)
        assert record is not None
        assert record.data["name"] == "Laptop"
        assert record.data["price"] == "999"
        assert table == db.get_table("products")

    def test_round_trip_many_tables(
        self, temp_dir: Path, metrics_registry: MetricsRegistry
    ) -> None:
        """Several tables with many records survive a save/load cycle."""
        db = Store(temp_dir, metrics=metrics_registry)
        for t in range(3):
            name = f"table_{t}"
            db.create_table(name)
            for i in range(25):
                db.insert(name, Record.new(i * 1000, index=str(i), table=name, note="ünïcödé"))
        db.create_table("empty")
        db.save()

        restored = Store(temp_dir, metrics=metrics_registry)
        report = restored.load()

        assert sorted(report.tables) == sorted(db.table_names())
        for name in db.table_names():
            assert restored.get_table(name) == db.get_table(name)

    def test_save_twice_same_content(
        self, temp_dir: Path, metrics_registry: MetricsRegistry
    ) -> None:
        """Two saves without mutation deserialize to the same content."""
        db = Store(temp_dir, metrics=metrics_registry)
        db.create_table("t")
        db.insert("t", Record.new(1, a="1"))

        db.save()
        first = json.loads((temp_dir / "t.json").read_text())
        db.save()
        second = json.loads((temp_dir / "t.json").read_text())

        assert first == second

    def test_load_merges_with_memory(
        self, temp_dir: Path, metrics_registry: MetricsRegistry
    ) -> None:
        """In-memory tables without files survive a load."""
        writer = Store(temp_dir, metrics=metrics_registry)
        writer.create_table("b")
        writer.insert("b", Record.new(1, k="v"))
        writer.save()

        reader = Store(temp_dir, metrics=metrics_registry)
        reader.create_table("a")
        reader.insert("a", Record.new(5, only="memory"))
        reader.load()

        assert reader.table_names() == ["a", "b"]
        assert reader.get_table("a").get(5).data == {"only": "memory"}
        assert reader.get_table("b").get(1).data == {"k": "v"}

    def test_load_reference_format(
        self, temp_dir: Path, metrics_registry: MetricsRegistry
    ) -> None:
        """Files in the established on-disk format load unchanged."""
        (temp_dir / "users.json").write_text(REFERENCE_USERS_FILE, encoding="utf-8")

        db = Store(temp_dir, metrics=metrics_registry)
        db.load()

        users = db.get_table("users")
        assert len(users) == 2
        assert users.get(1).data == {"name": "Stan", "role": "Admin"}
        assert users.get(2).data["name"] == "Ada"

    def test_renamed_file_loads_under_recorded_name(
        self, temp_dir: Path, metrics_registry: MetricsRegistry
    ) -> None:
        """Renaming a table file does not rename the table."""
        db = Store(temp_dir, metrics=metrics_registry)
        db.create_table("products")
        db.insert("products", Record.new(10, price="999"))
        db.save()
        (temp_dir / "products.json").rename(temp_dir / "backup.json")

        restored = Store(temp_dir, metrics=metrics_registry)
        restored.load()

        assert restored.table_names() == ["products"]

        # The next save writes the table back under its own name
        restored.save()
        assert (temp_dir / "products.json").is_file()

    def test_recreated_table_saves_empty(
        self, temp_dir: Path, metrics_registry: MetricsRegistry
    ) -> None:
        """Re-creating a table and saving overwrites the old records on disk."""
        db = Store(temp_dir, metrics=metrics_registry)
        db.create_table("t")
        db.insert("t", Record.new(1, a="b"))
        db.save()

        db.create_table("t")
        db.save()

        restored = Store(temp_dir, metrics=metrics_registry)
        restored.load()
        assert len(restored.get_table("t")) == 0

    def test_configured_store_round_trip(
        self, temp_dir: Path, metrics_registry: MetricsRegistry
    ) -> None:
        """A store built from config uses its directory and write mode."""
        config = Config(
            store=StoreConfig(data_dir=temp_dir / "cfg" / "data", atomic_writes=True, indent=4)
        )
        db = Store.from_config(config, metrics=metrics_registry)
        db.create_table("t")
        db.insert("t", Record.new(3, x="y"))
        db.save()

        text = (temp_dir / "cfg" / "data" / "t.json").read_text()
        assert text.startswith('{\n    "name": "t"')
        assert [p.name for p in (temp_dir / "cfg" / "data").iterdir()] == ["t.json"]

        restored = Store.from_config(config, metrics=metrics_registry)
        restored.load()
        assert restored.get_table("t").get(3).data == {"x": "y"}
