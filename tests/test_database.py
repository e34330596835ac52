import sqlite3
from unittest.mock import MagicMock

import mysql.connector
import pytest
from mysql.connector.constants import ClientFlag

from book import Book
from config import DatabaseSettings
from database import BookGateway, StorageError, open_gateway


def test_empty_table_loads_nothing(gateway):
    assert gateway.is_connected
    assert gateway.load_all() == []


def test_insert_assigns_id_and_round_trips(gateway):
    book = Book("Ulysses", "James Joyce", "Classic")
    assert book.id is None

    assert gateway.insert(book) is True
    assert isinstance(book.id, int)

    books = gateway.load_all()
    assert len(books) == 1
    loaded = books[0]
    assert loaded.id == book.id
    assert (loaded.title, loaded.author, loaded.category) == ("Ulysses", "James Joyce", "Classic")


def test_ids_are_unique(gateway):
    first = Book("A", "Author A", "X")
    second = Book("B", "Author B", "Y")
    gateway.insert(first)
    gateway.insert(second)
    assert first.id != second.id
    assert {b.id for b in gateway.load_all()} == {first.id, second.id}


def test_dune_scenario(gateway):
    gateway.insert(Book("Dune", "Frank Herbert", "Sci-Fi"))
    assert [b.to_dict() for b in gateway.load_all()] == [
        {"id": 1, "title": "Dune", "author": "Frank Herbert", "category": "Sci-Fi"}
    ]

    assert gateway.update(Book("Dune Messiah", "Frank Herbert", "Sci-Fi", id=1)) is True
    assert [b.to_dict() for b in gateway.load_all()] == [
        {"id": 1, "title": "Dune Messiah", "author": "Frank Herbert", "category": "Sci-Fi"}
    ]

    assert gateway.delete(1) is True
    assert gateway.load_all() == []


def test_update_with_same_values_succeeds(gateway):
    book = Book("Sapiens", "Yuval Noah Harari", "History")
    gateway.insert(book)
    before = gateway.load_all()

    assert gateway.update(Book("Sapiens", "Yuval Noah Harari", "History", id=book.id)) is True
    assert gateway.load_all() == before


def test_delete_removes_only_that_record(gateway):
    keep = Book("Keep", "Someone", "Misc")
    drop = Book("Drop", "Someone Else", "Misc")
    gateway.insert(keep)
    gateway.insert(drop)

    assert gateway.delete(drop.id) is True
    assert [b.id for b in gateway.load_all()] == [keep.id]


def test_missing_id_update_and_delete_fail_without_changes(gateway):
    gateway.insert(Book("Only", "One", "Solo"))
    before = gateway.load_all()

    assert gateway.update(Book("Ghost", "Nobody", "None", id=999)) is False
    assert gateway.delete(999) is False
    assert gateway.load_all() == before


def test_values_are_bound_not_interpolated(gateway):
    nasty = "x'); DROP TABLE books; --"
    book = Book(nasty, "O'Brien", "Tests")
    assert gateway.insert(book) is True

    loaded = gateway.load_all()
    assert loaded[0].title == nasty
    assert loaded[0].author == "O'Brien"


def test_connection_failure_leaves_gateway_unusable(tmp_path):
    missing = tmp_path / "no_such_dir" / "library.db"
    gw = open_gateway(DatabaseSettings(db_file=str(missing)))

    assert gw.is_connected is False
    assert isinstance(gw.connect_error, sqlite3.Error)
    with pytest.raises(StorageError, match="No database connection"):
        gw.load_all()
    with pytest.raises(StorageError):
        gw.insert(Book("T", "A", "C"))
    with pytest.raises(StorageError):
        gw.update(Book("T", "A", "C", id=1))
    with pytest.raises(StorageError):
        gw.delete(1)


def test_statement_failure_raises_storage_error(gateway):
    gateway.connection.execute("DROP TABLE books")

    with pytest.raises(StorageError) as excinfo:
        gateway.load_all()
    assert isinstance(excinfo.value.__cause__, sqlite3.OperationalError)

    with pytest.raises(StorageError, match="Failed to add the book"):
        gateway.insert(Book("T", "A", "C"))


def test_closed_gateway_reports_failure(gateway):
    gateway.close()
    assert gateway.is_connected is False
    with pytest.raises(StorageError):
        gateway.load_all()


def test_unknown_backend_is_rejected():
    with pytest.raises(ValueError, match="Unsupported database backend"):
        BookGateway(DatabaseSettings(backend="oracle"))


def test_mysql_backend_uses_format_placeholders(monkeypatch):
    cursor = MagicMock()
    cursor.rowcount = 1
    cursor.lastrowid = 7
    conn = MagicMock()
    conn.cursor.return_value = cursor
    connect = MagicMock(return_value=conn)
    monkeypatch.setattr("mysql.connector.connect", connect)

    gw = BookGateway(DatabaseSettings(backend="mysql", host="db", port=3307, name="library_db", user="root"))
    assert gw.connect() is True
    kwargs = connect.call_args.kwargs
    assert (kwargs["host"], kwargs["port"], kwargs["database"]) == ("db", 3307, "library_db")
    assert ClientFlag.FOUND_ROWS in kwargs["client_flags"]

    book = Book("Dune", "Frank Herbert", "Sci-Fi")
    assert gw.insert(book) is True
    assert book.id == 7
    sql, params = cursor.execute.call_args.args
    assert "VALUES (%s, %s, %s)" in sql
    assert params == ("Dune", "Frank Herbert", "Sci-Fi")
    conn.cursor.assert_called_with(dictionary=True)
    conn.commit.assert_called()


def test_mysql_connection_failure_leaves_gateway_unusable(monkeypatch):
    error = mysql.connector.Error("Can't connect to MySQL server on 'db:3306'")
    monkeypatch.setattr("mysql.connector.connect", MagicMock(side_effect=error))

    gw = open_gateway(DatabaseSettings(backend="mysql", host="db"))
    assert gw.connect() is False
    assert gw.is_connected is False
    assert gw.connect_error is error
    with pytest.raises(StorageError, match="No database connection"):
        gw.delete(1)
