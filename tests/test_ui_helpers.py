import json

from book import Book
from library import ErrorKind, OperationResult
from utils.ui_helpers import get_output_mode, print_list_result, print_result_message, set_output_mode


def test_set_output_mode_ignores_unknown_values():
    set_output_mode("json")
    assert get_output_mode() == "json"
    set_output_mode("yaml")
    assert get_output_mode() == "json"


def test_plain_listing(capsys):
    print_list_result([Book("Dune", "Frank Herbert", "Sci-Fi", id=1)])
    out = capsys.readouterr().out.splitlines()
    assert out == [
        "Books available in the library:",
        "ID: 1, Title: Dune, Author: Frank Herbert, Category: Sci-Fi",
    ]


def test_empty_json_listing_is_an_empty_array(capsys):
    set_output_mode("json")
    print_list_result([])
    assert json.loads(capsys.readouterr().out) == []


def test_rich_listing_contains_fields(capsys):
    set_output_mode("rich")
    print_list_result([Book("Dune", "Frank Herbert", "Sci-Fi", id=1)])
    out = capsys.readouterr().out
    assert "Dune" in out
    assert "Sci-Fi" in out


def test_json_failure_message_carries_error_kind(capsys):
    set_output_mode("json")
    print_result_message(OperationResult.failure(ErrorKind.NOT_FOUND, "Failed to delete book."))
    assert json.loads(capsys.readouterr().out) == {
        "ok": False,
        "message": "Failed to delete book.",
        "error": "not_found",
    }


def test_rich_message_keeps_brackets(capsys):
    set_output_mode("rich")
    print_result_message(OperationResult.failure(ErrorKind.INVALID_INPUT, "Invalid book ID: '[x]' is not a number."))
    assert "'[x]'" in capsys.readouterr().out
