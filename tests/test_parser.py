"""Tests for the tokenizer and name conversion (core/parser.py, core/naming.py).

Every test is a pure function call — no I/O, no mocking.  Coverage:

* ``--key value``, ``--key=value``, ``--flag`` and ``--no-flag`` syntax
* Reserved global flags never consuming a value
* Last-occurrence-wins and value-looking-like-an-option edge cases
* Command token extraction and global flag derivation
* Hyphenated ↔ compact name round-trips
"""

from __future__ import annotations

from types import MappingProxyType

import pytest

from clikit.core.models import GlobalFlags
from clikit.core.naming import compact_to_hyphen, hyphen_to_compact
from clikit.core.parser import extract_command_token, extract_global_flags, tokenize
from clikit.core.schema import compact_alias


# ---------------------------------------------------------------------------
# Name conversion
# ---------------------------------------------------------------------------

class TestNaming:
    @pytest.mark.parametrize(
        ("hyphenated", "compact"),
        [
            ("order-id", "orderId"),
            ("include-line-items", "includeLineItems"),
            ("limit", "limit"),
            ("page2", "page2"),
            ("page-2", "page-2"),
        ],
    )
    def test_hyphen_to_compact(self, hyphenated: str, compact: str) -> None:
        assert hyphen_to_compact(hyphenated) == compact

    @pytest.mark.parametrize(
        ("compact", "hyphenated"),
        [
            ("orderId", "order-id"),
            ("includeLineItems", "include-line-items"),
            ("limit", "limit"),
        ],
    )
    def test_compact_to_hyphen(self, compact: str, hyphenated: str) -> None:
        assert compact_to_hyphen(compact) == hyphenated

    @pytest.mark.parametrize(
        "name",
        ["a", "order-id", "include-line-items", "x-y-z", "top-10-items", "v2-api", "page-2"],
    )
    def test_round_trip(self, name: str) -> None:
        assert compact_to_hyphen(hyphen_to_compact(name)) == name

    @pytest.mark.parametrize(
        ("field_name", "flag"),
        [
            ("order_id", "--order-id"),
            ("include_line_items", "--include-line-items"),
            ("page_2", "--page-2"),
            ("top_10_items", "--top-10-items"),
            ("v2_api", "--v2-api"),
        ],
    )
    def test_field_alias_matches_tokenized_flag(self, field_name: str, flag: str) -> None:
        alias = compact_alias(field_name)
        assert list(tokenize([flag, "x"])) == [alias]
        assert f"--{compact_to_hyphen(alias)}" == flag


# ---------------------------------------------------------------------------
# tokenize
# ---------------------------------------------------------------------------

class TestTokenize:
    def test_space_separated_value_and_flag(self) -> None:
        assert dict(tokenize(["--limit", "50", "--verbose"])) == {
            "limit": "50",
            "verbose": True,
        }

    def test_no_cache_and_equals_syntax(self) -> None:
        assert dict(tokenize(["--no-cache", "--status=open"])) == {
            "noCache": True,
            "status": "open",
        }

    def test_only_first_equals_splits(self) -> None:
        assert dict(tokenize(["--key=a=b"])) == {"key": "a=b"}

    def test_empty_equals_value_is_empty_string(self) -> None:
        assert dict(tokenize(["--note="])) == {"note": ""}

    def test_negation_sets_false(self) -> None:
        assert dict(tokenize(["--no-include-line-items"])) == {"includeLineItems": False}

    def test_negation_never_consumes_value(self) -> None:
        assert dict(tokenize(["--no-color", "red"])) == {"color": False}

    def test_hyphenated_keys_become_compact(self) -> None:
        assert dict(tokenize(["--order-id", "A-1"])) == {"orderId": "A-1"}

    def test_trailing_flag_is_true(self) -> None:
        assert dict(tokenize(["--dry-run"])) == {"dryRun": True}

    def test_flag_followed_by_option_is_true(self) -> None:
        assert dict(tokenize(["--dry-run", "--limit", "5"])) == {
            "dryRun": True,
            "limit": "5",
        }

    def test_negative_number_is_a_value(self) -> None:
        assert dict(tokenize(["--offset", "-5"])) == {"offset": "-5"}

    def test_last_occurrence_wins(self) -> None:
        assert dict(tokenize(["--limit", "5", "--limit=10"])) == {"limit": "10"}

    def test_flag_then_negation_last_wins(self) -> None:
        assert dict(tokenize(["--color", "--no-color"])) == {"color": False}

    def test_positional_tokens_are_ignored(self) -> None:
        assert dict(tokenize(["list", "--limit", "5", "extra"])) == {"limit": "5"}

    def test_empty_input(self) -> None:
        assert dict(tokenize([])) == {}

    @pytest.mark.parametrize("flag", ["--help", "--verbose", "--no-cache"])
    def test_global_flags_never_consume_a_value(self, flag: str) -> None:
        result = dict(tokenize([flag, "list"]))
        assert list(result.values()) == [True]

    def test_global_flag_accepts_equals_value(self) -> None:
        assert dict(tokenize(["--verbose=false"])) == {"verbose": "false"}

    def test_result_is_read_only(self) -> None:
        result = tokenize(["--limit", "5"])
        assert isinstance(result, MappingProxyType)
        with pytest.raises(TypeError):
            result["limit"] = "6"  # type: ignore[index]


# ---------------------------------------------------------------------------
# extract_command_token
# ---------------------------------------------------------------------------

class TestExtractCommandToken:
    def test_first_non_option_token(self) -> None:
        assert extract_command_token(["--verbose", "list", "--limit", "5"]) == "list"

    def test_command_first(self) -> None:
        assert extract_command_token(["get-order", "--order-id", "1"]) == "get-order"

    def test_none_without_positional_token(self) -> None:
        assert extract_command_token(["--verbose", "--limit=5"]) is None

    def test_empty_input(self) -> None:
        assert extract_command_token([]) is None

    def test_option_value_before_command_is_picked_up(self) -> None:
        assert extract_command_token(["--limit", "5", "list"]) == "5"


# ---------------------------------------------------------------------------
# extract_global_flags
# ---------------------------------------------------------------------------

class TestExtractGlobalFlags:
    def test_defaults_all_off(self) -> None:
        assert extract_global_flags(tokenize([])) == GlobalFlags()

    def test_all_flags_on(self) -> None:
        flags = extract_global_flags(tokenize(["--help", "--no-cache", "--verbose"]))
        assert flags == GlobalFlags(no_cache=True, help=True, verbose=True)

    def test_string_true_counts(self) -> None:
        flags = extract_global_flags(tokenize(["--verbose=true", "--no-cache=true"]))
        assert flags.verbose is True
        assert flags.no_cache is True

    def test_other_strings_do_not_count(self) -> None:
        flags = extract_global_flags(tokenize(["--verbose=yes", "--help=false"]))
        assert flags.verbose is False
        assert flags.help is False

    def test_flags_are_immutable(self) -> None:
        flags = GlobalFlags()
        with pytest.raises(AttributeError):
            flags.verbose = True  # type: ignore[misc]
