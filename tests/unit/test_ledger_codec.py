"""Tests for ledger serialisation and strict parsing."""

from __future__ import annotations

import json
from datetime import UTC

import pytest
from hypothesis import given
from hypothesis import strategies as st

from valuetrack.errors import LedgerCorruptError
from valuetrack.ledger.codec import parse_ledger, serialize_ledger
from valuetrack.models.ledger import ValueEntry

_entries = st.lists(
    st.builds(
        ValueEntry,
        value=st.one_of(
            st.integers(min_value=-(10**12), max_value=10**12),
            st.floats(allow_nan=False, allow_infinity=False),
        ),
        sha=st.text(alphabet="0123456789abcdef", min_size=40, max_size=40),
        date=st.datetimes(timezones=st.just(UTC)).map(lambda d: d.isoformat()),
    ),
    max_size=20,
)


class TestSerialize:
    def test_tab_indented_with_fixed_key_order(self) -> None:
        entry = ValueEntry(value=42, sha="abc", date="2024-01-15T10:00:00Z")
        text = serialize_ledger([entry]).decode("utf-8")
        assert text == '[\n\t{\n\t\t"value": 42,\n\t\t"sha": "abc",\n\t\t"date": "2024-01-15T10:00:00Z"\n\t}\n]'

    @pytest.mark.parametrize(("value", "written"), [(42.0, "42"), (-5.0, "-5"), (-0.0, "0"), (12.5, "12.5")])
    def test_integral_floats_written_as_integers(self, value: float, written: str) -> None:
        entry = ValueEntry(value=value, sha="abc", date="2024-01-15T10:00:00Z")
        assert f'"value": {written},' in serialize_ledger([entry]).decode("utf-8")

    def test_huge_integral_float_stays_float(self) -> None:
        entry = ValueEntry(value=1e300, sha="abc", date="2024-01-15T10:00:00Z")
        assert '"value": 1e+300,' in serialize_ledger([entry]).decode("utf-8")

    def test_empty_ledger(self) -> None:
        assert serialize_ledger([]) == b"[]"

    def test_is_deterministic(self) -> None:
        entries = [ValueEntry(value=1.5, sha="a", date="2024-01-01T00:00:00Z")]
        assert serialize_ledger(entries) == serialize_ledger(list(entries))


class TestRoundTrip:
    @given(entries=_entries)
    def test_parse_inverts_serialize(self, entries: list[ValueEntry]) -> None:
        assert parse_ledger(serialize_ledger(entries)) == entries


class TestParseRejectsCorruptContent:
    @pytest.mark.parametrize(
        "raw",
        [
            b"not json",
            b"\xff\xfe",
            b'{"value": 1}',
            b"[1, 2]",
            b'[{"sha": "a", "date": "2024-01-01T00:00:00Z"}]',
            b'[{"value": "12", "sha": "a", "date": "2024-01-01T00:00:00Z"}]',
            b'[{"value": true, "sha": "a", "date": "2024-01-01T00:00:00Z"}]',
            b'[{"value": 1, "sha": 5, "date": "2024-01-01T00:00:00Z"}]',
            b'[{"value": 1, "sha": "a", "date": "yesterday"}]',
            b'[{"value": NaN, "sha": "a", "date": "2024-01-01T00:00:00Z"}]',
        ],
    )
    def test_raises_ledger_corrupt(self, raw: bytes) -> None:
        with pytest.raises(LedgerCorruptError):
            parse_ledger(raw, "x.json")

    def test_error_names_path(self) -> None:
        with pytest.raises(LedgerCorruptError) as info:
            parse_ledger(b"{}", ".github/storage/value-tracking/value/main.json")
        assert info.value.path == ".github/storage/value-tracking/value/main.json"

    def test_extra_keys_are_ignored(self) -> None:
        raw = json.dumps([{"value": 3, "sha": "a", "date": "2024-01-01T00:00:00Z", "ref": "main"}]).encode()
        assert parse_ledger(raw) == [ValueEntry(value=3, sha="a", date="2024-01-01T00:00:00Z")]
