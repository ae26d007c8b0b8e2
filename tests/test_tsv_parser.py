"""
tests/test_tsv_parser.py
Collector output -> raw field dict.
"""

from spotifyquery.core.tsv_parser import parse_fields


class TestParseFields:

    def test_key_value_lines(self):
        fields = parse_fields("state\tplaying\nname\tSong 2\n")
        assert fields == {"state": "playing", "name": "Song 2"}

    def test_empty_input(self):
        assert parse_fields("") == {}
        assert parse_fields("\n\n") == {}

    def test_lines_without_tab_are_dropped(self):
        fields = parse_fields("garbage\nstate\tpaused\nmore garbage")
        assert fields == {"state": "paused"}

    def test_only_first_tab_splits(self):
        fields = parse_fields("name\tA\tB")
        assert fields == {"name": "A\tB"}

    def test_key_trimmed_value_kept_raw(self):
        fields = parse_fields("  artist \t  Blur  ")
        assert fields == {"artist": "  Blur  "}

    def test_last_duplicate_wins(self):
        fields = parse_fields("state\tpaused\nstate\tplaying\nstate\tstopped")
        assert fields == {"state": "stopped"}

    def test_one_entry_per_unique_key(self):
        text = "a\t1\nb\t2\n a\t3\nc\t4\nb \t5"
        fields = parse_fields(text)
        assert fields == {"a": "3", "b": "5", "c": "4"}

    def test_crlf_line_endings(self):
        fields = parse_fields("state\tplaying\r\nname\tSong\r\n")
        assert fields == {"state": "playing", "name": "Song"}

    def test_empty_value(self):
        assert parse_fields("album\t") == {"album": ""}

    def test_unicode_separator_stays_in_value(self):
        fields = parse_fields("name\tLine\u2028Break\nalbum\tX\x0bY")
        assert fields == {"name": "Line\u2028Break", "album": "X\x0bY"}
