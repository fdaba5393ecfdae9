"""Tests for logpretty/parser.py"""

import json
import unittest

from logpretty.parser import RECOGNIZED_FIELDS, LogRecord, Unstructured, parse_line


class TestRecognizedFields(unittest.TestCase):
    def test_json_keys(self):
        self.assertEqual(
            set(RECOGNIZED_FIELDS),
            {"ts", "level", "component", "subcomponent", "msg"},
        )


class TestParseLineFallback(unittest.TestCase):
    """Anything that isn't a JSON object comes back as Unstructured."""

    def test_plain_text(self):
        line = "This is a test log that isn't json-formatted"
        self.assertEqual(parse_line(line), Unstructured(line))

    def test_empty_line(self):
        self.assertEqual(parse_line(""), Unstructured(""))

    def test_json_array(self):
        self.assertEqual(parse_line("[1, 2, 3]"), Unstructured("[1, 2, 3]"))

    def test_json_scalars(self):
        for line in ('"just a string"', "42", "true", "null"):
            self.assertIsInstance(parse_line(line), Unstructured)

    def test_truncated_object(self):
        line = '{"msg": "half a line'
        self.assertEqual(parse_line(line).raw, line)

    def test_non_standard_constants(self):
        for line in ('{"x": NaN}', '{"x": Infinity}', '{"x": -Infinity}'):
            self.assertIsInstance(parse_line(line), Unstructured)

    def test_deeply_nested(self):
        for line in ("[" * 100000, '{"a":' * 100000):
            self.assertEqual(parse_line(line), Unstructured(line))

    def test_unpaired_surrogate_escape_in_value(self):
        line = '{"ts": "2017-09-28T15:06:19Z", "msg": "\\ud800"}'
        self.assertEqual(parse_line(line), Unstructured(line))

    def test_unpaired_surrogate_escape_nested(self):
        line = '{"ctx": {"\\udfff": [1, "ok"]}}'
        self.assertIsInstance(parse_line(line), Unstructured)


class TestParseLineRecord(unittest.TestCase):
    def test_all_fields(self):
        line = json.dumps({
            "ts": "2017-09-28T15:06:19.898Z",
            "level": "INFO",
            "component": "service1",
            "subcomponent": "Tiny",
            "msg": "Hello world!",
        })
        record = parse_line(line)
        self.assertEqual(record, LogRecord(
            timestamp="2017-09-28T15:06:19.898Z",
            level="INFO",
            component="service1",
            subcomponent="Tiny",
            message="Hello world!",
        ))

    def test_missing_fields_default_empty(self):
        record = parse_line("{}")
        self.assertEqual(record, LogRecord())
        self.assertEqual(record.extra_fields, {})

    def test_non_string_recognized_field_defaults_empty(self):
        record = parse_line('{"level": 30, "msg": null, "component": ["a"]}')
        self.assertEqual(record.level, "")
        self.assertEqual(record.message, "")
        self.assertEqual(record.component, "")
        self.assertEqual(record.extra_fields, {})

    def test_extra_fields_preserve_order(self):
        line = '{"zeta": 1, "msg": "m", "alpha": "a", "mid": [true, null]}'
        record = parse_line(line)
        self.assertEqual(list(record.extra_fields), ["zeta", "alpha", "mid"])
        self.assertEqual(record.extra_fields["mid"], [True, None])

    def test_surrogate_pair_escape_allowed(self):
        record = parse_line('{"msg": "\\ud83d\\ude00"}')
        self.assertEqual(record.message, "\U0001f600")

    def test_undecodable_input_bytes_allowed(self):
        # b"\xe9" read with surrogateescape
        record = parse_line('{"msg": "caf\udce9"}')
        self.assertEqual(record.message, "caf\udce9")

    def test_surrounding_whitespace_allowed(self):
        record = parse_line('  {"msg": "padded"}  ')
        self.assertEqual(record.message, "padded")


if __name__ == "__main__":
    unittest.main()
