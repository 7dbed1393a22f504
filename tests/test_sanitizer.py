from masterserver.registry.sanitizer import sanitize, sanitize_value, to_text


class TestSanitizeValue:
    def test_strips_disallowed_characters(self):
        assert sanitize_value("My<Server>!! 01") == "MyServer 01"

    def test_keeps_hyphen_colon_and_whitespace(self):
        assert sanitize_value("eu-west: 1\r\nline\t2") == "eu-west: 1\r\nline\t2"

    def test_everything_stripped_gives_empty_string(self):
        assert sanitize_value("<>!?/.") == ""

    def test_numbers_are_coerced_to_text(self):
        assert sanitize_value(7777) == "7777"
        assert sanitize_value(16.0) == "16"
        assert sanitize_value(2.5) == "25"

    def test_non_ascii_letters_are_dropped(self):
        assert sanitize_value("Ünïcode Sérver") == "ncode Srver"


class TestToText:
    def test_json_literals(self):
        assert to_text(True) == "true"
        assert to_text(False) == "false"
        assert to_text(None) == ""

    def test_objects_and_arrays_follow_js_string_conversion(self):
        assert to_text({"x": 1}) == "[object Object]"
        assert to_text([1, "a", None, [2, 3.0], True]) == "1,a,,2,3,true"
        assert sanitize_value({"x": 1}) == "object Object"
        assert sanitize_value(["a", "b"]) == "ab"


class TestSanitize:
    def test_every_field_is_sanitized(self):
        out = sanitize({"name": "a<b>", "map": "de_dust2", "players": 4})
        assert out == {"name": "ab", "map": "dedust2", "players": "4"}

    def test_input_is_not_mutated(self):
        fields = {"name": "x!"}
        sanitize(fields)
        assert fields == {"name": "x!"}
