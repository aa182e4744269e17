"""
Tests for safe_html, used for order IDs embedded in admin notifications.
"""

from utils.html_escape import safe_html


class TestSafeHtml:

    def test_escapes_markup(self):
        assert safe_html("ORD-1</b><script>") == "ORD-1&lt;/b&gt;&lt;script&gt;"

    def test_escapes_quotes(self):
        assert safe_html('a"b\'c') == "a&quot;b&#x27;c"

    def test_none(self):
        assert safe_html(None) == ""

    def test_non_string(self):
        assert safe_html(42) == "42"
