"""
HTML Escaping for Telegram HTML Mode

Admin notifications are sent with HTML parse mode; order IDs come from the
storefront's query string and must be escaped before embedding.
"""

import html
from typing import Optional


def safe_html(text: Optional[str]) -> str:
    """
    Escapes HTML special characters in untrusted text.

    Examples:
        >>> safe_html("ORD-1</b><script>")
        "ORD-1&lt;/b&gt;&lt;script&gt;"

        >>> safe_html(None)
        ""
    """
    if text is None:
        return ""
    return html.escape(str(text), quote=True)
