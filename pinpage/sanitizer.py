"""Pattern-based stripping of active content from generated HTML.

This is best-effort cleanup for markup produced by a cooperative model. It is
not an HTML parser and not a security boundary: obfuscated markup (entity
encoded schemes, split tags, SVG/CSS vectors, unclosed script elements) gets
through. Handler patterns only match at a word boundary, yet plain text that
starts a word with ``on`` and is followed by ``=`` (``online = yes``) is still
stripped as if it were an attribute. Content rendered in an untrusted context
needs a real allow-list sanitizer on top of this.
"""

import re

SCRIPT_ELEMENT_RE = re.compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE)
QUOTED_EVENT_HANDLER_RE = re.compile(r"""\bon\w+\s*=\s*["'][^"']*["']""", re.IGNORECASE)
UNQUOTED_EVENT_HANDLER_RE = re.compile(r"\bon\w+\s*=\s*[^\s>]*", re.IGNORECASE)
JAVASCRIPT_SCHEME_RE = re.compile(r"javascript:", re.IGNORECASE)


def sanitize_html(html: str) -> str:
    sanitized = SCRIPT_ELEMENT_RE.sub("", html)
    sanitized = QUOTED_EVENT_HANDLER_RE.sub("", sanitized)
    sanitized = UNQUOTED_EVENT_HANDLER_RE.sub("", sanitized)
    return JAVASCRIPT_SCHEME_RE.sub("", sanitized)
