"""Text helpers for comment submission.

Cleaning of names and emails, HTML sanitisation of comment bodies, gravatar
hashes and deletion secrets.
"""

import hashlib
import html
import secrets

# Formatting tags restored after escaping a comment body
ALLOWED_TAGS = ("b", "i", "em", "strong", "code", "pre", "p")

# Void tags restored in their ``<br>`` and ``<br/>`` spellings
ALLOWED_VOID_TAGS = ("br",)


def clean_email(email: str) -> str:
    """Trim surrounding whitespace from an email address."""
    return email.strip()


def clean_name(name: str) -> str:
    """Keep letters, digits, whitespace, dots and underscores, then trim.

    Examples:
        >>> clean_name("John<script>Doe")
        'JohnscriptDoe'
        >>> clean_name("  Тигран Симонян  ")
        'Тигран Симонян'
    """
    cleaned = "".join(
        char
        for char in name
        if char.isalpha() or char.isdigit() or char.isspace() or char in "._"
    )
    return cleaned.strip()


def sanitize_comment(body: str) -> str:
    """Sanitise a comment body to prevent XSS.

    Escapes all HTML, then re-enables a small set of attribute-free
    formatting tags. Attributes are never restored, so event handlers and
    ``javascript:`` URLs cannot survive.
    """
    escaped = html.escape(body, quote=False)

    for tag in ALLOWED_TAGS:
        escaped = escaped.replace(f"&lt;{tag}&gt;", f"<{tag}>")
        escaped = escaped.replace(f"&lt;/{tag}&gt;", f"</{tag}>")

    for tag in ALLOWED_VOID_TAGS:
        escaped = escaped.replace(f"&lt;{tag}&gt;", f"<{tag}>")
        escaped = escaped.replace(f"&lt;{tag}/&gt;", f"<{tag}>")
        escaped = escaped.replace(f"&lt;{tag} /&gt;", f"<{tag}>")

    return escaped


def gravatar_hash(email: str) -> str:
    """MD5 hash of the lower-cased, trimmed email, as used by Gravatar."""
    return hashlib.md5(email.strip().lower().encode()).hexdigest()


def generate_secret() -> str:
    """Random deletion secret (20 bytes, 40 hex characters)."""
    return secrets.token_hex(20)
