"""Entry key and fingerprint helpers."""

import hashlib

from announcer.core.errors import MalformedLink

FINGERPRINT_SEPARATOR = "-"


def derive_key(link: str) -> str:
    """Get the entry key: everything after the first ``#`` of the link.

    Raises:
        MalformedLink: If the link has no fragment, or an empty one
    """
    _, separator, fragment = link.partition("#")
    if not separator or not fragment:
        raise MalformedLink(link)
    return fragment


def fingerprint(title: str, content: str) -> str:
    """Hex MD5 digest of ``title-content``; a change detector only."""
    payload = f"{title}{FINGERPRINT_SEPARATOR}{content}".encode()
    return hashlib.md5(payload, usedforsecurity=False).hexdigest()
