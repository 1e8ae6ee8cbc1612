"""Fragment vs. full-document classification."""

_DOCUMENT_PREFIXES = ("<!doctype", "<html")


def is_fragment(markup: str) -> bool:
    """Return True unless *markup* starts with a doctype or ``<html`` tag.

    Only the trimmed, lower-cased prefix is inspected, so a fragment that
    contains ``<html`` further in is still a fragment.
    """
    return not markup.strip().lower().startswith(_DOCUMENT_PREFIXES)
