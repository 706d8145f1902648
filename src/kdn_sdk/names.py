"""Name normalization helpers for the .kda registry."""

KDA_EXTENSION = ".kda"


def ensure_kda_extension(name: str) -> str:
    """
    Lower-case a name and make sure it ends with a single '.kda'.

    'Example' -> 'example.kda', 'EXAMPLE.KDA' -> 'example.kda'.
    """
    lower_case_name = name.lower()
    if not lower_case_name.endswith(KDA_EXTENSION):
        return f"{lower_case_name}{KDA_EXTENSION}"
    return lower_case_name


def add_extension_to_name(name: str) -> str:
    """Append '.kda' when the name has no extension at all; case is preserved."""
    return name if "." in name else f"{name}{KDA_EXTENSION}"


def shorten_string(value: str) -> str:
    """Shorten to 'first5...last5' when longer than ten characters."""
    if len(value) <= 10:
        return value
    return f"{value[:5]}...{value[-5:]}"
