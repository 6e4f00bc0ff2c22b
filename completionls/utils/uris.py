from pygls import uris


def from_uri(uri: str) -> str:
    """
    Convert a document URI into the file name a backend expects.

    URIs that cannot be parsed are returned unchanged.
    """
    path = uris.to_fs_path(uri)
    return path if path is not None else uri


def uri_scheme(uri: str) -> str | None:
    scheme = uris.uri_scheme(uri)
    return scheme or None
