import gzip, bz2, lzma

OPENERS = {
    "gzip": gzip.open,
    "bzip2": bz2.open,
    "xz": lzma.open,
}

def filetype(fn):
    fn = str(fn)
    if fn.endswith(".gz"):
        return "gzip"
    if fn.endswith(".bz2"):
        return "bzip2"
    if fn.endswith(".xz"):
        return "xz"
    return ""


def magic_open(fn, mode, **kwargs):
    """Open fn, transparently (de)compressing based on its suffix.

    Compressed files default to binary mode like the builtin open, so text
    callers should pass "rt"/"wt". Extra keyword arguments (encoding, newline)
    are passed through for text modes."""
    opener = OPENERS.get(filetype(fn), open)
    if "b" in mode:
        return opener(fn, mode)
    return opener(fn, mode, **kwargs)
