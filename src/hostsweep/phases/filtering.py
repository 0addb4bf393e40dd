def status_matches(code, include, exclude=()):
    """
    Decides whether a status code is kept.

    An excluded code is always rejected. A non-empty include set acts as an
    allow list; an empty one accepts everything not excluded.
    """
    if code in exclude:
        return False
    if include and code not in include:
        return False
    return True
