class GobanInvariantError(RuntimeError):
    """
    Internal-consistency failure of the board structure.
    Raised when a caller bug (e.g. an illegal move that slipped through) breaks
    the liberty, merge or undo bookkeeping; the current operation is aborted.
    """
