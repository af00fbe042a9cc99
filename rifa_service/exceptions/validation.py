class InvalidInput(ValueError):
    """Request parameters violate a locally checkable precondition.

    Raised before anything is sent to the ledger.
    """

    status_code = 400
