class CatalogError(Exception):
    code = "CATALOG_ERROR"
    message = "Catalog request failed"
    status_code = 500

    def __init__(self, message: str | None = None, details=None):
        self.message = message or self.message
        self.details = details
        super().__init__(self.message)

class MalformedIdentifierError(CatalogError, ValueError):
    code = "MALFORMED_IDENTIFIER"
    message = "Invalid partition key"
    status_code = 404

class StoreError(CatalogError):
    """
    Raised by a document store when it is reachable but rejects a call.
    status_code follows HTTP semantics (404 = no such key in that partition).
    """
    code = "STORE_ERROR"
    message = "The document store reported an error"

    def __init__(self, status_code: int, message: str | None = None, activity_id: str | None = None):
        super().__init__(message, details={"status_code": status_code, "activity_id": activity_id})
        self.status_code = status_code
        self.activity_id = activity_id

class StoreNotReadyError(CatalogError):
    code = "STORE_NOT_READY"
    message = "The document store is not loaded yet"
    status_code = 503

class InvalidQueryError(CatalogError):
    code = "INVALID_QUERY"
    message = "The query parameters are invalid"
    status_code = 400
