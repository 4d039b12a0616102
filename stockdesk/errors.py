# stockdesk/errors.py


class StockdeskError(Exception):
    """Base class for failures surfaced to API callers."""


# Requested identifier is absent from a collection
class NotFoundError(StockdeskError):
    def __init__(self, resource: str, record_id):
        self.resource = resource
        self.record_id = record_id
        super().__init__(f"{resource} not found")


# Request is well-formed but cannot be carried out (e.g. an order without lines)
class InvalidInputError(StockdeskError):
    pass
