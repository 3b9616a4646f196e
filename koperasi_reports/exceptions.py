class ReportError(Exception):
    """Base class for failures while serving a financial report."""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

class ReportRequestError(ReportError):
    """The request was rejected before any ledger query ran."""
    status_code = 400

class MissingParameter(ReportRequestError):
    pass

class UnsupportedReportType(ReportRequestError):
    pass

class InvalidParameter(ReportRequestError):
    pass

class AggregationFailure(ReportError):
    """A ledger store query failed while a report was being computed."""

class UnsupportedTransactionType(ValueError):
    pass
