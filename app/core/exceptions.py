"""
Custom Exceptions - CRM Insight Engine
app/core/exceptions.py

Custom exception classes raised by the HTTP layer around the scoring engine.
The engine itself never raises on missing data.
"""


class InsightEngineException(Exception):
    """Base exception for request-level failures."""

    pass


class InvalidTestStateException(InsightEngineException):
    """A/B test is not in a state that allows the requested transition."""

    def __init__(self, test_id: str, status: str):
        self.test_id = test_id
        self.status = status
        super().__init__(
            f"A/B test {test_id} is {status}; only running tests can be completed"
        )


class InvalidForecastRequestException(InsightEngineException):
    """Forecast request is missing required input."""

    def __init__(self, message: str = "Period is required"):
        self.message = message
        super().__init__(message)


class InvalidScoringRequestException(InsightEngineException):
    """Scoring request does not identify a scorable entity."""

    def __init__(self, message: str = "Lead, contact, or deal snapshot is required"):
        self.message = message
        super().__init__(message)
