from typing import Optional


class ReviewProofError(Exception):
    """Base class; ``str(err)`` is the message shown to the user."""


class ValidationError(ReviewProofError):
    pass


class EncodeError(ReviewProofError):
    pass


class SubmissionInProgress(ReviewProofError):
    pass


# ========== Submission outcomes ==========
class SubmissionError(ReviewProofError):
    pass


class ConnectivityError(SubmissionError):
    pass


class ServerError(SubmissionError):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class DomainError(SubmissionError):
    pass


class ResponseFormatError(SubmissionError):
    pass
