class APIError(Exception):
    def __init__(self, code: str, message: str, http_status: int = 400, details: dict = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.http_status = http_status
        self.details = details


class InvalidRequestError(APIError):
    def __init__(self, message: str, details: dict = None):
        super().__init__("Invalid request", message, 400, details)


class ServiceUnavailableError(APIError):
    def __init__(self, message: str, details: dict = None):
        super().__init__("Service unavailable", message, 503, details)
