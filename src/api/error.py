from typing import Any, Dict

from fastapi import status

from libs.result import Error


class ClientError(Exception):
    """Expected failure reported to the caller with its code and field errors"""

    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)

    def to_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "error": {"code": self.base_error.code, "message": self.base_error.message}
        }
        if self.base_error.details:
            body["errors"] = self.base_error.details
        return body


class ServerError(Exception):
    """Unexpected failure; only the code leaves the service"""

    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)

    def to_body(self) -> Dict[str, Any]:
        return {"error": {"code": self.base_error.code, "message": "Internal server error"}}
