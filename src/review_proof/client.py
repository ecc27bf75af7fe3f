import json
import logging
from dataclasses import dataclass
from typing import Optional

import requests

from review_proof.errors import ConnectivityError, DomainError, ResponseFormatError, ServerError
from review_proof.utils import Config, SubmissionPayload

log = logging.getLogger(__name__)

CONNECTIVITY_MESSAGE = (
    "ไม่สามารถเชื่อมต่อกับเซิร์ฟเวอร์ได้ กรุณาตรวจสอบการเชื่อมต่ออินเทอร์เน็ตของคุณแล้วลองอีกครั้ง"
)
FORMAT_MESSAGE = "ได้รับรูปแบบการตอบกลับที่ไม่ถูกต้องจากเซิร์ฟเวอร์"
DEFAULT_DOMAIN_MESSAGE = "The server reported an error after processing the request."
FOLDER_ACCESS_MESSAGE = (
    "Server configuration error: Could not access the Google Drive folder. "
    "Please verify the Folder ID in the Google Apps Script and check its sharing permissions."
)


def server_error_message(status_code: int) -> str:
    return (
        f"The server encountered an error (Status: {status_code}). "
        "This may be due to a server-side configuration issue, "
        "such as incorrect Google Drive folder permissions."
    )


def rewrite_backend_message(message: str) -> str:
    # Apps Script reports an inaccessible folder as a DriveApp.getFolderById failure.
    if "getFolderById" in message and "DriveApp" in message:
        return FOLDER_ACCESS_MESSAGE
    return message


@dataclass
class SubmitResult:
    ok: bool
    status_code: Optional[int]
    text: str
    error: Optional[str] = None


class HttpClient:
    def __init__(self, cfg: Config):
        self.cfg = cfg

    def post_payload(self, payload: SubmissionPayload) -> SubmitResult:
        """One POST to the endpoint; transport failures come back with status_code None."""
        # No Content-Type on purpose: Apps Script web apps reject the CORS preflight it would trigger.
        try:
            resp = requests.post(
                self.cfg.url,
                data=json.dumps(payload.to_json()),
                timeout=self.cfg.timeout,
                verify=self.cfg.verify_tls,
            )
        except requests.RequestException as e:
            return SubmitResult(ok=False, status_code=None, text="", error=repr(e))
        # Unfollowed 3xx responses count as failures too.
        ok = 200 <= resp.status_code < 300
        return SubmitResult(ok=ok, status_code=resp.status_code, text=resp.text)

    def submit(self, payload: SubmissionPayload) -> dict:
        result = self.post_payload(payload)

        if result.status_code is None:
            log.error("Network error during submission: %s", result.error)
            raise ConnectivityError(CONNECTIVITY_MESSAGE)

        if not result.ok:
            log.error("Server error: %s %s", result.status_code, result.text[:200])
            raise ServerError(server_error_message(result.status_code), status_code=result.status_code)

        return self._parse_body(result.text)

    @staticmethod
    def _parse_body(text: str) -> dict:
        try:
            data = json.loads(text)
        except ValueError as e:
            log.error("Error processing server response: %s", e)
            raise ResponseFormatError(FORMAT_MESSAGE) from e

        status = data.get("status") if isinstance(data, dict) else None
        if status == "success":
            return data
        if status == "error":
            message = data.get("message") or DEFAULT_DOMAIN_MESSAGE
            log.error("Server reported an error: %s", message)
            raise DomainError(rewrite_backend_message(str(message)))

        log.error("Unexpected response shape: %.200s", text)
        raise ResponseFormatError(FORMAT_MESSAGE)
