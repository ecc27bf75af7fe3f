import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Callable, Optional

from review_proof.encoder import file_to_base64
from review_proof.errors import ReviewProofError, SubmissionInProgress, ValidationError
from review_proof.utils import (
    EMPTY_STATUS,
    FormState,
    StagedFile,
    Status,
    StatusKind,
    SubmissionPayload,
)

log = logging.getLogger(__name__)

MSG_SELECT_EMPLOYEE = "กรุณาเลือกพนักงาน"
MSG_SELECT_IMAGE = "กรุณาเลือกรูปภาพเพื่อเป็นหลักฐาน"
MSG_UPLOADING = "กำลังอัปโหลดรีวิวของคุณ กรุณารอสักครู่..."
MSG_THANK_YOU = "ขอบคุณ! รีวิวของคุณถูกส่งเรียบร้อยแล้ว"


# ========== Preview ==========
class PreviewResource:
    """Temporary copy of the staged image, kept only while that file is staged."""

    def __init__(self, staged: StagedFile):
        fd, name = tempfile.mkstemp(prefix="review-proof-", suffix=staged.path.suffix)
        os.close(fd)
        self.path: Optional[Path] = Path(name)
        try:
            shutil.copyfile(staged.path, self.path)
        except OSError:
            # An unreadable file can still be staged; submit() reports it.
            log.debug("Could not copy %s for preview", staged.path)
            self.release()

    @property
    def released(self) -> bool:
        return self.path is None

    def release(self):
        if self.path is None:
            return
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass
        self.path = None


# ========== Form Controller ==========
class ReviewForm:
    """Form state and the submit pipeline: validate, encode, build, send, report."""

    def __init__(
        self,
        client,
        encoder: Callable[[Path], str] = file_to_base64,
        on_status: Optional[Callable[[Status], None]] = None,
    ):
        self.client = client
        self.encoder = encoder
        self.on_status = on_status

        self.employee_name = ""
        self.staged: Optional[StagedFile] = None
        self.preview: Optional[PreviewResource] = None
        self.state = FormState.IDLE
        self.status = EMPTY_STATUS
        self.last_response: Optional[dict] = None

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    # ----- field state -----
    def select_employee(self, name: str):
        self.employee_name = name

    def stage_file(self, path):
        self._set_status(EMPTY_STATUS)
        self._release_preview()
        self.staged = StagedFile.from_path(path)
        self.preview = PreviewResource(self.staged)

    def remove_file(self):
        self._release_preview()
        self.staged = None

    def reset(self):
        self.employee_name = ""
        self.remove_file()

    def close(self):
        self._release_preview()

    @property
    def can_submit(self) -> bool:
        return self.state is FormState.IDLE

    # ----- submission -----
    def submit(self) -> bool:
        if not self.can_submit:
            raise SubmissionInProgress("A submission is already in progress.")

        self.state = FormState.VALIDATING
        try:
            self._validate()
        except ValidationError as e:
            self.state = FormState.IDLE
            self._set_status(Status(str(e), StatusKind.ERROR))
            return False

        self.state = FormState.SUBMITTING
        self._set_status(Status(MSG_UPLOADING, StatusKind.INFO))
        try:
            file_data = self.encoder(self.staged.path)
            payload = SubmissionPayload.build(self.employee_name, file_data, self.staged)
            self.last_response = self.client.submit(payload)
        except ReviewProofError as e:
            log.debug("Submission failed: %s", type(e).__name__)
            self._set_status(Status(str(e), StatusKind.ERROR))
            return False
        finally:
            self.state = FormState.IDLE

        self._set_status(Status(MSG_THANK_YOU, StatusKind.SUCCESS))
        self.reset()
        return True

    def _validate(self):
        if not self.employee_name:
            raise ValidationError(MSG_SELECT_EMPLOYEE)
        if self.staged is None:
            raise ValidationError(MSG_SELECT_IMAGE)

    def _set_status(self, status: Status):
        self.status = status
        if self.on_status is not None:
            self.on_status(status)

    def _release_preview(self):
        if self.preview is not None:
            self.preview.release()
            self.preview = None
