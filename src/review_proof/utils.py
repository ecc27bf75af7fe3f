import mimetypes
import os
import tomllib
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional

DEFAULT_CONFIG_PATH = Path("~/.review-proof.toml").expanduser()


# ========== Config & Models ==========
@dataclass(frozen=True)
class EmployeeOption:
    value: str
    label: str


@dataclass
class Config:
    url: str
    timeout: int = 30
    verify_tls: bool = True
    debug: bool = False
    employees: List[EmployeeOption] = field(default_factory=list)

    @classmethod
    def init_from_args(cls, args) -> "Config":
        """Merge the TOML file, REVIEW_PROOF_URL and command line flags (highest wins)."""
        path = Path(args.config).expanduser() if getattr(args, "config", None) else DEFAULT_CONFIG_PATH
        data = load_toml(path)

        url = args.url or os.getenv("REVIEW_PROOF_URL") or data.get("url") or ""
        timeout = args.timeout if args.timeout is not None else int(data.get("timeout", 30))
        insecure = bool(args.insecure or data.get("insecure", False))
        employees = [
            EmployeeOption(value=str(e["value"]), label=str(e.get("label") or e["value"]))
            for e in data.get("employees", [])
        ]
        return cls(
            url=url.strip(),
            timeout=timeout,
            verify_tls=not insecure,
            debug=bool(args.debug),
            employees=employees,
        )

    def find_employee(self, text: str) -> Optional[EmployeeOption]:
        text = text.strip()
        for opt in self.employees:
            if text in (opt.value, opt.label):
                return opt
        return None


def load_toml(path: Path) -> dict:
    if not path.is_file():
        return {}
    with path.open("rb") as fh:
        return tomllib.load(fh)


class StatusKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


@dataclass(frozen=True)
class Status:
    message: str = ""
    kind: Optional[StatusKind] = None


EMPTY_STATUS = Status()


class FormState(Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    SUBMITTING = "submitting"


@dataclass(frozen=True)
class StagedFile:
    path: Path
    name: str
    mime_type: str

    @classmethod
    def from_path(cls, path) -> "StagedFile":
        p = Path(path).expanduser()
        mime, _ = mimetypes.guess_type(p.name)
        return cls(path=p, name=p.name, mime_type=mime or "")


@dataclass(frozen=True)
class SubmissionPayload:
    employee_name: str
    file_data: str
    file_name: str
    mime_type: str

    @classmethod
    def build(cls, employee_name: str, file_data: str, staged: StagedFile) -> "SubmissionPayload":
        return cls(
            employee_name=employee_name,
            file_data=file_data,
            file_name=staged.name,
            mime_type=staged.mime_type,
        )

    def to_json(self) -> dict:
        return {
            "employeeName": self.employee_name,
            "fileData": self.file_data,
            "fileName": self.file_name,
            "mimeType": self.mime_type,
        }
