"""Per-run logging of API requests and responses."""

import json
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Any, List, Optional

from shipi18n.errors import Shipi18nError


def _timestamp() -> str:
    return datetime.now(timezone.utc).replace(tzinfo=None).isoformat() + "Z"


class RunLogger:
    """Logger for client runs."""

    def __init__(self, runs_dir: Path, run_id: Optional[str] = None):
        """
        Initialize run logger.

        Args:
            runs_dir: Base directory for run logs (e.g., work/runs)
            run_id: Optional run ID. If None, generates a new UUID.
        """
        self.runs_dir = Path(runs_dir)
        self.run_id = run_id or str(uuid.uuid4())
        self.run_dir = self.runs_dir / self.run_id
        self.run_dir.mkdir(parents=True, exist_ok=True)

        self.requests_file = self.run_dir / "requests.jsonl"
        self.responses_file = self.run_dir / "responses.jsonl"
        self.failures_file = self.run_dir / "failures.jsonl"
        self.summary_file = self.run_dir / "summary.json"

        self.summary = {
            "run_id": self.run_id,
            "started_at": _timestamp(),
            "completed_at": None,
            "requests_sent": 0,
            "responses_ok": 0,
            "failures": 0,
            "target_languages": [],
        }

    def _append(self, file_path: Path, record: Dict[str, Any]) -> None:
        with open(file_path, "a", encoding="utf-8") as f:
            f.write(json.dumps(record, ensure_ascii=False) + "\n")

    def log_request(
        self,
        operation: str,
        url: str,
        payload: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Log an outgoing request.

        Headers are never logged, so the API key stays out of the run dir.

        Args:
            operation: Client operation (translate, translate_json, health_check)
            url: Request URL
            payload: JSON body, if any
        """
        self._append(self.requests_file, {
            "timestamp": _timestamp(),
            "operation": operation,
            "url": url,
            "payload": payload,
        })
        self.summary["requests_sent"] += 1

        if payload and "targetLanguages" in payload:
            try:
                languages: List[str] = json.loads(payload["targetLanguages"])
            except (TypeError, json.JSONDecodeError):
                languages = []
            for lang in languages:
                if lang not in self.summary["target_languages"]:
                    self.summary["target_languages"].append(lang)

    def log_response(
        self,
        operation: str,
        status: int,
        body: Any
    ) -> None:
        """
        Log a successful response.

        Args:
            operation: Client operation
            status: HTTP status code
            body: Decoded response body
        """
        self._append(self.responses_file, {
            "timestamp": _timestamp(),
            "operation": operation,
            "status": status,
            "response": body,
        })
        self.summary["responses_ok"] += 1

    def log_failure(
        self,
        operation: str,
        error: Shipi18nError
    ) -> None:
        """
        Log a failed request.

        Args:
            operation: Client operation
            error: Error raised by the client
        """
        self._append(self.failures_file, {
            "timestamp": _timestamp(),
            "operation": operation,
            "error_type": error.kind.value,
            "error_message": error.message,
            "code": error.code,
            "status": error.status,
        })
        self.summary["failures"] += 1

    def finalize(self) -> None:
        """Finalize the run and write summary."""
        self.summary["completed_at"] = _timestamp()

        with open(self.summary_file, "w", encoding="utf-8") as f:
            json.dump(self.summary, f, ensure_ascii=False, indent=2)

    def get_summary(self) -> Dict[str, Any]:
        """Get current summary."""
        return self.summary.copy()
