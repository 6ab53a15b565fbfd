import json
import logging
from datetime import datetime
from pathlib import Path

import config

logger = logging.getLogger(__name__)


class GenerationLogger:
    """
    One log entry per AI generation.
    Tracks each request from the moment it is sent to completion/failure,
    written as one JSON object per line in a monthly file.
    """

    def __init__(self, logs_folder=None):
        self.logs_folder = Path(logs_folder or config.LOGS_FOLDER)
        self.logs_folder.mkdir(parents=True, exist_ok=True)

        # session_id -> session data
        self.active_sessions = {}

    def get_current_log_file(self):
        """Get current month's log file name"""
        now = datetime.now()
        return self.logs_folder / f"generation_{now.year}_{now.month:02d}.log"

    def write_log(self, log_data):
        """Write a complete log entry to file"""
        log_data["logged_at"] = datetime.now().isoformat()
        try:
            with open(self.get_current_log_file(), "a", encoding="utf-8") as f:
                f.write(json.dumps(log_data) + "\n")
        except OSError as e:
            logger.error(f"Failed to write generation log: {e}")

    def start_generation(self, subject, mode, target_block=None, input_chars=0):
        """
        Start tracking a new generation.
        Returns a session_id to track it.
        """
        session_id = f"{subject}_{mode}_{datetime.now().isoformat()}"

        self.active_sessions[session_id] = {
            "session_id": session_id,
            "subject": subject,
            "mode": mode,
            "target_block": target_block,
            "input_chars": input_chars,
            "start_time": datetime.now().isoformat(),
            "end_time": None,
            "total_duration": None,
            "status": "processing",  # processing, success, failed
            "tokens": {"input": 0, "output": 0, "total": 0},
            "blocks_written": [],
            "error": None,
        }

        logger.info(f"Started generation session: {session_id}")
        return session_id

    def record_tokens(self, session_id, input_tokens, output_tokens, total_tokens):
        if session_id in self.active_sessions:
            self.active_sessions[session_id]["tokens"] = {
                "input": input_tokens or 0,
                "output": output_tokens or 0,
                "total": total_tokens or 0,
            }

    def complete_generation(self, session_id, blocks_written=None, success=True):
        """
        Mark generation as completed (success or failure).
        Writes the final log entry and cleans up the session.
        """
        session = self.active_sessions.pop(session_id, None)
        if session is None:
            logger.warning(f"Generation session not found: {session_id}")
            return

        end_time = datetime.now()
        session["end_time"] = end_time.isoformat()
        session["status"] = "success" if success else "failed"
        session["blocks_written"] = list(blocks_written or [])

        start_time = datetime.fromisoformat(session["start_time"])
        session["total_duration"] = round((end_time - start_time).total_seconds(), 2)

        self.write_log(session)
        logger.info(f"Completed generation session: {session_id} (Status: {session['status']})")

    def fail_generation(self, session_id, error_type, error_message):
        """Mark generation as failed with error details"""
        if session_id in self.active_sessions:
            self.active_sessions[session_id]["error"] = {
                "error_type": error_type,
                "error_message": error_message,
                "error_time": datetime.now().isoformat()
            }
        self.complete_generation(session_id, success=False)

    def read_logs(self, month=None, year=None):
        """Read logs from a specific month/year (current month by default)"""
        if month is None or year is None:
            log_file = self.get_current_log_file()
        else:
            log_file = self.logs_folder / f"generation_{year}_{month:02d}.log"

        if not log_file.exists():
            return []

        logs = []
        with open(log_file, "r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                try:
                    logs.append(json.loads(line))
                except json.JSONDecodeError:
                    continue
        return logs

    def get_stats_summary(self):
        """Get statistics summary from current month logs"""
        logs = self.read_logs()

        stats = {
            "total_generations": len(logs),
            "successful": len([l for l in logs if l.get("status") == "success"]),
            "failed": len([l for l in logs if l.get("status") == "failed"]),
            "total_tokens": sum(l.get("tokens", {}).get("total", 0) for l in logs),
            "average_duration": 0
        }

        durations = [l.get("total_duration") for l in logs if l.get("total_duration")]
        if durations:
            stats["average_duration"] = round(sum(durations) / len(durations), 1)

        return stats


_generation_logger = None


def get_generation_logger():
    """Shared logger instance, created on first use"""
    global _generation_logger
    if _generation_logger is None:
        _generation_logger = GenerationLogger()
    return _generation_logger
