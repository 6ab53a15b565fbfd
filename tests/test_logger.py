"""Unit tests for the generation activity log."""

import json

from logger import GenerationLogger


class TestGenerationLogger:

    def test_successful_session(self, generation_logger):
        session_id = generation_logger.start_generation("physics", "single", "3", 120)
        generation_logger.record_tokens(session_id, 10, 20, 30)
        generation_logger.complete_generation(session_id, blocks_written=["3"])

        [entry] = generation_logger.read_logs()
        assert entry["subject"] == "physics"
        assert entry["target_block"] == "3"
        assert entry["input_chars"] == 120
        assert entry["status"] == "success"
        assert entry["tokens"] == {"input": 10, "output": 20, "total": 30}
        assert entry["blocks_written"] == ["3"]
        assert entry["total_duration"] >= 0
        assert generation_logger.active_sessions == {}

    def test_failed_session(self, generation_logger):
        session_id = generation_logger.start_generation("maths", "full")
        generation_logger.fail_generation(session_id, "NETWORK_ERROR", "503")

        [entry] = generation_logger.read_logs()
        assert entry["status"] == "failed"
        assert entry["error"]["error_message"] == "503"

    def test_unknown_session_writes_nothing(self, generation_logger):
        generation_logger.complete_generation("missing")

        assert generation_logger.read_logs() == []

    def test_one_json_line_per_session(self, generation_logger):
        for subject in ("ict", "french"):
            generation_logger.complete_generation(generation_logger.start_generation(subject, "full"))

        lines = generation_logger.get_current_log_file().read_text(encoding="utf-8").splitlines()
        assert [json.loads(line)["subject"] for line in lines] == ["ict", "french"]

    def test_malformed_lines_skipped(self, generation_logger):
        generation_logger.get_current_log_file().write_text('garbage\n\n{"status": "success"}\n', encoding="utf-8")

        assert generation_logger.read_logs() == [{"status": "success"}]

    def test_other_month_missing(self, generation_logger):
        assert generation_logger.read_logs(month=1, year=1999) == []

    def test_stats_summary(self, generation_logger):
        ok = generation_logger.start_generation("ict", "full")
        generation_logger.record_tokens(ok, 1, 2, 3)
        generation_logger.complete_generation(ok)
        generation_logger.fail_generation(generation_logger.start_generation("ict", "full"), "X", "y")

        stats = generation_logger.get_stats_summary()

        assert stats["total_generations"] == 2
        assert stats["successful"] == 1
        assert stats["failed"] == 1
        assert stats["total_tokens"] == 3

    def test_creates_folder(self, tmp_path):
        GenerationLogger(logs_folder=tmp_path / "a" / "b")

        assert (tmp_path / "a" / "b").is_dir()
