import json
from unittest.mock import patch

import main
from _models.model import PipelineSummary


def test_build_config_precedence(tmp_path):
    args = main.build_parser().parse_args(["--model", "cli-model", "--chunk-size", "3000", "--strict-chunks"])
    file_values = {"model": "file-model", "max_diff_size": 9000, "chunk_size": 100, "unknown": True}

    config = main.build_config(args, file_values)

    assert config.model == "cli-model"
    assert config.chunk_size == 3000
    assert config.max_diff_size == 9000
    assert config.abort_on_chunk_failure is True
    assert config.max_retries == 3


def test_load_config_file_missing_and_malformed(tmp_path):
    assert main.load_config_file(str(tmp_path / "absent.json")) == {}
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    assert main.load_config_file(str(broken)) == {}


def test_save_default_model_keeps_other_settings(tmp_path):
    path = tmp_path / "cfg" / "default.json"
    path.parent.mkdir()
    path.write_text(json.dumps({"chunk_size": 4000}), encoding="utf-8")

    assert main.save_default_model("llama3:latest", str(path))

    assert json.loads(path.read_text(encoding="utf-8")) == {"chunk_size": 4000, "model": "llama3:latest"}


def test_invalid_configuration_exits_with_error(tmp_path):
    assert main.main(["--chunk-size", "0", "--config", str(tmp_path / "none.json")]) == 1


def test_explicit_commits_are_analyzed(tmp_path):
    with patch("main.get_models", return_value=[]), patch(
        "main.run_pipeline", return_value=PipelineSummary()
    ) as pipeline, patch("main.print_summary"):
        status = main.main(["-c", "abc123", "-c", "def456", "--config", str(tmp_path / "none.json")])

    assert status == 0
    hashes, config = pipeline.call_args[0]
    assert hashes == ["abc123", "def456"]
    assert config.model == "deepseek-r1:8b"


def test_git_log_failure_exits_with_error(tmp_path):
    from _engine.errors import UpstreamFetchError

    with patch("main.get_models", return_value=[]), patch(
        "main.get_recent_commit_hashes", side_effect=UpstreamFetchError("not a git repository")
    ):
        assert main.main(["5", "--config", str(tmp_path / "none.json")]) == 1
