from unittest.mock import patch

import requests

from _models.config import PipelineConfig
from _engine.ollama.model import get_models, is_model_installed, select_model

MODELS = [
    {"name": "llama3:latest", "model": "llama3:latest", "size": 4_700_000_000},
    {"name": "deepseek-r1:8b", "model": "deepseek-r1:8b", "size": 4_900_000_000},
]


def test_is_model_installed():
    assert is_model_installed(MODELS, "deepseek-r1:8b")
    assert is_model_installed(MODELS, "llama3")
    assert not is_model_installed(MODELS, "mistral")
    assert not is_model_installed([], "llama3")


def test_get_models_lists_tags():
    response = requests.Response()
    response.status_code = 200
    response._content = b'{"models": [{"name": "llama3:latest"}]}'

    with patch("_engine.ollama.model.requests.get", return_value=response) as get:
        models = get_models(PipelineConfig(base_url="http://ollama:11434/api"))

    assert models == [{"name": "llama3:latest"}]
    assert get.call_args[0][0] == "http://ollama:11434/api/tags"


def test_get_models_connection_error():
    with patch("_engine.ollama.model.requests.get", side_effect=requests.exceptions.ConnectionError()):
        assert get_models(PipelineConfig()) == []


def test_select_model_retries_until_valid():
    with patch("_engine.ollama.model.console.input", side_effect=["abc", "9", "2"]):
        assert select_model(MODELS) == "deepseek-r1:8b"


def test_select_model_quit():
    with patch("_engine.ollama.model.console.input", return_value="q"):
        assert select_model(MODELS) is None
