import json

import pytest
import yaml

from shortcut_core.config_manager import ConfigManager
from shortcut_core.dispatcher import ModelDispatcher


def _write_config(tmp_path, llm_overrides=None):
    llm = {"llm_provider": "openai", "openai_api_key": "sk-fake-key", "model_name": "gpt-test", "max_tokens": 1024}
    llm.update(llm_overrides or {})
    config_path = tmp_path / "settings.yaml"
    with open(config_path, "w") as f:
        yaml.dump({"paths": {"log_dir": str(tmp_path / "logs")}, "llm": llm, "server": {}}, f)
    return str(config_path)


@pytest.fixture
def make_config(tmp_path):
    def _make(**llm_overrides):
        return ConfigManager(config_path=_write_config(tmp_path, llm_overrides))

    return _make


@pytest.fixture
def mock_create(mocker):
    mock_client = mocker.patch("shortcut_core.dispatcher.instructor.from_openai")
    return mock_client.return_value.chat.completions.create


@pytest.fixture
def dispatcher(make_config, mock_create):
    return ModelDispatcher(make_config())


@pytest.fixture
def reply_with():
    """Makes the mocked model answer with `payload`, parsed the way Instructor parses tool output."""

    def _reply(payload):
        def create(**kwargs):
            return kwargs["response_model"].model_validate_json(json.dumps(payload))

        return create

    return _reply


@pytest.fixture
def analysis_payload():
    return {
        "summary": "A cooking tutorial.",
        "viralMoments": [
            {
                "timestamp": "1:23",
                "duration": "15",
                "description": "The souffle rises.",
                "hookReason": "Visual payoff",
                "viralScore": 9,
            }
        ],
        "keyQuotes": ["Butter is flavor."],
        "visualHighlights": [{"timestamp": "2:10", "description": "Overhead plating shot"}],
        "targetAudience": {
            "demographic": "Home cooks 25-40",
            "recommendedDuration": "30s",
            "hashtags": ["#cooking", "#souffle"],
        },
    }


@pytest.fixture
def ideas_payload():
    return {
        "ideas": [
            {
                "title": "Espresso in 60 seconds",
                "concept": "A speed run through a morning shot.",
                "hook": "You are pulling it wrong.",
                "viralPotential": 8,
                "suitabilityScore": 7.5,
            }
        ]
    }
