import json

import httpx
import openai
import pytest
from openai.types.chat import ChatCompletion
from tenacity import Retrying

from shortcut_core.capabilities import flows, registry
from shortcut_core.capabilities.models import (
    AnalyzeVideoInput,
    AnalyzeVideoOutput,
    GenerateIdeasInput,
    OptimizeTrendsInput,
    RepurposeContentInput,
)
from shortcut_core.capabilities.prompts import SYSTEM_PROMPT
from shortcut_core.dispatcher import ModelDispatcher, single_attempt
from shortcut_core.errors import ContractMismatchError, PreconditionError, TransportError

VIDEO_URL = "https://www.youtube.com/watch?v=abc123"
IDEAS_INPUT = GenerateIdeasInput(topic="Coffee", target_audience="Students", style="Educational")


def test_dispatch_success(dispatcher, mock_create, reply_with, analysis_payload):
    mock_create.side_effect = reply_with(analysis_payload)

    result = flows.analyze_video_content(dispatcher, AnalyzeVideoInput(video_url=VIDEO_URL))

    assert isinstance(result, AnalyzeVideoOutput)
    assert result.summary == "A cooking tutorial."
    assert result.viral_moments[0].viral_score == 9
    assert result.target_audience.hashtags == ["#cooking", "#souffle"]


def test_dispatch_request_shape(dispatcher, mock_create, reply_with, analysis_payload):
    mock_create.side_effect = reply_with(analysis_payload)

    dispatcher.dispatch(registry.ANALYZE_VIDEO, AnalyzeVideoInput(video_url=VIDEO_URL))

    assert mock_create.call_count == 1
    kwargs = mock_create.call_args.kwargs
    assert kwargs["model"] == "gpt-test"
    assert kwargs["max_tokens"] == 1024
    assert isinstance(kwargs["max_retries"], Retrying)
    assert kwargs["response_model"] is AnalyzeVideoOutput
    assert kwargs["messages"][0] == {"role": "system", "content": SYSTEM_PROMPT}
    assert kwargs["messages"][1]["role"] == "user"
    assert f"Video URL: {VIDEO_URL}" in kwargs["messages"][1]["content"]
    assert len(kwargs["extra_body"]["safety_settings"]) == 4


def test_dispatch_forwards_tool_hints(dispatcher, mock_create):
    mock_create.side_effect = RuntimeError("stop here")
    data = OptimizeTrendsInput(short_details="A 30s latte art tutorial", category="Coffee")

    with pytest.raises(TransportError):
        flows.optimize_short_for_trends(dispatcher, data)

    assert mock_create.call_args.kwargs["extra_body"] == {"tools_hint": ["google_search"]}


def test_dispatch_without_hints(dispatcher, mock_create, reply_with, ideas_payload):
    mock_create.side_effect = reply_with(ideas_payload)

    result = flows.generate_video_ideas(dispatcher, IDEAS_INPUT)

    assert result.ideas[0].title == "Espresso in 60 seconds"
    assert "extra_body" not in mock_create.call_args.kwargs


def test_hints_can_be_disabled(make_config, mock_create, reply_with, analysis_payload):
    dispatcher = ModelDispatcher(make_config(pass_execution_hints=False))
    mock_create.side_effect = reply_with(analysis_payload)

    dispatcher.dispatch(registry.ANALYZE_VIDEO, AnalyzeVideoInput(video_url=VIDEO_URL))

    assert "extra_body" not in mock_create.call_args.kwargs


def test_transport_failure(dispatcher, mock_create):
    mock_create.side_effect = ConnectionError("network down")

    with pytest.raises(TransportError) as exc_info:
        flows.generate_video_ideas(dispatcher, IDEAS_INPUT)

    assert exc_info.value.capability == "generate_video_ideas"
    assert mock_create.call_count == 1


def test_contract_mismatch_on_missing_field(dispatcher, mock_create, reply_with, analysis_payload):
    del analysis_payload["targetAudience"]
    mock_create.side_effect = reply_with(analysis_payload)

    with pytest.raises(ContractMismatchError):
        flows.analyze_video_content(dispatcher, AnalyzeVideoInput(video_url=VIDEO_URL))

    # One attempt only
    assert mock_create.call_count == 1


def test_contract_mismatch_on_numeral_string(dispatcher, mock_create, reply_with, ideas_payload):
    ideas_payload["ideas"][0]["viralPotential"] = "8"
    mock_create.side_effect = reply_with(ideas_payload)

    with pytest.raises(ContractMismatchError):
        flows.generate_video_ideas(dispatcher, IDEAS_INPUT)


def test_contract_mismatch_on_wrong_type(dispatcher, mock_create):
    mock_create.return_value = {"ideas": []}

    with pytest.raises(ContractMismatchError):
        flows.generate_video_ideas(dispatcher, IDEAS_INPUT)


def test_precondition_checked_before_call(dispatcher, mock_create):
    with pytest.raises(PreconditionError):
        flows.repurpose_content(dispatcher, RepurposeContentInput())

    mock_create.assert_not_called()


def test_no_api_key(make_config, mock_create):
    dispatcher = ModelDispatcher(make_config(openai_api_key=None))
    assert dispatcher.client is None

    with pytest.raises(TransportError):
        flows.generate_video_ideas(dispatcher, IDEAS_INPUT)

    mock_create.assert_not_called()


def test_anthropic_provider(mocker, make_config):
    mock_from_anthropic = mocker.patch("shortcut_core.dispatcher.instructor.from_anthropic")

    dispatcher = ModelDispatcher(make_config(llm_provider="anthropic", anthropic_api_key="sk-ant-fake"))

    assert dispatcher.client is mock_from_anthropic.return_value


def test_unknown_provider(make_config):
    with pytest.raises(ValueError):
        ModelDispatcher(make_config(llm_provider="carrier-pigeon"))


def test_base_url_passed_to_client(mocker, make_config):
    mocker.patch("shortcut_core.dispatcher.instructor.from_openai")
    mock_openai = mocker.patch("shortcut_core.dispatcher.OpenAI")

    ModelDispatcher(make_config(base_url="http://localhost:11434/v1", timeout_seconds=30))

    mock_openai.assert_called_once_with(
        api_key="sk-fake-key", base_url="http://localhost:11434/v1", timeout=30.0
    )


def test_single_attempt_policy():
    policy = single_attempt()
    assert policy.stop.max_attempt_number == 1
    assert policy.reraise is True
    assert single_attempt() is not policy


# --- Real OpenAI client and Instructor retry loop; only the HTTP call is replaced ---


def _tool_call_completion(arguments, name="GenerateIdeasOutput"):
    return ChatCompletion.model_validate(
        {
            "id": "chatcmpl-test",
            "object": "chat.completion",
            "created": 0,
            "model": "gpt-test",
            "choices": [
                {
                    "index": 0,
                    "finish_reason": "tool_calls",
                    "message": {
                        "role": "assistant",
                        "content": None,
                        "tool_calls": [
                            {
                                "id": "call_1",
                                "type": "function",
                                "function": {"name": name, "arguments": arguments},
                            }
                        ],
                    },
                }
            ],
            "usage": {"prompt_tokens": 10, "completion_tokens": 10, "total_tokens": 20},
        }
    )


@pytest.fixture
def openai_create(mocker):
    return mocker.patch("openai.resources.chat.completions.Completions.create")


def test_real_client_parses_tool_call(make_config, openai_create, ideas_payload):
    openai_create.return_value = _tool_call_completion(json.dumps(ideas_payload))
    dispatcher = ModelDispatcher(make_config())

    result = flows.generate_video_ideas(dispatcher, IDEAS_INPUT)

    assert result.ideas[0].viral_potential == 8
    assert openai_create.call_count == 1
    assert openai_create.call_args.kwargs["model"] == "gpt-test"


def test_real_client_never_reasks_on_contract_mismatch(make_config, openai_create, ideas_payload):
    ideas_payload["ideas"][0]["viralPotential"] = "9"
    openai_create.return_value = _tool_call_completion(json.dumps(ideas_payload))
    dispatcher = ModelDispatcher(make_config())

    with pytest.raises(ContractMismatchError):
        flows.generate_video_ideas(dispatcher, IDEAS_INPUT)

    assert openai_create.call_count == 1


def test_real_client_never_reasks_on_malformed_json(make_config, openai_create):
    openai_create.return_value = _tool_call_completion('{"ideas": [')
    dispatcher = ModelDispatcher(make_config())

    with pytest.raises(ContractMismatchError):
        flows.generate_video_ideas(dispatcher, IDEAS_INPUT)

    assert openai_create.call_count == 1


def test_real_client_connection_error_is_transport(make_config, openai_create):
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    openai_create.side_effect = openai.APIConnectionError(request=request)
    dispatcher = ModelDispatcher(make_config())

    with pytest.raises(TransportError):
        flows.generate_video_ideas(dispatcher, IDEAS_INPUT)

    assert openai_create.call_count == 1
