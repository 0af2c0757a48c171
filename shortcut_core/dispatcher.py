from json import JSONDecodeError
from typing import Any, Dict, Optional

import instructor
from anthropic import Anthropic
from instructor.core import IncompleteOutputException, InstructorRetryException, ResponseParsingError
from instructor.core import ValidationError as InstructorValidationError
from loguru import logger
from openai import OpenAI
from pydantic import ValidationError
from tenacity import Retrying, stop_after_attempt

from shortcut_core.capabilities.models import InputContract, OutputContract
from shortcut_core.capabilities.prompts import SYSTEM_PROMPT
from shortcut_core.capabilities.registry import Capability
from shortcut_core.config_manager import ConfigManager
from shortcut_core.errors import ContractMismatchError, TransportError

# Failures that mean the model answered, but not in the contract's shape
CONTRACT_ERRORS = (
    ValidationError,
    JSONDecodeError,
    InstructorValidationError,
    ResponseParsingError,
    IncompleteOutputException,
    InstructorRetryException,
)


def single_attempt() -> Retrying:
    """One call per submission: the model is never re-asked after a bad reply."""
    return Retrying(stop=stop_after_attempt(1), reraise=True)


class ModelDispatcher:
    """Sends one rendered prompt per call to the configured model and parses the reply."""

    def __init__(self, config_manager: ConfigManager):
        self.cfg = config_manager.llm
        self.client: Optional[Any] = self._init_client()

    def _init_client(self) -> Optional[Any]:
        """Initialize the LLM client wrapped with Instructor."""
        client_kwargs: Dict[str, Any] = {}
        if self.cfg.timeout_seconds is not None:
            client_kwargs["timeout"] = self.cfg.timeout_seconds

        if self.cfg.llm_provider == "openai":
            api_key = self.cfg.openai_api_key
            if not api_key:
                logger.warning("OpenAI API Key not found. Every capability call will fail.")
                return None
            if self.cfg.base_url:
                client_kwargs["base_url"] = self.cfg.base_url
            return instructor.from_openai(OpenAI(api_key=api_key, **client_kwargs))

        elif self.cfg.llm_provider == "anthropic":
            api_key = self.cfg.anthropic_api_key
            if not api_key:
                logger.warning("Anthropic API Key not found. Every capability call will fail.")
                return None
            return instructor.from_anthropic(Anthropic(api_key=api_key, **client_kwargs))

        else:
            raise ValueError(f"Unsupported LLM provider: {self.cfg.llm_provider}")

    def _request_options(self, capability: Capability) -> Dict[str, Any]:
        if not self.cfg.pass_execution_hints or capability.hints.is_empty():
            return {}
        return {"extra_body": capability.hints.as_request_body()}

    def dispatch(self, capability: Capability, data: InputContract) -> OutputContract:
        """
        Runs one capability against the model. The input is trusted to be validated.

        Raises:
            PreconditionError: required input combination missing; no call is made.
            TransportError: the call failed or no client is configured.
            ContractMismatchError: the reply did not parse into the output contract.
        """
        capability.check_preconditions(data)

        if not self.client:
            logger.error(f"LLM Client not available. Cannot run {capability.name}.")
            raise TransportError(capability.name, "LLM client not configured")

        user_prompt = capability.render_prompt(data)
        logger.info(f"Dispatching {capability.name} ({len(user_prompt)} prompt chars)")

        try:
            resp = self.client.chat.completions.create(
                model=self.cfg.model_name,
                response_model=capability.output_model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": user_prompt},
                ],
                max_tokens=self.cfg.max_tokens,
                max_retries=single_attempt(),
                **self._request_options(capability),
            )
        except Exception as e:
            # Instructor wraps whatever ended the attempt; classify by that
            cause = e.__cause__ if isinstance(e, InstructorRetryException) and e.__cause__ is not None else e
            if isinstance(cause, CONTRACT_ERRORS):
                logger.error(f"{capability.name} response did not match its contract: {cause}")
                raise ContractMismatchError(capability.name, "response did not match the output contract") from e
            logger.error(f"{capability.name} model call failed: {cause}")
            raise TransportError(capability.name, "model call failed") from e

        if not isinstance(resp, capability.output_model):
            logger.error(f"{capability.name} returned {type(resp).__name__}, expected {capability.output_model.__name__}")
            raise ContractMismatchError(capability.name, "unexpected response type")

        logger.success(f"{capability.name} completed.")
        return resp
