"""Optional language-model enrichment of the simulated CSR reply."""
from __future__ import annotations

from dataclasses import dataclass, field
import json
import logging
import os
from typing import Any, Protocol

from jinja2 import Template
from langchain_community.chat_models import ChatOllama
from langchain_core.messages import BaseMessage
from langchain_core.prompts import ChatPromptTemplate
from langchain_openai import ChatOpenAI

from coachsim.models.coach import ConversationTurn
from coachsim.models.feedback import FeedbackResult
from coachsim.models.scenario import Scenario

logger = logging.getLogger(__name__)


class SupportsInvoke(Protocol):
    """Protocol describing the subset of LangChain interfaces we rely on."""

    def invoke(self, input: Any, **kwargs: Any) -> BaseMessage | str:
        """Invoke the underlying language model."""


@dataclass(slots=True, frozen=True)
class EnrichmentContext:
    """Everything the enricher may use to rewrite the CSR reply."""

    scenario: Scenario
    manager_message: str
    csr_reply: str
    feedback: FeedbackResult
    conversation: tuple[ConversationTurn, ...] = ()


class ReplyEnricher(Protocol):
    """Capability that may return a more natural CSR reply."""

    def improve_reply(self, context: EnrichmentContext) -> str | None:
        """Return a replacement reply, or ``None`` to keep the rule-based one."""


class NoopReplyEnricher:
    """Enricher used when no language model is configured."""

    def improve_reply(self, context: EnrichmentContext) -> str | None:
        return None


ENRICHMENT_SYSTEM_PROMPT = (
    "You are a concise internal coaching assistant for retail branch managers helping reduce PAR90. "
    "Keep replies brief (1-3 sentences)."
)

ENRICHMENT_HUMAN_PROMPT = Template(
    """
Scenario: {{ scenario.label }} ({{ scenario.id }}){% if scenario.context %}. {{ scenario.context }}{% endif %}
{% if conversation %}
Conversation so far:
{% for turn in conversation %}- {{ turn.speaker }}: {{ turn.text }}
{% endfor %}{% endif %}
Manager message: {{ manager_message }}
Current CSR reply (rule-based): {{ csr_reply }}
Coaching feedback: {{ feedback_json }}

Rewrite the CSR reply so it sounds natural while staying consistent with a coaching score of {{ score }}.
Respond with the reply only, as a single paragraph.
""".strip()
)


def _default_prompt() -> ChatPromptTemplate:
    return ChatPromptTemplate.from_messages(
        [
            ("system", ENRICHMENT_SYSTEM_PROMPT),
            ("human", "{enrichment_prompt}"),
        ]
    )


@dataclass(slots=True)
class LLMReplyEnricher:
    """Rewrite the CSR reply with a chat model, keeping only the first paragraph."""

    llm: SupportsInvoke
    prompt: ChatPromptTemplate = field(default_factory=_default_prompt)

    def improve_reply(self, context: EnrichmentContext) -> str | None:
        rendered = ENRICHMENT_HUMAN_PROMPT.render(
            scenario=context.scenario,
            conversation=context.conversation,
            manager_message=context.manager_message,
            csr_reply=context.csr_reply,
            feedback_json=json.dumps(context.feedback.as_dict()),
            score=context.feedback.score,
        )
        messages = self.prompt.format_messages(enrichment_prompt=rendered)
        response = self.llm.invoke(messages)
        text = _extract_content(response).strip()
        if not text:
            return None
        first_paragraph = text.split("\n\n", maxsplit=1)[0].strip()
        return first_paragraph or None


def _extract_content(response: Any) -> str:
    if response is None:
        return ""
    if isinstance(response, str):
        return response
    if isinstance(response, BaseMessage):
        content = response.content
        if isinstance(content, list):
            return "".join(str(part) for part in content)
        return str(content or "")
    if isinstance(response, dict) and "content" in response:
        return str(response["content"])
    return str(response)


def _llm_timeout() -> float:
    raw = os.getenv("COACHSIM_LLM_TIMEOUT")
    try:
        return float(raw) if raw else 30.0
    except ValueError:
        return 30.0


def _default_provider() -> str:
    raw = os.getenv("COACHSIM_LLM_PROVIDER")
    if raw and raw.strip():
        return raw.strip().lower()
    return "openai" if os.getenv("OPENAI_API_KEY") else "none"


def create_enrichment_llm(provider: str | None = None) -> SupportsInvoke | None:
    """Construct the chat model selected by ``COACHSIM_LLM_PROVIDER`` (``None`` when disabled)."""

    selected = (provider or _default_provider()).strip().lower()

    if selected in {"", "none", "off"}:
        return None

    if selected == "openai":
        api_key = os.getenv("OPENAI_API_KEY") or ""
        if not api_key:
            raise RuntimeError("OPENAI_API_KEY must be set to use the openai provider")
        return ChatOpenAI(
            model=os.getenv("COACHSIM_OPENAI_MODEL") or "gpt-4o-mini",
            api_key=api_key,
            base_url=os.getenv("COACHSIM_OPENAI_URL") or None,
            temperature=0.7,
            max_tokens=200,
            timeout=_llm_timeout(),
        )

    if selected == "ollama":
        return ChatOllama(
            model=os.getenv("COACHSIM_OLLAMA_MODEL") or "llama3",
            base_url=(os.getenv("COACHSIM_OLLAMA_URL") or "http://127.0.0.1:11434").rstrip("/"),
            timeout=int(_llm_timeout()),
        )

    raise RuntimeError(f"Unsupported COACHSIM_LLM_PROVIDER: {selected}")


def create_reply_enricher(provider: str | None = None) -> ReplyEnricher:
    """Return the reply enricher for the configured provider.

    A misconfigured provider disables enrichment instead of failing requests.
    """

    try:
        llm = create_enrichment_llm(provider)
    except RuntimeError as exc:
        logger.warning(
            "Reply enrichment unavailable; using rule-based replies",
            extra={"event": "coach.enrich_unavailable", "reason": str(exc)},
        )
        return NoopReplyEnricher()

    if llm is None:
        return NoopReplyEnricher()
    return LLMReplyEnricher(llm=llm)


__all__ = [
    "EnrichmentContext",
    "LLMReplyEnricher",
    "NoopReplyEnricher",
    "ReplyEnricher",
    "SupportsInvoke",
    "create_enrichment_llm",
    "create_reply_enricher",
]
