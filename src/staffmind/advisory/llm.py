from typing import Protocol
import logging

from openai import AsyncOpenAI, OpenAIError

from staffmind.errors import AdvisoryServiceUnavailable
from staffmind.platform.config import Settings, get_settings

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a resource planning assistant for a compliance team. "
    "Be concise and factual. Do not change the proposed team."
)


class AdvisoryProvider(Protocol):
    async def advise(self, context: str) -> str:
        ...


class OpenAIAdvisor:
    def __init__(self, settings: Settings | None = None, client: AsyncOpenAI | None = None):
        self.settings = settings or get_settings()
        self.client = client or AsyncOpenAI(api_key=self.settings.OPENAI_API_KEY)

    async def advise(self, context: str) -> str:
        try:
            completion = await self.client.chat.completions.create(
                model=self.settings.OPENAI_MODEL,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": context},
                ],
                temperature=0.3,
            )
        except OpenAIError as e:
            logger.warning(f"Advisory request failed: {e}")
            raise AdvisoryServiceUnavailable(str(e)) from e

        if not completion.choices:
            raise AdvisoryServiceUnavailable("Advisory service returned no choices")

        content = completion.choices[0].message.content
        if not content:
            raise AdvisoryServiceUnavailable("Advisory service returned an empty response")
        return content.strip()
