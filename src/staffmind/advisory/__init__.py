from .llm import AdvisoryProvider, OpenAIAdvisor
from .prompts import build_advisory_prompt

__all__ = ["AdvisoryProvider", "OpenAIAdvisor", "build_advisory_prompt"]
