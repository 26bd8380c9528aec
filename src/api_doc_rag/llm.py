"""LLM client wrapper around litellm.

Answer generation is optional: callers treat LlmError as "no generated
answer" and fall back to the retrieved context.
"""

from pathlib import Path

from litellm import completion

from api_doc_rag.errors import LlmError

DEFAULT_MODEL = "groq/llama-3.3-70b-versatile"

PROMPTS_DIR = Path(__file__).parent / "prompts"


class LlmClient:
    """Wrapper for LLM API calls via litellm."""

    def __init__(self, model: str | None = None, timeout: float = 30.0):
        self.model = model or DEFAULT_MODEL
        self.timeout = timeout

    def call(self, system: str, user: str) -> str:
        """Send a system+user message to the LLM and return the response text."""
        try:
            response = completion(
                model=self.model,
                messages=[
                    {"role": "system", "content": system},
                    {"role": "user", "content": user},
                ],
                temperature=0.1,
                timeout=self.timeout,
            )
        except Exception as e:
            raise LlmError(f"{self.model}: {e}") from e

        content = response.choices[0].message.content
        if not content or not content.strip():
            raise LlmError(f"{self.model}: empty response")
        return content.strip()

    def generate_answer(self, query: str, context: str) -> str:
        """Answer ``query`` using only the retrieved documentation ``context``."""
        system = (PROMPTS_DIR / "answer.md").read_text(encoding="utf-8")
        user = f"CONTEXT:\n{context}\n\nQUESTION: {query}"
        return self.call(system=system, user=user)
