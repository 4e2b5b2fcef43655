"""Structured user-message builder for ICP completions."""

import json
from typing import Dict, List, Sequence

from llm_completion.schema import DomainPayload

_SECTION_TEMPLATE = """\
## {title}
```json
{data}
```
"""

_TASK_INSTRUCTIONS = """\
# TASK

Answer every question above for this domain using the provided data.
Address each question in order, under its number.
"""


class IcpPromptBuilder:
    """Builds the chat messages for one domain.

    The system message carries the user's system prompt verbatim. The
    user message combines the optional user context, the domain data and
    the numbered question list.
    """

    def build_messages(
        self,
        system_prompt: str,
        questions: Sequence[str],
        payload: DomainPayload,
    ) -> List[Dict[str, str]]:
        """Build the message list for the chat completions API.

        Args:
            system_prompt: Instruction text of the selected prompt template.
            questions: Selected question texts, in display order.
            payload: Domain data and optional user context.

        Returns:
            A ``system`` message followed by one ``user`` message.
        """
        return [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": self.build_user_message(questions, payload)},
        ]

    def build_user_message(self, questions: Sequence[str], payload: DomainPayload) -> str:
        sections = []
        if payload.user_context:
            sections.append(self._format_section("User Context", payload.user_context))
        sections.append(self._format_section("Domain Data", payload.data_section()))

        return (
            "# PROVIDED DATA\n\n"
            + "\n".join(sections)
            + "\n# QUESTIONS\n\n"
            + self.format_questions(questions)
            + "\n\n"
            + _TASK_INSTRUCTIONS
        )

    @staticmethod
    def format_questions(questions: Sequence[str]) -> str:
        """Number questions starting at 1, one per line."""
        return "\n".join(f"{index}. {question}" for index, question in enumerate(questions, start=1))

    @staticmethod
    def _format_section(title: str, data: object) -> str:
        body = json.dumps(data, indent=2, default=str, ensure_ascii=False)
        return _SECTION_TEMPLATE.format(title=title, data=body)
