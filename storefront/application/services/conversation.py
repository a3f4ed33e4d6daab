"""Prompt assembly for the shopping assistant."""

from typing import Optional, Sequence

from storefront.application.models import ConversationTurn
from storefront.config.settings import settings
from storefront.infrastructure.llm.prompts import ASSISTANT_PROMPT

SPEAKER_LABELS = {"user": "Customer", "assistant": "Assistant"}


class ConversationAssembler:
    """Combines persona, product context, recent history and the new message."""

    def __init__(
        self,
        history_window: Optional[int] = None,
        store_name: Optional[str] = None,
        currency: Optional[str] = None,
        currency_name: Optional[str] = None,
    ):
        self.history_window = settings.history_window if history_window is None else history_window
        self.store_name = store_name or settings.store_name
        self.currency = currency or settings.currency
        self.currency_name = currency_name or settings.currency_name

    def render_history(self, history: Sequence[ConversationTurn]) -> str:
        """
        Render the most recent turns as Customer/Assistant lines.

        Older turns beyond the window are dropped.
        """
        if not history or self.history_window <= 0:
            return ""
        recent = list(history)[-self.history_window:]
        lines = ["PREVIOUS CONVERSATION:"]
        lines.extend(f"{SPEAKER_LABELS[turn.speaker]}: {turn.text}" for turn in recent)
        return "\n".join(lines)

    def assemble(
        self,
        user_message: str,
        product_context: str,
        history: Sequence[ConversationTurn] = (),
    ) -> str:
        """Build the single prompt string sent to the model."""
        return ASSISTANT_PROMPT.format(
            store_name=self.store_name,
            currency=self.currency,
            currency_name=self.currency_name,
            product_context=product_context,
            conversation_context=self.render_history(history),
            user_message=user_message,
        )
