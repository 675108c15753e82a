"""Keyword rule that turns a transcript into a YES/NO command."""

from collections.abc import Iterable

from logging_config import setup_logging

from .models import Decision

logger = setup_logging()


class CommandAnalyzer:
    """
    Matches transcripts against an ordered list of trigger phrases.

    The phrase list lives only in memory: changes made through the
    ``trigger_phrases`` setter last until the process restarts.
    """

    def __init__(self, trigger_phrases: Iterable[str]):
        self._trigger_phrases = self._normalize(trigger_phrases)

    @property
    def trigger_phrases(self) -> list[str]:
        return list(self._trigger_phrases)

    @trigger_phrases.setter
    def trigger_phrases(self, phrases: Iterable[str]) -> None:
        self._trigger_phrases = self._normalize(phrases)
        logger.info(
            "Trigger phrases updated",
            extra={"trigger_phrases": self._trigger_phrases},
        )

    def analyze(self, text: str | None) -> Decision:
        """
        Returns YES when any trigger phrase occurs in the text, ignoring case.

        Args:
            text: Transcript text. None, empty and blank text yield NO.

        Returns:
            Decision.YES on the first matching phrase, otherwise Decision.NO.
        """
        lower_text = (text or "").lower()

        for phrase in self._trigger_phrases:
            if phrase.lower() in lower_text:
                logger.info(
                    "Trigger phrase found",
                    extra={"trigger_phrase": phrase, "transcript": text},
                )
                return Decision.YES

        logger.info("No trigger phrase found", extra={"transcript": text})
        return Decision.NO

    @staticmethod
    def _normalize(phrases: Iterable[str]) -> list[str]:
        # Blank phrases would match every transcript.
        return [p.strip() for p in phrases if p and p.strip()]
