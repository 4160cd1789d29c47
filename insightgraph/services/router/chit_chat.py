"""Small talk: greetings, identity, jokes and thanks."""

import random
import re

GREETINGS = {"hi", "hello", "hey", "good morning", "good evening"}

GREETING_REPLY = "Hello. I am functioning within optimal parameters. How can I help?"
IDENTITY_REPLY = (
    "I am ARA, your knowledge assistant. I live next to your notes and answer from them."
)
THANKS_REPLY = "You are welcome. Ready for the next task."

JOKES = (
    "I tried to explain a pun to a qubit, but it was two-faced.",
    "I would tell you a UDP joke, but you might not get it.",
    "My notes are so well linked that even my shopping list knows about my thesis.",
    "There are 10 kinds of notes: those that are linked and those that are not.",
)

_SCHEDULE = re.compile(
    r"\b(schedul\w*|meetings?|plans?|planning|planned|calendar|appointments?|agenda)\b"
)


def mentions_schedule(text: str) -> bool:
    """Check whether text asks about schedules, meetings or plans."""
    return bool(_SCHEDULE.search(text.lower()))


class ChitChat:
    """Canned small-talk replies."""

    def __init__(self, rng: random.Random | None = None):
        """
        Initialize small talk.

        Args:
            rng: Random source for joke selection
        """
        self.rng = rng or random.Random()

    def reply(self, query: str) -> str | None:
        """
        Reply to small talk.

        Utterances about schedules, meetings or plans are never small talk,
        they go to retrieval.

        Args:
            query: User utterance

        Returns:
            Canned reply, or None if the utterance is not small talk
        """
        lower_query = query.lower().strip()
        if mentions_schedule(lower_query):
            return None

        if lower_query.strip(" !.?,") in GREETINGS:
            return GREETING_REPLY
        if "who are you" in lower_query:
            return IDENTITY_REPLY
        if "joke" in lower_query:
            return self.rng.choice(JOKES)
        if "thank" in lower_query:
            return THANKS_REPLY
        return None
