"""Owned profile document with subscribe/notify and save-on-change."""

import logging
from typing import Callable

from . import dictionaries
from .dictionaries import WordInput
from .errors import NotFound
from .languages import Language
from .models import Dictionary, UserProfile
from .storage import ProfileStorage

log = logging.getLogger(__name__)

Listener = Callable[[UserProfile], None]


class ProfileStore:
    """Single holder of the current profile.

    Each accepted mutation replaces the profile, writes it through the
    storage gateway and notifies subscribers. A refused mutation raises
    and changes nothing.
    """

    def __init__(self, storage: ProfileStorage):
        self.storage = storage
        self._profile = storage.load()
        self._listeners: list[Listener] = []

    def get(self) -> UserProfile | None:
        return self._profile

    def set(self, profile: UserProfile) -> None:
        self.storage.save(profile)
        self._profile = profile
        for listener in list(self._listeners):
            try:
                listener(profile)
            except Exception:
                log.exception("Profile listener %r failed", listener)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _require_profile(self) -> UserProfile:
        if self._profile is None:
            raise NotFound("No profile yet: finish onboarding first.")
        return self._profile

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def onboard(self, name: str) -> UserProfile:
        profile = dictionaries.onboard(name)
        self.set(profile)
        return profile

    def create_dictionary(self, source: Language | str, target: Language | str) -> Dictionary:
        profile, dictionary = dictionaries.create_dictionary(self._require_profile(), source, target)
        self.set(profile)
        return dictionary

    def delete_dictionary(self, dictionary_id: str) -> None:
        self.set(dictionaries.delete_dictionary(self._require_profile(), dictionary_id))

    def dictionary(self, dictionary_id: str) -> Dictionary:
        return dictionaries.get_dictionary(self._require_profile(), dictionary_id)

    def upsert_word(
        self, dictionary_id: str, word_input: WordInput, editing_id: str | None = None
    ) -> Dictionary:
        profile = self._require_profile()
        words = dictionaries.upsert_word(
            dictionaries.get_dictionary(profile, dictionary_id), word_input, editing_id
        )
        self.set(dictionaries.replace_words(profile, dictionary_id, words))
        return self.dictionary(dictionary_id)

    def delete_word(self, dictionary_id: str, word_id: str) -> Dictionary:
        profile = self._require_profile()
        dictionary = dictionaries.get_dictionary(profile, dictionary_id)
        words = dictionaries.delete_word(dictionary, word_id)
        if len(words) != len(dictionary.words):
            self.set(dictionaries.replace_words(profile, dictionary_id, words))
        return self.dictionary(dictionary_id)
