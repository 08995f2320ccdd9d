"""Standalone/shared data mode controller."""

import logging
import threading
from typing import Callable, Optional

from schedulec.database.base import Database
from schedulec.domain.entities import DataMode
from schedulec.settings import IS_USING_SHARED_DATA, MODE_WAS_EXPLICITLY_SET, Preferences

logger = logging.getLogger(__name__)

StoreFactory = Callable[[DataMode], Database]
ModeListener = Callable[[], None]


class ModeController:
    """Owns the choice of backing store and the persisted mode flags.

    Switching mode points the controller at a different store; it does not
    move data. Code that captured the previous store keeps using it, so a
    write issued before the switch completes where it was issued.
    """

    def __init__(self, preferences: Preferences, store_factory: StoreFactory):
        """Initialize mode controller.

        Args:
            preferences: Persisted flags (isUsingSharedData, modeWasExplicitlySet)
            store_factory: Builds the store for a mode
        """
        self.preferences = preferences
        self.store_factory = store_factory
        self._lock = threading.Lock()
        self._listeners: list[ModeListener] = []
        self._database: Optional[Database] = None

    def get_state(self) -> DataMode:
        """Return unset, standalone or shared."""
        if not self.preferences.has(IS_USING_SHARED_DATA):
            return DataMode.UNSET
        if self.preferences.get_bool(IS_USING_SHARED_DATA):
            return DataMode.SHARED
        return DataMode.STANDALONE

    def get_mode(self) -> DataMode:
        """Return the effective mode; an unset mode reads as standalone."""
        if self.get_state() is DataMode.SHARED:
            return DataMode.SHARED
        return DataMode.STANDALONE

    @property
    def mode_was_explicitly_set(self) -> bool:
        """True once the user has chosen a mode themselves."""
        return self.preferences.get_bool(MODE_WAS_EXPLICITLY_SET)

    def initialize(self) -> DataMode:
        """Apply the first-run default and return the effective mode.

        An unset mode silently becomes standalone; the explicit flag is left
        alone so a later screen can still tell the user never decided.
        """
        if self.get_state() is DataMode.UNSET:
            self.preferences.set_bool(IS_USING_SHARED_DATA, False)
            logger.info("No data mode chosen yet; defaulting to standalone")
        return self.get_mode()

    @property
    def database(self) -> Database:
        """The store backing the current mode, opened on first use."""
        with self._lock:
            if self._database is None:
                self._database = self._open(self.get_mode())
            return self._database

    def _open(self, mode: DataMode) -> Database:
        database = self.store_factory(mode)
        database.connect()
        database.initialize_schema()
        return database

    def set_mode(self, shared: bool) -> DataMode:
        """Switch to the shared or standalone store and remember the choice.

        Args:
            shared: True for the shared store, False for standalone

        Returns:
            The new mode
        """
        new_mode = DataMode.SHARED if shared else DataMode.STANDALONE
        with self._lock:
            # The choice is only persisted once the new store has opened
            opened = self._open(new_mode)
            self.preferences.set_many(
                {IS_USING_SHARED_DATA: shared, MODE_WAS_EXPLICITLY_SET: True}
            )
            previous = self._database
            self._database = opened
            if previous is not None:
                previous.disconnect()

        logger.info("Data mode switched to %s", new_mode.value)
        self._notify()
        return new_mode

    def subscribe(self, listener: ModeListener) -> None:
        """Register a callback for the mode-changed notification."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: ModeListener) -> None:
        """Remove a previously registered callback."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        # Fire-and-forget: one failing listener does not stop the others
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                logger.exception("Mode change listener %r failed", listener)

    def close(self) -> None:
        """Disconnect the current store."""
        with self._lock:
            if self._database is not None:
                self._database.disconnect()
                self._database = None
