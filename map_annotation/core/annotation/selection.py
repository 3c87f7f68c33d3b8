"""
Popup selection: which marker is being viewed or edited.
"""

import dataclasses
import logging
from gettext import gettext as _

from ..errors import InvalidSelectionTransition, UnknownEditField
from .events import AnnotationEvent, EventType
from .state import Editing, Marker, NoSelection, Selection, Viewing
from .store import AnnotationStore

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("title", "image")


class SelectionState:
    """
    Tagged selection over ``NoSelection | Viewing | Editing``.

    ``Viewing`` references the stored marker. ``Editing`` owns a copy,
    so edits stay local until ``commit_edit``.
    """

    def __init__(self, store: AnnotationStore):
        self.store = store
        self._current: Selection = NoSelection()

    @property
    def current(self) -> Selection:
        return self._current

    @property
    def marker_id(self):
        """Id of the selected marker, or None."""
        if isinstance(self._current, Viewing):
            return self._current.marker.id
        if isinstance(self._current, Editing):
            return self._current.draft.id
        return None

    def _set(self, selection: Selection):
        self._current = selection
        self.store.events.emit(
            AnnotationEvent(
                EventType.SELECTION_CHANGED,
                {"kind": type(selection).__name__, "marker_id": self.marker_id},
            )
        )

    def view(self, marker: Marker):
        """Open the read-only popup for ``marker``."""
        self._set(Viewing(marker))

    def begin_edit(self, marker: Marker):
        """Switch from viewing ``marker`` to editing a copy of it."""
        current = self._current
        if not isinstance(current, Viewing) or current.marker.id != marker.id:
            raise InvalidSelectionTransition(
                _("Editing marker {id} requires viewing it first").format(id=marker.id)
            )
        self._set(Editing(dataclasses.replace(current.marker)))

    def update_edit_draft(self, **patch):
        """Change fields of the edit copy. Nothing else sees the change."""
        current = self._current
        if not isinstance(current, Editing):
            raise InvalidSelectionTransition(_("No marker is being edited"))
        for key in patch:
            if key not in EDITABLE_FIELDS:
                raise UnknownEditField(key)
        self._current = Editing(dataclasses.replace(current.draft, **patch))
        self.store.events.emit(
            AnnotationEvent(
                EventType.EDIT_DRAFT_UPDATED,
                {"marker_id": current.draft.id, "fields": sorted(patch)},
            )
        )

    def commit_edit(self) -> Marker:
        """Write the edit copy to the store and go back to viewing it."""
        current = self._current
        if not isinstance(current, Editing):
            raise InvalidSelectionTransition(_("No marker is being edited"))

        draft = current.draft
        self.store.update_marker(draft.id, draft)
        committed = self.store.get_marker(draft.id)
        if committed is None:
            # Removed while the popup was open
            logger.warning("Edited marker %s no longer exists", draft.id)
            self._set(NoSelection())
            return draft
        self._set(Viewing(committed))
        return committed

    def cancel(self):
        """Close any popup."""
        self._set(NoSelection())

    def delete_and_clear(self, marker_id: int):
        """Delete a marker and close any popup."""
        self.store.remove_marker(marker_id)
        self._set(NoSelection())
