from __future__ import annotations

from typing import Any

from barber_admin.domain.entities.load_state import LoadState, LoadStatus


def render_load_state(state: LoadState) -> dict[str, Any]:
    """Render the fetch state the admin UI switches on (spinner, error banner, content)."""
    rendered: dict[str, Any] = {"state": state.status.value, "message": None}
    if state.status is LoadStatus.error:
        rendered["message"] = state.message or "Could not load the data."
    elif state.status is LoadStatus.loading:
        rendered["message"] = "Loading..."
    return rendered
