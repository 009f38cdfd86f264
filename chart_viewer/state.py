"""
Viewer state machine.

``ViewerState`` is immutable; every event returns a new state. Phases::

    EMPTY -> LOADED -> CONFIGURED -> RENDERED

An upload or a chart-type change always lands in ``LOADED`` with roles
cleared. Role edits recompute the chart data in place and keep the phase
name (``CONFIGURED`` or ``RENDERED``) while the mapping stays ready; an
edit that leaves the mapping incomplete drops back to ``LOADED``.
A failed upload keeps the previous state and only sets ``message``.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from . import roles as role_ops
from .colors import RandomColorSource
from .config import ViewerSettings
from .errors import ChartViewerError, UnsupportedFormat
from .mapper import map_to_chart_data
from .models import AxisMode, ChartReadyData, ChartType, Dataset, Role, RoleAssignment
from .normalize import load_file

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    EMPTY = "empty"
    LOADED = "loaded"
    CONFIGURED = "configured"
    RENDERED = "rendered"


@dataclass(frozen=True, eq=False)
class ViewerState:
    phase: Phase = Phase.EMPTY
    dataset: Optional[Dataset] = None
    chart_type: ChartType = ChartType.BAR
    roles: RoleAssignment = RoleAssignment()
    mode: AxisMode = AxisMode.CATEGORY
    chart_data: Optional[ChartReadyData] = None
    message: Optional[str] = None
    settings: ViewerSettings = ViewerSettings()


def initial_state(settings: Optional[ViewerSettings] = None) -> ViewerState:
    settings = settings or ViewerSettings()
    return ViewerState(settings=settings, mode=AxisMode(settings.axis_mode))


def _recompute(state, colors=None):
    if state.dataset is None:
        return replace(state, chart_data=None, phase=Phase.EMPTY)
    if colors is None:
        colors = RandomColorSource(state.settings.seed)
    chart_data = map_to_chart_data(
        state.dataset, state.chart_type, state.roles, colors=colors, mode=state.mode
    )
    if chart_data is None:
        phase = Phase.LOADED
    elif state.phase == Phase.RENDERED:
        phase = Phase.RENDERED
    else:
        phase = Phase.CONFIGURED
    return replace(state, chart_data=chart_data, phase=phase)


def load_dataset(state, dataset) -> ViewerState:
    """Replace the dataset; roles and chart data start over"""
    return replace(
        state,
        dataset=dataset,
        roles=role_ops.reset_roles(),
        chart_data=None,
        phase=Phase.LOADED,
        message=None,
    )


def handle_upload(state, filename, content) -> ViewerState:
    """Parse an uploaded file and load it, or keep ``state`` and report why not"""
    try:
        dataset = load_file(filename, content, preview_limit=state.settings.preview_limit)
    except UnsupportedFormat as e:
        logger.warning("Rejected upload %s: %s", filename, e)
        return replace(state, message=str(e))
    except ChartViewerError as e:
        logger.exception("Failed to parse %s", filename)
        return replace(state, message=f"Failed to parse file. Please check the format. ({e})")
    return load_dataset(state, dataset)


def change_chart_type(state, chart_type) -> ViewerState:
    return replace(
        state,
        chart_type=ChartType(chart_type),
        roles=role_ops.reset_roles(),
        chart_data=None,
        phase=Phase.LOADED if state.dataset is not None else Phase.EMPTY,
        message=None,
    )


def change_mode(state, mode, colors=None) -> ViewerState:
    return _recompute(replace(state, mode=AxisMode(mode)), colors)


def select_role(state, role, column, colors=None) -> ViewerState:
    new_roles = role_ops.select_role(
        state.roles, state.chart_type, Role(role), column,
        exclusive_axes=state.settings.exclusive_axes,
    )
    if new_roles == state.roles and state.chart_data is not None:
        return state
    return _recompute(replace(state, roles=new_roles), colors)


def set_y(state, columns, colors=None) -> ViewerState:
    new_roles = role_ops.set_y(
        state.roles, state.chart_type, columns,
        exclusive_axes=state.settings.exclusive_axes,
    )
    if new_roles == state.roles and state.chart_data is not None:
        return state
    return _recompute(replace(state, roles=new_roles), colors)


def mark_rendered(state) -> ViewerState:
    if state.phase == Phase.CONFIGURED:
        return replace(state, phase=Phase.RENDERED)
    return state


def dismiss_message(state) -> ViewerState:
    return replace(state, message=None)


def change_settings(state, settings, colors=None) -> ViewerState:
    """Swap runtime policies; the next upload picks up a new preview limit"""
    return _recompute(replace(state, settings=settings), colors)
