"""
Column role selection.

Pure transitions on ``RoleAssignment``. Roles a chart type does not accept
are ignored rather than rejected, so the UI can forward every widget event.
"""

import logging
from dataclasses import replace

from .models import AxisMode, ChartFamily, ChartType, Role, RoleAssignment

logger = logging.getLogger(__name__)


def reset_roles() -> RoleAssignment:
    return RoleAssignment()


def is_role_enabled(chart_type: ChartType, role: Role) -> bool:
    contract = ChartType(chart_type).contract
    if role == Role.X:
        return contract.x_enabled
    if role == Role.LABEL:
        return contract.label_enabled
    return True


def _clip_y(columns, chart_type):
    y_max = ChartType(chart_type).contract.y_max
    return tuple(columns) if y_max is None else tuple(columns)[:y_max]


def select_role(roles, chart_type, role, column, exclusive_axes=True) -> RoleAssignment:
    """Assign ``column`` to ``role``; ``None`` clears ``x``/``label``.

    For a multi-valued ``y`` the column is toggled in or out of the
    selection. With ``exclusive_axes`` a column cannot be both ``x`` and a
    ``y`` column.
    """
    role = Role(role)
    if not is_role_enabled(chart_type, role):
        logger.debug("Ignoring %s for %s: role disabled", role.value, chart_type)
        return roles

    if role == Role.X:
        y = roles.y
        if exclusive_axes and column is not None:
            y = tuple(col for col in y if col != column)
        return replace(roles, x=column, y=y)

    if role == Role.LABEL:
        return replace(roles, label=column)

    if column is None:
        return replace(roles, y=())
    if exclusive_axes and column == roles.x:
        return roles

    if ChartType(chart_type).contract.y_max == 1:
        return replace(roles, y=(column,))
    if column in roles.y:
        return replace(roles, y=tuple(col for col in roles.y if col != column))
    return replace(roles, y=roles.y + (column,))


def set_y(roles, chart_type, columns, exclusive_axes=True) -> RoleAssignment:
    """Replace the whole ``y`` selection, as a multiselect widget does"""
    columns = [col for col in dict.fromkeys(columns) if col is not None]
    if exclusive_axes and roles.x is not None:
        columns = [col for col in columns if col != roles.x]
    return replace(roles, y=_clip_y(columns, chart_type))


def is_ready(roles, chart_type, mode=AxisMode.CATEGORY) -> bool:
    """Whether ``roles`` satisfy what ``chart_type`` needs to be mapped"""
    chart_type = ChartType(chart_type)
    contract = chart_type.contract

    if contract.family == ChartFamily.PROPORTION:
        return len(roles.y) == 1
    if roles.x is None:
        return False
    if chart_type == ChartType.BAR and AxisMode(mode) == AxisMode.SCALED:
        return True
    return len(roles.y) >= contract.y_min
