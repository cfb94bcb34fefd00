"""
base_templates.py — System default dashboard templates.

One read-only layout per AvailableTemplates member. Users never edit these;
their first visit to a dashboard forks the default into an owned
DashboardTemplate row (see dashboard_template_service).

Callers always get a deep copy so the module-level definitions stay intact.

Called by: services/dashboard_template_service.py
Depends on: models/dashboard.py
"""

import copy

from ..models.dashboard import AvailableTemplates

# Widget id, width and height in grid units on the widest (xl, 4 column) layout
_LANDING_PAGE_WIDGETS = [
    ("landing-explore#lp-explore", 4, 4),
    ("landing-recentlyVisited#lp-recently-visited", 2, 4),
    ("landing-favoriteServices#lp-favorites", 2, 4),
    ("landing-openshift#lp-openshift", 1, 3),
    ("landing-rhel#lp-rhel", 1, 3),
    ("landing-ansible#lp-ansible", 1, 3),
    ("landing-imageBuilder#lp-image-builder", 1, 3),
    ("landing-learningResources#lp-learning", 2, 4),
    ("landing-supportCases#lp-support", 2, 4),
]

# Columns available at each breakpoint
_BREAKPOINT_COLUMNS = {"xl": 4, "lg": 3, "md": 2, "sm": 1}


def _layout(widgets, columns: int) -> list[dict]:
    """Flow widgets left to right into `columns`, wrapping on overflow."""
    items = []
    x, y, row_height = 0, 0, 0
    for widget_id, width, height in widgets:
        w = min(width, columns)
        if x + w > columns:
            x, y, row_height = 0, y + row_height, 0
        items.append(
            {"i": widget_id, "x": x, "y": y, "w": w, "h": height, "maxH": 10, "minH": 1, "static": False}
        )
        x += w
        row_height = max(row_height, height)
    return items


def _config(widgets) -> dict:
    return {bp: _layout(widgets, cols) for bp, cols in _BREAKPOINT_COLUMNS.items()}


_BASE_TEMPLATES = {
    AvailableTemplates.LANDING_PAGE: {
        "name": AvailableTemplates.LANDING_PAGE.value,
        "displayName": "Landing Page",
        "templateConfig": _config(_LANDING_PAGE_WIDGETS),
    },
}


def get_base_template(dashboard: AvailableTemplates) -> dict:
    """Return a copy of the base template for a dashboard."""
    return copy.deepcopy(_BASE_TEMPLATES[dashboard])


def list_base_templates() -> list[dict]:
    """Return copies of every base template, in AvailableTemplates order."""
    return [copy.deepcopy(_BASE_TEMPLATES[t]) for t in AvailableTemplates if t in _BASE_TEMPLATES]
