"""rendermap data models.

- ResponseContext: data a page template is rendered against
- RequestContext: request-scoped params and keys
- Helper: values computed at render time
"""

from rendermap.models.response import Helper, RequestContext, ResponseContext

__all__ = [
    "Helper",
    "RequestContext",
    "ResponseContext",
]
