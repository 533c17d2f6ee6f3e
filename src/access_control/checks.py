"""System checks for role policy configuration."""

from django.core.checks import Error, register
from django.urls import URLPattern, URLResolver, get_resolver

from access_control.permissions import RolePolicyPermission
from access_control.policy import ROLE_POLICIES


def _iter_view_classes(patterns):
    for entry in patterns:
        if isinstance(entry, URLResolver):
            yield from _iter_view_classes(entry.url_patterns)
        elif isinstance(entry, URLPattern):
            view_cls = getattr(entry.callback, "cls", None)
            if view_cls is not None:
                yield view_cls


@register()
def role_policies_are_known(app_configs, **kwargs):
    """Ensure routed views using RolePolicyPermission name existing predicates."""
    errors: list[Error] = []
    seen = set()

    for view_cls in _iter_view_classes(get_resolver().url_patterns):
        if view_cls in seen:
            continue
        seen.add(view_cls)
        if RolePolicyPermission not in getattr(view_cls, "permission_classes", []):
            continue
        for attr in ("read_policy", "write_policy"):
            name = getattr(view_cls, attr, None)
            if name is not None and name not in ROLE_POLICIES:
                errors.append(
                    Error(
                        f"{view_cls.__name__}.{attr} names unknown policy {name!r}.",
                        obj=view_cls,
                        id="access_control.E001",
                    )
                )

    return errors
