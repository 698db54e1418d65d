"""Deprecation notices for endpoints SonarQube is phasing out.

Warnings go through the standard ``warnings`` machinery, so callers silence
or escalate them with the usual filters:

    warnings.simplefilter("error", DeprecationWarning)
"""

import warnings


def warn_deprecated(
    api: str,
    *,
    replacement: str | None = None,
    remove_version: str | None = None,
    reason: str | None = None,
) -> None:
    """Emit a ``DeprecationWarning`` pointing at the caller of *api*."""
    parts = [f"{api} is deprecated"]
    if remove_version:
        parts[0] += f" and will be removed in {remove_version}"
    if reason:
        parts.append(reason)
    if replacement:
        parts.append(f"Use {replacement} instead.")
    warnings.warn(". ".join(p.rstrip(".") for p in parts) + ".", DeprecationWarning, stacklevel=3)
