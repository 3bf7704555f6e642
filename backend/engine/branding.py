from __future__ import annotations

from typing import Optional, Union

from models import LayoutConfig, MalformedConfig
from models_branding import BrandingOverrides


def merge_branding(
    config: Union[LayoutConfig, MalformedConfig],
    overrides: Optional[BrandingOverrides],
) -> Union[LayoutConfig, MalformedConfig]:
    """
    Write each non-empty override over the matching globalStyles key.

    Returns a new LayoutConfig; the input is never mutated. Keys the overrides leave
    absent or blank keep the template value. ``overrides is None`` and malformed
    configs come back as the same object.
    """
    if overrides is None or isinstance(config, MalformedConfig):
        return config
    styles = overrides.style_overrides()
    merged = config.model_copy(deep=True)
    if styles:
        merged.global_styles = {**merged.global_styles, **styles}
    return merged
