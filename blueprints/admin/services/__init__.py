"""Admin services package."""

from blueprints.admin.services.pavilion_service import (  # noqa: F401
    validate_pavilion_data,
    validate_discount_data,
    parse_entrances,
    parse_pavilion_form,
    save_pavilion_image,
)
from blueprints.admin.services.floor_plan_service import (  # noqa: F401
    to_percent,
    find_pavilion_at_point,
    build_markers,
)
