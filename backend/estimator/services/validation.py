from typing import Iterable, List, Optional

from estimator.models.domain import PrintDesign

NO_LOCATION = "noLocation"
NO_COLORS = "noColors"
NO_SIZE = "noSize"
DUPLICATE = "duplicate"
INK_COUNT = "inkCount"


class DesignValidator:
    """Validation logic for print designs before they are saved.

    Rules, checked in this order (the first failure wins):
    - location is empty -> noLocation
    - silkscreen colors <= 0 -> noColors
    - DTF width/height missing or not positive -> noSize
    - another design (different id) already uses the same (location, size) -> duplicate
    - special ink counts add up to more than colors -> inkCount
    """

    def issues(self, design: PrintDesign, existing: Iterable[PrintDesign]) -> List[str]:
        issues: List[str] = []
        if not design.location:
            issues.append(NO_LOCATION)
        if design.is_dtf:
            if not (design.width_cm and design.width_cm > 0 and design.height_cm and design.height_cm > 0):
                issues.append(NO_SIZE)
        elif design.colors <= 0:
            issues.append(NO_COLORS)

        # editing a design never conflicts with itself
        if any(d.id != design.id and d.location == design.location and d.size == design.size for d in existing):
            issues.append(DUPLICATE)

        if not design.is_dtf and design.special_ink_count > design.colors:
            issues.append(INK_COUNT)
        return issues

    def validate(self, design: PrintDesign, existing: Iterable[PrintDesign]) -> Optional[str]:
        """Return the first failing rule code, or None when the design can be saved."""
        issues = self.issues(design, existing)
        return issues[0] if issues else None
