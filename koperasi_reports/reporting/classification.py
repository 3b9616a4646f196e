from typing import Iterable
from koperasi_reports.models.journal import ActivityClassification, LedgerLine

def classify_reference_type(reference_type: str, operating_tags: Iterable[str]) -> ActivityClassification:
    """Legacy rule: any operating tag contained in the reference type marks it operating."""
    reference_type = reference_type or ""
    if any(tag in reference_type for tag in operating_tags):
        return ActivityClassification.OPERATING
    return ActivityClassification.FINANCING

def resolve_activity(line: LedgerLine, operating_tags: Iterable[str]) -> ActivityClassification:
    """Prefer the classification stored at posting time, fall back to the reference type."""
    if line.activity_classification is not None:
        return line.activity_classification
    return classify_reference_type(line.reference_type, operating_tags)
